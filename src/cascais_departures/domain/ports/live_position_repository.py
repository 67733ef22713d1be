"""Live position repository port."""

from typing import Protocol

from cascais_departures.domain.models.live_vehicle import LiveVehicle


class LivePositionRepository(Protocol):
    """Port for retrieving live vehicle positions for the line."""

    async def fetch_active(self) -> list[LiveVehicle]:
        """Get vehicles currently in service on the line.

        Never raises; an unavailable feed yields an empty list.
        """
        ...
