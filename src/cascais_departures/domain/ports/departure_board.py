"""Departure board port."""

from typing import Protocol

from cascais_departures.domain.models.departure_result import DepartureResult, StationOverview


class DepartureBoard(Protocol):
    """Port for answering "when is the next train?" queries."""

    async def get_departures(
        self, station_id: str | None, destination_id: str | None = None
    ) -> list[DepartureResult]:
        """Get upcoming departures for a station, optionally toward a destination."""
        ...

    async def get_overview(self, station_id: str | None) -> StationOverview:
        """Get upcoming departures in both directions for a station."""
        ...

    def fallback_departures(
        self, station_id: str | None, destination_id: str | None = None
    ) -> list[DepartureResult]:
        """Get synthetic departures for degraded operation."""
        ...
