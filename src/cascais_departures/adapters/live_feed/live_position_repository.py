"""Live position repository adapter."""

import logging
from typing import TYPE_CHECKING

from cascais_departures.adapters.live_feed.http_client import LiveFeedHttpClient
from cascais_departures.adapters.live_feed.vehicle_parser import VehicleParser
from cascais_departures.domain.models.live_vehicle import LiveVehicle
from cascais_departures.domain.ports.live_position_repository import LivePositionRepository

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientSession


class LiveFeedPositionRepository(LivePositionRepository):
    """Adapter for the live vehicle feed, restricted to one line's service."""

    def __init__(
        self,
        url: str,
        service_code: str,
        terminus_codes: set[str],
        session: "ClientSession | None" = None,
        timeout_seconds: float = 5.0,
        verify_tls: bool = False,
    ) -> None:
        """Initialize the repository.

        Args:
            url: Vehicles endpoint.
            service_code: Service code of the line in the feed.
            terminus_codes: Live-feed codes of both termini.
            session: Optional aiohttp ClientSession for HTTP requests.
            timeout_seconds: Total timeout for one request.
            verify_tls: Whether to verify the upstream TLS certificate.
        """
        self._http_client = LiveFeedHttpClient(
            url, session=session, timeout_seconds=timeout_seconds, verify_tls=verify_tls
        )
        self._service_code = service_code
        self._terminus_codes = set(terminus_codes)

    def _is_on_line(self, vehicle: LiveVehicle) -> bool:
        if self._service_code and vehicle.service_code != self._service_code:
            return False
        return (
            vehicle.origin_code in self._terminus_codes
            or vehicle.destination_code in self._terminus_codes
        )

    async def fetch_active(self) -> list[LiveVehicle]:
        """Get vehicles currently running on the line.

        Returns:
            Vehicles of the line's service starting or ending at a terminus.
        """
        raw_vehicles = await self._http_client.fetch_vehicles()
        if not raw_vehicles:
            logger.debug("No live vehicles available")
            return []

        vehicles = [v for v in VehicleParser.parse_vehicles(raw_vehicles) if self._is_on_line(v)]
        logger.debug(f"Live feed: {len(vehicles)} of {len(raw_vehicles)} vehicle(s) on the line")
        return vehicles
