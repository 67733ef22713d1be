"""Parser for live feed vehicle reports."""

import logging
from typing import Any

from cascais_departures.domain.models.live_vehicle import LiveVehicle, VehicleStatus

logger = logging.getLogger(__name__)


class VehicleParser:
    """Parses raw vehicle dictionaries into LiveVehicle objects."""

    @staticmethod
    def parse_vehicles(vehicles: list[dict[str, Any]]) -> list[LiveVehicle]:
        """Parse vehicles, skipping entries that cannot be parsed.

        Args:
            vehicles: List of vehicle dictionaries from the feed.

        Returns:
            List of LiveVehicle objects.
        """
        results = []
        for raw in vehicles:
            vehicle = VehicleParser._parse_vehicle(raw)
            if vehicle:
                results.append(vehicle)
        return results

    @staticmethod
    def _code_of(value: Any) -> str:
        """Extract a station/service code from a nested object or a bare value."""
        if isinstance(value, dict):
            value = value.get("code", value.get("id", ""))
        return str(value).strip() if value is not None else ""

    @staticmethod
    def _designation_of(value: Any) -> str:
        if isinstance(value, dict):
            return str(value.get("designation", value.get("name", "")) or "")
        return ""

    @staticmethod
    def _parse_delay(value: Any) -> int:
        try:
            return int(value) if value is not None else 0
        except (TypeError, ValueError):
            return 0

    @staticmethod
    def _parse_vehicle(raw: dict[str, Any]) -> LiveVehicle | None:
        train_number = raw.get("trainNumber")
        if train_number is None or str(train_number).strip() == "":
            logger.debug(f"Skipping vehicle without train number: {raw!r:.200}")
            return None

        destination = raw.get("destination")
        last_station = VehicleParser._code_of(raw.get("lastStation")) or None
        return LiveVehicle(
            train_number=str(train_number).strip(),
            service_code=VehicleParser._code_of(raw.get("service")),
            origin_code=VehicleParser._code_of(raw.get("origin")),
            destination_code=VehicleParser._code_of(destination),
            destination_name=VehicleParser._designation_of(destination),
            last_station_code=last_station,
            delay_seconds=VehicleParser._parse_delay(raw.get("delay")),
            status=VehicleStatus.from_raw(raw.get("status")),
        )
