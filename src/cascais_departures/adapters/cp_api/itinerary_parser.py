"""Parser for CP timetable API responses."""

import logging
from datetime import datetime
from typing import Any

from cascais_departures.adapters.cp_api.constants import RECORD_LIST_PATHS
from cascais_departures.domain.errors import MalformedUpstreamShapeError
from cascais_departures.domain.models.itinerary_record import ItineraryRecord
from cascais_departures.domain.time_of_day import format_time_of_day, parse_time_of_day

logger = logging.getLogger(__name__)

_TRAIN_NUMBER_KEYS = ("trainNumber", "trainNr", "number")
_TIME_KEYS = ("departureTime", "departure", "time", "arrivalTime")
_DESTINATION_KEYS = ("trainDestination", "destination", "arrivalStation")


class ItineraryParser:
    """Normalizes the known CP response shapes into ItineraryRecord objects."""

    @staticmethod
    def extract_records(data: Any) -> list[dict[str, Any]]:
        """Find the record list in a response body.

        Raises:
            MalformedUpstreamShapeError: If the body matches no known shape.
        """
        if isinstance(data, list):
            return [r for r in data if isinstance(r, dict)]
        if isinstance(data, dict):
            for path in RECORD_LIST_PATHS:
                node: Any = data
                for key in path:
                    node = node.get(key) if isinstance(node, dict) else None
                if isinstance(node, list):
                    return [r for r in node if isinstance(r, dict)]
        keys = sorted(data) if isinstance(data, dict) else type(data).__name__
        raise MalformedUpstreamShapeError(f"Unrecognized CP API response shape: {keys}")

    @staticmethod
    def parse_records(records: list[dict[str, Any]]) -> list[ItineraryRecord]:
        """Parse records, skipping entries without a usable departure time."""
        results = []
        for raw in records:
            record = ItineraryParser._parse_record(raw)
            if record:
                results.append(record)
        return results

    @staticmethod
    def _first(raw: dict[str, Any], keys: tuple[str, ...]) -> Any:
        for key in keys:
            value = raw.get(key)
            if value not in (None, ""):
                return value
        return None

    @staticmethod
    def _normalize_time(value: Any) -> str | None:
        """Accept "HH:MM", "HH:MM:SS" or an ISO datetime; return "HH:MM"."""
        if value is None:
            return None
        text = str(value).strip()
        try:
            return format_time_of_day(parse_time_of_day(text))
        except ValueError:
            pass
        try:
            return format_time_of_day(datetime.fromisoformat(text.replace("Z", "+00:00")))
        except ValueError:
            return None

    @staticmethod
    def _parse_train_number(raw: dict[str, Any]) -> str | None:
        value = ItineraryParser._first(raw, _TRAIN_NUMBER_KEYS)
        if value is None and isinstance(raw.get("train"), dict):
            value = ItineraryParser._first(raw["train"], _TRAIN_NUMBER_KEYS)
        return str(value).strip() if value is not None else None

    @staticmethod
    def _parse_destination(raw: dict[str, Any]) -> tuple[str, str]:
        value = ItineraryParser._first(raw, _DESTINATION_KEYS)
        if isinstance(value, dict):
            code = value.get("code", value.get("id", ""))
            name = value.get("designation", value.get("name", ""))
            return str(code or "").strip(), str(name or "").strip()
        # A bare string is a station name
        return "", str(value or "").strip()

    @staticmethod
    def _parse_delay(value: Any) -> int:
        try:
            return max(0, int(value)) if value is not None else 0
        except (TypeError, ValueError):
            return 0

    @staticmethod
    def _parse_platform(value: Any) -> str | None:
        if value is None:
            return None
        platform = str(value).strip()
        return platform or None

    @staticmethod
    def _parse_record(raw: dict[str, Any]) -> ItineraryRecord | None:
        departure_time = ItineraryParser._normalize_time(ItineraryParser._first(raw, _TIME_KEYS))
        if departure_time is None:
            logger.debug(f"Skipping CP record without departure time: {raw!r:.200}")
            return None

        destination_code, destination_name = ItineraryParser._parse_destination(raw)
        return ItineraryRecord(
            train_number=ItineraryParser._parse_train_number(raw),
            departure_time=departure_time,
            destination_code=destination_code,
            destination_name=destination_name,
            delay_minutes=ItineraryParser._parse_delay(raw.get("delay")),
            platform=ItineraryParser._parse_platform(raw.get("platform")),
        )
