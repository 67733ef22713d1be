"""Live vehicle domain model."""

from dataclasses import dataclass
from enum import StrEnum


class VehicleStatus(StrEnum):
    """Operational status reported by the live feed."""

    NOT_STARTED = "NOT_STARTED"
    IN_TRANSIT = "IN_TRANSIT"
    AT_STATION = "AT_STATION"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def from_raw(cls, value: object) -> "VehicleStatus":
        """Map a raw feed value to a status, defaulting to UNKNOWN."""
        if not isinstance(value, str):
            return cls.UNKNOWN
        normalized = value.strip().upper().replace(" ", "_").replace("-", "_")
        try:
            return cls(normalized)
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class LiveVehicle:
    """Real-time position and delay report for an in-service train."""

    train_number: str
    service_code: str
    origin_code: str
    destination_code: str
    destination_name: str
    last_station_code: str | None
    delay_seconds: int
    status: VehicleStatus = VehicleStatus.UNKNOWN

    @property
    def delay_minutes(self) -> int:
        """Reported delay rounded to whole minutes, never negative."""
        return max(0, round(self.delay_seconds / 60))

    @property
    def is_completed(self) -> bool:
        """Whether the train has finished its run."""
        return self.status is VehicleStatus.COMPLETED
