"""Schedule slot domain model."""

from dataclasses import dataclass
from datetime import datetime

from cascais_departures.domain.models.direction import Direction


@dataclass(frozen=True)
class ScheduleSlot:
    """A static departure time projected onto one station for one day."""

    direction: Direction
    origin_time: str  # "HH:MM" at the terminus the train starts from
    scheduled_at: datetime  # Scheduled instant at the projected station

    @property
    def scheduled_time(self) -> str:
        """Scheduled wall-clock time at the projected station."""
        return self.scheduled_at.strftime("%H:%M")
