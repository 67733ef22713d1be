"""Static timetable provider port."""

from datetime import date
from typing import Protocol

from cascais_departures.domain.models.direction import Direction


class TimetableProvider(Protocol):
    """Port for the hand-entered static timetables."""

    def schedule(self, direction: Direction, day: date) -> list[str]:
        """Departure times ("HH:MM") from the starting terminus, sorted and deduplicated."""
        ...
