"""Static timetable provider backed by the hand-entered line timetables."""

from datetime import date

from cascais_departures.domain.models.direction import Direction
from cascais_departures.domain.ports.timetable_provider import TimetableProvider
from cascais_departures.domain.time_of_day import parse_time_of_day

# date.weekday() values for Monday to Friday
WEEKDAYS = frozenset(range(5))


class StaticTimetableProvider(TimetableProvider):
    """Day-of-week aware departure tables per direction.

    Every day uses the daily table. Monday to Friday, the weekday peak overlay
    is merged in.
    """

    def __init__(
        self,
        daily: dict[Direction, list[str]],
        weekday: dict[Direction, list[str]] | None = None,
        weekday_overlay_enabled: bool = True,
    ) -> None:
        """Initialize with departure times from each direction's starting terminus.

        Args:
            daily: "HH:MM" departures that run every day.
            weekday: "HH:MM" departures added Monday to Friday.
            weekday_overlay_enabled: If False, the weekday overlay is never applied.
        """
        self._daily = {direction: list(times) for direction, times in daily.items()}
        self._weekday = {direction: list(times) for direction, times in (weekday or {}).items()}
        self._weekday_overlay_enabled = weekday_overlay_enabled

    def schedule(self, direction: Direction, day: date) -> list[str]:
        times = set(self._daily.get(direction, []))
        if self._weekday_overlay_enabled and day.weekday() in WEEKDAYS:
            times.update(self._weekday.get(direction, []))
        return sorted(times, key=parse_time_of_day)
