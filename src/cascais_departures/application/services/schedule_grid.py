"""Projection of static timetables onto a station."""

from datetime import date, timedelta, tzinfo

from cascais_departures.domain.models.direction import Direction
from cascais_departures.domain.models.schedule_slot import ScheduleSlot
from cascais_departures.domain.models.station import Station
from cascais_departures.domain.ports.station_registry import StationRegistry
from cascais_departures.domain.ports.timetable_provider import TimetableProvider
from cascais_departures.domain.time_of_day import at_time_of_day


class ScheduleGridBuilder:
    """Builds the day's slot grid for a station and direction."""

    def __init__(
        self, registry: StationRegistry, timetable: TimetableProvider, tz: tzinfo
    ) -> None:
        self._registry = registry
        self._timetable = timetable
        self._tz = tz

    def slots(self, station: Station, direction: Direction, day: date) -> list[ScheduleSlot]:
        """Project each departure of direction onto station.

        Departures are read as wall-clock times of day in the configured
        timezone and shifted by the station's running time from the
        direction's starting terminus.
        """
        offset = timedelta(minutes=self._registry.offset_from_start(station, direction))
        return [
            ScheduleSlot(
                direction=direction,
                origin_time=origin_time,
                scheduled_at=at_time_of_day(day, origin_time, self._tz) + offset,
            )
            for origin_time in self._timetable.schedule(direction, day)
        ]
