"""Station registry backed by the static line data."""

import logging

from cascais_departures.domain.errors import InvalidStationError
from cascais_departures.domain.models.direction import Direction
from cascais_departures.domain.models.station import Station
from cascais_departures.domain.ports.station_registry import StationRegistry

logger = logging.getLogger(__name__)


class LineStationRegistry(StationRegistry):
    """Ordered, immutable list of the line's stations.

    Lower index means closer to the origin terminus, so the direction between
    two stations is a comparison of their indices.
    """

    def __init__(
        self,
        stations: list[Station],
        legacy_ids: dict[str, tuple[str, Direction]] | None = None,
    ) -> None:
        """Initialize with stations in line order.

        Args:
            stations: Stations ordered from origin terminus to far terminus.
            legacy_ids: Deprecated ids mapped to (user id, implied direction).
        """
        if len(stations) < 2:
            raise ValueError("A line needs at least two stations")
        self._stations = tuple(stations)
        self._by_user_id = {s.user_id: s for s in stations}
        self._index = {s.user_id: i for i, s in enumerate(stations)}
        self._by_code: dict[str, Station] = {}
        for station in stations:
            for code in station.codes():
                self._by_code[code] = station
        self._by_live_id = {s.live_id: s for s in stations}
        self._by_timetable_id = {s.timetable_id: s for s in stations}
        self._legacy_ids = dict(legacy_ids or {})

    @property
    def origin(self) -> Station:
        return self._stations[0]

    @property
    def terminus(self) -> Station:
        return self._stations[-1]

    def stations(self) -> list[Station]:
        return list(self._stations)

    def find(self, user_id: str | None) -> Station | None:
        if not user_id:
            return None
        user_id = user_id.strip()
        legacy = self._legacy_ids.get(user_id)
        if legacy:
            return self._by_user_id[legacy[0]]
        return self._by_user_id.get(user_id)

    def resolve(self, user_id: str | None) -> Station:
        station = self.find(user_id)
        if station is None:
            logger.debug(f"Station id {user_id!r} not found on the line")
            raise InvalidStationError(user_id)
        return station

    def legacy_direction(self, user_id: str) -> Direction | None:
        legacy = self._legacy_ids.get(user_id.strip())
        return legacy[1] if legacy else None

    def find_by_code(self, code: str | None) -> Station | None:
        if not code:
            return None
        return self._by_code.get(str(code).strip())

    def by_live_id(self, live_id: str) -> Station | None:
        return self._by_live_id.get(live_id)

    def by_timetable_id(self, timetable_id: str) -> Station | None:
        return self._by_timetable_id.get(timetable_id)

    def index_of(self, station: Station) -> int:
        return self._index[station.user_id]

    def direction_between(self, start: Station, end: Station) -> Direction | None:
        start_index, end_index = self.index_of(start), self.index_of(end)
        if start_index == end_index:
            return None
        return Direction.TO_TERMINUS if start_index < end_index else Direction.TO_ORIGIN

    def end_of(self, direction: Direction) -> Station:
        return self.terminus if direction is Direction.TO_TERMINUS else self.origin

    def start_of(self, direction: Direction) -> Station:
        """Station where trains travelling in direction start."""
        return self.end_of(direction.opposite)

    def offset_from_start(self, station: Station, direction: Direction) -> int:
        if direction is Direction.TO_TERMINUS:
            return station.offset_minutes
        return self.terminus.offset_minutes - station.offset_minutes

    def directions_from(self, station: Station) -> list[Direction]:
        """Directions in which trains leave station (one at either terminus)."""
        if station == self.origin:
            return [Direction.TO_TERMINUS]
        if station == self.terminus:
            return [Direction.TO_ORIGIN]
        return [Direction.TO_ORIGIN, Direction.TO_TERMINUS]
