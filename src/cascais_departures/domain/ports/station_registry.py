"""Station registry port."""

from typing import Protocol

from cascais_departures.domain.models.direction import Direction
from cascais_departures.domain.models.station import Station


class StationRegistry(Protocol):
    """Port for looking up stations of the line."""

    @property
    def origin(self) -> Station:
        """First station of the line."""
        ...

    @property
    def terminus(self) -> Station:
        """Last station of the line."""
        ...

    def stations(self) -> list[Station]:
        """All stations in line order."""
        ...

    def resolve(self, user_id: str | None) -> Station:
        """Resolve a user-facing (or legacy) id, raising InvalidStationError if unknown."""
        ...

    def find(self, user_id: str | None) -> Station | None:
        """Resolve a user-facing (or legacy) id, returning None if unknown."""
        ...

    def legacy_direction(self, user_id: str) -> Direction | None:
        """Direction implied by a legacy id, or None for regular ids."""
        ...

    def find_by_code(self, code: str | None) -> Station | None:
        """Find a station by any of its identifiers."""
        ...

    def by_live_id(self, live_id: str) -> Station | None:
        """Find a station by its live-feed id."""
        ...

    def by_timetable_id(self, timetable_id: str) -> Station | None:
        """Find a station by its timetable-API id."""
        ...

    def index_of(self, station: Station) -> int:
        """Position of the station along the line."""
        ...

    def direction_between(self, start: Station, end: Station) -> Direction | None:
        """Direction of travel from start to end, or None if they are the same."""
        ...

    def end_of(self, direction: Direction) -> Station:
        """Station where trains travelling in direction terminate."""
        ...

    def offset_from_start(self, station: Station, direction: Direction) -> int:
        """Scheduled minutes from the starting terminus of direction to station."""
        ...

    def directions_from(self, station: Station) -> list[Direction]:
        """Directions in which trains leave station."""
        ...
