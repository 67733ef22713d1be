"""Tests for the station registry."""

import pytest

from cascais_departures.adapters.config import LineData
from cascais_departures.adapters.line import LineStationRegistry
from cascais_departures.domain.errors import InvalidStationError
from cascais_departures.domain.models import Direction, Station

# user id -> (live id, timetable id) for a sample of the line
KNOWN_IDS = {
    "94-69005": ("94-30005", "9430005"),
    "94-69146": ("94-30146", "9432001"),
    "94-69187": ("94-30187", "9434007"),
    "94-69260": ("94-30260", "9436101"),
}


class TestResolution:
    """Tests for id lookups."""

    def test_every_station_round_trips_through_each_namespace(
        self, registry: LineStationRegistry, line_data: LineData
    ) -> None:
        """Given each station, when resolving any of its ids, then the same station returns."""
        for station in line_data.stations:
            resolved = registry.resolve(station.user_id)
            assert resolved == station
            assert registry.by_live_id(resolved.live_id) == station
            assert registry.by_timetable_id(resolved.timetable_id) == station
            assert registry.find_by_code(resolved.timetable_id) == station

    @pytest.mark.parametrize(("user_id", "ids"), KNOWN_IDS.items())
    def test_known_stations_have_expected_upstream_ids(
        self, registry: LineStationRegistry, user_id: str, ids: tuple[str, str]
    ) -> None:
        """Given a known station, when resolving, then its upstream ids match the line table."""
        station = registry.resolve(user_id)

        assert (station.live_id, station.timetable_id) == ids

    @pytest.mark.parametrize("bad_id", [None, "", "94-00000", "Carcavelos"])
    def test_unknown_ids_raise_invalid_station(
        self, registry: LineStationRegistry, bad_id: str | None
    ) -> None:
        """Given a missing or unknown id, when resolving, then InvalidStationError is raised."""
        with pytest.raises(InvalidStationError):
            registry.resolve(bad_id)

    def test_find_returns_none_for_unknown_ids(self, registry: LineStationRegistry) -> None:
        """Given an unknown id, when finding, then None is returned."""
        assert registry.find("94-00000") is None
        assert registry.find(None) is None

    def test_live_ids_are_not_user_ids(self, registry: LineStationRegistry) -> None:
        """Given a live-feed id, when resolving it as a user id, then it is rejected."""
        with pytest.raises(InvalidStationError):
            registry.resolve("94-30187")


class TestLegacyIds:
    """Tests for deprecated station ids."""

    def test_legacy_carcavelos_id_resolves_with_direction_to_origin(
        self, registry: LineStationRegistry
    ) -> None:
        """Given the legacy Carcavelos id, when resolving, then Carcavelos toward Cais do Sodré."""
        assert registry.resolve("94-21014").name == "Carcavelos"
        assert registry.legacy_direction("94-21014") is Direction.TO_ORIGIN

    def test_legacy_cais_do_sodre_id_resolves_with_direction_to_terminus(
        self, registry: LineStationRegistry
    ) -> None:
        """Given the legacy origin id, when resolving, then Cais do Sodré toward Cascais."""
        assert registry.resolve("94-20006").name == "Cais do Sodré"
        assert registry.legacy_direction("94-20006") is Direction.TO_TERMINUS

    def test_regular_ids_have_no_legacy_direction(self, registry: LineStationRegistry) -> None:
        """Given a regular id, when asking for a legacy direction, then None is returned."""
        assert registry.legacy_direction("94-69187") is None


class TestLineGeometry:
    """Tests for ordering and direction math."""

    def test_termini(self, registry: LineStationRegistry) -> None:
        """Given the line, when asking for its ends, then Cais do Sodré and Cascais return."""
        assert registry.origin.name == "Cais do Sodré"
        assert registry.terminus.name == "Cascais"
        assert registry.end_of(Direction.TO_ORIGIN) == registry.origin
        assert registry.end_of(Direction.TO_TERMINUS) == registry.terminus
        assert registry.start_of(Direction.TO_ORIGIN) == registry.terminus

    def test_direction_between_compares_indices(self, registry: LineStationRegistry) -> None:
        """Given two stations, when computing direction, then index order decides it."""
        carcavelos = registry.resolve("94-69187")
        oeiras = registry.resolve("94-69179")

        assert registry.index_of(oeiras) < registry.index_of(carcavelos)
        assert registry.direction_between(oeiras, carcavelos) is Direction.TO_TERMINUS
        assert registry.direction_between(carcavelos, oeiras) is Direction.TO_ORIGIN
        assert registry.direction_between(oeiras, oeiras) is None

    def test_offset_from_start_depends_on_direction(self, registry: LineStationRegistry) -> None:
        """Given Carcavelos, when measuring from each starting terminus, then offsets differ."""
        carcavelos = registry.resolve("94-69187")

        assert registry.offset_from_start(carcavelos, Direction.TO_TERMINUS) == 26
        assert registry.offset_from_start(carcavelos, Direction.TO_ORIGIN) == 14

    def test_directions_from_termini_and_intermediate_stations(
        self, registry: LineStationRegistry
    ) -> None:
        """Given each kind of station, when listing departing directions, then termini have one."""
        assert registry.directions_from(registry.origin) == [Direction.TO_TERMINUS]
        assert registry.directions_from(registry.terminus) == [Direction.TO_ORIGIN]
        assert len(registry.directions_from(registry.resolve("94-69187"))) == 2

    def test_registry_needs_two_stations(self) -> None:
        """Given one station, when building a registry, then ValueError is raised."""
        with pytest.raises(ValueError, match="at least two stations"):
            LineStationRegistry([Station("a", "b", "c", "A", 0)])
