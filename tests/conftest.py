"""Shared fixtures for the departures tests."""

from collections.abc import Callable
from datetime import datetime

import pytest
from fakes import LISBON, FakeClock, FakeItineraries, FakeLivePositions, FakeTimetable, lisbon_time

from cascais_departures.adapters.cache import InMemoryDisappearanceCache
from cascais_departures.adapters.config import LineData, LineDataLoader
from cascais_departures.adapters.line import LineStationRegistry
from cascais_departures.application.services import ReconciliationEngine
from cascais_departures.domain.models import ReconciliationSettings


@pytest.fixture(scope="session")
def line_data() -> LineData:
    """The packaged Cascais line data."""
    return LineDataLoader.load()


@pytest.fixture
def registry(line_data: LineData) -> LineStationRegistry:
    """Registry over the packaged stations."""
    return LineStationRegistry(line_data.stations, line_data.legacy_ids)


@pytest.fixture
def make_engine(
    registry: LineStationRegistry,
) -> Callable[..., ReconciliationEngine]:
    """Factory for engines wired to fakes, with a frozen Wednesday 08:00 clock by default."""

    def _make(
        timetable: FakeTimetable | None = None,
        live_positions: FakeLivePositions | None = None,
        itineraries: FakeItineraries | None = None,
        cache: InMemoryDisappearanceCache | None = None,
        clock: Callable[[], datetime] | None = None,
        settings: ReconciliationSettings | None = None,
    ) -> ReconciliationEngine:
        return ReconciliationEngine(
            registry,
            timetable or FakeTimetable(),
            live_positions or FakeLivePositions(),
            itineraries or FakeItineraries(),
            cache if cache is not None else InMemoryDisappearanceCache(),
            settings=settings,
            tz=LISBON,
            clock=clock or FakeClock(lisbon_time(8, 0)),
        )

    return _make
