"""Synthetic departures for when no data source answers."""

import random
from datetime import datetime, timedelta

from cascais_departures.domain.models.departure_result import DepartureResult
from cascais_departures.domain.models.direction import Direction
from cascais_departures.domain.models.station import Station
from cascais_departures.domain.ports.station_registry import StationRegistry
from cascais_departures.domain.time_of_day import format_time_of_day

FIRST_DEPARTURE_MINUTES = 2
HEADWAY_MINUTES = 12
DELAY_CHOICES = (0, 0, 0, 1, 2, 3)


class MockDepartureGenerator:
    """Deterministic, plausible-looking schedule-only rows.

    The same station and hour always yield the same rows.
    """

    def __init__(self, registry: StationRegistry, slot_count: int = 6) -> None:
        self._registry = registry
        self._slot_count = slot_count

    def generate(
        self,
        station: Station,
        directions: list[Direction],
        now: datetime,
        page_size: int,
    ) -> list[DepartureResult]:
        """Build min(slot count, page size) rows, each at least two minutes away."""
        rng = random.Random(f"{station.user_id}:{now:%Y-%m-%d %H}")
        destinations = [self._registry.end_of(d) for d in directions] or [
            self._registry.terminus
        ]

        rows = []
        for i in range(min(self._slot_count, page_size)):
            minutes = FIRST_DEPARTURE_MINUTES + i * HEADWAY_MINUTES
            delay = rng.choice(DELAY_CHOICES)
            rows.append(
                DepartureResult(
                    train_number=None,
                    scheduled_time=format_time_of_day(now + timedelta(minutes=minutes)),
                    minutes_to_departure=minutes + delay,
                    delay_minutes=delay,
                    destination_name=destinations[i % len(destinations)].name,
                    is_delayed=delay > 0,
                )
            )
        return rows
