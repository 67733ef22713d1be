"""Destination filtering, ordering and truncation of departure rows."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from cascais_departures.domain.models.departure_result import DepartureResult
from cascais_departures.domain.models.direction import Direction
from cascais_departures.domain.models.station import Station
from cascais_departures.domain.ports.station_registry import StationRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CandidateDeparture:
    """A departure row together with where the train terminates."""

    result: DepartureResult
    destination_code: str | None = None  # Any of the destination station's ids


class DestinationFilter:
    """Drops rows whose train does not reach the requested destination."""

    def __init__(self, registry: StationRegistry) -> None:
        self._registry = registry

    def apply(
        self,
        rows: list[CandidateDeparture],
        station: Station,
        destination: Station,
    ) -> list[CandidateDeparture]:
        """Keep rows whose train terminates at or beyond destination.

        Trains terminating at station itself are never departures. When a row's
        destination cannot be placed on the line, it is compared against the
        two termini instead.
        """
        kept = [row for row in rows if self._reaches(row, station, destination)]
        if len(kept) != len(rows):
            logger.debug(
                f"Destination filter {station.name} -> {destination.name}: "
                f"kept {len(kept)} of {len(rows)} row(s)"
            )
        return kept

    def _reaches(self, row: CandidateDeparture, station: Station, destination: Station) -> bool:
        train_end = self._registry.find_by_code(row.destination_code)
        if train_end is None:
            return self._reaches_by_terminus(row, station, destination)
        if train_end == station:
            return False

        start = self._registry.index_of(station)
        end = self._registry.index_of(destination)
        reached = self._registry.index_of(train_end)
        if start < end:
            return start < reached and reached >= end
        if start > end:
            return start > reached and reached <= end
        return True

    def heading(
        self,
        rows: list[CandidateDeparture],
        station: Station,
        direction: Direction,
    ) -> list[CandidateDeparture]:
        """Keep rows whose train leaves station in direction.

        Short-turning trains are kept as long as they end beyond station. Rows
        that cannot be placed on the line are dropped only when they end at the
        opposite terminus.
        """
        kept = [row for row in rows if self._heads(row, station, direction)]
        if len(kept) != len(rows):
            logger.debug(
                f"Direction filter {station.name} {direction}: "
                f"kept {len(kept)} of {len(rows)} row(s)"
            )
        return kept

    def drop_terminating(
        self, rows: list[CandidateDeparture], station: Station
    ) -> list[CandidateDeparture]:
        """Drop rows whose train terminates at station."""
        find = self._registry.find_by_code
        return [row for row in rows if find(row.destination_code) != station]

    def _heads(self, row: CandidateDeparture, station: Station, direction: Direction) -> bool:
        train_end = self._registry.find_by_code(row.destination_code)
        if train_end is None:
            return not self._ends_at(row, self._registry.end_of(direction.opposite))
        return self._registry.direction_between(station, train_end) is direction

    def _reaches_by_terminus(
        self, row: CandidateDeparture, station: Station, destination: Station
    ) -> bool:
        direction = self._registry.direction_between(station, destination)
        if direction is None:
            return True
        return not self._ends_at(row, self._registry.end_of(direction.opposite))

    @staticmethod
    def _ends_at(row: CandidateDeparture, terminus: Station) -> bool:
        name = row.result.destination_name.strip().casefold()
        return row.destination_code in terminus.codes() or name == terminus.name.casefold()


def finalize(results: Iterable[DepartureResult], page_size: int) -> list[DepartureResult]:
    """Sort by countdown, keep one row per train number and truncate.

    Ties are broken by scheduled time. Rows without a train number are never
    deduplicated.
    """
    ordered = sorted(results, key=lambda r: (r.minutes_to_departure, r.scheduled_time))
    seen_trains: set[str] = set()
    page: list[DepartureResult] = []
    for result in ordered:
        if result.train_number is not None:
            if result.train_number in seen_trains:
                continue
            seen_trains.add(result.train_number)
        page.append(result)
        if len(page) >= page_size:
            break
    return page
