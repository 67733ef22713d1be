"""Matching of live vehicles to schedule slots."""

import logging
from dataclasses import dataclass
from datetime import datetime

from cascais_departures.domain.models.direction import Direction
from cascais_departures.domain.models.live_vehicle import LiveVehicle
from cascais_departures.domain.models.schedule_slot import ScheduleSlot
from cascais_departures.domain.models.station import Station
from cascais_departures.domain.ports.station_registry import StationRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SlotMatch:
    """A live vehicle assigned to a schedule slot."""

    slot: ScheduleSlot
    vehicle: LiveVehicle
    stations_remaining: int


class SlotMatcher:
    """Greedy assignment of live vehicles to the slots of one direction."""

    def __init__(self, registry: StationRegistry, match_window_minutes: int = 30) -> None:
        self._registry = registry
        self._match_window_seconds = match_window_minutes * 60

    def candidates(
        self, vehicles: list[LiveVehicle], station: Station, direction: Direction
    ) -> list[tuple[LiveVehicle, int]]:
        """Vehicles heading for station in direction, ranked for matching.

        A vehicle qualifies when it runs toward the direction's terminus, has
        not yet passed station and is not completed. Ranking is by stations
        remaining to station, then by reported delay.

        Returns:
            (vehicle, stations remaining) pairs, best first.
        """
        end = self._registry.end_of(direction)
        station_index = self._registry.index_of(station)
        ranked: list[tuple[LiveVehicle, int]] = []
        for vehicle in vehicles:
            if vehicle.is_completed:
                continue
            if self._registry.find_by_code(vehicle.destination_code) != end:
                continue
            last_station = self._registry.find_by_code(vehicle.last_station_code)
            if last_station is None:
                continue
            last_index = self._registry.index_of(last_station)
            if direction is Direction.TO_TERMINUS and last_index > station_index:
                continue
            if direction is Direction.TO_ORIGIN and last_index < station_index:
                continue
            ranked.append((vehicle, abs(station_index - last_index)))

        ranked.sort(key=lambda pair: (pair[1], pair[0].delay_seconds))
        return ranked

    def match(
        self,
        vehicles: list[LiveVehicle],
        slots: list[ScheduleSlot],
        station: Station,
        direction: Direction,
        now: datetime,
    ) -> list[SlotMatch]:
        """Assign each ranked vehicle the closest unclaimed slot.

        Closeness is the absolute time to the slot's scheduled departure, over
        the whole grid (past slots included), within the match window. A slot
        takes at most one vehicle and a train number claims at most one slot.
        """
        matches: list[SlotMatch] = []
        claimed: set[ScheduleSlot] = set()
        matched_trains: set[str] = set()

        for vehicle, remaining in self.candidates(vehicles, station, direction):
            if vehicle.train_number in matched_trains:
                continue
            best: ScheduleSlot | None = None
            best_distance = 0.0
            for slot in slots:
                if slot in claimed:
                    continue
                distance = abs((slot.scheduled_at - now).total_seconds())
                if distance > self._match_window_seconds:
                    continue
                if best is None or distance < best_distance:
                    best, best_distance = slot, distance
            if best is None:
                logger.debug(f"No slot within window for train {vehicle.train_number}")
                continue
            claimed.add(best)
            matched_trains.add(vehicle.train_number)
            matches.append(SlotMatch(slot=best, vehicle=vehicle, stations_remaining=remaining))

        return matches
