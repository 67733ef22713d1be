"""Schedule reconciliation engine.

Answers "when is the next train?" by reconciling three sources of decreasing
reliability: the live vehicle feed, the official timetable API and the static
timetables. Live trains are matched to static slots; when that yields nothing
the timetable API is tried, and when that also yields nothing the caller gets
synthetic rows.
"""

import asyncio
import logging
from collections.abc import Callable
from datetime import date, datetime, timedelta, tzinfo
from zoneinfo import ZoneInfo

from cascais_departures.application.services.departure_filter import (
    CandidateDeparture,
    DestinationFilter,
    finalize,
)
from cascais_departures.application.services.mock_departures import MockDepartureGenerator
from cascais_departures.application.services.schedule_grid import ScheduleGridBuilder
from cascais_departures.application.services.slot_matcher import SlotMatch, SlotMatcher
from cascais_departures.domain.contracts.disappearance_cache import DisappearanceCacheProtocol
from cascais_departures.domain.errors import DeparturesError, InternalError
from cascais_departures.domain.models.departure_result import DepartureResult, StationOverview
from cascais_departures.domain.models.direction import Direction
from cascais_departures.domain.models.itinerary_record import ItineraryRecord
from cascais_departures.domain.models.live_vehicle import LiveVehicle
from cascais_departures.domain.models.reconciliation_settings import ReconciliationSettings
from cascais_departures.domain.models.schedule_slot import ScheduleSlot
from cascais_departures.domain.models.station import Station
from cascais_departures.domain.ports.departure_board import DepartureBoard
from cascais_departures.domain.ports.itinerary_repository import ItineraryRepository
from cascais_departures.domain.ports.live_position_repository import LivePositionRepository
from cascais_departures.domain.ports.station_registry import StationRegistry
from cascais_departures.domain.ports.timetable_provider import TimetableProvider
from cascais_departures.domain.time_of_day import (
    at_time_of_day,
    format_time_of_day,
    minutes_until,
)

logger = logging.getLogger(__name__)

# Station timetable queries are made from these offsets to now and merged by train number
ITINERARY_WINDOW_OFFSETS_MINUTES = (-10, 20)

Grids = dict[Direction, list[ScheduleSlot]]


class ReconciliationEngine(DepartureBoard):
    """Builds the ranked list of upcoming departures for a station."""

    def __init__(
        self,
        registry: StationRegistry,
        timetable: TimetableProvider,
        live_positions: LivePositionRepository,
        itineraries: ItineraryRepository,
        disappearance_cache: DisappearanceCacheProtocol,
        settings: ReconciliationSettings | None = None,
        tz: tzinfo | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            registry: Stations of the line.
            timetable: Static timetables.
            live_positions: Live vehicle feed.
            itineraries: Official timetable API.
            disappearance_cache: Frozen disappearance instants, shared across requests.
            settings: Reconciliation thresholds and page sizes.
            tz: Timezone the timetables are expressed in.
            clock: Returns the current aware datetime. Defaults to now in tz.
        """
        self._registry = registry
        self._live_positions = live_positions
        self._itineraries = itineraries
        self._cache = disappearance_cache
        self._settings = settings or ReconciliationSettings()
        self._tz = tz or ZoneInfo("Europe/Lisbon")
        self._clock = clock or (lambda: datetime.now(self._tz))
        self._grid = ScheduleGridBuilder(registry, timetable, self._tz)
        self._matcher = SlotMatcher(registry, self._settings.match_window_minutes)
        self._destination_filter = DestinationFilter(registry)
        self._mock = MockDepartureGenerator(registry, self._settings.mock_slot_count)

    async def get_departures(
        self, station_id: str | None, destination_id: str | None = None
    ) -> list[DepartureResult]:
        """Get upcoming departures for a station, optionally toward a destination.

        Raises:
            InvalidStationError: If either id is missing or not on the line.
        """
        station = self._registry.resolve(station_id)
        destination = self._registry.resolve(destination_id) if destination_id else None
        legacy_direction = self._registry.legacy_direction(station_id or "")
        directions = self._directions_for(station, destination, legacy_direction)
        # Legacy ids carry their own direction; the destination only filters direct queries
        filter_destination = destination if legacy_direction is None else None

        now = self._now()
        grids, vehicles = await self._collect(station, directions, now)
        return await self._board(
            station,
            directions,
            filter_destination,
            now,
            self._settings.direct_page_size,
            grids,
            vehicles,
        )

    async def get_overview(self, station_id: str | None) -> StationOverview:
        """Get upcoming departures in both directions for a station.

        A direction no train leaves the station in (at a terminus) is empty.
        """
        station = self._registry.resolve(station_id)
        directions = self._registry.directions_from(station)
        now = self._now()
        grids, vehicles = await self._collect(station, directions, now)

        boards = await asyncio.gather(
            *(
                self._board(
                    station,
                    [direction],
                    None,
                    now,
                    self._settings.overview_page_size,
                    {direction: grids.get(direction, [])},
                    vehicles,
                )
                for direction in directions
            )
        )
        by_direction = dict(zip(directions, boards, strict=True))
        return StationOverview(
            station_id=station.user_id,
            station_name=station.name,
            to_origin=by_direction.get(Direction.TO_ORIGIN, []),
            to_terminus=by_direction.get(Direction.TO_TERMINUS, []),
        )

    def fallback_departures(
        self, station_id: str | None, destination_id: str | None = None
    ) -> list[DepartureResult]:
        """Get synthetic departures without touching any data source."""
        station = self._registry.resolve(station_id)
        destination = self._registry.find(destination_id)
        directions = self._directions_for(
            station, destination, self._registry.legacy_direction(station_id or "")
        )
        return self._mock.generate(
            station, directions, self._clock(), self._settings.direct_page_size
        )

    def _now(self) -> datetime:
        now = self._clock()
        cutoff = now - timedelta(minutes=self._settings.disappearance_retention_minutes)
        self._cache.evict_before(cutoff)
        return now

    def _directions_for(
        self,
        station: Station,
        destination: Station | None,
        legacy_direction: Direction | None,
    ) -> list[Direction]:
        if legacy_direction is not None:
            return [legacy_direction]
        if destination is not None:
            direction = self._registry.direction_between(station, destination)
            if direction is not None:
                return [direction]
        return self._registry.directions_from(station)

    async def _collect(
        self, station: Station, directions: list[Direction], now: datetime
    ) -> tuple[Grids, list[LiveVehicle]]:
        """Fetch live vehicles while the slot grids are built."""
        live_task = asyncio.create_task(self._fetch_live())
        grids = self._build_grids(station, directions, now.date())
        vehicles = await live_task
        return grids, vehicles

    async def _fetch_live(self) -> list[LiveVehicle]:
        try:
            return await self._live_positions.fetch_active()
        except DeparturesError as e:
            logger.warning(f"Live positions unavailable: {e}")
            return []

    def _build_grids(self, station: Station, directions: list[Direction], day: date) -> Grids:
        grids: Grids = {}
        for direction in directions:
            try:
                grids[direction] = self._grid.slots(station, direction, day)
            except ValueError:
                logger.exception(f"Could not build {direction} grid for {station.name}")
        return grids

    async def _board(
        self,
        station: Station,
        directions: list[Direction],
        destination: Station | None,
        now: datetime,
        page_size: int,
        grids: Grids,
        vehicles: list[LiveVehicle],
    ) -> list[DepartureResult]:
        """Run the three tiers in order and return the first non-empty page."""
        try:
            rows = self._reconcile(
                station, directions, destination, now, page_size, grids, vehicles
            )
        except InternalError:
            logger.exception(f"Reconciliation failed for {station.name}")
            rows = []
        if rows:
            return rows

        rows = await self._from_timetable_api(
            station, directions, destination, now, page_size, vehicles
        )
        if rows:
            return rows

        logger.warning(f"No departure data for {station.name}, serving mock departures")
        return self._mock.generate(station, directions, now, page_size)

    def _reconcile(
        self,
        station: Station,
        directions: list[Direction],
        destination: Station | None,
        now: datetime,
        page_size: int,
        grids: Grids,
        vehicles: list[LiveVehicle],
    ) -> list[DepartureResult]:
        """Match live vehicles to slots and fill with schedule-only rows.

        Raises:
            InternalError: If the pipeline fails unexpectedly.
        """
        try:
            rows: list[CandidateDeparture] = []
            for direction in directions:
                rows.extend(
                    self._direction_rows(
                        station, direction, grids.get(direction, []), vehicles, now, page_size
                    )
                )
            if destination is not None:
                rows = self._destination_filter.apply(rows, station, destination)
            return finalize((row.result for row in rows), page_size)
        except (ArithmeticError, KeyError, TypeError, ValueError) as e:
            raise InternalError(f"Reconciliation failed for {station.user_id}: {e}") from e

    def _direction_rows(
        self,
        station: Station,
        direction: Direction,
        slots: list[ScheduleSlot],
        vehicles: list[LiveVehicle],
        now: datetime,
        page_size: int,
    ) -> list[CandidateDeparture]:
        matches = self._matcher.match(vehicles, slots, station, direction, now)
        rows = [row for row in (self._matched_row(m, now) for m in matches) if row]

        claimed = {m.slot for m in matches}
        end = self._registry.end_of(direction)
        grace = timedelta(minutes=self._settings.departure_grace_minutes)
        for slot in slots:
            if len(rows) >= page_size:
                break
            if slot in claimed or slot.scheduled_at - now + grace <= timedelta(0):
                continue
            rows.append(
                CandidateDeparture(
                    result=DepartureResult(
                        train_number=None,
                        scheduled_time=slot.scheduled_time,
                        minutes_to_departure=max(0, minutes_until(slot.scheduled_at, now)),
                        destination_name=end.name,
                    ),
                    destination_code=end.live_id,
                )
            )
        return rows

    def _matched_row(self, match: SlotMatch, now: datetime) -> CandidateDeparture | None:
        """Countdown for a matched train, or None once it should disappear."""
        slot, vehicle = match.slot, match.vehicle
        delay_minutes = vehicle.delay_minutes
        delayed_departure = slot.scheduled_at + timedelta(seconds=max(0, vehicle.delay_seconds))
        key = (vehicle.train_number, slot.scheduled_time)

        frozen = self._cache.get(key)
        freeze_at = timedelta(minutes=self._settings.freeze_threshold_minutes)
        if frozen is None and slot.scheduled_at - now <= freeze_at:
            frozen = self._cache.set_if_absent(key, delayed_departure)
        if frozen is not None:
            if now >= frozen:
                return None
        elif delayed_departure <= now:
            return None

        delayed = minutes_until(slot.scheduled_at, now) + delay_minutes
        if match.stations_remaining == 0:
            if delayed < 0:
                return None
            minutes = delayed
        else:
            transit = match.stations_remaining * self._settings.per_station_transit_minutes
            minutes = max(0, min(transit, delayed))

        end = self._registry.end_of(slot.direction)
        return CandidateDeparture(
            result=DepartureResult(
                train_number=vehicle.train_number,
                scheduled_time=slot.scheduled_time,
                minutes_to_departure=minutes,
                delay_minutes=delay_minutes,
                destination_name=vehicle.destination_name or end.name,
                is_delayed=delay_minutes > 0,
            ),
            destination_code=vehicle.destination_code,
        )

    async def _from_timetable_api(
        self,
        station: Station,
        directions: list[Direction],
        destination: Station | None,
        now: datetime,
        page_size: int,
        vehicles: list[LiveVehicle],
    ) -> list[DepartureResult]:
        """Departures from the official timetable API, with live delays merged in."""
        targets: list[Station] = []
        for direction in directions:
            target = destination or self._registry.end_of(direction)
            if target != station and target not in targets:
                targets.append(target)
        if not targets:
            return []

        windows = [
            format_time_of_day(now + timedelta(minutes=offset))
            for offset in ITINERARY_WINDOW_OFFSETS_MINUTES
        ]
        queries = [(target, start_time) for target in targets for start_time in windows]
        responses = await asyncio.gather(
            *(
                self._itineraries.fetch_itinerary(
                    station.timetable_id,
                    target.timetable_id,
                    now.date(),
                    start_time,
                    station_id=station.user_id,
                )
                for target, start_time in queries
            ),
            return_exceptions=True,
        )

        records: dict[str | tuple[str, str], tuple[ItineraryRecord, Station]] = {}
        for (target, start_time), response in zip(queries, responses, strict=True):
            if isinstance(response, BaseException):
                logger.warning(
                    f"Timetable API failed for {station.name} -> {target.name} "
                    f"from {start_time}: {response}"
                )
                continue
            for record in response or []:
                key = record.train_number or (record.departure_time, record.destination_code)
                records.setdefault(key, (record, target))

        live_delays = {v.train_number: v.delay_minutes for v in vehicles}
        rows: list[CandidateDeparture] = []
        for record, target in records.values():
            row = self._itinerary_row(record, target, live_delays, now)
            if row:
                rows.append(row)

        rows = self._filter_api_rows(rows, station, directions, destination)
        return finalize((row.result for row in rows), page_size)

    def _filter_api_rows(
        self,
        rows: list[CandidateDeparture],
        station: Station,
        directions: list[Direction],
        destination: Station | None,
    ) -> list[CandidateDeparture]:
        """Keep API rows that are departures for the query.

        A station timetable lists every train calling at the station, whichever
        way it runs and wherever it ends.
        """
        if destination is not None:
            return self._destination_filter.apply(rows, station, destination)
        if len(directions) == 1:
            return self._destination_filter.heading(rows, station, directions[0])
        return self._destination_filter.drop_terminating(rows, station)

    def _itinerary_row(
        self,
        record: ItineraryRecord,
        target: Station,
        live_delays: dict[str, int],
        now: datetime,
    ) -> CandidateDeparture | None:
        delay = record.delay_minutes
        if record.train_number and record.train_number in live_delays:
            delay = live_delays[record.train_number]

        scheduled_at = at_time_of_day(now.date(), record.departure_time, self._tz)
        minutes = minutes_until(scheduled_at, now) + delay
        if minutes < -self._settings.departure_grace_minutes:
            return None

        return CandidateDeparture(
            result=DepartureResult(
                train_number=record.train_number,
                scheduled_time=record.departure_time,
                minutes_to_departure=max(0, minutes),
                delay_minutes=delay,
                destination_name=record.destination_name or target.name,
                is_delayed=delay > 0,
                platform=record.platform,
            ),
            destination_code=record.destination_code or None,
        )
