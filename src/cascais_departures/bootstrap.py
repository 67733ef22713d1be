"""Wiring of the adapters into a departure board."""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from cascais_departures.adapters.cache import InMemoryDisappearanceCache
from cascais_departures.adapters.config import AppConfig, LineData, LineDataLoader
from cascais_departures.adapters.cp_api import CpItineraryRepository
from cascais_departures.adapters.line import LineStationRegistry, StaticTimetableProvider
from cascais_departures.adapters.live_feed import LiveFeedPositionRepository
from cascais_departures.application.services import ReconciliationEngine

if TYPE_CHECKING:
    from aiohttp import ClientSession


@dataclass(frozen=True)
class Components:
    """The wired-up pieces the entry points need."""

    line: LineData
    registry: LineStationRegistry
    timetable: StaticTimetableProvider
    engine: ReconciliationEngine


def build_components(
    config: AppConfig,
    session: "ClientSession | None" = None,
    line_data: LineData | None = None,
) -> Components:
    """Build the engine and its collaborators from configuration.

    Args:
        config: Application configuration.
        session: Shared aiohttp session. Without one, both upstream tiers
            report no data and only static timetables are used.
        line_data: Line data to use instead of loading it from configuration.

    Raises:
        FileNotFoundError: If a configured line data file does not exist.
        ValueError: If the line data is invalid.
    """
    line = line_data or LineDataLoader.load(config.line_data_file)
    registry = LineStationRegistry(line.stations, line.legacy_ids)
    timetable = StaticTimetableProvider(
        line.daily_timetables,
        line.weekday_timetables,
        weekday_overlay_enabled=config.weekday_overlay_enabled,
    )
    live_positions = LiveFeedPositionRepository(
        url=config.live_feed_url,
        service_code=config.live_service_code or line.service_code,
        terminus_codes={registry.origin.live_id, registry.terminus.live_id},
        session=session,
        timeout_seconds=config.live_feed_timeout_seconds,
        verify_tls=config.upstream_verify_tls,
    )
    itineraries = CpItineraryRepository(
        session=session,
        base_url=config.cp_api_base_url,
        api_key=config.cp_api_key,
        connect_id=config.cp_connect_id,
        connect_secret=config.cp_connect_secret,
        timeout_seconds=config.cp_api_timeout_seconds,
        verify_tls=config.upstream_verify_tls,
    )
    engine = ReconciliationEngine(
        registry,
        timetable,
        live_positions,
        itineraries,
        InMemoryDisappearanceCache(),
        settings=config.reconciliation_settings(),
        tz=config.tzinfo,
    )
    return Components(line=line, registry=registry, timetable=timetable, engine=engine)
