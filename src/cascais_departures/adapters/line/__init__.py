"""Adapters for the static line data."""

from cascais_departures.adapters.line.static_timetable_provider import StaticTimetableProvider
from cascais_departures.adapters.line.station_registry import LineStationRegistry

__all__ = ["LineStationRegistry", "StaticTimetableProvider"]
