"""Ports (interfaces) for the ports-and-adapters architecture."""

from cascais_departures.domain.ports.departure_board import DepartureBoard
from cascais_departures.domain.ports.itinerary_repository import ItineraryRepository
from cascais_departures.domain.ports.live_position_repository import LivePositionRepository
from cascais_departures.domain.ports.station_registry import StationRegistry
from cascais_departures.domain.ports.timetable_provider import TimetableProvider

__all__ = [
    "DepartureBoard",
    "ItineraryRepository",
    "LivePositionRepository",
    "StationRegistry",
    "TimetableProvider",
]
