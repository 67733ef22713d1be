"""CP timetable API adapters."""

from cascais_departures.adapters.cp_api.cp_itinerary_repository import CpItineraryRepository

__all__ = ["CpItineraryRepository"]
