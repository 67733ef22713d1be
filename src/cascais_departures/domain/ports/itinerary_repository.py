"""Itinerary repository port."""

from datetime import date
from typing import Protocol

from cascais_departures.domain.models.itinerary_record import ItineraryRecord


class ItineraryRepository(Protocol):
    """Port for the official timetable API."""

    async def fetch_itinerary(
        self,
        from_id: str,
        to_id: str,
        day: date,
        start_time: str = "00:00",
        station_id: str | None = None,
    ) -> list[ItineraryRecord] | None:
        """Get itinerary records between two timetable-API station ids.

        start_time ("HH:MM") bounds station timetable queries from below.
        station_id is the departure station's user-facing id, which station
        timetable queries are keyed by.
        Returns None when no usable data could be obtained.
        """
        ...
