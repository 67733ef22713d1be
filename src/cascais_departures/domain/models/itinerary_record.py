"""Itinerary record domain model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ItineraryRecord:
    """A normalized departure record from the official timetable API."""

    train_number: str | None
    departure_time: str  # "HH:MM" at the queried station
    destination_code: str
    destination_name: str
    delay_minutes: int = 0
    platform: str | None = None
