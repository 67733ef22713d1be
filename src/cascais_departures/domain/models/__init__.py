"""Domain models for Cascais line departures."""

from cascais_departures.domain.models.departure_result import DepartureResult, StationOverview
from cascais_departures.domain.models.direction import Direction
from cascais_departures.domain.models.itinerary_record import ItineraryRecord
from cascais_departures.domain.models.live_vehicle import LiveVehicle, VehicleStatus
from cascais_departures.domain.models.reconciliation_settings import ReconciliationSettings
from cascais_departures.domain.models.schedule_slot import ScheduleSlot
from cascais_departures.domain.models.station import Station

__all__ = [
    "DepartureResult",
    "Direction",
    "ItineraryRecord",
    "LiveVehicle",
    "ReconciliationSettings",
    "ScheduleSlot",
    "Station",
    "StationOverview",
    "VehicleStatus",
]
