"""Domain layer - core business logic and models."""

from cascais_departures.domain.errors import (
    DeparturesError,
    InternalError,
    InvalidStationError,
    MalformedUpstreamShapeError,
    UpstreamUnavailableError,
)
from cascais_departures.domain.models import (
    DepartureResult,
    Direction,
    LiveVehicle,
    Station,
)

__all__ = [
    "DepartureResult",
    "DeparturesError",
    "Direction",
    "InternalError",
    "InvalidStationError",
    "LiveVehicle",
    "MalformedUpstreamShapeError",
    "Station",
    "UpstreamUnavailableError",
]
