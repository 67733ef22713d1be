"""Exception taxonomy for the departures domain."""


class DeparturesError(Exception):
    """Base class for all departures errors."""


class InvalidStationError(DeparturesError):
    """Raised when a station identifier is missing or not on the line."""

    def __init__(self, station_id: str | None) -> None:
        self.station_id = station_id
        message = f"Unknown station id: {station_id!r}" if station_id else "Station id required"
        super().__init__(message)


class UpstreamUnavailableError(DeparturesError):
    """An upstream data source timed out or answered with an error."""


class MalformedUpstreamShapeError(DeparturesError):
    """An upstream payload did not match any known response shape."""


class InternalError(DeparturesError):
    """Unexpected failure inside the reconciliation pipeline."""
