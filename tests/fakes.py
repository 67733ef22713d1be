"""Test doubles and builders shared by the departures tests."""

from datetime import date, datetime
from typing import Any
from zoneinfo import ZoneInfo

from cascais_departures.domain.models import (
    Direction,
    ItineraryRecord,
    LiveVehicle,
    VehicleStatus,
)

LISBON = ZoneInfo("Europe/Lisbon")

# Live-feed ids of a few stations used throughout the tests
CAIS_DO_SODRE_LIVE = "94-30005"
PACO_DE_ARCOS_LIVE = "94-30146"
OEIRAS_LIVE = "94-30179"
CARCAVELOS_LIVE = "94-30187"
PAREDE_LIVE = "94-30203"
CASCAIS_LIVE = "94-30260"

CARCAVELOS = "94-69187"
CAIS_DO_SODRE = "94-69005"
OEIRAS = "94-69179"
CASCAIS = "94-69260"


def lisbon_time(hour: int, minute: int, second: int = 0, day: int = 17) -> datetime:
    """An instant on December 2025 in Lisbon (the 17th is a Wednesday)."""
    return datetime(2025, 12, day, hour, minute, second, tzinfo=LISBON)


def make_vehicle(
    train_number: str = "19207",
    destination_code: str = CASCAIS_LIVE,
    last_station_code: str | None = PACO_DE_ARCOS_LIVE,
    delay_seconds: int = 0,
    status: VehicleStatus = VehicleStatus.IN_TRANSIT,
    origin_code: str = CAIS_DO_SODRE_LIVE,
    destination_name: str = "",
) -> LiveVehicle:
    """A vehicle of the line's service."""
    return LiveVehicle(
        train_number=train_number,
        service_code="URB",
        origin_code=origin_code,
        destination_code=destination_code,
        destination_name=destination_name,
        last_station_code=last_station_code,
        delay_seconds=delay_seconds,
        status=status,
    )


class FakeTimetable:
    """Timetable provider returning fixed departures per direction."""

    def __init__(
        self,
        to_terminus: list[str] | None = None,
        to_origin: list[str] | None = None,
        error: Exception | None = None,
    ) -> None:
        self._times = {
            Direction.TO_TERMINUS: list(to_terminus or []),
            Direction.TO_ORIGIN: list(to_origin or []),
        }
        self._error = error

    def schedule(self, direction: Direction, day: date) -> list[str]:  # noqa: ARG002
        if self._error:
            raise self._error
        return list(self._times[direction])


class FakeLivePositions:
    """Live position repository returning a mutable list of vehicles."""

    def __init__(self, vehicles: list[LiveVehicle] | None = None) -> None:
        self.vehicles = list(vehicles or [])
        self.calls = 0

    async def fetch_active(self) -> list[LiveVehicle]:
        self.calls += 1
        return list(self.vehicles)


class FakeItineraries:
    """Itinerary repository returning fixed records and recording queries.

    by_start_time answers a query with the records of its start time, falling
    back to records.
    """

    def __init__(
        self,
        records: list[ItineraryRecord] | None = None,
        by_start_time: dict[str, list[ItineraryRecord]] | None = None,
    ) -> None:
        self.records = records
        self.by_start_time = by_start_time or {}
        self.calls: list[tuple[str, str, date, str, str | None]] = []

    async def fetch_itinerary(
        self,
        from_id: str,
        to_id: str,
        day: date,
        start_time: str = "00:00",
        station_id: str | None = None,
    ) -> list[ItineraryRecord] | None:
        self.calls.append((from_id, to_id, day, start_time, station_id))
        records = self.by_start_time.get(start_time, self.records)
        return list(records) if records is not None else None


class FakeClock:
    """Settable clock."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class FakeResponse:
    """Minimal aiohttp response usable as an async context manager."""

    def __init__(self, status: int = 200, body: Any = None, text: str = "") -> None:
        self.status = status
        self._body = body
        self._text = text
        self.headers = {"Content-Type": "application/json"}

    async def json(self, content_type: str | None = None) -> Any:  # noqa: ARG002
        if isinstance(self._body, Exception):
            raise self._body
        return self._body

    async def text(self) -> str:
        return self._text

    async def __aenter__(self) -> "FakeResponse":
        return self

    async def __aexit__(self, *args: object) -> None:
        return None


class FakeSession:
    """Minimal aiohttp session answering from a queue of responses or errors."""

    def __init__(self, responses: list[FakeResponse | Exception]) -> None:
        self._responses = list(responses)
        self.requests: list[dict[str, Any]] = []

    def _next(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        self.requests.append({"method": method, "url": url, **kwargs})
        response = self._responses.pop(0) if self._responses else FakeResponse(status=404)
        if isinstance(response, Exception):
            raise response
        return response

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        return self._next("GET", url, **kwargs)

    def request(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        return self._next(method, url, **kwargs)
