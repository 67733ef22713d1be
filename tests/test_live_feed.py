"""Tests for the live vehicle feed adapter."""

import aiohttp
import pytest
from fakes import (
    CAIS_DO_SODRE_LIVE,
    CARCAVELOS_LIVE,
    CASCAIS_LIVE,
    PACO_DE_ARCOS_LIVE,
    FakeResponse,
    FakeSession,
)

from cascais_departures.adapters.live_feed import LiveFeedPositionRepository
from cascais_departures.adapters.live_feed.http_client import LiveFeedHttpClient
from cascais_departures.adapters.live_feed.vehicle_parser import VehicleParser
from cascais_departures.domain.models import VehicleStatus

FEED_URL = "https://feed.example/vehicles"


def _raw_vehicle(**overrides: object) -> dict[str, object]:
    raw: dict[str, object] = {
        "trainNumber": 19207,
        "service": {"code": "URB"},
        "origin": {"code": CAIS_DO_SODRE_LIVE},
        "destination": {"code": CASCAIS_LIVE, "designation": "Cascais"},
        "lastStation": {"code": PACO_DE_ARCOS_LIVE},
        "delay": 120,
        "status": "IN_TRANSIT",
    }
    raw.update(overrides)
    return raw


class TestVehicleParser:
    """Tests for VehicleParser."""

    def test_when_full_report_then_all_fields_are_parsed(self) -> None:
        """Given a complete report, when parsing, then every field is mapped."""
        (vehicle,) = VehicleParser.parse_vehicles([_raw_vehicle()])

        assert vehicle.train_number == "19207"
        assert vehicle.service_code == "URB"
        assert vehicle.origin_code == CAIS_DO_SODRE_LIVE
        assert vehicle.destination_code == CASCAIS_LIVE
        assert vehicle.destination_name == "Cascais"
        assert vehicle.last_station_code == PACO_DE_ARCOS_LIVE
        assert vehicle.delay_seconds == 120
        assert vehicle.status is VehicleStatus.IN_TRANSIT

    def test_when_train_number_missing_then_report_is_skipped(self) -> None:
        """Given a report without train number, when parsing, then it is dropped."""
        raw = _raw_vehicle()
        del raw["trainNumber"]

        assert VehicleParser.parse_vehicles([raw, _raw_vehicle(trainNumber=" ")]) == []

    def test_when_fields_are_bare_or_invalid_then_defaults_apply(self) -> None:
        """Given bare codes and a junk delay, when parsing, then safe defaults are used."""
        (vehicle,) = VehicleParser.parse_vehicles(
            [_raw_vehicle(destination=CASCAIS_LIVE, lastStation=None, delay="n/a", status=None)]
        )

        assert vehicle.destination_code == CASCAIS_LIVE
        assert vehicle.destination_name == ""
        assert vehicle.last_station_code is None
        assert vehicle.delay_seconds == 0
        assert vehicle.status is VehicleStatus.UNKNOWN

    def test_when_status_is_lowercase_with_spaces_then_it_is_normalized(self) -> None:
        """Given 'at station', when parsing, then AT_STATION is recognized."""
        (vehicle,) = VehicleParser.parse_vehicles([_raw_vehicle(status="at station")])

        assert vehicle.status is VehicleStatus.AT_STATION


class TestLiveFeedHttpClient:
    """Tests for LiveFeedHttpClient."""

    @pytest.mark.asyncio
    async def test_when_no_session_then_returns_empty(self) -> None:
        """Given no session, when fetching, then nothing is requested."""
        assert await LiveFeedHttpClient(FEED_URL).fetch_vehicles() == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            [_raw_vehicle()],
            {"vehicles": [_raw_vehicle()]},
            {"data": [_raw_vehicle(), "junk"]},
        ],
    )
    async def test_when_payload_has_known_shape_then_vehicles_are_extracted(
        self, body: object
    ) -> None:
        """Given a list or a wrapped list, when fetching, then the dict entries are returned."""
        session = FakeSession([FakeResponse(body=body)])

        vehicles = await LiveFeedHttpClient(FEED_URL, session=session).fetch_vehicles()

        assert len(vehicles) == 1
        assert session.requests[0]["url"] == FEED_URL
        assert session.requests[0]["ssl"] is False

    @pytest.mark.asyncio
    async def test_when_payload_shape_is_unknown_then_returns_empty(self) -> None:
        """Given an unexpected payload, when fetching, then an empty list is returned."""
        session = FakeSession([FakeResponse(body={"trains": "none"})])

        assert await LiveFeedHttpClient(FEED_URL, session=session).fetch_vehicles() == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "outcome",
        [
            FakeResponse(status=503, text="maintenance"),
            FakeResponse(body=ValueError("not json")),
            TimeoutError(),
            aiohttp.ClientConnectionError("refused"),
        ],
    )
    async def test_when_fetch_fails_then_returns_empty(self, outcome: object) -> None:
        """Given a failing upstream, when fetching, then an empty list is returned."""
        session = FakeSession([outcome])

        assert await LiveFeedHttpClient(FEED_URL, session=session).fetch_vehicles() == []


class TestLiveFeedPositionRepository:
    """Tests for LiveFeedPositionRepository."""

    @pytest.mark.asyncio
    async def test_when_feed_has_other_lines_then_only_this_line_is_kept(self) -> None:
        """Given vehicles of other services or routes, when fetching, then they are filtered out."""
        session = FakeSession(
            [
                FakeResponse(
                    body=[
                        _raw_vehicle(trainNumber=1),
                        _raw_vehicle(trainNumber=2, service={"code": "IC"}),
                        _raw_vehicle(
                            trainNumber=3,
                            origin={"code": "94-99999"},
                            destination={"code": "94-88888"},
                        ),
                        _raw_vehicle(
                            trainNumber=4,
                            origin={"code": CARCAVELOS_LIVE},
                            destination={"code": CAIS_DO_SODRE_LIVE},
                        ),
                    ]
                )
            ]
        )
        repository = LiveFeedPositionRepository(
            FEED_URL, "URB", {CAIS_DO_SODRE_LIVE, CASCAIS_LIVE}, session=session
        )

        vehicles = await repository.fetch_active()

        assert [v.train_number for v in vehicles] == ["1", "4"]

    @pytest.mark.asyncio
    async def test_when_service_code_blank_then_any_service_is_accepted(self) -> None:
        """Given no service code, when fetching, then only the termini decide membership."""
        session = FakeSession([FakeResponse(body=[_raw_vehicle(service={"code": "IC"})])])
        repository = LiveFeedPositionRepository(
            FEED_URL, "", {CAIS_DO_SODRE_LIVE, CASCAIS_LIVE}, session=session
        )

        assert len(await repository.fetch_active()) == 1

    @pytest.mark.asyncio
    async def test_when_feed_fails_then_no_vehicles(self) -> None:
        """Given a failing feed, when fetching, then an empty list is returned."""
        repository = LiveFeedPositionRepository(
            FEED_URL, "URB", {CASCAIS_LIVE}, session=FakeSession([TimeoutError()])
        )

        assert await repository.fetch_active() == []
