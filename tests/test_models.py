"""Tests for domain models."""

from datetime import datetime

import pytest
from fakes import LISBON
from pydantic import ValidationError

from cascais_departures.domain.models import (
    DepartureResult,
    Direction,
    LiveVehicle,
    ScheduleSlot,
    Station,
    StationOverview,
    VehicleStatus,
)


def test_departure_result_serializes_with_camel_case_keys() -> None:
    """Given a departure, when serialized, then keys are camelCase."""
    departure = DepartureResult(
        train_number="19207",
        scheduled_time="08:10",
        minutes_to_departure=6,
        delay_minutes=4,
        destination_name="Cascais",
        is_delayed=True,
        platform="2",
    )

    assert departure.to_payload() == {
        "trainNumber": "19207",
        "scheduledTime": "08:10",
        "minutesToDeparture": 6,
        "delayMinutes": 4,
        "destinationName": "Cascais",
        "isDelayed": True,
        "platform": "2",
    }


def test_departure_result_defaults_describe_schedule_only_row() -> None:
    """Given only the required fields, when created, then it is an on-time schedule-only row."""
    departure = DepartureResult(
        scheduled_time="08:10", minutes_to_departure=10, destination_name="Cascais"
    )

    assert departure.train_number is None
    assert departure.delay_minutes == 0
    assert departure.is_delayed is False
    assert departure.platform is None


def test_departure_result_rejects_negative_countdown() -> None:
    """Given a negative countdown, when created, then validation fails."""
    with pytest.raises(ValidationError):
        DepartureResult(scheduled_time="08:10", minutes_to_departure=-1, destination_name="X")


def test_departure_result_is_immutable() -> None:
    """Given a departure, when mutating, then validation fails."""
    departure = DepartureResult(
        scheduled_time="08:10", minutes_to_departure=1, destination_name="Cascais"
    )

    with pytest.raises(ValidationError):
        departure.minutes_to_departure = 2  # type: ignore[misc]


def test_station_overview_serializes_nested_rows() -> None:
    """Given an overview, when serialized, then nested rows use camelCase too."""
    row = DepartureResult(scheduled_time="08:10", minutes_to_departure=1, destination_name="Cascais")
    overview = StationOverview(
        station_id="94-69179", station_name="Oeiras", to_origin=[], to_terminus=[row]
    )

    payload = overview.to_payload()

    assert payload["toTerminus"][0]["scheduledTime"] == "08:10"
    assert payload["toOrigin"] == []


def test_direction_opposite() -> None:
    """Given a direction, when asking for the opposite, then the other one is returned."""
    assert Direction.TO_ORIGIN.opposite is Direction.TO_TERMINUS
    assert Direction.TO_TERMINUS.opposite is Direction.TO_ORIGIN


def test_station_codes_cover_every_namespace() -> None:
    """Given a station, when listing codes, then all three ids are included."""
    station = Station("94-69187", "94-30187", "9434007", "Carcavelos", 26)

    assert station.codes() == {"94-69187", "94-30187", "9434007"}


class TestLiveVehicle:
    """Tests for live vehicle helpers."""

    def _vehicle(self, delay_seconds: int, status: VehicleStatus) -> LiveVehicle:
        return LiveVehicle("1", "URB", "a", "b", "B", None, delay_seconds, status)

    @pytest.mark.parametrize(
        ("delay_seconds", "expected"), [(0, 0), (29, 0), (31, 1), (240, 4), (-120, 0)]
    )
    def test_delay_minutes_rounds_and_never_goes_negative(
        self, delay_seconds: int, expected: int
    ) -> None:
        """Given a delay in seconds, when converting, then whole non-negative minutes result."""
        assert self._vehicle(delay_seconds, VehicleStatus.IN_TRANSIT).delay_minutes == expected

    def test_completed_status_marks_vehicle_completed(self) -> None:
        """Given a completed vehicle, when checking, then it is completed."""
        assert self._vehicle(0, VehicleStatus.COMPLETED).is_completed is True
        assert self._vehicle(0, VehicleStatus.IN_TRANSIT).is_completed is False

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("COMPLETED", VehicleStatus.COMPLETED),
            ("in transit", VehicleStatus.IN_TRANSIT),
            ("at-station", VehicleStatus.AT_STATION),
            ("teleporting", VehicleStatus.UNKNOWN),
            (None, VehicleStatus.UNKNOWN),
        ],
    )
    def test_status_from_raw_feed_values(self, raw: object, expected: VehicleStatus) -> None:
        """Given a raw feed status, when mapping, then the matching status is returned."""
        assert VehicleStatus.from_raw(raw) is expected


def test_schedule_slot_formats_scheduled_time() -> None:
    """Given a slot, when formatting, then the station-local time is returned."""
    slot = ScheduleSlot(
        Direction.TO_TERMINUS, "07:44", datetime(2025, 12, 17, 8, 10, tzinfo=LISBON)
    )

    assert slot.scheduled_time == "08:10"
