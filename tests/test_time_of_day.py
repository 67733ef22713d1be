"""Tests for time-of-day helpers."""

from datetime import date, datetime, time

import pytest
from fakes import LISBON

from cascais_departures.domain.time_of_day import (
    at_time_of_day,
    format_time_of_day,
    minutes_until,
    parse_time_of_day,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("07:44", time(7, 44)),
        ("7:05", time(7, 5)),
        ("23:59:30", time(23, 59)),
        (" 00:10 ", time(0, 10)),
    ],
)
def test_parse_time_of_day_accepts_common_forms(value: str, expected: time) -> None:
    """Given HH:MM or HH:MM:SS, when parsing, then the time of day is returned."""
    assert parse_time_of_day(value) == expected


@pytest.mark.parametrize("value", ["24:00", "12:60", "noon", "", "12"])
def test_parse_time_of_day_rejects_invalid_values(value: str) -> None:
    """Given an invalid time, when parsing, then ValueError is raised."""
    with pytest.raises(ValueError, match="Invalid time of day"):
        parse_time_of_day(value)


def test_at_time_of_day_builds_aware_datetime() -> None:
    """Given a day and a time, when combining, then an aware datetime in the zone results."""
    moment = at_time_of_day(date(2025, 7, 1), "08:10", LISBON)

    assert moment == datetime(2025, 7, 1, 8, 10, tzinfo=LISBON)
    assert moment.utcoffset() is not None
    assert format_time_of_day(moment) == "08:10"


def test_minutes_until_rounds_to_nearest_minute() -> None:
    """Given instants 90 and 150 seconds apart, when counting, then minutes are rounded."""
    now = datetime(2025, 12, 17, 8, 0, tzinfo=LISBON)

    assert minutes_until(datetime(2025, 12, 17, 8, 10, tzinfo=LISBON), now) == 10
    assert minutes_until(datetime(2025, 12, 17, 8, 2, 31, tzinfo=LISBON), now) == 3
    assert minutes_until(datetime(2025, 12, 17, 7, 55, tzinfo=LISBON), now) == -5
