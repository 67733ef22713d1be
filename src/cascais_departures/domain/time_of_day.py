"""Helpers for wall-clock "HH:MM" times and minute countdowns."""

import re
from datetime import date, datetime, time, tzinfo

_TIME_OF_DAY_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})(?::\d{2})?$")


def parse_time_of_day(value: str) -> time:
    """Parse "HH:MM" (or "HH:MM:SS") into a time.

    Raises:
        ValueError: If the value is not a valid time of day.
    """
    match = _TIME_OF_DAY_PATTERN.match(value.strip())
    if not match:
        raise ValueError(f"Invalid time of day: {value!r}")
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise ValueError(f"Invalid time of day: {value!r}")
    return time(hours, minutes)


def format_time_of_day(moment: datetime | time) -> str:
    """Format a datetime or time as "HH:MM"."""
    return moment.strftime("%H:%M")


def at_time_of_day(day: date, value: str, tz: tzinfo) -> datetime:
    """Combine a calendar day and an "HH:MM" string into an aware datetime."""
    return datetime.combine(day, parse_time_of_day(value), tzinfo=tz)


def minutes_until(moment: datetime, now: datetime) -> int:
    """Whole minutes from now until moment, rounded to the nearest minute."""
    return round((moment - now).total_seconds() / 60)
