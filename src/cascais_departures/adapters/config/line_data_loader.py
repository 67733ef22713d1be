"""Loader for the line data file (stations, legacy ids and static timetables)."""

import tomllib
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import Any

from cascais_departures.domain.models.direction import Direction
from cascais_departures.domain.models.station import Station
from cascais_departures.domain.time_of_day import parse_time_of_day

PACKAGED_LINE_DATA = "cascais_line.toml"


@dataclass(frozen=True)
class LineData:
    """Static description of the line."""

    name: str
    service_code: str
    stations: list[Station]
    legacy_ids: dict[str, tuple[str, Direction]]  # legacy id -> (user id, implied direction)
    daily_timetables: dict[Direction, list[str]] = field(default_factory=dict)
    weekday_timetables: dict[Direction, list[str]] = field(default_factory=dict)


class LineDataLoader:
    """Loads and validates line data from TOML."""

    @staticmethod
    def load(path: str | Path | None = None) -> LineData:
        """Load line data from a file, or from the packaged data when path is None.

        Raises:
            FileNotFoundError: If an explicit path does not exist.
            ValueError: If the data is invalid.
        """
        if path is None:
            raw = (
                resources.files("cascais_departures.data")
                .joinpath(PACKAGED_LINE_DATA)
                .read_text(encoding="utf-8")
            )
            return LineDataLoader.parse(tomllib.loads(raw))

        data_path = Path(path)
        if not data_path.exists():
            raise FileNotFoundError(f"Line data file not found: {data_path}")
        with open(data_path, "rb") as f:
            return LineDataLoader.parse(tomllib.load(f))

    @staticmethod
    def parse(toml_data: dict[str, Any]) -> LineData:
        """Build LineData from parsed TOML."""
        line = toml_data.get("line", {})
        stations = LineDataLoader._parse_stations(toml_data.get("stations", []))
        known_ids = {s.user_id for s in stations}
        legacy_ids = LineDataLoader._parse_legacy_ids(toml_data.get("legacy_ids", []), known_ids)

        daily: dict[Direction, list[str]] = {}
        weekday: dict[Direction, list[str]] = {}
        timetables = toml_data.get("timetables", {})
        if not isinstance(timetables, dict):
            raise ValueError("TOML 'timetables' must be a table")
        for key, tables in timetables.items():
            direction = LineDataLoader._parse_direction(key)
            daily[direction] = LineDataLoader._parse_times(tables.get("daily", []), key)
            weekday[direction] = LineDataLoader._parse_times(tables.get("weekday", []), key)

        return LineData(
            name=str(line.get("name", "")),
            service_code=str(line.get("service_code", "")),
            stations=stations,
            legacy_ids=legacy_ids,
            daily_timetables=daily,
            weekday_timetables=weekday,
        )

    @staticmethod
    def _parse_stations(raw_stations: Any) -> list[Station]:
        if not isinstance(raw_stations, list) or len(raw_stations) < 2:
            raise ValueError("TOML 'stations' must list at least two stations")

        stations: list[Station] = []
        for entry in raw_stations:
            try:
                station = Station(
                    user_id=str(entry["user_id"]),
                    live_id=str(entry["live_id"]),
                    timetable_id=str(entry["timetable_id"]),
                    name=str(entry["name"]),
                    offset_minutes=int(entry["offset_minutes"]),
                )
            except (KeyError, TypeError, ValueError) as e:
                raise ValueError(f"Invalid station entry {entry!r}: {e}") from e
            if stations and station.offset_minutes < stations[-1].offset_minutes:
                raise ValueError(f"Station offsets must not decrease (at {station.name})")
            stations.append(station)

        # A station may reuse one id across namespaces, but never another station's id
        all_codes = [code for s in stations for code in s.codes()]
        duplicates = {c for c in all_codes if all_codes.count(c) > 1}
        if duplicates:
            raise ValueError(f"Station ids must be unique. Duplicates found: {duplicates}")
        return stations

    @staticmethod
    def _parse_legacy_ids(raw: Any, known_ids: set[str]) -> dict[str, tuple[str, Direction]]:
        if not isinstance(raw, list):
            raise ValueError("TOML 'legacy_ids' must be a list")
        legacy: dict[str, tuple[str, Direction]] = {}
        for entry in raw:
            station_id = str(entry.get("station", ""))
            if station_id not in known_ids:
                raise ValueError(f"Legacy id {entry.get('id')!r} points to unknown station")
            direction = LineDataLoader._parse_direction(entry.get("direction", ""))
            legacy[str(entry["id"])] = (station_id, direction)
        return legacy

    @staticmethod
    def _parse_direction(value: str) -> Direction:
        try:
            return Direction(value)
        except ValueError as e:
            raise ValueError(f"Unknown direction {value!r}") from e

    @staticmethod
    def _parse_times(values: Any, table: str) -> list[str]:
        if not isinstance(values, list):
            raise ValueError(f"Timetable '{table}' must be a list of HH:MM strings")
        times = []
        for value in values:
            parse_time_of_day(str(value))
            times.append(str(value))
        return times
