"""Command line interface for the Cascais line departures."""

import argparse
import asyncio
import json
import sys
from datetime import date, datetime

import aiohttp

from cascais_departures.adapters.config import AppConfig
from cascais_departures.bootstrap import build_components
from cascais_departures.domain.errors import InvalidStationError
from cascais_departures.domain.models.departure_result import DepartureResult
from cascais_departures.domain.models.direction import Direction


def format_departure(row: DepartureResult) -> str:
    """One human-readable line for a departure."""
    train = row.train_number or "-"
    delay = f" +{row.delay_minutes}" if row.is_delayed else ""
    platform = f"  platform {row.platform}" if row.platform else ""
    return (
        f"  {row.scheduled_time}  {row.minutes_to_departure:>3} min{delay:<4} "
        f"{train:>6}  {row.destination_name}{platform}"
    )


def today_in(config: AppConfig) -> date:
    """Current service day in the configured timezone."""
    return datetime.now(config.tzinfo).date()


def list_stations(config: AppConfig, as_json: bool = False) -> None:
    """Print the stations of the line in order."""
    registry = build_components(config).registry
    stations = registry.stations()
    if as_json:
        payload = [
            {
                "id": s.user_id,
                "name": s.name,
                "liveId": s.live_id,
                "timetableId": s.timetable_id,
                "offsetMinutes": s.offset_minutes,
            }
            for s in stations
        ]
        print(json.dumps(payload, indent=2, ensure_ascii=False))
        return
    for station in stations:
        print(f"  {station.user_id}  +{station.offset_minutes:>2} min  {station.name}")


def print_schedule(config: AppConfig, direction: Direction, day: date) -> None:
    """Print the static departures of a direction from its starting terminus."""
    components = build_components(config)
    start = components.registry.end_of(direction.opposite)
    end = components.registry.end_of(direction)
    times = components.timetable.schedule(direction, day)
    print(f"{start.name} -> {end.name} on {day:%A %Y-%m-%d} ({len(times)} departures):")
    for i in range(0, len(times), 10):
        print("  " + " ".join(times[i : i + 10]))


async def show_next(
    config: AppConfig,
    station_id: str,
    destination_id: str | None = None,
    overview: bool = False,
    as_json: bool = False,
) -> None:
    """Run the engine once and print the departures."""
    async with aiohttp.ClientSession() as session:
        engine = build_components(config, session=session).engine
        if overview:
            result = await engine.get_overview(station_id)
            if as_json:
                print(json.dumps(result.to_payload(), indent=2, ensure_ascii=False))
                return
            print(result.station_name)
            sections = (
                ("Towards Cais do Sodré", result.to_origin),
                ("Towards Cascais", result.to_terminus),
            )
            for label, rows in sections:
                print(f"\n {label}:")
                for row in rows:
                    print(format_departure(row))
                if not rows:
                    print("  (no departures)")
            return

        rows = await engine.get_departures(station_id, destination_id)
        if as_json:
            print(json.dumps([r.to_payload() for r in rows], indent=2, ensure_ascii=False))
            return
        for row in rows:
            print(format_departure(row))


async def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Cascais line departures",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run the HTTP API
  cascais-departures serve

  # List stations and their ids
  cascais-departures stations

  # Next trains from Carcavelos towards Cais do Sodré
  cascais-departures next 94-69187 --to 94-69005

  # Both directions from Oeiras
  cascais-departures next 94-69179 --overview

  # Static timetable towards Cascais
  cascais-departures schedule to_terminus --date 2025-12-20
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    subparsers.add_parser("serve", help="Run the HTTP API")

    stations_parser = subparsers.add_parser("stations", help="List the stations of the line")
    stations_parser.add_argument("--json", action="store_true", help="Output as JSON")

    next_parser = subparsers.add_parser("next", help="Show the next departures from a station")
    next_parser.add_argument("station_id", help="Station id (e.g., 94-69187)")
    next_parser.add_argument("--to", dest="destination_id", help="Destination station id")
    next_parser.add_argument(
        "--overview", action="store_true", help="Show both directions side by side"
    )
    next_parser.add_argument("--json", action="store_true", help="Output as JSON")

    schedule_parser = subparsers.add_parser("schedule", help="Show the static timetable")
    schedule_parser.add_argument(
        "direction",
        choices=[d.value for d in Direction],
        help="Direction of travel",
    )
    schedule_parser.add_argument(
        "--date",
        type=date.fromisoformat,
        default=None,
        help="Service day as YYYY-MM-DD (default: today in the configured timezone)",
    )

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        if args.command == "serve":
            from cascais_departures.main import main as serve

            await serve()
            return

        config = AppConfig()
        if args.command == "stations":
            list_stations(config, as_json=args.json)

        elif args.command == "next":
            await show_next(
                config,
                args.station_id,
                destination_id=args.destination_id,
                overview=args.overview,
                as_json=args.json,
            )

        elif args.command == "schedule":
            day = args.date or today_in(config)
            print_schedule(config, Direction(args.direction), day)

    except InvalidStationError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(1)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def cli_main() -> None:
    """Synchronous entry point for the CLI command."""
    asyncio.run(main())


if __name__ == "__main__":
    cli_main()
