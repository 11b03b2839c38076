"""
Command-line interface for hatchcast.

This module provides the main entry point for the CLI.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

import requests

from hatchcast import __version__
from hatchcast.config import get_settings
from hatchcast.flows.refresh import refresh_top_picks
from hatchcast.reference.hatches import HATCHES
from hatchcast.reference.streams import DEFAULT_RADIUS_MILES, STREAMS, locations_near
from hatchcast.schemas import Coordinates, Location, LocationScore
from hatchcast.top_picks import build_ranker

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO", *, debug: bool = False) -> None:
    """Route module loggers to stderr at ``level`` (DEBUG when ``debug``)."""
    logging.basicConfig(
        level=logging.DEBUG if debug else level.upper(),
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


def _coordinates(value: str) -> Coordinates:
    """Parse ``LAT,LON`` for ``--near``."""
    try:
        lat, lon = (float(part) for part in value.split(","))
        return Coordinates(latitude=lat, longitude=lon)
    except ValueError as exc:
        msg = f"expected LAT,LON in degrees, got {value!r}"
        raise argparse.ArgumentTypeError(msg) from exc


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="hatchcast",
        description="Live trout stream conditions, hatch predictions and top picks",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("info", help="Show application info")

    locations_parser = subparsers.add_parser("locations", help="List monitored streams")
    locations_parser.add_argument("--region", type=str, default=None, help="Filter by region")
    locations_parser.add_argument(
        "--near",
        type=_coordinates,
        default=None,
        metavar="LAT,LON",
        help="Only streams near this point, nearest first",
    )
    locations_parser.add_argument(
        "--radius",
        type=float,
        default=DEFAULT_RADIUS_MILES,
        help=f"Search radius in miles for --near (default: {DEFAULT_RADIUS_MILES:g})",
    )

    hatches_parser = subparsers.add_parser("hatches", help="List the hatch catalog")
    hatches_parser.add_argument(
        "--month",
        type=int,
        default=None,
        choices=range(1, 13),
        help="Only hatches peaking in month",
    )

    conditions_parser = subparsers.add_parser("conditions", help="Score one stream right now")
    conditions_parser.add_argument("location_id", help="Stream id (see 'hatchcast locations')")
    conditions_parser.add_argument("--json", action="store_true", help="Print JSON")

    top_parser = subparsers.add_parser("top-picks", help="Rank streams by current conditions")
    top_parser.add_argument(
        "--count",
        type=int,
        default=None,
        help="Number of picks (default: top_n from settings)",
    )
    top_parser.add_argument("--json", action="store_true", help="Print JSON")

    refresh_parser = subparsers.add_parser("refresh", help="Run the refresh flow")
    refresh_parser.add_argument(
        "--force", action="store_true", help="Re-rank even if the snapshot is fresh"
    )

    return parser


def _print_score(rank: int | None, score: LocationScore) -> None:
    prefix = f"{rank:>2}. " if rank is not None else ""
    name = f"{score.location.name} [{score.location.id}]"
    print(f"{prefix}{name} {score.score}/100 ({score.quality})")
    print(f"    {score.summary}")
    for prediction in score.top_predictions:
        print(
            f"    - {prediction.hatch.common_name}: "
            f"{prediction.probability:.0%} ({prediction.confidence})"
        )


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"Cache backend: {settings.cache_backend}")
    print(f"Data dir: {settings.data_dir}")
    print(f"Streams: {len(STREAMS)}")
    print(f"Hatches: {len(HATCHES)}")
    return 0


def cmd_locations(args: argparse.Namespace) -> int:
    """Handle the 'locations' command."""
    nearby: list[tuple[Location, float | None]]
    if args.near is not None:
        try:
            nearby = [(loc, d) for loc, d in locations_near(args.near, args.radius)]
        except ValueError as e:
            print(e, file=sys.stderr)
            return 1
    else:
        nearby = [(loc, None) for loc in STREAMS]

    for loc, distance in nearby:
        if args.region and loc.region != args.region:
            continue
        stations = ", ".join(loc.station_ids)
        line = f"{loc.id:<24} {loc.name:<32} {loc.state} {loc.region:<15} {stations}"
        print(f"{line}  ({distance:.1f} mi)" if distance is not None else line)
    return 0


def cmd_hatches(args: argparse.Namespace) -> int:
    """Handle the 'hatches' command."""
    for hatch in HATCHES:
        if args.month is not None and args.month not in hatch.peak_months:
            continue
        months = ",".join(str(m) for m in hatch.peak_months)
        print(
            f"{hatch.id:<18} {hatch.common_name:<24} {hatch.min_temp_f:g}-{hatch.max_temp_f:g}°F "
            f"months {months:<14} {hatch.time_of_day}"
        )
    return 0


def cmd_conditions(args: argparse.Namespace) -> int:
    """Handle the 'conditions' command."""
    ranker = build_ranker(get_settings())
    try:
        score = asyncio.run(ranker.conditions(args.location_id))
    except KeyError:
        print(f"Unknown stream: {args.location_id}", file=sys.stderr)
        return 1
    except (requests.RequestException, ValueError) as e:
        # ValueError covers pydantic ValidationError from a malformed upstream payload
        logger.error("Could not score %s: %s", args.location_id, e)
        return 1

    if args.json:
        print(json.dumps(score.model_dump(mode="json"), indent=2))
    else:
        _print_score(None, score)
    return 0


def cmd_top_picks(args: argparse.Namespace) -> int:
    """Handle the 'top-picks' command."""
    settings = get_settings()
    count = args.count if args.count is not None else settings.top_n
    if count < 1:
        print("--count must be at least 1", file=sys.stderr)
        return 1

    ranker = build_ranker(settings)
    rankings = asyncio.run(ranker.rank(count=count))

    if args.json:
        print(json.dumps(rankings.model_dump(mode="json"), indent=2))
        return 0

    if not rankings.picks:
        print("No streams could be scored right now.", file=sys.stderr)
        return 1
    for i, pick in enumerate(rankings.picks, 1):
        _print_score(i, pick)
    return 0


def cmd_refresh(args: argparse.Namespace) -> int:
    """Handle the 'refresh' command: rank streams and write the snapshot."""
    result = asyncio.run(refresh_top_picks(force=args.force))
    print(f"Done ({result['count']} picks).")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(settings.log_level, debug=args.debug or settings.debug)

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "info": cmd_info,
        "locations": cmd_locations,
        "hatches": cmd_hatches,
        "conditions": cmd_conditions,
        "top-picks": cmd_top_picks,
        "refresh": cmd_refresh,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
