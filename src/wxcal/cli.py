"""Command-line interface for generating forecast calendars."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from wxcal import __version__
from wxcal.config import CalendarConfig, get_settings
from wxcal.models.location import Coordinates
from wxcal.pipeline import PipelineError, run_pipeline


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wxcal",
        description="Publish a weather.gov forecast as iCal calendars",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=__version__,
    )
    parser.add_argument(
        "--cal-location",
        default="",
        help="The name of the calendar's location (eg. \"Ann Arbor, MI\") (required)",
    )
    parser.add_argument(
        "--cal-domain",
        default="",
        help="The calendar's domain (eg. \"ical.example.com\") (required)",
    )
    parser.add_argument(
        "--evt-title-prefix",
        default="",
        help="An optional prefix to be inserted before each event's title",
    )
    parser.add_argument(
        "--lat",
        type=float,
        default=42.27,
        help="The forecast location's latitude (eg. \"42.27\")",
    )
    parser.add_argument(
        "--lon",
        type=float,
        default=-83.74,
        help="The forecast location's longitude (eg. \"-83.74\")",
    )
    parser.add_argument(
        "--ical-file",
        default="",
        help="Path/filename for the weather forecast iCal output file (required)",
    )
    parser.add_argument(
        "--sun-ical-file",
        default="",
        help="Path/filename for a sunrise/sunset iCal output file (optional)",
    )

    # Network client
    parser.add_argument(
        "--ua-email",
        default=None,
        help="Contact email to include in the User-Agent sent to weather.gov",
    )
    parser.add_argument(
        "--force-ipv4",
        action="store_true",
        help="Only connect to weather.gov over IPv4",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.cal_location or not args.cal_domain or not args.ical_file:
        parser.print_help(sys.stderr)
        return 1

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = CalendarConfig(
            location=args.cal_location,
            domain=args.cal_domain,
            title_prefix=args.evt_title_prefix,
            coordinates=Coordinates(latitude=args.lat, longitude=args.lon),
            ical_file=Path(args.ical_file),
            sun_ical_file=Path(args.sun_ical_file) if args.sun_ical_file else None,
            contact_email=args.ua_email,
            force_ipv4=args.force_ipv4,
        )
    except ValidationError as e:
        print(f"wxcal: invalid configuration: {e}", file=sys.stderr)
        return 1

    try:
        asyncio.run(run_pipeline(config, settings=settings))
    except PipelineError as e:
        print(f"wxcal: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
