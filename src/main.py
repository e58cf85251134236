# src/main.py
"""CLI entry point: list, show, date, refresh commands.

Usage:
    waldbrandindex list [--json]
    waldbrandindex show [district] [--json]
    waldbrandindex date
    waldbrandindex refresh
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import TYPE_CHECKING

from pydantic import ValidationError

from waldbrandindex.core.errors import ConfigurationError, IndexUnavailableError
from waldbrandindex.version import __version__

if TYPE_CHECKING:
    from waldbrandindex.api.service import IndexService
    from waldbrandindex.config.settings import Settings

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    from waldbrandindex.api.facade import open_index
    from waldbrandindex.config.settings import Settings
    from waldbrandindex.logging.logger import setup_logging_from_settings

    try:
        settings = Settings()
    except (ConfigurationError, ValidationError) as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 1

    setup_logging_from_settings(settings, level="DEBUG" if args.verbose else None)

    try:
        with open_index(settings) as index:
            return args.func(args, index, settings)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except IndexUnavailableError as exc:
        logger.error("Index unavailable: %s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="waldbrandindex",
        description=f"waldbrandindex v{__version__}: forest-fire danger levels per district",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    p_list = subparsers.add_parser("list", help="List all districts with their level")
    p_list.add_argument("--json", action="store_true", help="Emit JSON")
    p_list.set_defaults(func=_cmd_list)

    p_show = subparsers.add_parser("show", help="Show the level of one district")
    p_show.add_argument(
        "district", nargs="?", default=None,
        help="District name (default: DEFAULT_DISTRICT setting)",
    )
    p_show.add_argument("--json", action="store_true", help="Emit JSON")
    p_show.set_defaults(func=_cmd_show)

    p_date = subparsers.add_parser("date", help="Show the source's publication date")
    p_date.set_defaults(func=_cmd_date)

    p_refresh = subparsers.add_parser("refresh", help="Force a refetch of the source")
    p_refresh.set_defaults(func=_cmd_refresh)

    return parser


def _cmd_list(
    args: argparse.Namespace, index: IndexService, settings: Settings
) -> int:
    descriptors = index.lookup_all()
    if args.json:
        payload = {
            "last_updated": index.last_updated_date(),
            "districts": {name: d.model_dump() for name, d in descriptors.items()},
        }
        print(json.dumps(payload, ensure_ascii=False, indent=2))
        return 0

    width = max((len(name) for name in descriptors), default=0)
    for name, d in descriptors.items():
        print(f"{name:<{width}}  {d.level}  {d.description}")
    return 0


def _cmd_show(
    args: argparse.Namespace, index: IndexService, settings: Settings
) -> int:
    district = args.district or settings.default_district
    descriptor = index.lookup(district)
    if descriptor is None:
        print(f"Landkreis {district} nicht gefunden.")
        return 1

    if args.json:
        print(json.dumps({"district": district, **descriptor.model_dump()}, ensure_ascii=False))
    else:
        print(
            f"Die Waldbrandstufe für {district} beträgt: "
            f"{descriptor.level} ({descriptor.description})"
        )
    return 0


def _cmd_date(
    args: argparse.Namespace, index: IndexService, settings: Settings
) -> int:
    date = index.last_updated_date()
    if date is None:
        print("Datum konnte nicht abgerufen werden.")
        return 1
    print(f"letzte Aktualisierung: {date}")
    return 0


def _cmd_refresh(
    args: argparse.Namespace, index: IndexService, settings: Settings
) -> int:
    report = index.force_refresh()
    print(f"Fetched:    {'yes' if report.fetched else 'no'}")
    if report.fetch_error:
        print(f"  Error:    {report.fetch_error}")
    print(f"Parsed:     {'yes' if report.parsed else 'no'}")
    if report.parse_error:
        print(f"  Error:    {report.parse_error}")
    print(f"Districts:  {report.district_count}")
    return 1 if report.degraded else 0
