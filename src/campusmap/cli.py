"""
Campus Map CLI entrypoint.

This CLI is intended for quick local lookups and debugging without a frontend.
It delegates all query logic to `campusmap.directory.search.search`.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from campusmap.catalog.loader import load_resources_cached
from campusmap.config.settings import get_settings
from campusmap.core.logging import configure_logging
from campusmap.core.time import parse_datetime
from campusmap.directory.search import campus_now, resolve_instant, search
from campusmap.domain.models import Category, Coordinate, QueryContext, SortStrategy
from campusmap.quality.report import build_catalog_report
from campusmap.scoring.explain import hours_summary, one_line_summary


def _parse_origin(args: argparse.Namespace) -> Coordinate | None:
    if args.origin_lat is None and args.origin_lon is None:
        return None
    if args.origin_lat is None or args.origin_lon is None:
        raise ValueError("Provide both --origin-lat and --origin-lon (or neither).")
    return Coordinate(lat=float(args.origin_lat), lon=float(args.origin_lon))


def _cmd_search(args: argparse.Namespace) -> int:
    """Handle the `search` subcommand."""
    settings = get_settings()

    stamp = campus_now(settings.app.timezone)
    at = parse_datetime(args.at, settings.app.timezone) if args.at else stamp
    now = resolve_instant(at, settings.app.timezone)

    ctx = QueryContext(
        query=args.query or "",
        category=args.category or None,
        amenities=args.amenity or [],
        open_only=bool(args.open_only),
        sort=args.sort or settings.ranking.default_sort,
        origin=_parse_origin(args),
    )

    result = search(ctx, now, settings=settings, generated_at=stamp)

    if args.json:
        print(json.dumps(result.model_dump(mode="json"), ensure_ascii=False, indent=2))
        return 0

    print(f"{result.count} result(s) at {result.instant} (sort={ctx.sort.value})")
    for i, item in enumerate(result.results, start=1):
        r = item.resource
        print(f"{i:>2}. {r.name}  {one_line_summary(item)}")
        print(f"    {r.address}")
        print(f"    hours: {hours_summary(r)}")
        if r.amenities:
            print(f"    amenities: {', '.join(sorted(r.amenities))}")
    return 0


def _cmd_catalog_report(_: argparse.Namespace) -> int:
    settings = get_settings()
    report = build_catalog_report(load_resources_cached(settings.catalog.path))
    print(json.dumps(report, ensure_ascii=False, indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the Campus Map CLI."""
    parser = argparse.ArgumentParser(prog="campusmap")
    sub = parser.add_subparsers(dest="command", required=True)

    s = sub.add_parser("search", help="Search, filter and rank campus resources.")
    s.add_argument("--query", "-q", type=str, default="", help="Case-insensitive text (name or address)")
    s.add_argument("--category", type=str, default=None, choices=[c.value for c in Category])
    s.add_argument("--amenity", action="append", default=[], help="Repeatable; every amenity is required")
    s.add_argument("--open-only", action="store_true", help="Only resources open at --at (default: now)")
    s.add_argument(
        "--sort",
        type=str,
        default=None,
        help=f"One of {', '.join(st.value for st in SortStrategy)}; unknown values use relevance",
    )
    s.add_argument("--origin-lat", type=float, default=None)
    s.add_argument("--origin-lon", type=float, default=None)
    s.add_argument("--at", type=str, default=None, help="ISO datetime (e.g. 2026-01-06T10:00-05:00)")
    s.add_argument("--json", action="store_true", help="Output machine-readable JSON")
    s.set_defaults(func=_cmd_search)

    q = sub.add_parser("catalog-report", help="Offline catalog summary and data issues.")
    q.set_defaults(func=_cmd_catalog_report)
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint callable used by `python -m campusmap.cli`."""
    configure_logging()
    parser = build_parser()
    args = parser.parse_args(argv)
    func: Any = getattr(args, "func")
    try:
        return int(func(args))
    except ValueError as e:
        # pydantic.ValidationError is a ValueError subclass.
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
