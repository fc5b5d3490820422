#!/usr/bin/env python3
"""Fetch the zone catalog and print it as JSON.

Usage examples:
    # Whole catalog, most popular first
    python fetch_zones.py --sort popularity

    # Only zones whose name contains "run", against a mirror
    python fetch_zones.py --zones-url https://example.org/zones.json --query run

    # Today's featured zone
    python fetch_zones.py --today
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

from src.config.core import parse_args
from src.helpers.catalog import CatalogController
from src.helpers.gallery import error_message
from src.helpers.ordering import SortKey, filter_zones
from src.zones.client import ZoneClient
from src.zones.errors import ZoneError

logging.basicConfig(level=logging.INFO, stream=sys.stderr)
logger = logging.getLogger(__name__)


def extra_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument(
        "--sort",
        default="name",
        help="Ordering: name, id or popularity.",
    )
    parser.add_argument("--query", default="", help="Only zones whose name contains this text.")
    parser.add_argument(
        "--today",
        action="store_true",
        help="Print only the zone of the day.",
    )
    return parser


def parse_extra(argv: list[str] | None = None) -> argparse.Namespace:
    return extra_parser().parse_known_args(argv)[0]


def dump_json(data: Any):
    print(json.dumps(data, indent=2, ensure_ascii=False))


def main(argv: list[str] | None = None) -> int:
    settings = parse_args(argv, parents=[extra_parser()]).to_catalog_settings()
    extra = parse_extra(argv)

    controller = CatalogController(settings, ZoneClient.from_settings(settings))
    try:
        controller.load()
    except ZoneError as exc:
        print(error_message(exc), file=sys.stderr)
        return 1

    if extra.today:
        zone = controller.zone_of_the_day()
        dump_json(zone.to_dict() if zone else None)
        return 0

    try:
        zones = controller.sort(SortKey.parse(extra.sort))
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 2

    rows = []
    for zone in filter_zones(zones, extra.query):
        row = zone.to_dict()
        row["hits"] = controller.popularity.hits(zone.id)
        rows.append(row)
    dump_json(rows)
    return 0


if __name__ == "__main__":
    sys.exit(main())
