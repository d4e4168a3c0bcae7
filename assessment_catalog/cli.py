"""CLI entrypoint for querying the property assessment catalog."""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path
from typing import IO

from assessment_catalog.common.config_loader import load_catalog_config
from assessment_catalog.common.constants import EXIT_HARD_FAIL, EXIT_NOT_FOUND, EXIT_SUCCESS
from assessment_catalog.common.errors import CatalogError
from assessment_catalog.common.fs import dump_json
from assessment_catalog.common.logging import build_logger, log_event
from assessment_catalog.core.catalog import AssessmentCatalog, get_catalog, reset_catalog


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--config-dir", default=None)
    parser.add_argument("--overlay-config-dir", default=None)
    parser.add_argument("--source", default=None, help="Path or URL overriding source.location")
    parser.add_argument("--log-level", default=None, choices=["DEBUG", "INFO", "WARN", "ERROR"])

    sub = parser.add_subparsers(dest="command", required=True)

    account = sub.add_parser("account")
    account.add_argument("account_number")

    address = sub.add_parser("address")
    address.add_argument("house_number")
    address.add_argument("street_name")

    radius = sub.add_parser("radius")
    radius.add_argument("latitude", type=float)
    radius.add_argument("longitude", type=float)
    radius.add_argument("meters", type=float)

    sub.add_parser("classes")
    sub.add_parser("wards")
    sub.add_parser("neighbourhoods")

    total = sub.add_parser("total")
    total.add_argument("assessment_class")
    total.add_argument("--ward", default=None)

    count = sub.add_parser("count")
    count.add_argument("assessment_class")
    count.add_argument("--ward", default=None)

    stats = sub.add_parser("stats")
    stats.add_argument("assessment_class")
    stats.add_argument("neighbourhood")

    listing = sub.add_parser("list")
    listing.add_argument("neighbourhood")
    listing.add_argument("--min", dest="min_value", type=float, default=None)
    listing.add_argument("--max", dest="max_value", type=float, default=None)

    return parser.parse_args(argv)


def execute_query(catalog: AssessmentCatalog, args: argparse.Namespace):
    command = args.command
    if command == "account":
        record = catalog.find_by_account_number(args.account_number)
        return None if record is None else record.to_dict()
    if command == "address":
        record = catalog.find_by_address(args.house_number, args.street_name)
        return None if record is None else record.to_dict()
    if command == "radius":
        return [r.to_dict() for r in catalog.find_within_radius(args.latitude, args.longitude, args.meters)]
    if command == "classes":
        return catalog.distinct_assessment_classes()
    if command == "wards":
        return catalog.distinct_wards()
    if command == "neighbourhoods":
        return {str(key): name for key, name in catalog.distinct_neighbourhoods().items()}
    if command == "total":
        return catalog.total_assessed_value(args.assessment_class, args.ward)
    if command == "count":
        if args.ward is None:
            return catalog.count_by_class(args.assessment_class)
        return catalog.count_by_class_and_ward(args.assessment_class, args.ward)
    if command == "stats":
        cls, hood = args.assessment_class, args.neighbourhood
        return {
            "min": catalog.min_assessed_value(cls, hood),
            "max": catalog.max_assessed_value(cls, hood),
            "average": catalog.average_assessed_value(cls, hood),
        }
    if command == "list":
        if args.min_value is None and args.max_value is None:
            records = catalog.list_by_neighbourhood(args.neighbourhood)
        else:
            records = catalog.list_by_neighbourhood_and_value_range(
                args.neighbourhood,
                args.min_value if args.min_value is not None else 0,
                args.max_value if args.max_value is not None else float("inf"),
            )
        return [r.to_dict() for r in records]
    raise ValueError(f"Unknown command: {command}")


def run_command(args: argparse.Namespace, out: IO[str] | None = None) -> int:
    out = out or sys.stdout
    config = load_catalog_config(
        Path(args.config_dir) if args.config_dir else None,
        overlay_config_dir=Path(args.overlay_config_dir) if args.overlay_config_dir else None,
    )
    if args.source:
        config = replace(config, source_location=args.source)
    logger = build_logger(level=args.log_level or config.log_level)

    # Explicit config flags replace any catalog cached under other settings.
    if args.config_dir or args.overlay_config_dir or args.source:
        reset_catalog()
    catalog = get_catalog(lambda: AssessmentCatalog.from_config(config))

    result = execute_query(catalog, args)
    log_event(logger, f"query {args.command}", event="QUERY", status="ok", source=config.source_location)
    dump_json(result, out)

    if args.command in ("account", "address") and result is None:
        return EXIT_NOT_FOUND
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv if argv is not None else sys.argv[1:])
    try:
        return run_command(args)
    except CatalogError as exc:
        print(f"{exc.error_code}: {exc}", file=sys.stderr)
        return EXIT_HARD_FAIL


if __name__ == "__main__":
    raise SystemExit(main())
