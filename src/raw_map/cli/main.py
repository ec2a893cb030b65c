"""Command line interface for creating and inspecting raw map snapshots."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from ..domain.models import RawMap, SnapshotOptions
from ..domain.names import MapName
from ..utils.constants import DATA_ROOT, DEFAULT_COMPRESSION_LEVEL
from ..utils.errors import RawMapError
from ..utils.io import read_snapshot
from ..utils.logging import configure_logger


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="raw-map", description="Create and inspect raw map snapshots")
    parser.add_argument("--log-file", "-lf", type=Path, help="Also write log records to this file")
    parser.add_argument("--no-console-log", "-nl", action="store_true", help="Disable console logging")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log at DEBUG level")

    subparsers = parser.add_subparsers(dest="command", required=True)

    blank = subparsers.add_parser("blank", help="Write an empty snapshot for a map name")
    blank.add_argument("country", help="Country code of the city, e.g. us")
    blank.add_argument("city", help="City identifier, e.g. seattle")
    blank.add_argument("map", help="Map identifier within the city")
    blank.add_argument(
        "--data-root",
        "-dr",
        type=Path,
        default=DATA_ROOT,
        help=f"Root directory for snapshots (default: {DATA_ROOT})",
    )
    blank.add_argument(
        "--compression-level",
        "-cl",
        type=int,
        default=DEFAULT_COMPRESSION_LEVEL,
        help=f"zstd compression level (default: {DEFAULT_COMPRESSION_LEVEL})",
    )

    describe = subparsers.add_parser("describe", help="Print collection sizes of a snapshot")
    describe.add_argument("snapshot", type=Path, help="Path to a snapshot file")

    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    return _build_parser().parse_args(argv)


def describe_raw_map(raw_map: RawMap) -> list[str]:
    return [
        f"name: {raw_map.name.describe()}",
        f"intersections: {raw_map.streets.num_intersections()}",
        f"roads: {raw_map.streets.num_roads()}",
        f"buildings: {len(raw_map.buildings)}",
        f"areas: {len(raw_map.areas)}",
        f"parking lots: {len(raw_map.parking_lots)}",
        f"parking aisles: {len(raw_map.parking_aisles)}",
        f"transit routes: {len(raw_map.transit_routes)}",
        f"transit stops: {len(raw_map.transit_stops)}",
        f"roads with bus routes: {len(raw_map.bus_routes_on_roads)}",
    ]


def _run_blank(args: argparse.Namespace) -> int:
    options = SnapshotOptions(data_root=args.data_root, compression_level=args.compression_level)
    raw_map = RawMap.blank(MapName.new(args.country, args.city, args.map))
    print(raw_map.snapshot(options))
    return 0


def _run_describe(args: argparse.Namespace) -> int:
    raw_map = read_snapshot(args.snapshot)
    for line in describe_raw_map(raw_map):
        print(line)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logger(
        args.log_file,
        console=not args.no_console_log,
        level=logging.DEBUG if args.verbose else logging.INFO,
    )
    handlers = {"blank": _run_blank, "describe": _run_describe}
    try:
        return handlers[args.command](args)
    except RawMapError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
