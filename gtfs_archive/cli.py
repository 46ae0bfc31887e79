"""
gtfs-archive CLI.

Usage
-----
gtfs-archive summary feeds/klt.zip
gtfs-archive summary https://example.org/gtfs.zip -v
"""

from __future__ import annotations

import argparse
import logging
import sys

from gtfs_archive.app.config import ArchiveConfig
from gtfs_archive.app.services.gtfs_archive import GtfsArchive
from gtfs_archive.domain.exceptions import GtfsArchiveError

logger = logging.getLogger(__name__)


def _is_url(source: str) -> bool:
    return source.lower().startswith(("http://", "https://"))


def _open(source: str, config: ArchiveConfig) -> GtfsArchive:
    if _is_url(source):
        return GtfsArchive.from_url(source, config=config)
    return GtfsArchive.from_path(source, config=config)


def count_rows(archive: GtfsArchive) -> dict[str, int]:
    """Count records per available file by streaming, one row at a time."""

    counts: dict[str, int] = {}
    for gtfs_file in archive.available_files():
        n = 0
        with archive.get_file(gtfs_file) as reader:
            while reader.next() is not None:
                n += 1
        counts[gtfs_file.filename] = n
    return counts


def cmd_summary(args: argparse.Namespace) -> int:
    archive = _open(args.source, ArchiveConfig.from_env())
    try:
        counts = count_rows(archive)
    finally:
        archive.cleanup()

    width = max((len(name) for name in counts), default=0)
    for name, n in counts.items():
        print(f"{name.ljust(width)}  {n}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gtfs-archive", description="Inspect GTFS feed archives.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    sub = parser.add_subparsers(dest="command", required=True)

    summary = sub.add_parser("summary", help="Print the row count of every component file.")
    summary.add_argument("source", help="Local zip path or http(s) URL.")
    summary.set_defaults(func=cmd_summary)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        return int(args.func(args))
    except GtfsArchiveError as exc:
        logger.error("%s: %s", type(exc).__name__, exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
