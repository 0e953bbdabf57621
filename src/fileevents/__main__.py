"""Command-line entry point for the file event scanner."""
from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from .config import AppConfig, ConfigError, ScanConfig, load_config
from .events import EventKind, EventRecord
from .export import write_csv
from .finder import DirectoryEnumerator, EnumerationError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Find files by extension under a directory tree")
    parser.add_argument("root", nargs="?", help="Directory to scan (overrides scan.root_path)")
    parser.add_argument("extension", nargs="?", help="Extension to match, with or without the leading dot")
    parser.add_argument(
        "--config",
        help="Path to an optional YAML configuration file",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Abort on the first unreadable subdirectory instead of skipping it",
    )
    parser.add_argument(
        "--follow-symlinks",
        action="store_true",
        default=None,
        help="Descend into symlinked directories",
    )
    parser.add_argument(
        "--format",
        choices=("paths", "csv"),
        default="paths",
        help="Output one path per line or CSV event records (default: %(default)s)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
    )

    try:
        app_config = load_config(Path(args.config)) if args.config else AppConfig(scan=ScanConfig())
    except ConfigError as exc:
        logging.error("%s", exc)
        return 2

    scan = app_config.scan
    root = args.root or (str(scan.root_path) if scan.root_path is not None else None)
    extension = args.extension or scan.extension
    if not root or not extension:
        logging.error("Both a root directory and an extension are required")
        return 2

    enumerator = DirectoryEnumerator(
        strict=scan.strict if args.strict is None else args.strict,
        follow_symlinks=scan.follow_symlinks if args.follow_symlinks is None else args.follow_symlinks,
    )
    try:
        paths = enumerator.enumerate(root, extension)
    except EnumerationError as exc:
        logging.error("%s", exc)
        return 1

    if enumerator.errors:
        logger.warning("%s directory(ies) could not be read and were skipped", len(enumerator.errors))

    if args.format == "csv":
        scanned_at = datetime.now()
        records = (EventRecord.from_change(path, EventKind.CREATED, scanned_at) for path in paths)
        write_csv(records, sys.stdout)
    else:
        for path in paths:
            print(path)

    logger.info("Listed %s file(s) under %s", len(paths), root)
    return 0


if __name__ == "__main__":
    sys.exit(main())
