"""CSV rendering of event records."""
from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Iterable, TextIO

from .events import EventRecord

logger = logging.getLogger(__name__)

CSV_HEADER = ("FileName", "Extension", "FilePath", "EventType", "Timestamp")


def write_csv(events: Iterable[EventRecord], stream: TextIO) -> int:
    """Write ``events`` to ``stream`` as CSV and return the number of rows."""

    writer = csv.writer(stream, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    count = 0
    for event in events:
        writer.writerow(event.as_row())
        count += 1
    return count


def export_csv(events: Iterable[EventRecord], path: Path) -> int:
    with path.open("w", encoding="utf-8", newline="") as handle:
        count = write_csv(events, handle)
    logger.info("Exported %s event(s) to %s", count, path)
    return count
