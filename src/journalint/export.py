"""Export journal entries as structured records.

Each entry whose times resolve against the front matter date and whose
duration is well formed becomes one flat record:

    start_time  ISO-8601 timestamp with +00:00 offset
    end_time    ISO-8601 timestamp with +00:00 offset
    duration    written duration in whole seconds
    code1..N    the entry's codes, left to right
    activity    the activity text

Entries that fail to resolve are skipped silently; the linter reports them.

Python 3.13+.
"""

import csv
import json
import logging
from datetime import date, datetime, timedelta
from typing import TextIO

from journalint.diagnostics import InvalidTimeValueError
from journalint.enums import ExportFormat
from journalint.syntax import (
    Activity,
    Code,
    Duration,
    EndTime,
    Entry,
    FrontMatterDate,
    Journal,
    JournalVisitor,
    StartTime,
    walk,
)

__all__ = ["Exporter", "export", "split_activity_prefixes"]

logger = logging.getLogger(__name__)

_PREFIX_SEPARATOR = ": "

type Record = dict[str, str | int]


def split_activity_prefixes(activity: str) -> tuple[list[str], str]:
    """Split ``"prefix: prefix: body"`` activity text into prefixes and body.

    Example:
        >>> split_activity_prefixes("foo: bar: baz")
        (['foo', 'bar'], 'baz')
        >>> split_activity_prefixes("plain")
        ([], 'plain')
    """
    *prefixes, body = activity.split(_PREFIX_SEPARATOR)
    return prefixes, body


class Exporter(JournalVisitor):
    """Collects one record per resolvable entry.

    Usage:
        exporter = Exporter(split_prefixes=True)
        walk(journal, exporter)
        for record in exporter.records:
            ...
    """

    def __init__(self, *, split_prefixes: bool = False) -> None:
        self.split_prefixes = split_prefixes
        self.records: list[Record] = []
        self._date: date | None = None
        self._start: datetime | None = None
        self._end: datetime | None = None
        self._duration: timedelta | None = None
        self._codes: list[str] = []
        self._activity: str | None = None

    def _resolve(self, node: StartTime | EndTime) -> datetime | None:
        if self._date is None:
            return None
        try:
            return node.value.to_datetime(self._date)
        except InvalidTimeValueError:
            return None

    def visit_FrontMatterDate(self, node: FrontMatterDate) -> None:
        self._date = node.value.value

    def visit_Entry(self, node: Entry) -> None:
        self._start = None
        self._end = None
        self._duration = None
        self._codes = []
        self._activity = None

    def visit_StartTime(self, node: StartTime) -> None:
        self._start = self._resolve(node)

    def visit_EndTime(self, node: EndTime) -> None:
        self._end = self._resolve(node)

    def visit_Code(self, node: Code) -> None:
        self._codes.append(node.value)

    def visit_Duration(self, node: Duration) -> None:
        self._duration = node.value

    def visit_Activity(self, node: Activity) -> None:
        self._activity = node.value

    def leave_Entry(self, node: Entry) -> None:
        if self._start is None or self._end is None or self._duration is None:
            logger.debug("Skipping unresolvable entry at %d", node.span.start)
            return
        if self._activity is None:
            return

        codes = list(self._codes)
        activity = self._activity
        if self.split_prefixes:
            prefixes, activity = split_activity_prefixes(activity)
            codes.extend(prefixes)

        record: Record = {
            "start_time": self._start.isoformat(),
            "end_time": self._end.isoformat(),
            "duration": int(self._duration.total_seconds()),
        }
        for index, code in enumerate(codes, start=1):
            record[f"code{index}"] = code
        record["activity"] = activity
        self.records.append(record)


def _code_columns(records: list[Record]) -> list[str]:
    count = max((sum(key.startswith("code") for key in r) for r in records), default=0)
    return [f"code{index}" for index in range(1, count + 1)]


def export(
    journal: Journal,
    fmt: ExportFormat,
    writer: TextIO,
    *,
    split_activity_prefixes: bool = False,
) -> int:
    """Write the journal's entries to a text stream.

    Args:
        journal: Parsed journal
        fmt: JSON Lines (sorted keys) or CSV with a header row
        writer: Destination text stream
        split_activity_prefixes: Move ``prefix: `` parts of the activity
            into additional codes

    Returns:
        Number of records written
    """
    exporter = Exporter(split_prefixes=split_activity_prefixes)
    walk(journal, exporter)
    records = exporter.records

    match fmt:
        case ExportFormat.JSON:
            for record in records:
                writer.write(json.dumps(record, sort_keys=True, ensure_ascii=False))
                writer.write("\n")
        case ExportFormat.CSV:
            fieldnames = ["start_time", "end_time", "duration", *_code_columns(records), "activity"]
            csv_writer = csv.DictWriter(writer, fieldnames=fieldnames, lineterminator="\n")
            csv_writer.writeheader()
            csv_writer.writerows(records)

    logger.debug("Exported %d record(s) as %s", len(records), fmt)
    return len(records)
