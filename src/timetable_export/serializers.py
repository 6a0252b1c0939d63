"""JSON and CSV rendering of extracted entries.

JSON mirrors the records one to one (camelCase keys, absent fields omitted).
CSV follows the calendar-import layout spreadsheet and calendar tools expect:
one row per class, dates as "2025/11/4", a UTF-8 BOM so Excel picks the
right encoding.
"""

from __future__ import annotations

import csv
import io
import json
from typing import Iterable, List, Sequence

from pydantic import BaseModel

from src.timetable_export.models import (
    CalendarEntry,
    ExportFormat,
    TimetableEntries,
    TimetableEntry,
)

BOM = "\ufeff"
CSV_LINE_TERMINATOR = "\n"

CSV_HEADERS = [
    "Subject",
    "Start Date",
    "Start Time",
    "End Date",
    "End Time",
    "All Day Event",
    "Description",
    "Location",
    "Private",
]


def to_records(entries: Iterable[BaseModel]) -> List[dict]:
    """Plain JSON-ready dicts with alias keys and None fields dropped."""
    return [
        entry.model_dump(mode="json", by_alias=True, exclude_none=True)
        for entry in entries
    ]


def serialize_json(entries: Iterable[BaseModel], format: ExportFormat = "pretty") -> str:
    """Render entries as a standalone JSON array.

    Args:
        entries: TimetableEntry or CalendarEntry records.
        format: "pretty" (2-space indent) or "compact" (no extraneous whitespace).
    """
    records = to_records(entries)
    if format == "compact":
        return json.dumps(records, ensure_ascii=False, separators=(",", ":"))
    if format == "pretty":
        return json.dumps(records, ensure_ascii=False, indent=2)
    raise ValueError(f"Unknown JSON format {format!r}. Valid: ['pretty', 'compact']")


def load_timetable_json(text: str) -> List[TimetableEntry]:
    """Parse an exported timetable JSON document back into entries."""
    return TimetableEntries.validate_json(text)


def format_csv_date(iso_date: str) -> str:
    """'2025-11-04' -> '2025/11/4' (month and day without zero padding)."""
    year, month, day = iso_date.split("-")
    return f"{year}/{int(month)}/{int(day)}"


def calendar_csv_row(entry: CalendarEntry) -> List[str]:
    return [
        entry.subject,
        format_csv_date(entry.date),
        entry.start_time,
        "",  # End Date: same day as Start Date
        entry.end_time,
        "FALSE",
        entry.teacher or "",  # Description
        entry.location or "",
        "TRUE",
    ]


def serialize_calendar_csv(entries: Sequence[CalendarEntry]) -> str:
    """Render calendar entries as BOM-prefixed CSV text with LF row separators.

    Fields holding a comma, a double quote or a line break are wrapped in
    double quotes, with internal double quotes doubled (csv.QUOTE_MINIMAL).
    """
    buffer = io.StringIO()
    writer = csv.writer(
        buffer,
        quoting=csv.QUOTE_MINIMAL,
        lineterminator=CSV_LINE_TERMINATOR,
    )
    writer.writerow(CSV_HEADERS)
    writer.writerows(calendar_csv_row(entry) for entry in entries)
    return BOM + buffer.getvalue().removesuffix(CSV_LINE_TERMINATOR)
