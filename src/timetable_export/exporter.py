"""Export entry points invoked by the CLI (or any other trigger).

export_timetable() and export_calendar() are pure: markup and options in,
ExportResult out. deliver() is the only function here that performs I/O.
"""

import sys
from datetime import date
from pathlib import Path
from typing import Literal, TextIO

from src.timetable_export.document import Markup, load_document
from src.timetable_export.errors import DeliveryError
from src.timetable_export.filenames import (
    STATIC_TIMETABLE_FILENAME,
    calendar_filename,
    timetable_filename,
)
from src.timetable_export.logging import get_logger
from src.timetable_export.models import ExportOptions, ExportResult, OutputType
from src.timetable_export.pages.calendar import CalendarPage
from src.timetable_export.pages.timetable import TimetablePage
from src.timetable_export.serializers import serialize_calendar_csv, serialize_json

log = get_logger(__name__)

TimetableNaming = Literal["quarter", "static"]

JSON_MEDIA_TYPE = "application/json"
CSV_MEDIA_TYPE = "text/csv;charset=utf-8"


def export_timetable(
    markup: Markup,
    options: ExportOptions,
    *,
    naming: TimetableNaming = "quarter",
    today: date | None = None,
) -> ExportResult:
    """Extract the timetable grid and render it as JSON.

    Args:
        markup: Saved timetable page (HTML text, bytes or parsed document).
        options: Resolved export options.
        naming: "quarter" for timetable_<year>_<Q>Q.json, "static" for timetable.json.
        today: Date used when the page shows no academic year (default: today).
    """
    document = load_document(markup)
    extraction = TimetablePage(document).extract(options)
    text = serialize_json(extraction.entries, options.format)

    if naming == "static":
        filename = STATIC_TIMETABLE_FILENAME
    else:
        filename = timetable_filename(document, today)

    log.info(
        "timetable_exported",
        filename=filename,
        entries=len(extraction.entries),
        format=options.format,
    )
    return ExportResult(
        text=text,
        filename=filename,
        media_type=JSON_MEDIA_TYPE,
        entry_count=len(extraction.entries),
        structure_found=extraction.structure_found,
    )


def export_calendar(markup: Markup, *, today: date | None = None) -> ExportResult:
    """Extract the displayed month's classes and render them as calendar CSV."""
    document = load_document(markup)
    extraction = CalendarPage(document).extract()
    filename = calendar_filename(document, today)

    log.info("calendar_exported", filename=filename, entries=len(extraction.entries))
    return ExportResult(
        text=serialize_calendar_csv(extraction.entries),
        filename=filename,
        media_type=CSV_MEDIA_TYPE,
        entry_count=len(extraction.entries),
        structure_found=extraction.structure_found,
    )


def is_timetable_page(markup: Markup) -> bool:
    return TimetablePage(markup).is_present()


def is_calendar_page(markup: Markup) -> bool:
    document = load_document(markup)
    if CalendarPage(document).labels():
        return True
    return document.select_one("#datePicker, .fc-toolbar-title") is not None


def deliver(
    result: ExportResult,
    output_type: OutputType,
    output_dir: str | Path = ".",
    stream: TextIO | None = None,
) -> Path | None:
    """Hand the exported text to the user.

    "download" writes output_dir/filename and returns the path; "clipboard"
    writes the text to the stream (stdout by default) and returns None.

    Raises:
        DeliveryError: If the file or stream can't be written.
    """
    if output_type == "clipboard":
        stream = stream or sys.stdout
        try:
            stream.write(result.text)
            if not result.text.endswith("\n"):
                stream.write("\n")
            stream.flush()
        except (OSError, UnicodeError) as e:
            # e.g. a cp932 console pipe can't encode the BOM
            log.error("clipboard_write_failed", error=str(e))
            raise DeliveryError(f"Failed to write export to output stream: {e}") from e
        log.info("export_copied", filename=result.filename, chars=len(result.text))
        return None

    path = Path(output_dir) / result.filename
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        # newline="" keeps the LF row separators on every platform
        with path.open("w", encoding="utf-8", newline="") as f:
            f.write(result.text)
    except (OSError, UnicodeError) as e:
        log.error("download_write_failed", path=str(path), error=str(e))
        raise DeliveryError(f"Failed to write {path}: {e}") from e

    log.info("export_downloaded", path=str(path), entries=result.entry_count)
    return path
