"""CalendarPage - extracts the month's classes from the portal calendar (FullCalendar).

DOM structure:
  td.fc-daygrid-day[data-date="2025-11-04"]      (fc-day-other = adjacent month)
    a.c-timetable-usage-guide-item-class          one per scheduled class
      .fc-event-title                             single free-text label

The label packs every field into segments separated by full-width spaces:
  "電磁気学Ⅰ　３限 13:00-14:30　(情)1401講義室　許　宗焄"
   subject   period + time range  location      teacher (remaining segments)
"""

import re

from bs4 import BeautifulSoup, Tag

from src.timetable_export.document import Markup, has_class, load_document, node_text
from src.timetable_export.logging import get_logger
from src.timetable_export.models import CalendarEntry, Diagnostic, ExtractionResult

log = get_logger(__name__)

COMPONENT = "calendar"

SEGMENT_DELIMITER = re.compile("\u3000+")
TIME_RANGE = re.compile(r"(\d{1,2}:\d{2})-(\d{1,2}:\d{2})", re.ASCII)
CELL_DATE = re.compile(r"^\d{4}-\d{1,2}-\d{1,2}$", re.ASCII)


class LabelSkipped(Exception):
    """A label that yields no entry; carries the diagnostic reason."""

    def __init__(self, reason: str, detail: str | None = None) -> None:
        super().__init__(reason)
        self.reason = reason
        self.detail = detail


class CalendarPage:
    """Month calendar with one text label per class."""

    EVENT_LABEL = "a.c-timetable-usage-guide-item-class"
    EVENT_TITLE = ".fc-event-title"
    OTHER_MONTH_CLASS = "fc-day-other"
    DATE_ATTR = "data-date"

    def __init__(self, markup: Markup) -> None:
        self.document: BeautifulSoup = load_document(markup)

    def labels(self) -> list[Tag]:
        return self.document.select(self.EVENT_LABEL)

    def extract(self) -> ExtractionResult[CalendarEntry]:
        """Extract one CalendarEntry per parseable label of the displayed month.

        Returns:
            ExtractionResult with entries in document order. Labels from
            adjacent months or with malformed text are reported as
            diagnostics and never stop the remaining labels.
        """
        result = ExtractionResult[CalendarEntry]()
        labels = self.labels()
        log.debug("calendar_labels_found", count=len(labels))

        for index, label in enumerate(labels):
            try:
                entry = self._parse_label(label)
            except LabelSkipped as skip:
                log.info(
                    "item_skipped",
                    component=COMPONENT,
                    index=index,
                    reason=skip.reason,
                    detail=skip.detail,
                )
                result.diagnostics.append(
                    Diagnostic(
                        component=COMPONENT,
                        index=index,
                        reason=skip.reason,
                        detail=skip.detail,
                    )
                )
                continue

            if _minutes(entry.end_time) < _minutes(entry.start_time):
                # Kept as-is; the portal is the source of truth for times
                log.warning(
                    "time_range_inverted",
                    component=COMPONENT,
                    index=index,
                    start=entry.start_time,
                    end=entry.end_time,
                )
                result.diagnostics.append(
                    Diagnostic(
                        component=COMPONENT,
                        index=index,
                        reason="inverted_time_range",
                        detail=f"{entry.start_time}-{entry.end_time}",
                    )
                )
            result.entries.append(entry)

        log.info(
            "calendar_extracted",
            labels=len(labels),
            entries=len(result.entries),
        )
        return result

    def _parse_label(self, label: Tag) -> CalendarEntry:
        cell = label.find_parent("td")
        if cell is None:
            raise LabelSkipped("no_enclosing_cell")
        if has_class(cell, self.OTHER_MONTH_CLASS):
            raise LabelSkipped("other_month")

        date = (cell.get(self.DATE_ATTR) or "").strip()
        if not date:
            raise LabelSkipped("missing_date")
        if not CELL_DATE.match(date):
            raise LabelSkipped("malformed_date", date)

        title = label.select_one(self.EVENT_TITLE)
        if title is None:
            raise LabelSkipped("missing_title")
        text = node_text(title)
        if text is None:
            raise LabelSkipped("empty_title")

        return parse_label_text(text, date)


def parse_label_text(text: str, date: str) -> CalendarEntry:
    """Decompose one label into a CalendarEntry.

    Raises:
        LabelSkipped: fewer than two segments, or no H:MM-H:MM range in the
            second segment.
    """
    segments = SEGMENT_DELIMITER.split(text.strip())
    if len(segments) < 2:
        raise LabelSkipped("too_few_segments", text)

    match = TIME_RANGE.search(segments[1])
    if match is None:
        raise LabelSkipped("malformed_time", segments[1])

    location = segments[2] if len(segments) > 2 else None
    teacher = " ".join(segments[3:]).strip() if len(segments) > 3 else None

    return CalendarEntry(
        date=date,
        start_time=match.group(1),
        end_time=match.group(2),
        subject=segments[0],
        location=location,
        teacher=teacher or None,
    )


def _minutes(hhmm: str) -> int:
    hours, minutes = hhmm.split(":")
    return int(hours) * 60 + int(minutes)
