"""TimetablePage - extracts the quarter timetable grid from a saved portal page.

DOM structure:
  table.schedule-table
    tbody
      tr -> th per day (月 火 水 木 金 土 日), header row, never data
      tr -> one row per period (1-based)
        td#week1 .. td#week7 (ids repeat on every row)
          ul > li -> one class entry
            h4                       subject (required)
            p.teacher                teacher (fallback: first plain <p>)
            span.classroom           classroom (fallbacks: p > span, .classroom-info)
            .memo                    free-text memo
            data-color / style       explicit color / inline background color

An li without a subject is discarded. A cell without any li produces a
placeholder entry only when include_empty_cells is set.
"""

from bs4 import BeautifulSoup, Tag

from src.timetable_export.colors import normalize_color, style_background_color
from src.timetable_export.document import Markup, load_document, node_text
from src.timetable_export.logging import get_logger
from src.timetable_export.models import (
    DayOfWeek,
    Diagnostic,
    ExportOptions,
    ExtractionResult,
    TimetableEntry,
)

log = get_logger(__name__)

COMPONENT = "grid"


class TimetablePage:
    """Quarter timetable grid (period x day).

    Each call to extract() walks the tree from scratch; the page object holds
    no state besides the parsed document.
    """

    SCHEDULE_TABLE = "table.schedule-table"
    DAY_CELL = "td#week{index}"
    CLASS_ITEM = "ul > li"
    SUBJECT = "h4"
    TEACHER_SELECTORS = ("p.teacher", "p:not(.credits):not(.classroom-info):not(.memo)")
    CLASSROOM_SELECTORS = ("span.classroom", "p > span", ".classroom-info")
    MEMO = ".memo"
    COLOR_ATTR = "data-color"

    def __init__(self, markup: Markup) -> None:
        self.document: BeautifulSoup = load_document(markup)

    def is_present(self) -> bool:
        """True if the page carries the timetable grid."""
        return self.document.select_one(self.SCHEDULE_TABLE) is not None

    def extract(self, options: ExportOptions) -> ExtractionResult[TimetableEntry]:
        """Extract every class entry from the grid.

        Args:
            options: Export options (empty-cell placeholders, meta, default color).

        Returns:
            ExtractionResult with entries ordered by period, then day, then
            document order inside a cell. structure_found is False when the
            table or its tbody is missing.
        """
        result = ExtractionResult[TimetableEntry]()

        table = self.document.select_one(self.SCHEDULE_TABLE)
        tbody = table.find("tbody") if table is not None else None
        if tbody is None:
            missing = "table" if table is None else "tbody"
            log.warning("structure_not_found", component=COMPONENT, missing=missing)
            result.structure_found = False
            result.diagnostics.append(
                Diagnostic(component=COMPONENT, reason="structure_not_found", detail=missing)
            )
            return result

        rows = tbody.find_all("tr", recursive=False)
        item_index = 0

        # First row is the day-of-week header
        for period, row in enumerate(rows[1:], start=1):
            for day in DayOfWeek:
                cell = row.select_one(self.DAY_CELL.format(index=day.number))
                if cell is None:
                    continue

                items = cell.select(self.CLASS_ITEM)
                if not items:
                    if options.include_empty_cells:
                        result.entries.append(
                            TimetableEntry(
                                day_of_week=day,
                                period=period,
                                subject="",
                                color=options.default_color,
                            )
                        )
                    continue

                for item in items:
                    entry = self._parse_item(item, period, day, options)
                    if entry is None:
                        log.info(
                            "item_skipped",
                            component=COMPONENT,
                            index=item_index,
                            reason="missing_subject",
                            period=period,
                            day=day.value,
                        )
                        result.diagnostics.append(
                            Diagnostic(
                                component=COMPONENT,
                                index=item_index,
                                reason="missing_subject",
                            )
                        )
                    else:
                        result.entries.append(entry)
                    item_index += 1

        log.info(
            "timetable_extracted",
            periods=max(len(rows) - 1, 0),
            entries=len(result.entries),
            skipped=len(result.diagnostics),
        )
        return result

    def _parse_item(
        self, item: Tag, period: int, day: DayOfWeek, options: ExportOptions
    ) -> TimetableEntry | None:
        subject = node_text(item.select_one(self.SUBJECT))
        if subject is None:
            return None

        teacher = classroom = memo = None
        if options.include_meta:
            teacher = _first_text(item, self.TEACHER_SELECTORS)
            classroom = _first_text(item, self.CLASSROOM_SELECTORS)
            memo = node_text(item.select_one(self.MEMO))

        return TimetableEntry(
            day_of_week=day,
            period=period,
            subject=subject,
            teacher=teacher,
            classroom=classroom,
            color=self._resolve_color(item, options.default_color),
            memo=memo,
        )

    def _resolve_color(self, item: Tag, default_color: str) -> str:
        """Explicit attribute, then inline style, then the configured default."""
        explicit = item.get(self.COLOR_ATTR)
        if explicit and explicit.strip():
            return explicit.strip()
        inline = normalize_color(style_background_color(item.get("style")))
        return inline or default_color


def _first_text(item: Tag, selectors: tuple[str, ...]) -> str | None:
    # Selectors are tried in order; the first matching node wins even if blank
    for selector in selectors:
        node = item.select_one(selector)
        if node is not None:
            return node_text(node)
    return None
