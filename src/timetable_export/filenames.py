"""Export filenames derived from the page the data was taken from.

The displayed month (calendar) or academic year and quarter (timetable) is
read from page chrome. Missing or unparseable chrome falls back to today's
date, so a filename is always produced.
"""

import re
from datetime import date

from bs4 import BeautifulSoup

from src.timetable_export.document import node_text
from src.timetable_export.logging import get_logger

log = get_logger(__name__)

STATIC_TIMETABLE_FILENAME = "timetable.json"

DATE_PICKER = "#datePicker"
TOOLBAR_TITLE = ".fc-toolbar-title"
YEAR_LABEL = "p.year"
ACTIVE_QUARTER = "p.c-half-btn a.is-active"

_YEAR_MONTH_RE = re.compile(r"(\d{4})年(\d{1,2})月", re.ASCII)
_YEAR_RE = re.compile(r"(\d{4})", re.ASCII)
_QUARTER_RE = re.compile(r"[１２３４1234]")

# Full-width and ASCII quarter digits ("３Ｑ" on the quarter toggle)
_QUARTER_DIGITS = {
    "１": 1, "1": 1,
    "２": 2, "2": 2,
    "３": 3, "3": 3,
    "４": 4, "4": 4,
}


def _year_month(text: str | None) -> tuple[int, int] | None:
    if not text:
        return None
    match = _YEAR_MONTH_RE.search(text)
    if match is None:
        return None
    return int(match.group(1)), int(match.group(2))


def displayed_month(document: BeautifulSoup) -> tuple[int, int] | None:
    """Year and month shown by the calendar, or None if the page doesn't say.

    The date picker input ("2025年12月") is preferred over the toolbar title.
    """
    picker = document.select_one(DATE_PICKER)
    if picker is not None:
        found = _year_month(picker.get("value"))
        if found:
            log.debug("month_from_date_picker", year=found[0], month=found[1])
            return found

    found = _year_month(node_text(document.select_one(TOOLBAR_TITLE)))
    if found:
        log.debug("month_from_toolbar_title", year=found[0], month=found[1])
    return found


def calendar_filename(document: BeautifulSoup, today: date | None = None) -> str:
    """calendar_<year>_<month>.csv, e.g. calendar_2025_12.csv."""
    found = displayed_month(document)
    if found is None:
        today = today or date.today()
        found = (today.year, today.month)
        log.info(
            "filename_fallback_to_today",
            variant="calendar",
            year=today.year,
            month=today.month,
        )
    year, month = found
    return f"calendar_{year}_{month}.csv"


def academic_year(document: BeautifulSoup) -> int | None:
    match = _YEAR_RE.search(node_text(document.select_one(YEAR_LABEL)) or "")
    return int(match.group(1)) if match else None


def active_quarter(document: BeautifulSoup) -> int | None:
    match = _QUARTER_RE.search(node_text(document.select_one(ACTIVE_QUARTER)) or "")
    return _QUARTER_DIGITS[match.group(0)] if match else None


def timetable_filename(document: BeautifulSoup, today: date | None = None) -> str:
    """timetable_<year>_<quarter>Q.json, e.g. timetable_2025_3Q.json.

    Missing year falls back to the current year, missing quarter to 1.
    """
    year = academic_year(document)
    if year is None:
        year = (today or date.today()).year
        log.info("filename_fallback_to_today", variant="timetable", year=year)
    quarter = active_quarter(document) or 1
    return f"timetable_{year}_{quarter}Q.json"
