"""Timetable and calendar export for the university portal.

Turns saved portal pages (quarter timetable grid, month calendar) into JSON and
calendar-import CSV. The extractors and serializers are pure functions of the
page markup and ExportOptions.
"""

from src.timetable_export.exporter import deliver, export_calendar, export_timetable
from src.timetable_export.models import CalendarEntry, ExportOptions, TimetableEntry
from src.timetable_export.pages.calendar import CalendarPage
from src.timetable_export.pages.timetable import TimetablePage

__all__ = [
    "CalendarEntry",
    "CalendarPage",
    "ExportOptions",
    "TimetableEntry",
    "TimetablePage",
    "deliver",
    "export_calendar",
    "export_timetable",
]
