"""Pydantic models for exported schedule data.

All data structures use Pydantic v2 for validation, serialization, and type safety.
Attributes are snake_case; exported JSON uses the camelCase aliases
(dayOfWeek, startTime, ...) that downstream timetable apps read.
"""

from enum import Enum
from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel


class DayOfWeek(str, Enum):
    """Day column of the timetable grid, in the portal's own labels."""

    MON = "月"
    TUE = "火"
    WED = "水"
    THU = "木"
    FRI = "金"
    SAT = "土"
    SUN = "日"

    @property
    def number(self) -> int:
        """1-based column index (1 = Monday), as used in the td#week<n> ids."""
        return list(type(self)).index(self) + 1


class _Record(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class TimetableEntry(_Record):
    """One class occupying one cell of the period x day grid.

    A cell can hold several entries, so (period, day_of_week) is not a key.
    An empty subject only appears on placeholder entries for empty cells.
    """

    day_of_week: DayOfWeek
    period: int = Field(ge=1)  # row offset below the header row
    subject: str
    teacher: str | None = None
    classroom: str | None = None
    color: str | None = None  # "#rrggbb"
    memo: str | None = None


class CalendarEntry(_Record):
    """One event parsed from a calendar label such as
    "電磁気学Ⅰ　３限 13:00-14:30　(情)1401講義室　許　宗焄".
    """

    date: str  # "2025-11-04", verbatim from the day cell's data-date
    start_time: str  # "13:00"
    end_time: str  # "14:30"
    subject: str
    location: str | None = None
    teacher: str | None = None


ExportFormat = Literal["pretty", "compact"]
OutputType = Literal["download", "clipboard"]


class ExportOptions(BaseModel):
    """Per-run export configuration.

    Every field is required: defaults are resolved by ExportSettings before
    a run starts, never inside the extractors.
    """

    model_config = ConfigDict(frozen=True)

    format: ExportFormat
    default_color: str
    include_empty_cells: bool
    include_meta: bool
    output_type: OutputType


class Diagnostic(BaseModel):
    """Why an item (or the whole page) produced no entry."""

    model_config = ConfigDict(frozen=True)

    component: str  # "grid" or "calendar"
    index: int | None = None  # item position in document order
    reason: str  # e.g. "missing_subject", "malformed_time"
    detail: str | None = None


EntryT = TypeVar("EntryT", bound=_Record)


class ExtractionResult(BaseModel, Generic[EntryT]):
    """Entries extracted from one page plus the skip/discard decisions."""

    entries: list[EntryT] = Field(default_factory=list)
    diagnostics: list[Diagnostic] = Field(default_factory=list)
    structure_found: bool = True


class ExportResult(BaseModel):
    """Serialized export ready for the caller to download or copy."""

    model_config = ConfigDict(frozen=True)

    text: str
    filename: str
    media_type: str
    entry_count: int
    structure_found: bool = True


TimetableEntries = TypeAdapter(list[TimetableEntry])
CalendarEntries = TypeAdapter(list[CalendarEntry])
