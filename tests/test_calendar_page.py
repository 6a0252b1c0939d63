import pytest
from structlog.testing import capture_logs

from src.timetable_export.models import CalendarEntry
from src.timetable_export.pages.calendar import CalendarPage, LabelSkipped, parse_label_text


def test_label_is_split_into_fields():
    entry = parse_label_text(
        "Physics I　3rd period 13:00-14:30　(Bldg)1401　Prof. X　Y",
        "2025-11-04",
    )

    assert entry == CalendarEntry(
        date="2025-11-04",
        start_time="13:00",
        end_time="14:30",
        subject="Physics I",
        location="(Bldg)1401",
        teacher="Prof. X Y",
    )


def test_ordinary_spaces_do_not_split():
    entry = parse_label_text("Linear Algebra II　1 9:00-10:30", "2025-11-05")

    assert entry.subject == "Linear Algebra II"
    assert entry.start_time == "9:00"
    assert entry.location is None
    assert entry.teacher is None


def test_consecutive_delimiters_count_as_one():
    entry = parse_label_text("化学　　2限 10:40-12:10　　A棟", "2025-11-06")

    assert entry.location == "A棟"


@pytest.mark.parametrize(
    "text, reason",
    [
        ("休講のお知らせ", "too_few_segments"),
        ("英語　時間未定", "malformed_time"),
        ("英語　1330-1500", "malformed_time"),
        ("英語　１３:００-１４:３０", "malformed_time"),
    ],
)
def test_unparseable_labels_raise_label_skipped(text, reason):
    with pytest.raises(LabelSkipped) as exc_info:
        parse_label_text(text, "2025-11-04")

    assert exc_info.value.reason == reason


def test_extract_keeps_document_order_and_skips_bad_labels(calendar_html):
    result = CalendarPage(calendar_html).extract()

    assert [(e.date, e.subject) for e in result.entries] == [
        ("2025-12-01", "電磁気学Ⅰ"),
        ("2025-12-02", 'Math, Advanced "II"'),
    ]
    first = result.entries[0]
    assert (first.start_time, first.end_time) == ("13:00", "14:30")
    assert first.location == "(情)1401講義室"
    assert first.teacher == "許 宗焄"


def test_every_skip_is_reported_with_its_position(calendar_html):
    with capture_logs() as logs:
        result = CalendarPage(calendar_html).extract()

    assert [(d.index, d.reason) for d in result.diagnostics] == [
        (0, "other_month"),
        (2, "too_few_segments"),
        (3, "malformed_time"),
        (4, "missing_date"),
    ]
    skipped = [(log["index"], log["reason"]) for log in logs if log["event"] == "item_skipped"]
    assert skipped == [(d.index, d.reason) for d in result.diagnostics]


def test_label_without_title_is_skipped():
    html = (
        '<table><tr><td data-date="2025-12-03">'
        '<a class="c-timetable-usage-guide-item-class"><span>no title</span></a>'
        "</td></tr></table>"
    )
    result = CalendarPage(html).extract()

    assert result.entries == []
    assert result.diagnostics[0].reason == "missing_title"


def test_label_outside_a_cell_is_skipped():
    html = '<div><a class="c-timetable-usage-guide-item-class"><div class="fc-event-title">x</div></a></div>'
    result = CalendarPage(html).extract()

    assert result.diagnostics[0].reason == "no_enclosing_cell"


def test_inverted_time_range_passes_through():
    html = (
        '<table><tr><td data-date="2025-12-03">'
        '<a class="c-timetable-usage-guide-item-class">'
        '<div class="fc-event-title">夜間演習　18:00-9:00</div></a>'
        "</td></tr></table>"
    )
    result = CalendarPage(html).extract()

    (entry,) = result.entries
    assert (entry.start_time, entry.end_time) == ("18:00", "9:00")
    assert result.diagnostics[0].reason == "inverted_time_range"


def test_page_without_labels_is_empty():
    result = CalendarPage("<html><body></body></html>").extract()

    assert result.entries == []
    assert result.diagnostics == []
    assert result.structure_found


def test_cell_with_malformed_date_is_skipped():
    html = (
        "<table><tr>"
        '<td data-date="2025-11-04T00:00:00">'
        '<a class="c-timetable-usage-guide-item-class">'
        '<div class="fc-event-title">電磁気学Ⅰ　13:00-14:30</div></a></td>'
        '<td data-date="2025-11-05">'
        '<a class="c-timetable-usage-guide-item-class">'
        '<div class="fc-event-title">線形代数　9:00-10:30</div></a></td>'
        "</tr></table>"
    )
    result = CalendarPage(html).extract()

    assert [e.date for e in result.entries] == ["2025-11-05"]
    assert [(d.index, d.reason, d.detail) for d in result.diagnostics] == [
        (0, "malformed_date", "2025-11-04T00:00:00")
    ]
