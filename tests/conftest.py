import textwrap

import pytest

from src.timetable_export.models import ExportOptions

TIMETABLE_HTML = textwrap.dedent(
    """
    <html><body>
    <p class="year">2025年度</p>
    <p class="c-half-btn"><a href="#">１Ｑ</a><a href="#" class="is-active">３Ｑ</a></p>
    <table class="schedule-table">
      <tbody>
        <tr><th></th><th>月</th><th>火</th><th>水</th><th>木</th><th>金</th><th>土</th><th>日</th></tr>
        <tr>
          <th>1</th>
          <td id="week1">
            <ul>
              <li data-color="#123abc" style="background-color: rgb(1, 2, 3)">
                <h4>電磁気学Ⅰ</h4>
                <p class="teacher">許 宗焄</p>
                <span class="classroom">(情)1401講義室</span>
                <p class="memo">レポートあり</p>
              </li>
              <li style="background-color: rgb(0, 128, 255)">
                <h4>線形代数</h4>
                <p class="teacher">山田</p>
              </li>
            </ul>
          </td>
          <td id="week2"><ul></ul></td>
          <td id="week3">
            <ul>
              <li><h4>   </h4><p class="teacher">No Subject</p></li>
              <li><h4>英語</h4></li>
            </ul>
          </td>
        </tr>
        <tr>
          <th>2</th>
          <td id="week1"></td>
          <td id="week5">
            <ul><li style="background: transparent"><h4>物理実験</h4><p class="memo">  </p></li></ul>
          </td>
        </tr>
      </tbody>
    </table>
    </body></html>
    """
)

CALENDAR_HTML = textwrap.dedent(
    """
    <html><body>
    <input id="datePicker" value="2025年12月">
    <h2 class="fc-toolbar-title">2025年12月</h2>
    <table><tbody><tr>
      <td class="fc-daygrid-day fc-day-other" data-date="2025-11-30">
        <a class="c-timetable-usage-guide-item-class"><div class="fc-event-title">前月の授業　１限 9:00-10:30　A101　先生</div></a>
      </td>
      <td class="fc-daygrid-day" data-date="2025-12-01">
        <a class="c-timetable-usage-guide-item-class"><div class="fc-event-title">電磁気学Ⅰ　３限 13:00-14:30　(情)1401講義室　許　宗焄</div></a>
        <a class="c-timetable-usage-guide-item-class"><div class="fc-event-title">休講のお知らせ</div></a>
        <a class="c-timetable-usage-guide-item-class"><div class="fc-event-title">英語　時間未定　B202</div></a>
      </td>
      <td class="fc-daygrid-day">
        <a class="c-timetable-usage-guide-item-class"><div class="fc-event-title">日付なし　１限 9:00-10:30</div></a>
      </td>
      <td class="fc-daygrid-day" data-date="2025-12-02">
        <a class="c-timetable-usage-guide-item-class"><div class="fc-event-title">Math, Advanced "II"　２限 10:40-12:10</div></a>
      </td>
    </tr></tbody></table>
    </body></html>
    """
)


@pytest.fixture
def timetable_html() -> str:
    return TIMETABLE_HTML


@pytest.fixture
def calendar_html() -> str:
    return CALENDAR_HTML


@pytest.fixture
def make_options():
    def _make(**overrides) -> ExportOptions:
        values = {
            "format": "pretty",
            "default_color": "#ff6b6b",
            "include_empty_cells": False,
            "include_meta": True,
            "output_type": "download",
        }
        values.update(overrides)
        return ExportOptions(**values)

    return _make


@pytest.fixture
def options(make_options) -> ExportOptions:
    return make_options()
