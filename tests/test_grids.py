"""Tests for month, week and day calendar layouts."""
import calendar
from datetime import date

import pytest

from due_planner.collector import build_calendar_index
from due_planner.formatting import day_label, format_date_long, month_label, week_label
from due_planner.grids import (
    DAY_EMPTY_MESSAGE,
    EntryTone,
    build_day_agenda,
    build_month_grid,
    build_week_grid,
    circled_number,
    first_weekday_offset,
    month_dates,
    sunday_of_week,
)
from due_planner.models import TodayMarker

EMPTY_INDEX = build_calendar_index([])


def test_february_2026_fits_four_rows(today: date) -> None:
    grid = build_month_grid(2026, 2, EMPTY_INDEX, today)

    assert grid.label == "February 2026"
    assert grid.weekday_labels == ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
    assert first_weekday_offset(2026, 2) == 0
    assert len(grid.rows) == 4
    assert all(len(row) == 7 for row in grid.rows)
    assert [cell.date.day for cell in grid.cells] == list(range(1, 29))
    assert not any(cell.outside for cell in grid.cells)
    assert not any(cell.has_items for cell in grid.cells)


def test_fill_days_come_from_neighbouring_months(today: date) -> None:
    # May 1st 2026 is a Friday
    grid = build_month_grid(2026, 5, EMPTY_INDEX, today)

    assert len(grid.rows) == 6
    first_row = grid.rows[0]
    assert first_row[0].date == date(2026, 4, 26)
    assert all(cell.outside for cell in first_row[:5])
    assert first_row[5].date == date(2026, 5, 1) and not first_row[5].outside
    assert grid.cells[-1].date == date(2026, 6, 6) and grid.cells[-1].outside


@pytest.mark.parametrize("month", range(1, 13))
def test_month_grid_is_whole_weeks(month: int) -> None:
    dates = month_dates(2026, month)
    in_month = [d for d, outside in dates if not outside]

    assert len(dates) % 7 == 0
    assert len(in_month) == calendar.monthrange(2026, month)[1]
    assert dates[0][0].weekday() == 6  # Sunday


def test_cells_cap_entries_and_count_overflow(make_item, today: date) -> None:
    due = date(2026, 2, 15)
    items = [
        make_item("A very long assignment name", due),
        make_item("Quiz", due, subject="Math"),
        make_item("Lab", due, subject="Chemistry"),
    ]
    grid = build_month_grid(2026, 2, build_calendar_index(items), today)
    cell = next(c for c in grid.cells if c.date == due)

    assert [e.label for e in cell.entries] == ["A very long ass…", "Quiz"]
    assert cell.overflow == 1
    assert cell.more_label == "+1 more"


@pytest.mark.parametrize("cap", [None, 0])
def test_no_cap_shows_everything(make_item, today: date, cap) -> None:
    due = date(2026, 2, 15)
    index = build_calendar_index([make_item(name, due) for name in ("A", "B", "C", "D")])
    grid = build_month_grid(2026, 2, index, today, cell_cap=cap)
    cell = next(c for c in grid.cells if c.date == due)

    assert len(cell.entries) == 4
    assert cell.more_label is None


def test_entry_tones_follow_urgency(make_item, today: date) -> None:
    items = [
        make_item("Late", date(2026, 2, 10)),
        make_item("Now", date(2026, 2, 12)),
        make_item("Soon", date(2026, 2, 20)),
    ]
    grid = build_month_grid(2026, 2, build_calendar_index(items), today)
    tones = {e.label: e.tone for c in grid.cells for e in c.entries}

    assert tones == {"Late": EntryTone.OVERDUE, "Now": EntryTone.TODAY, "Soon": EntryTone.UPCOMING}


def test_entries_carry_subject_color(make_item, today: date) -> None:
    items = [make_item("Essay", date(2026, 2, 15)), make_item("Timeline", date(2026, 2, 16))]
    grid = build_month_grid(2026, 2, build_calendar_index(items), today)
    entries = [e for c in grid.cells for e in c.entries]

    assert entries[0].color == entries[1].color


def test_today_marker(today: date) -> None:
    highlighted = build_month_grid(2026, 2, EMPTY_INDEX, today)
    glyph = build_month_grid(2026, 2, EMPTY_INDEX, today, today_marker=TodayMarker.GLYPH)

    [h_today] = [c for c in highlighted.cells if c.is_today]
    [g_today] = [c for c in glyph.cells if c.is_today]
    assert h_today.date == today and h_today.day_label == "12"
    assert g_today.day_label == "⑫"


def test_circled_numbers() -> None:
    assert circled_number(1) == "①"
    assert circled_number(20) == "⑳"
    assert circled_number(21) == "㉑"
    assert circled_number(31) == "㉛"


def test_week_grid_shows_full_names(make_item, today: date) -> None:
    items = [make_item("A very long assignment name", date(2026, 2, 14))] + [
        make_item(f"Problem set {n}", date(2026, 2, 9)) for n in range(4)
    ]
    grid = build_week_grid(today, build_calendar_index(items), today)

    assert grid.start == date(2026, 2, 8)
    assert grid.label == "Feb 8 – 14, 2026"
    assert len(grid.cells) == 7
    assert [len(c.entries) for c in grid.cells] == [0, 4, 0, 0, 0, 0, 1]
    assert grid.cells[6].entries[0].label == "A very long assignment name"
    assert all(c.overflow == 0 for c in grid.cells)
    assert [c.is_today for c in grid.cells].index(True) == 4


def test_week_label_across_months() -> None:
    assert sunday_of_week(date(2026, 1, 1)) == date(2025, 12, 28)
    assert week_label(date(2025, 12, 28)) == "Dec 28 – Jan 3, 2026"


def test_day_agenda(make_item, today: date) -> None:
    index = build_calendar_index([make_item("Essay", date(2026, 2, 15)), make_item("Quiz", date(2026, 2, 15))])

    agenda = build_day_agenda(date(2026, 2, 15), index, today)
    assert agenda.label == "Sunday, February 15, 2026"
    assert [e.label for e in agenda.entries] == ["Essay", "Quiz"]
    assert agenda.empty_message is None

    empty = build_day_agenda(date(2026, 2, 16), index, today)
    assert empty.entries == ()
    assert empty.empty_message == DAY_EMPTY_MESSAGE == "No assignments due"


def test_labels() -> None:
    assert month_label(2026, 2) == "February 2026"
    assert day_label(date(2026, 2, 12)) == "Thursday, February 12, 2026"
    assert format_date_long(date(2026, 2, 15)) == "February 15, 2026"
