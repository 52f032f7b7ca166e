"""
Month, week and day layouts for the calendar view.

Builders are pure: given a date, the calendar index and today's date they
return plain cell/entry data. Nothing here knows how the result is drawn.
"""
from __future__ import annotations

import calendar
import math
import typing as t
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum

from due_planner.collector import CalendarIndex
from due_planner.colors import SubjectColor, subject_color
from due_planner.formatting import DAY_LABELS, day_label, month_label, week_label
from due_planner.models import DueItem, TodayMarker, UrgencyBucket

DEFAULT_CELL_CAP = 2
MONTH_NAME_LIMIT = 15
ELLIPSIS = "…"
DAY_EMPTY_MESSAGE = "No assignments due"


class EntryTone(str, Enum):
    """Dot color class of a calendar entry."""
    OVERDUE = "overdue"
    TODAY = "today"
    UPCOMING = "upcoming"


@dataclass(frozen=True)
class CalendarEntry:
    """One item as shown inside a calendar cell or the day agenda."""
    item: DueItem
    label: str
    subject: str
    tone: EntryTone
    color: SubjectColor


@dataclass(frozen=True)
class DayCell:
    """
    One day of a month or week grid.

    ``entries`` holds at most the cell cap; ``overflow`` counts the items
    deferred behind the "+N more" marker.
    """
    date: date
    key: str
    day_label: str
    outside: bool
    is_today: bool
    entries: tuple[CalendarEntry, ...]
    overflow: int = 0

    @property
    def has_items(self) -> bool:
        return bool(self.entries) or self.overflow > 0

    @property
    def more_label(self) -> t.Optional[str]:
        return f"+{self.overflow} more" if self.overflow else None


@dataclass(frozen=True)
class MonthGrid:
    label: str
    year: int
    month: int
    weekday_labels: tuple[str, ...]
    rows: tuple[tuple[DayCell, ...], ...]

    @property
    def cells(self) -> list[DayCell]:
        return [cell for row in self.rows for cell in row]


@dataclass(frozen=True)
class WeekGrid:
    label: str
    start: date
    weekday_labels: tuple[str, ...]
    cells: tuple[DayCell, ...]


@dataclass(frozen=True)
class DayAgenda:
    label: str
    date: date
    entries: tuple[CalendarEntry, ...]
    empty_message: t.Optional[str]


CalendarLayout = t.Union[MonthGrid, WeekGrid, DayAgenda]


def entry_tone(item: DueItem, today: date) -> EntryTone:
    bucket = item.urgency(today)
    if bucket is UrgencyBucket.OVERDUE:
        return EntryTone.OVERDUE
    if bucket is UrgencyBucket.TODAY:
        return EntryTone.TODAY
    return EntryTone.UPCOMING


def truncate(name: str, limit: int = MONTH_NAME_LIMIT) -> str:
    return name if len(name) <= limit else name[:limit] + ELLIPSIS


def make_entry(item: DueItem, today: date, limit: t.Optional[int] = None) -> CalendarEntry:
    return CalendarEntry(
        item=item,
        label=truncate(item.name, limit) if limit else item.name,
        subject=item.subject,
        tone=entry_tone(item, today),
        color=subject_color(item.subject),
    )


def circled_number(n: int) -> str:
    """Circled digit glyph for 1..35 (covers every day of a month)."""
    if 1 <= n <= 20:
        return chr(0x2460 + n - 1)
    if 21 <= n <= 35:
        return chr(0x3251 + n - 21)
    return f"({n})"


def format_day_number(day: int, is_today: bool, marker: TodayMarker) -> str:
    if is_today and marker is TodayMarker.GLYPH:
        return circled_number(day)
    return str(day)


def sunday_of_week(d: date) -> date:
    """Start of the Sunday-first week containing ``d``."""
    return d - timedelta(days=(d.weekday() + 1) % 7)


def first_weekday_offset(year: int, month: int) -> int:
    """Column (0 = Sunday) of the first day of the month."""
    return (date(year, month, 1).weekday() + 1) % 7


def month_dates(year: int, month: int) -> list[tuple[date, bool]]:
    """Dates of the month grid as ``(date, outside_month)`` pairs.

    Leading days come from the previous month and trailing days from the
    next so the grid is a whole number of 7-day rows:
    ``rows = ceil((offset + days_in_month) / 7)``.
    """
    offset = first_weekday_offset(year, month)
    days_in_month = calendar.monthrange(year, month)[1]
    rows = math.ceil((offset + days_in_month) / 7)

    first = date(year, month, 1)
    start = first - timedelta(days=offset)
    return [
        (d, d.month != month)
        for d in (start + timedelta(days=i) for i in range(rows * 7))
    ]


def _cell(
    d: date,
    outside: bool,
    index: CalendarIndex,
    today: date,
    cap: t.Optional[int],
    limit: t.Optional[int],
    marker: TodayMarker,
) -> DayCell:
    key = d.isoformat()
    items = index.get(key, ())
    shown = items if not cap or cap <= 0 else items[:cap]
    is_today = d == today
    return DayCell(
        date=d,
        key=key,
        day_label=format_day_number(d.day, is_today, marker),
        outside=outside,
        is_today=is_today,
        entries=tuple(make_entry(item, today, limit) for item in shown),
        overflow=len(items) - len(shown),
    )


def build_month_grid(
    year: int,
    month: int,
    index: CalendarIndex,
    today: date,
    cell_cap: t.Optional[int] = DEFAULT_CELL_CAP,
    today_marker: TodayMarker = TodayMarker.HIGHLIGHT,
) -> MonthGrid:
    """Month layout with fill days and capped, truncated entries per cell."""
    cells = [
        _cell(d, outside, index, today, cell_cap, MONTH_NAME_LIMIT, today_marker)
        for d, outside in month_dates(year, month)
    ]
    rows = tuple(tuple(cells[i:i + 7]) for i in range(0, len(cells), 7))
    return MonthGrid(
        label=month_label(year, month),
        year=year,
        month=month,
        weekday_labels=DAY_LABELS,
        rows=rows,
    )


def build_week_grid(
    anchor: date,
    index: CalendarIndex,
    today: date,
    today_marker: TodayMarker = TodayMarker.HIGHLIGHT,
) -> WeekGrid:
    """Sunday-start week around ``anchor``; every item shown with its full name."""
    sunday = sunday_of_week(anchor)
    cells = tuple(
        _cell(sunday + timedelta(days=i), False, index, today, None, None, today_marker)
        for i in range(7)
    )
    return WeekGrid(label=week_label(sunday), start=sunday, weekday_labels=DAY_LABELS, cells=cells)


def build_day_agenda(anchor: date, index: CalendarIndex, today: date) -> DayAgenda:
    """Every item due exactly on ``anchor``, or the empty-state message."""
    entries = tuple(make_entry(item, today) for item in index.get(anchor.isoformat(), ()))
    return DayAgenda(
        label=day_label(anchor),
        date=anchor,
        entries=entries,
        empty_message=None if entries else DAY_EMPTY_MESSAGE,
    )
