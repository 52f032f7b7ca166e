"""
Calendar view state: the anchor date and active mode, and the navigation
commands that move them.

A ``CalendarView`` lives for one render of the calendar block. It takes a
snapshot of the items once (the calendar index) and recomputes the layout
from its state on every refresh; items synced in the meantime show up on
the next render, not this one.
"""
from __future__ import annotations

import typing as t
from dataclasses import dataclass
from datetime import date, timedelta

from due_planner.collector import CalendarIndex, build_calendar_index
from due_planner.grids import (
    DEFAULT_CELL_CAP,
    CalendarLayout,
    build_day_agenda,
    build_month_grid,
    build_week_grid,
    month_dates,
    sunday_of_week,
)
from due_planner.models import DueItem, TodayMarker, ViewMode

NAVIGATION_COMMANDS = ("prev", "next", "today")


def add_months(d: date, months: int) -> date:
    """First day of the month ``months`` away from ``d``'s month."""
    index = d.year * 12 + (d.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


@dataclass
class ViewState:
    """Navigation state ``{mode, anchor}``. Starts at month view on today."""
    anchor: date
    mode: ViewMode = ViewMode.MONTH

    def _shift(self, step: int) -> None:
        if self.mode is ViewMode.MONTH:
            self.anchor = add_months(self.anchor, step)
        elif self.mode is ViewMode.WEEK:
            self.anchor = self.anchor + timedelta(days=7 * step)
        else:
            self.anchor = self.anchor + timedelta(days=step)

    def prev(self) -> None:
        """One unit of the current mode back (month view clamps to the 1st)."""
        self._shift(-1)

    def next(self) -> None:
        self._shift(1)

    def go_today(self, today: date) -> None:
        self.anchor = today

    def set_mode(self, mode: t.Union[ViewMode, str]) -> bool:
        """Switch mode, keeping the anchor. Returns False if already in ``mode``."""
        mode = ViewMode(mode)
        if mode is self.mode:
            return False
        self.mode = mode
        return True

    def visible_range(self) -> tuple[date, date]:
        """First and last date the current mode renders (inclusive)."""
        if self.mode is ViewMode.MONTH:
            dates = month_dates(self.anchor.year, self.anchor.month)
            return dates[0][0], dates[-1][0]
        if self.mode is ViewMode.WEEK:
            sunday = sunday_of_week(self.anchor)
            return sunday, sunday + timedelta(days=6)
        return self.anchor, self.anchor


class CalendarView:
    """One calendar render: item snapshot + view state + layout policy.

    Args:
        items: Collected due items; only dated ones reach the calendar.
        clock: Returns the current date; called on every layout so a view
            left open past midnight moves its today marker.
        cell_cap: Items shown inline per month cell (None or 0: no cap).
        today_marker: How today's cell is flagged.
        mode: Initial mode.
        anchor: Initial anchor, today when omitted.
    """

    def __init__(
        self,
        items: t.Iterable[DueItem],
        clock: t.Callable[[], date] = date.today,
        cell_cap: t.Optional[int] = DEFAULT_CELL_CAP,
        today_marker: TodayMarker = TodayMarker.HIGHLIGHT,
        mode: ViewMode = ViewMode.MONTH,
        anchor: t.Optional[date] = None,
    ) -> None:
        self._clock = clock
        self.index: CalendarIndex = build_calendar_index(items)
        self.cell_cap = cell_cap
        self.today_marker = TodayMarker(today_marker)
        self.state = ViewState(anchor=anchor or clock(), mode=ViewMode(mode))

    @property
    def today(self) -> date:
        return self._clock()

    def layout(self) -> CalendarLayout:
        """Layout for the current state."""
        state = self.state
        if state.mode is ViewMode.MONTH:
            return build_month_grid(
                state.anchor.year,
                state.anchor.month,
                self.index,
                self.today,
                cell_cap=self.cell_cap,
                today_marker=self.today_marker,
            )
        if state.mode is ViewMode.WEEK:
            return build_week_grid(state.anchor, self.index, self.today, today_marker=self.today_marker)
        return build_day_agenda(state.anchor, self.index, self.today)

    def handle(self, command: str) -> bool:
        """Apply a toolbar/navigation command.

        Accepts ``prev``, ``next``, ``today`` and the mode names.

        :return: Whether the view needs to re-render.
        :raises ValueError: For an unknown command.
        """
        command = command.strip().lower()
        if command == "prev":
            self.state.prev()
            return True
        if command == "next":
            self.state.next()
            return True
        if command == "today":
            before = self.state.anchor
            self.state.go_today(self.today)
            return self.state.anchor != before
        try:
            mode = ViewMode(command)
        except ValueError:
            raise ValueError(f"Unknown calendar command: {command!r}") from None
        return self.state.set_mode(mode)
