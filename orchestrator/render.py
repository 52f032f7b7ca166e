# -*- coding: utf-8 -*-
"""
Turn todo sections and calendar layouts into rich renderables.

Only presentation lives here: what goes in each section or cell is decided
by ``due_planner``.
"""
from __future__ import annotations

import io
import typing as t
from datetime import date

from rich import box
from rich.console import Console, Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from due_planner.colors import SubjectColor
from due_planner.grids import (
    CalendarEntry,
    CalendarLayout,
    DayAgenda,
    DayCell,
    EntryTone,
    MonthGrid,
    WeekGrid,
)
from due_planner.models import TodayMarker
from due_planner.notifications import DueReminder
from due_planner.todo_list import EMPTY_MESSAGE, TodoSection

CHECKBOX = "☐"
DOT = "●"

TONE_STYLES = {
    EntryTone.OVERDUE: "bold red",
    EntryTone.TODAY: "bold yellow",
    EntryTone.UPCOMING: "green",
}
TODAY_HIGHLIGHT = "bold white on blue"
OUTSIDE_STYLE = "dim"


def subject_style(color: SubjectColor) -> str:
    return f"{color.text} on {color.background}"


def render_todo(sections: t.Sequence[TodoSection]) -> RenderableType:
    """One table per section, with the section label as its title."""
    if not sections:
        return Text(EMPTY_MESSAGE, style="dim italic")

    tables = []
    for section in sections:
        table = Table(
            title=section.label,
            title_justify="left",
            title_style="bold magenta",
            show_header=False,
            box=box.SIMPLE,
            expand=False,
        )
        table.add_column("", width=2)
        table.add_column("Name", style="white")
        table.add_column("Subject", style="cyan")
        table.add_column("Due", style="yellow")
        for row in section.rows:
            due = Text(row.due_label or "", style="bold red" if row.overdue else "yellow")
            table.add_row(CHECKBOX, row.name, row.subject, due)
        tables.append(table)
    return Group(*tables)


def _entry_text(entry: CalendarEntry, with_subject: bool = False) -> Text:
    text = Text()
    text.append(f"{DOT} ", style=TONE_STYLES[entry.tone])
    text.append(entry.label, style=subject_style(entry.color))
    if with_subject:
        text.append(f"\n  {entry.subject}", style="dim")
    return text


def _cell_text(cell: DayCell, marker: TodayMarker, with_subject: bool = False) -> Text:
    text = Text()
    if cell.is_today and marker is TodayMarker.HIGHLIGHT:
        day_style = TODAY_HIGHLIGHT
    elif cell.outside:
        day_style = OUTSIDE_STYLE
    else:
        day_style = "bold"
    text.append(cell.day_label, style=day_style)
    for entry in cell.entries:
        text.append("\n")
        text.append_text(_entry_text(entry, with_subject))
    if cell.more_label:
        text.append(f"\n{cell.more_label}", style="dim italic")
    if cell.outside:
        text.stylize(OUTSIDE_STYLE)
    return text


def render_month(grid: MonthGrid, marker: TodayMarker = TodayMarker.HIGHLIGHT) -> RenderableType:
    table = Table(title=grid.label, show_lines=True, box=box.SQUARE, expand=True)
    for label in grid.weekday_labels:
        table.add_column(label, justify="left", vertical="top", ratio=1)
    for row in grid.rows:
        table.add_row(*(_cell_text(cell, marker) for cell in row))
    return table


def render_week(grid: WeekGrid, marker: TodayMarker = TodayMarker.HIGHLIGHT) -> RenderableType:
    table = Table(title=grid.label, show_lines=True, box=box.SQUARE, expand=True)
    for label in grid.weekday_labels:
        table.add_column(label, justify="left", vertical="top", ratio=1)
    table.add_row(*(_cell_text(cell, marker, with_subject=True) for cell in grid.cells))
    return table


def render_day(agenda: DayAgenda) -> RenderableType:
    if agenda.empty_message:
        body: RenderableType = Text(agenda.empty_message, style="dim italic")
    else:
        body = Table(show_header=True, header_style="bold magenta", box=box.SIMPLE)
        body.add_column("", width=2)
        body.add_column("Name")
        body.add_column("Subject", style="cyan")
        for entry in agenda.entries:
            body.add_row(
                Text(DOT, style=TONE_STYLES[entry.tone]),
                Text(entry.label, style=subject_style(entry.color)),
                entry.subject,
            )
    return Panel(body, title=agenda.label, border_style="blue", expand=False)


def render_layout(layout: CalendarLayout, marker: TodayMarker = TodayMarker.HIGHLIGHT) -> RenderableType:
    if isinstance(layout, MonthGrid):
        return render_month(layout, marker)
    if isinstance(layout, WeekGrid):
        return render_week(layout, marker)
    return render_day(layout)


def render_reminder(reminder: DueReminder) -> RenderableType:
    due = date.fromisoformat(reminder.due)
    body = Text()
    body.append(reminder.notes, style="cyan")
    body.append(f"\n{due:%A} {reminder.due}", style="yellow")
    if reminder.path:
        body.append(f"\n{reminder.path}", style="dim")
    return Panel(body, title=f"⏰ {reminder.title}", border_style="yellow", expand=False)


def render_to_text(renderable: RenderableType, width: int = 120) -> str:
    """Render without a terminal (for tool results and tests)."""
    console = Console(record=True, file=io.StringIO(), width=width, color_system=None)
    console.print(renderable)
    return console.export_text()
