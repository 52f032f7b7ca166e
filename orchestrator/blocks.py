"""
The two embeddable views: the todo list and the calendar.

Each block collects due items from the vault on every call, so a render
always reflects the notes as they are now.
"""
from __future__ import annotations

import typing as t
from datetime import date

from rich.console import Group, RenderableType
from rich.text import Text

from assignment_sync.settings import Settings
from due_planner.calendar_view import CalendarView
from due_planner.collector import collect
from due_planner.models import SortMode, ViewMode
from due_planner.todo_list import TodoListView
from orchestrator.render import render_layout, render_todo
from vault_store.store import VaultStore


def make_todo_view(store: VaultStore, settings: Settings, sort_mode: SortMode = SortMode.DATE) -> TodoListView:
    return TodoListView(collect(store, settings.semester_base_path), SortMode(sort_mode))


def make_calendar_view(
    store: VaultStore,
    settings: Settings,
    mode: ViewMode = ViewMode.MONTH,
    anchor: t.Optional[date] = None,
    clock: t.Callable[[], date] = date.today,
) -> CalendarView:
    return CalendarView(
        collect(store, settings.semester_base_path),
        clock=clock,
        cell_cap=settings.month_cell_item_cap,
        today_marker=settings.today_marker,
        mode=ViewMode(mode),
        anchor=anchor,
    )


def todo_block(
    store: VaultStore,
    settings: Settings,
    today: t.Optional[date] = None,
    sort_mode: SortMode = SortMode.DATE,
) -> RenderableType:
    """Outstanding assignments grouped by urgency, subject or name."""
    view = make_todo_view(store, settings, sort_mode)
    header = Text(f"Sort: {view.sort_mode.value}", style="dim")
    return Group(header, render_todo(view.sections(today or date.today())))


def calendar_block(
    store: VaultStore,
    settings: Settings,
    today: t.Optional[date] = None,
    mode: ViewMode = ViewMode.MONTH,
    anchor: t.Optional[date] = None,
) -> RenderableType:
    """Month, week or day calendar of dated assignments."""
    clock = (lambda: today) if today else date.today
    view = make_calendar_view(store, settings, mode=mode, anchor=anchor, clock=clock)
    return render_layout(view.layout(), view.today_marker)
