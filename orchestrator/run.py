# -*- coding: utf-8 -*-
import asyncio
import typing as t
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path

import click
from rich.panel import Panel
from rich.table import Table

from assignment_sync.backfill import backfill_due_dates
from assignment_sync.settings import (
    CourseMapping,
    Settings,
    SettingsError,
    load_settings,
    save_settings,
)
from assignment_sync.sync import default_client_factory, sync_assignments
from canvas_api.client import CanvasApiError
from due_planner.collector import collect
from due_planner.models import DueItem, SortMode, ViewMode
from due_planner.notifications import DueReminder, NotificationLedger, check_and_notify
from orchestrator.blocks import make_calendar_view, make_todo_view
from orchestrator.render import render_layout, render_reminder, render_todo
from orchestrator.scheduler import Schedule, run_schedules
from orchestrator.utils import console, fail, notify, setup_logging
from registry import VIEW_REGISTRY, render_block
from vault_store.store import VaultStore

NOTIFICATION_CHECK_SECONDS = 60

# interactive calendar key -> view command
CALENDAR_KEYS = {
    "p": "prev",
    "n": "next",
    "t": "today",
    "m": "month",
    "w": "week",
    "d": "day",
}
CALENDAR_PROMPT = "[p]rev [n]ext [t]oday [m]onth [w]eek [d]ay [q]uit"


@dataclass
class AppContext:
    vault_root: Path

    @property
    def store(self) -> VaultStore:
        return VaultStore(self.vault_root)

    def settings(self, use_env: bool = True) -> Settings:
        try:
            return load_settings(self.vault_root, use_env=use_env)
        except SettingsError as e:
            fail(str(e))

    def save(self, settings: Settings) -> None:
        save_settings(self.vault_root, settings)


pass_app = click.make_pass_decorator(AppContext)


def _parse_date(value: t.Optional[str]) -> t.Optional[date]:
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise click.BadParameter(f"expected YYYY-MM-DD, got {value!r}", param_hint="--date")


def _show_reminder(reminder: DueReminder) -> None:
    console.print(render_reminder(reminder))


def _find_item(app: AppContext, settings: Settings, name: str) -> DueItem:
    view = make_todo_view(app.store, settings)
    item = view.find(name)
    if item is None:
        fail(f"No pending assignment named '{name}'.")
    return item


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--vault",
    envvar="CANVAS_VAULT",
    default=".",
    show_default=True,
    type=click.Path(file_okay=False),
    help="Vault directory (or set CANVAS_VAULT).",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.pass_context
def main(ctx: click.Context, vault: str, verbose: bool) -> None:
    """Sync Canvas assignments into a notes vault and plan around their due dates."""
    setup_logging(verbose)
    ctx.obj = AppContext(vault_root=Path(vault))


@main.command()
@pass_app
def sync(app: AppContext) -> None:
    """Create notes for new published assignments."""
    report = sync_assignments(app.store, app.settings(), notify=notify)
    if report.aborted:
        raise SystemExit(1)
    for path in report.created:
        console.print(f"   ✓ {path}", markup=False)


@main.command()
@click.option(
    "--interval",
    type=click.IntRange(min=0),
    default=None,
    help="Minutes between syncs (default: sync_interval_minutes from settings; 0 disables).",
)
@click.option("--max-runs", type=click.IntRange(min=1), default=None, hidden=True)
@pass_app
def watch(app: AppContext, interval: t.Optional[int], max_runs: t.Optional[int]) -> None:
    """Keep syncing and checking deadlines until interrupted."""
    settings = app.settings()
    interval = settings.sync_interval_minutes if interval is None else interval
    store = app.store
    ledger = NotificationLedger()

    if settings.auto_sync_on_startup:
        sync_assignments(store, settings, notify=notify)

    def check_deadlines() -> None:
        items = collect(store, settings.semester_base_path)
        check_and_notify(items, settings.notification_policy(), ledger, datetime.now(), _show_reminder)

    schedules = [Schedule("deadline check", check_deadlines, NOTIFICATION_CHECK_SECONDS)]
    if interval > 0:
        schedules.append(
            Schedule(
                "sync",
                lambda: sync_assignments(store, settings, notify=notify),
                interval * 60,
                run_immediately=False,
            )
        )

    console.print(
        Panel.fit(
            f"[bold blue]Watching vault[/bold blue] {app.vault_root}\n"
            f"Sync: {'every %d min' % interval if interval else 'manual'}",
            border_style="blue",
        )
    )
    try:
        asyncio.run(run_schedules(schedules, max_runs=max_runs))
    except KeyboardInterrupt:
        console.print("[dim]Stopped.[/dim]")


@main.command()
@click.option("--add", "add_missing", is_flag=True, help="Add a mapping for every course not mapped yet.")
@pass_app
def courses(app: AppContext, add_missing: bool) -> None:
    """List active Canvas courses and their vault mappings."""
    settings = app.settings()
    if not settings.canvas_base_url or not settings.api_token:
        fail("Configure the Canvas URL and API token first (CANVAS_BASE_URL, CANVAS_API_TOKEN).")

    try:
        with default_client_factory(settings) as client:
            active = client.fetch_active_courses()
    except CanvasApiError as e:
        fail(str(e))

    table = Table(title="Active courses", show_header=True, header_style="bold magenta")
    table.add_column("ID", style="cyan")
    table.add_column("Course")
    table.add_column("Subject", style="green")
    table.add_column("Tag", style="yellow")
    for course in active:
        mapping = settings.course_mappings.get(str(course.id))
        table.add_row(
            str(course.id),
            course.name,
            mapping.subject if mapping else "",
            mapping.subject_tag if mapping else "",
        )
    console.print(table)

    if add_missing:
        stored = app.settings(use_env=False)
        added = stored.add_courses((course.id, course.name) for course in active)
        app.save(stored)
        console.print(f"[green]Added {added} courses.[/green] Set a subject with 'canvas-vault map'.")


@main.command("map")
@click.argument("course_id")
@click.option("--subject", required=True, help="Vault folder for the course's notes.")
@click.option("--tag", default=None, help="Subject tag written into each note.")
@pass_app
def map_course(app: AppContext, course_id: str, subject: str, tag: t.Optional[str]) -> None:
    """Map a Canvas course to a vault subject folder."""
    settings = app.settings(use_env=False)
    current = settings.course_mappings.get(course_id, CourseMapping())
    settings.course_mappings[course_id] = current.model_copy(
        update={"subject": subject.strip(), "subject_tag": current.subject_tag if tag is None else tag.strip()}
    )
    app.save(settings)
    console.print(f"[green]Mapped course {course_id} -> {subject}[/green]")


@main.command()
@click.argument("course_id")
@pass_app
def unmap(app: AppContext, course_id: str) -> None:
    """Remove a course mapping."""
    settings = app.settings(use_env=False)
    if settings.course_mappings.pop(course_id, None) is None:
        fail(f"Course {course_id} is not mapped.")
    app.save(settings)
    console.print(f"[green]Removed mapping for course {course_id}[/green]")


@main.command()
@click.option(
    "--sort",
    "sort_mode",
    type=click.Choice([m.value for m in SortMode]),
    default=SortMode.DATE.value,
    show_default=True,
)
@pass_app
def todo(app: AppContext, sort_mode: str) -> None:
    """Show outstanding assignments."""
    view = make_todo_view(app.store, app.settings(), SortMode(sort_mode))
    console.print(render_todo(view.sections(date.today())))


def _interactive_calendar(view) -> None:
    while True:
        key = click.prompt(CALENDAR_PROMPT, default="q", show_default=False).strip().lower()
        if key in ("q", "quit"):
            return
        command = CALENDAR_KEYS.get(key, key)
        try:
            changed = view.handle(command)
        except ValueError as e:
            console.print(f"[yellow]{e}[/yellow]")
            continue
        if changed:
            console.print(render_layout(view.layout(), view.today_marker))


@main.command()
@click.option(
    "--mode",
    type=click.Choice([m.value for m in ViewMode]),
    default=ViewMode.MONTH.value,
    show_default=True,
)
@click.option("--date", "anchor", default=None, help="Date to show (YYYY-MM-DD); today when omitted.")
@click.option("--interactive", "-i", is_flag=True, help="Navigate with single-letter commands.")
@pass_app
def calendar(app: AppContext, mode: str, anchor: t.Optional[str], interactive: bool) -> None:
    """Show due dates on a month, week or day calendar."""
    view = make_calendar_view(app.store, app.settings(), mode=ViewMode(mode), anchor=_parse_date(anchor))
    console.print(render_layout(view.layout(), view.today_marker))
    if interactive:
        _interactive_calendar(view)


@main.command()
@click.argument("name")
@pass_app
def complete(app: AppContext, name: str) -> None:
    """Mark an assignment done and move it to the Done folder."""
    settings = app.settings()
    item = _find_item(app, settings, name)
    try:
        make_todo_view(app.store, settings).complete(app.store, item, notify=notify)
    except OSError as e:
        fail(str(e))


@main.command("open")
@click.argument("name")
@pass_app
def open_note(app: AppContext, name: str) -> None:
    """Open an assignment note with the system's default app."""
    item = _find_item(app, app.settings(), name)
    app.store.open_by_path(item.file.path)


@main.command()
@pass_app
def backfill(app: AppContext) -> None:
    """Copy due dates from note bodies into front matter."""
    backfill_due_dates(app.store, app.settings(), notify=notify)


@main.command("notify")
@pass_app
def notify_cmd(app: AppContext) -> None:
    """Show deadline reminders that are due now."""
    settings = app.settings()
    policy = settings.notification_policy()
    if not policy.enabled:
        console.print("[dim]Notifications are disabled in settings.[/dim]")
        return
    items = collect(app.store, settings.semester_base_path)
    delivered = check_and_notify(items, policy, NotificationLedger(), datetime.now(), _show_reminder)
    if not delivered:
        console.print("[dim]Nothing due right now.[/dim]")


@main.command()
@click.argument("block", type=click.Choice(sorted(VIEW_REGISTRY)))
@pass_app
def view(app: AppContext, block: str) -> None:
    """Render a view block (canvas-todo or canvas-calendar)."""
    console.print(render_block(block, app.store, app.settings()))


if __name__ == "__main__":
    main()
