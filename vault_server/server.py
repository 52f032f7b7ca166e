"""
MCP server exposing the vault planner: sync, the todo list, the calendar,
completion and a plain listing of due items.

The vault is the directory named by ``CANVAS_VAULT`` (default: the working
directory). Notices that the CLI would print are collected and returned in
the tool result instead.
"""
from __future__ import annotations

import os
import typing as t
from datetime import date

from fastmcp import FastMCP

from assignment_sync.settings import load_settings
from assignment_sync.sync import sync_assignments
from due_planner.collector import collect
from due_planner.models import SortMode, ViewMode
from orchestrator.blocks import calendar_block, make_todo_view, todo_block
from orchestrator.render import render_to_text
from vault_store.store import VaultStore

mcp = FastMCP("CanvasVault")

# Vault root - configurable via environment variable
VAULT_ROOT = os.getenv("CANVAS_VAULT", ".")


def _vault(vault_root: str = "") -> str:
    return vault_root or VAULT_ROOT


def _parse_date(value: str) -> t.Optional[date]:
    return date.fromisoformat(value) if value else None


def _sync(vault_root: str = "") -> dict[str, t.Any]:
    """Run a sync and report what it created."""
    root = _vault(vault_root)
    messages: list[str] = []
    report = sync_assignments(VaultStore(root), load_settings(root), notify=messages.append)
    return {
        "created": report.created,
        "errors": report.errors,
        "messages": messages,
    }


def _list_due_items(vault_root: str = "") -> list[dict[str, t.Any]]:
    root = _vault(vault_root)
    settings = load_settings(root)
    today = date.today()
    return [
        {
            "name": item.name,
            "subject": item.subject,
            "due": item.due_key,
            "urgency": item.urgency(today).value,
            "path": item.file.path,
        }
        for item in collect(VaultStore(root), settings.semester_base_path)
    ]


def _show_todo_list(sort: str = SortMode.DATE.value, vault_root: str = "") -> str:
    root = _vault(vault_root)
    return render_to_text(todo_block(VaultStore(root), load_settings(root), sort_mode=SortMode(sort)))


def _show_calendar(mode: str = ViewMode.MONTH.value, anchor: str = "", vault_root: str = "") -> str:
    root = _vault(vault_root)
    block = calendar_block(
        VaultStore(root),
        load_settings(root),
        mode=ViewMode(mode),
        anchor=_parse_date(anchor),
    )
    return render_to_text(block)


def _complete_assignment(name: str, vault_root: str = "") -> dict[str, str]:
    """Move a pending assignment to Done.

    :raises ValueError: If no pending assignment matches ``name``.
    """
    root = _vault(vault_root)
    store = VaultStore(root)
    view = make_todo_view(store, load_settings(root))
    item = view.find(name)
    if item is None:
        raise ValueError(f"No pending assignment named '{name}'")
    messages: list[str] = []
    moved = view.complete(store, item, notify=messages.append)
    return {"path": moved.path, "message": messages[0] if messages else ""}


@mcp.tool()
def sync(vault_root: str = "") -> dict[str, t.Any]:
    """Sync published Canvas assignments into Todo notes.

    :param vault_root: Vault directory (optional; defaults to CANVAS_VAULT).
    :return: Created note paths, per-subject errors and the notices shown.
    """
    return _sync(vault_root)


@mcp.tool()
def list_due_items(vault_root: str = "") -> list[dict[str, t.Any]]:
    """Lists outstanding assignments with due date and urgency.

    :param vault_root: Vault directory (optional).
    :return: One dict per assignment note in a Todo folder.
    """
    return _list_due_items(vault_root)


@mcp.tool()
def show_todo_list(sort: str = "date", vault_root: str = "") -> str:
    """Renders the todo list as text.

    :param sort: One of "date", "subject", "name".
    :param vault_root: Vault directory (optional).
    """
    return _show_todo_list(sort, vault_root)


@mcp.tool()
def show_calendar(mode: str = "month", anchor: str = "", vault_root: str = "") -> str:
    """Renders the calendar as text.

    :param mode: One of "month", "week", "day".
    :param anchor: Date to show (YYYY-MM-DD); today when empty.
    :param vault_root: Vault directory (optional).
    """
    return _show_calendar(mode, anchor, vault_root)


@mcp.tool()
def complete_assignment(name: str, vault_root: str = "") -> dict[str, str]:
    """Marks an assignment done and moves its note to the Done folder.

    :param name: Note name (without .md) or vault path.
    :param vault_root: Vault directory (optional).
    :return: The new path and the notice.
    """
    return _complete_assignment(name, vault_root)


if __name__ == "__main__":
    mcp.run()
