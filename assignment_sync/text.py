"""Small text helpers for turning assignments into notes."""
from __future__ import annotations

import re
import typing as t
from datetime import date

from due_planner.formatting import format_date_long

MAX_FILENAME_LENGTH = 100

_FORBIDDEN_RE = re.compile(r'[/\\:*?"<>|]')
_WHITESPACE_RE = re.compile(r"\s+")


def sanitize_filename(name: str) -> str:
    """Make an assignment name safe as a note file name."""
    cleaned = _FORBIDDEN_RE.sub("", name)
    cleaned = _WHITESPACE_RE.sub(" ", cleaned).strip()
    return cleaned[:MAX_FILENAME_LENGTH]


def format_date(iso: str) -> str:
    """'2026-02-15T23:59:00Z' -> 'February 15, 2026'.

    Uses the calendar date as written, the same one stored in front matter.
    Anything unparseable comes back unchanged.
    """
    try:
        return format_date_long(date.fromisoformat(iso[:10]))
    except (ValueError, TypeError):
        return iso


def due_display(due_at: t.Optional[str]) -> str:
    return format_date(due_at) if due_at else "No due date"
