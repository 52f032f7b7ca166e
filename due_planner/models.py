"""
Data models for the due-date planner.

This module contains the due item materialised from a vault note and the
closed enumerations the list and calendar views are driven by.
"""
from __future__ import annotations

import typing as t
from dataclasses import dataclass
from datetime import date
from enum import Enum

from vault_store.models import VaultFile


class UrgencyBucket(str, Enum):
    """Coarse classification of a due date relative to today.

    Declaration order is the presentation order.
    """
    OVERDUE = "overdue"
    TODAY = "today"
    TOMORROW = "tomorrow"
    WEEK = "week"
    LATER = "later"
    NONE = "none"

    @property
    def rank(self) -> int:
        return URGENCY_ORDER.index(self)


URGENCY_ORDER: tuple[UrgencyBucket, ...] = tuple(UrgencyBucket)


class ViewMode(str, Enum):
    """Calendar view granularity."""
    MONTH = "month"
    WEEK = "week"
    DAY = "day"


class SortMode(str, Enum):
    """Todo list presentation toggle."""
    DATE = "date"
    SUBJECT = "subject"
    NAME = "name"


class TodayMarker(str, Enum):
    """How the calendar flags today's cell."""
    HIGHLIGHT = "highlight"   # cell background
    GLYPH = "glyph"           # circled day number


@dataclass(frozen=True)
class DueItem:
    """
    One outstanding assignment note.

    ``name`` and ``subject`` are a snapshot of the file path at collection
    time; if the note is renamed or moved, collect again instead of
    patching the item.
    """
    file: VaultFile
    name: str
    due: t.Optional[date]
    subject: str

    @property
    def due_key(self) -> t.Optional[str]:
        """Calendar index key ("YYYY-MM-DD"), or None without a due date."""
        return self.due.isoformat() if self.due else None

    def urgency(self, today: date) -> UrgencyBucket:
        from due_planner.urgency import classify
        return classify(self.due, today)
