"""
Todo list view: ordering, grouping and the completion hook.

The layout functions return plain sections and rows; drawing them is the
presentation layer's job.
"""
from __future__ import annotations

import typing as t
from dataclasses import dataclass
from datetime import date

from due_planner.completion import complete
from due_planner.formatting import format_date_short
from due_planner.models import URGENCY_ORDER, DueItem, SortMode, UrgencyBucket
from vault_store.models import VaultFile
from vault_store.store import VaultStore

SECTION_LABELS: dict[UrgencyBucket, str] = {
    UrgencyBucket.OVERDUE: "Overdue",
    UrgencyBucket.TODAY: "Due Today",
    UrgencyBucket.TOMORROW: "Due Tomorrow",
    UrgencyBucket.WEEK: "This Week",
    UrgencyBucket.LATER: "Later",
    UrgencyBucket.NONE: "No Due Date",
}

EMPTY_MESSAGE = "No pending assignments"


@dataclass(frozen=True)
class TodoRow:
    """Presentation data for one item: checkbox, name, subject, due label."""
    item: DueItem
    name: str
    subject: str
    due_label: t.Optional[str]
    overdue: bool


@dataclass(frozen=True)
class TodoSection:
    """A run of rows under one header. ``label`` is None for the flat name list."""
    key: str
    label: t.Optional[str]
    rows: tuple[TodoRow, ...]


def _text_key(value: str) -> tuple[str, str]:
    return value.casefold(), value


def sort_by_due(items: t.Iterable[DueItem]) -> list[DueItem]:
    """Ascending by due date, undated items last; stable otherwise."""
    return sorted(items, key=lambda item: (item.due is None, item.due or date.min))


def make_row(item: DueItem, today: date) -> TodoRow:
    return TodoRow(
        item=item,
        name=item.name,
        subject=item.subject,
        due_label=format_date_short(item.due) if item.due else None,
        overdue=item.urgency(today) is UrgencyBucket.OVERDUE,
    )


def group_by_urgency(items: t.Sequence[DueItem], today: date) -> list[TodoSection]:
    """Sections in fixed urgency order; empty buckets are left out."""
    grouped: dict[UrgencyBucket, list[DueItem]] = {}
    for item in sort_by_due(items):
        grouped.setdefault(item.urgency(today), []).append(item)

    return [
        TodoSection(
            key=bucket.value,
            label=SECTION_LABELS[bucket],
            rows=tuple(make_row(item, today) for item in grouped[bucket]),
        )
        for bucket in URGENCY_ORDER
        if grouped.get(bucket)
    ]


def group_by_subject(items: t.Sequence[DueItem], today: date) -> list[TodoSection]:
    """One section per subject, subjects alphabetical, items by due date inside."""
    grouped: dict[str, list[DueItem]] = {}
    for item in sort_by_due(items):
        grouped.setdefault(item.subject, []).append(item)

    return [
        TodoSection(
            key=subject,
            label=subject,
            rows=tuple(make_row(item, today) for item in grouped[subject]),
        )
        for subject in sorted(grouped, key=_text_key)
    ]


def sort_by_name(items: t.Sequence[DueItem], today: date) -> list[TodoSection]:
    """A single headerless section, alphabetical by name."""
    if not items:
        return []
    ordered = sorted(items, key=lambda item: _text_key(item.name))
    return [TodoSection(key="all", label=None, rows=tuple(make_row(item, today) for item in ordered))]


_LAYOUTS: dict[SortMode, t.Callable[[t.Sequence[DueItem], date], list[TodoSection]]] = {
    SortMode.DATE: group_by_urgency,
    SortMode.SUBJECT: group_by_subject,
    SortMode.NAME: sort_by_name,
}


def build_sections(items: t.Sequence[DueItem], mode: SortMode, today: date) -> list[TodoSection]:
    return _LAYOUTS[SortMode(mode)](items, today)


class TodoListView:
    """The todo list of one render: a snapshot of items plus a sort toggle.

    Changing the sort mode only changes the presentation; completing an item
    removes it from the snapshot.
    """

    def __init__(self, items: t.Iterable[DueItem], sort_mode: SortMode = SortMode.DATE) -> None:
        self._items: list[DueItem] = sort_by_due(items)
        self.sort_mode = SortMode(sort_mode)

    @property
    def items(self) -> tuple[DueItem, ...]:
        return tuple(self._items)

    @property
    def is_empty(self) -> bool:
        return not self._items

    def set_sort_mode(self, mode: SortMode) -> bool:
        """Switch presentation mode. Returns False when nothing changed."""
        mode = SortMode(mode)
        if mode is self.sort_mode:
            return False
        self.sort_mode = mode
        return True

    def sections(self, today: date) -> list[TodoSection]:
        return build_sections(self._items, self.sort_mode, today)

    def find(self, name: str) -> t.Optional[DueItem]:
        """Look an item up by display name (case-insensitive) or vault path."""
        for item in self._items:
            if item.file.path == name or item.name.casefold() == name.casefold():
                return item
        return None

    def complete(
        self,
        store: VaultStore,
        item: DueItem,
        notify: t.Optional[t.Callable[[str], None]] = None,
    ) -> VaultFile:
        """Mark ``item`` done in the vault and drop it from this list.

        Errors from the move propagate and leave the item in the list.
        """
        moved = complete(store, item)
        self._items.remove(item)
        if notify:
            notify(f"Moved to Done: {item.name}")
        return moved
