"""
Materialise due items from the vault.

A note is a due item when it lives under the semester base path, inside a
folder named after the marker (``Todo``), and is a Markdown note. Its
subject is the folder right above the marker.
"""
from __future__ import annotations

import typing as t
from types import MappingProxyType

from due_planner.models import DueItem
from vault_store.models import VaultFile
from vault_store.store import VaultStore

DEFAULT_MARKER = "Todo"
NOTE_EXTENSION = "md"
UNKNOWN_SUBJECT = "Unknown"

# date key ("YYYY-MM-DD") -> items due that day, in collection order
CalendarIndex = t.Mapping[str, tuple[DueItem, ...]]


def is_candidate(file: VaultFile, base_path_prefix: str, marker: str = DEFAULT_MARKER) -> bool:
    """Selection predicate for due-item notes."""
    if not file.path.startswith(base_path_prefix):
        return False
    if file.extension != NOTE_EXTENSION:
        return False
    # folder segments only, so a note literally named "Todo.md" does not count
    return marker in file.path.split("/")[:-1]


def derive_subject(path: str, marker: str = DEFAULT_MARKER) -> str:
    """The path segment right before ``marker``, or "Unknown"."""
    parts = path.split("/")
    try:
        idx = parts.index(marker)
    except ValueError:
        return UNKNOWN_SUBJECT
    return parts[idx - 1] if idx > 0 else UNKNOWN_SUBJECT


def make_item(store: VaultStore, file: VaultFile, marker: str = DEFAULT_MARKER) -> DueItem:
    front_matter = store.front_matter_of(file)
    return DueItem(
        file=file,
        name=file.basename,
        due=front_matter.due if front_matter else None,
        subject=derive_subject(file.path, marker),
    )


def collect(store: VaultStore, base_path_prefix: str, marker: str = DEFAULT_MARKER) -> list[DueItem]:
    """Collect every due item under ``base_path_prefix``.

    Read-only. The order of the result is not meaningful; list and calendar
    views sort and group it themselves.

    :param store: Vault to scan.
    :param base_path_prefix: Semester base path the notes must live under.
    :param marker: Folder name marking outstanding notes.
    :return: Due items, including ones without a due date.
    """
    return [
        make_item(store, file, marker)
        for file in store.list_all_files()
        if is_candidate(file, base_path_prefix, marker)
    ]


def build_calendar_index(items: t.Iterable[DueItem]) -> CalendarIndex:
    """Index dated items by their due-date key. Undated items are left out."""
    index: dict[str, list[DueItem]] = {}
    for item in items:
        key = item.due_key
        if key is None:
            continue
        index.setdefault(key, []).append(item)
    return MappingProxyType({key: tuple(bucket) for key, bucket in index.items()})
