"""
Backfill ``due`` front matter for notes created before it was written.

Older notes only carry the due date in the body (``**Due:** February 15, 2026``).
This copies it into the front matter so the list and calendar views see it.
"""
from __future__ import annotations

import logging
import re
import typing as t
from datetime import datetime

from assignment_sync.settings import Settings
from due_planner.collector import collect
from due_planner.models import DueItem
from vault_store.store import VaultStore

logger = logging.getLogger(__name__)

_BODY_DUE_RE = re.compile(r"\*\*Due:\*\*\s*([A-Z][a-z]+ \d{1,2}, \d{4})")
_FRONT_MATTER_RE = re.compile(r"\A---\r?\n([\s\S]*?)\r?\n---(?=\r?\n|\Z)")
_STATUS_RE = re.compile(r"^status:", re.MULTILINE)


def _log_notice(message: str) -> None:
    logger.info(message)


def due_from_body(content: str) -> t.Optional[str]:
    """The ``**Due:**`` date of a note body as ``YYYY-MM-DD``, if any."""
    match = _BODY_DUE_RE.search(content)
    if not match:
        return None
    try:
        return datetime.strptime(match.group(1), "%B %d, %Y").date().isoformat()
    except ValueError:
        return None


def insert_due(content: str, due_key: str) -> t.Optional[str]:
    """Add ``due: <key>`` to the front matter.

    Goes right before the ``status:`` line, or at the end of the block when
    there is none. Returns None if the note has no front matter.
    """
    match = _FRONT_MATTER_RE.match(content)
    if not match:
        return None

    block_start, block_end = match.span(1)
    block = match.group(1)
    status = _STATUS_RE.search(block)
    if status:
        at = block_start + status.start()
        return f"{content[:at]}due: {due_key}\n{content[at:]}"
    return f"{content[:block_end]}\ndue: {due_key}{content[block_end:]}"


def backfill_item(store: VaultStore, item: DueItem) -> bool:
    if item.due is not None:
        return False
    content = store.read(item.file)
    due_key = due_from_body(content)
    if due_key is None:
        return False
    updated = insert_due(content, due_key)
    if updated is None:
        return False
    store.modify(item.file, updated)
    logger.debug("Backfilled due %s into %s", due_key, item.file.path)
    return True


def backfill_due_dates(
    store: VaultStore,
    settings: Settings,
    notify: t.Callable[[str], None] = _log_notice,
) -> int:
    """Backfill every undated Todo note under the semester folder.

    :return: Number of notes updated.
    """
    updated = sum(
        1 for item in collect(store, settings.semester_base_path) if backfill_item(store, item)
    )
    notify(f"Backfilled due dates for {updated} notes")
    return updated
