"""
Completion transition: mark a note done and move it out of the Todo folder.

The front matter is edited textually, line by line; it is never parsed and
re-serialised, so the rest of the note stays byte-for-byte intact.
"""
from __future__ import annotations

import logging
import re

from due_planner.models import DueItem
from vault_store.models import VaultFile
from vault_store.store import VaultStore

logger = logging.getLogger(__name__)

TODO_FOLDER = "Todo"
DONE_FOLDER = "Done"

# "tags:" header plus the indented list under it, up to the next key or fence
_TAG_BLOCK_RE = re.compile(r"^(tags:\s*\n)([\s\S]*?)(?=\n\w|\n---)", re.MULTILINE)
_STATUS_TODO_TAG_RE = re.compile(r"^-?\s*Status/Todo$")
_STATUS_LINE_RE = re.compile(r"^status:[ \t]*Todo[ \t]*(?=\r?$)", re.MULTILINE)


def _strip_status_tag(match: re.Match) -> str:
    prefix, tag_block = match.group(1), match.group(2)
    kept = [line for line in tag_block.split("\n") if not _STATUS_TODO_TAG_RE.match(line.strip())]
    return prefix + "\n".join(kept)


def mark_done(content: str) -> str:
    """Drop the ``Status/Todo`` tag line and flip ``status: Todo`` to ``status: Done``."""
    content = _TAG_BLOCK_RE.sub(_strip_status_tag, content, count=1)
    return _STATUS_LINE_RE.sub("status: Done", content, count=1)


def done_path(path: str, marker: str = TODO_FOLDER, done_folder: str = DONE_FOLDER) -> str:
    """Swap the first ``marker`` folder segment of ``path`` for ``done_folder``.

    ``History/Todo/Essay.md`` -> ``History/Done/Essay.md``. A path without the
    marker folder comes back unchanged.
    """
    parts = path.split("/")
    for idx, part in enumerate(parts[:-1]):
        if part == marker:
            parts[idx] = done_folder
            break
    return "/".join(parts)


def complete(store: VaultStore, item: DueItem) -> VaultFile:
    """Mark ``item`` as done and move it to the sibling Done folder.

    There is no rollback: if the move fails, the note keeps its edited
    content in the Todo folder and the error propagates to the caller.

    :param store: Vault holding the note.
    :param item: The item to complete.
    :return: The note at its new location.
    :raises FileExistsError: If a note with the same name is already done.
    :raises FileNotFoundError: If the note disappeared.
    """
    file = item.file
    content = store.read(file)
    store.modify(file, mark_done(content))

    new_path = done_path(file.path)
    folder = new_path.rsplit("/", 1)[0] if "/" in new_path else ""
    if folder:
        try:
            store.create_folder(folder)
        except FileExistsError:
            # already there from an earlier completion
            pass

    moved = store.move(file, new_path)
    logger.info("Completed %s -> %s", file.path, moved.path)
    return moved
