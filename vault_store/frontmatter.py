"""Locate and parse the YAML front matter block at the head of a note."""
from __future__ import annotations

import logging
import re
import typing as t

import yaml
from pydantic import ValidationError

from vault_store.models import FrontMatter

logger = logging.getLogger(__name__)

FENCE = "---"

_LEADING_WS_RE = re.compile(r"^[ \t]+", re.MULTILINE)


def split_front_matter(text: str) -> tuple[t.Optional[str], str]:
    """Split a note into ``(front_matter_yaml, body)``.

    The block must start on the very first line with ``---`` and end at the
    next ``---`` line. Without both fences the whole text is body.
    """
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].strip() != FENCE:
        return None, text

    for idx in range(1, len(lines)):
        if lines[idx].strip() == FENCE:
            return "".join(lines[1:idx]), "".join(lines[idx + 1:])
    return None, text


def _expand_indent_tabs(block: str) -> str:
    # YAML forbids tabs in indentation; older notes indent tag lists with them
    return _LEADING_WS_RE.sub(lambda m: m.group(0).replace("\t", "  "), block)


def _load_yaml(block: str) -> t.Any:
    try:
        return yaml.safe_load(block)
    except yaml.YAMLError:
        if "\t" not in block:
            raise
        return yaml.safe_load(_expand_indent_tabs(block))


def parse_front_matter(text: str) -> t.Optional[FrontMatter]:
    """Parse the front matter of ``text``.

    :param text: Full note content.
    :return: A FrontMatter record, or None when the note has no block or the
        block is not a YAML mapping.
    """
    block, _ = split_front_matter(text)
    if block is None:
        return None

    try:
        data = _load_yaml(block)
    except yaml.YAMLError as e:
        logger.debug("Unparseable front matter: %s", e)
        return None

    if not isinstance(data, dict):
        return None

    try:
        return FrontMatter.model_validate({str(key): value for key, value in data.items()})
    except ValidationError as e:
        logger.debug("Front matter rejected: %s", e)
        return None
