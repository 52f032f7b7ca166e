# -*- coding: utf-8 -*-
"""
Filesystem-backed vault: the file store and metadata index the planner
and the sync read from and write to.

Paths handed in and out are vault-relative and '/'-separated, whatever the
host OS uses.
"""
from __future__ import annotations

import logging
import typing as t
from pathlib import Path, PurePosixPath

import click

from vault_store.frontmatter import parse_front_matter
from vault_store.models import FrontMatter, VaultFile

logger = logging.getLogger(__name__)


class VaultStore:
    """A vault rooted at a local directory.

    Hidden entries (any path segment starting with '.') are not part of the
    vault, which keeps editor state folders and the settings file out of
    listings.
    """

    def __init__(self, root: t.Union[str, Path]) -> None:
        self.root = Path(root)
        # path -> (mtime_ns, parsed front matter)
        self._metadata_cache: dict[str, tuple[int, t.Optional[FrontMatter]]] = {}

    def _abs(self, path: str) -> Path:
        return self.root.joinpath(*PurePosixPath(path).parts)

    def list_all_files(self) -> list[VaultFile]:
        """Every visible file in the vault, sorted by path."""
        if not self.root.is_dir():
            return []

        files = []
        for path in self.root.rglob("*"):
            rel = path.relative_to(self.root)
            if any(part.startswith(".") for part in rel.parts):
                continue
            if path.is_file():
                files.append(VaultFile(rel.as_posix()))
        return sorted(files, key=lambda f: f.path)

    def exists(self, path: str) -> bool:
        return self._abs(path).exists()

    def get_file(self, path: str) -> t.Optional[VaultFile]:
        return VaultFile(path) if self._abs(path).is_file() else None

    def read(self, file: VaultFile) -> str:
        return self._abs(file.path).read_text(encoding="utf-8")

    def modify(self, file: VaultFile, text: str) -> None:
        """Overwrite an existing file.

        :raises FileNotFoundError: If the file does not exist.
        """
        target = self._abs(file.path)
        if not target.is_file():
            raise FileNotFoundError(f"File not found: {file.path}")
        target.write_text(text, encoding="utf-8")
        self._metadata_cache.pop(file.path, None)

    def create(self, path: str, text: str) -> VaultFile:
        """Create a new file; its folder must already exist.

        :raises FileExistsError: If something already lives at ``path``.
        """
        with self._abs(path).open("x", encoding="utf-8") as f:
            f.write(text)
        logger.debug("Created %s", path)
        return VaultFile(path)

    def create_folder(self, path: str) -> None:
        """Create a folder (and missing parents).

        :raises FileExistsError: If the folder already exists.
        """
        self._abs(path).mkdir(parents=True)

    def move(self, file: VaultFile, new_path: str) -> VaultFile:
        """Rename/move a file within the vault.

        :raises FileNotFoundError: If the source or the destination folder is missing.
        :raises FileExistsError: If the destination is taken.
        """
        source = self._abs(file.path)
        target = self._abs(new_path)
        if not source.is_file():
            raise FileNotFoundError(f"File not found: {file.path}")
        if target.exists():
            raise FileExistsError(f"Destination already exists: {new_path}")

        source.rename(target)
        self._metadata_cache.pop(file.path, None)
        logger.debug("Moved %s -> %s", file.path, new_path)
        return VaultFile(new_path)

    def front_matter_of(self, file: VaultFile) -> t.Optional[FrontMatter]:
        """Front matter of ``file``, or None if it has none or cannot be read."""
        target = self._abs(file.path)
        try:
            mtime = target.stat().st_mtime_ns
        except OSError:
            return None

        cached = self._metadata_cache.get(file.path)
        if cached is not None and cached[0] == mtime:
            return cached[1]

        try:
            front_matter = parse_front_matter(target.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            logger.debug("Cannot read %s: %s", file.path, e)
            return None

        self._metadata_cache[file.path] = (mtime, front_matter)
        return front_matter

    def open_by_path(self, path: str) -> None:
        """Open a note with the system's default handler."""
        click.launch(str(self._abs(path)))
