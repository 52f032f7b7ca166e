"""
Data models for vault files and their front matter.

This module contains the file handle the store hands out and the explicit
optional-field record front matter is read into.
"""
from __future__ import annotations

import typing as t
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import PurePosixPath

from pydantic import BaseModel, ConfigDict, Field, field_validator


@dataclass(frozen=True)
class VaultFile:
    """A file in the vault, identified by its '/'-separated vault-relative path."""
    path: str

    @property
    def name(self) -> str:
        return PurePosixPath(self.path).name

    @property
    def basename(self) -> str:
        """File name without extension ("Essay" for "History/Todo/Essay.md")."""
        return PurePosixPath(self.path).stem

    @property
    def extension(self) -> str:
        return PurePosixPath(self.path).suffix.lstrip(".")

    @property
    def parent(self) -> str:
        parent = str(PurePosixPath(self.path).parent)
        return "" if parent == "." else parent


def _to_date(value: t.Any) -> t.Optional[date]:
    """Lenient date coercion: anything that is not a recognisable date is None."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            return None
    return None


class FrontMatter(BaseModel):
    """
    The front matter fields the planner reads. Every field is optional;
    other keys are kept as extras but never consulted.
    """
    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    due: t.Optional[date] = None
    status: t.Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    canvas_id: t.Optional[str] = Field(default=None, alias="canvas-id")
    canvas_url: t.Optional[str] = Field(default=None, alias="canvas-url")

    @field_validator("due", mode="before")
    @classmethod
    def _coerce_due(cls, value: t.Any) -> t.Optional[date]:
        return _to_date(value)

    @field_validator("status", "canvas_id", "canvas_url", mode="before")
    @classmethod
    def _coerce_text(cls, value: t.Any) -> t.Optional[str]:
        if value is None:
            return None
        return str(value)

    @field_validator("tags", mode="before")
    @classmethod
    def _coerce_tags(cls, value: t.Any) -> list[str]:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        if isinstance(value, (list, tuple)):
            return [str(tag) for tag in value if tag is not None]
        return []
