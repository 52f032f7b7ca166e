"""
Pydantic models for Canvas REST API payloads.

Only the fields the sync reads are declared; anything else in the
response is ignored on validation.
"""
from __future__ import annotations

import typing as t
from pydantic import BaseModel, Field


class CanvasCourse(BaseModel):
    """An active course the token holder is enrolled in."""
    id: int
    name: str = ""
    course_code: str = ""


class CanvasAssignment(BaseModel):
    """
    One assignment row from /courses/{id}/assignments.
    """
    id: int
    name: str = ""
    description: t.Optional[str] = None    # raw HTML, may be null
    due_at: t.Optional[str] = None         # ISO datetime or null
    html_url: str = ""
    course_id: int = 0
    points_possible: t.Optional[float] = None
    submission_types: list[str] = Field(default_factory=list)
    published: bool = False

    @property
    def due_date_key(self) -> t.Optional[str]:
        """The calendar part of ``due_at`` ("YYYY-MM-DD"), as written to front matter."""
        return self.due_at[:10] if self.due_at else None
