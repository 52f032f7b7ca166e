"""Shared fixtures: a temporary vault, note writers and planner items."""
from datetime import date

import pytest

from assignment_sync.settings import CourseMapping, Settings
from due_planner.models import DueItem
from vault_store.models import VaultFile
from vault_store.store import VaultStore

SEMESTER = "2025-2026 - Sophmore/01 - Spring Semester"


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("CANVAS_BASE_URL", "CANVAS_API_TOKEN", "CANVAS_VAULT"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def base_path() -> str:
    return SEMESTER


@pytest.fixture
def today() -> date:
    """A Thursday."""
    return date(2026, 2, 12)


@pytest.fixture
def store(tmp_path) -> VaultStore:
    return VaultStore(tmp_path)


@pytest.fixture
def write_note(tmp_path):
    """Write a note with template-style front matter; returns its VaultFile."""

    def _write(
        rel_path: str,
        due: str = "",
        status: str = "Todo",
        tags: tuple = ("History/WWI", "Status/Todo"),
        canvas_id: str = "",
        body: str = "",
    ) -> VaultFile:
        lines = ["---", "tags:"] + [f"  - {tag}" for tag in tags]
        if due:
            lines.append(f"due: {due}")
        if status:
            lines.append(f"status: {status}")
        if canvas_id:
            lines.append(f'canvas-id: "{canvas_id}"')
        lines.append("---")
        path = tmp_path / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("\n".join(lines) + "\n" + body, encoding="utf-8")
        return VaultFile(rel_path)

    return _write


@pytest.fixture
def write_todo(write_note):
    """Write ``<semester>/<subject>/Todo/<name>.md``."""

    def _write(name: str, subject: str = "History", **kwargs) -> VaultFile:
        return write_note(f"{SEMESTER}/{subject}/Todo/{name}.md", **kwargs)

    return _write


@pytest.fixture
def make_item():
    def _make(name: str, due: date = None, subject: str = "History") -> DueItem:
        return DueItem(
            file=VaultFile(f"{SEMESTER}/{subject}/Todo/{name}.md"),
            name=name,
            due=due,
            subject=subject,
        )

    return _make


@pytest.fixture
def settings() -> Settings:
    return Settings(
        canvas_base_url="https://canvas.test",
        api_token="secret-token",
        semester_base_path=SEMESTER,
        course_mappings={
            "101": CourseMapping(canvas_course_name="History 101", subject="History", subject_tag="History/WWI"),
        },
    )
