"""
Plugin settings: Canvas connection, course -> vault folder mappings,
sync schedule and view/notification preferences.

Persisted as JSON in the vault (``.canvas-sync.json``). The Canvas URL and
token can be overridden from the environment so they need not be stored.
"""
from __future__ import annotations

import json
import os
import typing as t
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator

from due_planner.models import TodayMarker
from due_planner.notifications import NotificationPolicy

SETTINGS_FILENAME = ".canvas-sync.json"

BASE_URL_ENV = "CANVAS_BASE_URL"
API_TOKEN_ENV = "CANVAS_API_TOKEN"


class SettingsError(ValueError):
    """Raised when the settings file exists but cannot be used."""


class CourseMapping(BaseModel):
    """Where a Canvas course's notes go in the vault."""
    canvas_course_name: str = ""
    subject: str = ""          # vault folder name, e.g. "History"
    subject_tag: str = ""      # front matter tag, e.g. "History/WWI"


class Settings(BaseModel):
    canvas_base_url: str = ""
    api_token: str = ""
    semester_base_path: str = "2025-2026 - Sophmore/01 - Spring Semester"
    course_mappings: dict[str, CourseMapping] = Field(default_factory=dict)
    auto_sync_on_startup: bool = False
    sync_interval_minutes: int = 0      # 0 = manual only
    notifications_enabled: bool = False
    notify_evening_before: bool = True
    notify_morning_of: bool = True
    extra_tags: list[str] = Field(default_factory=lambda: ["Type/Homework", "Year/Sophomore"])
    month_cell_item_cap: int = 2
    today_marker: TodayMarker = TodayMarker.HIGHLIGHT

    @field_validator("sync_interval_minutes", mode="before")
    @classmethod
    def _clamp_interval(cls, value: t.Any) -> int:
        try:
            return max(0, int(value))
        except (TypeError, ValueError):
            return 0

    @field_validator("canvas_base_url", "api_token", "semester_base_path")
    @classmethod
    def _strip(cls, value: str) -> str:
        return value.strip()

    def active_mappings(self) -> list[tuple[str, CourseMapping]]:
        """Mappings with a subject folder set, in insertion order."""
        return [
            (course_id, mapping)
            for course_id, mapping in self.course_mappings.items()
            if mapping.subject
        ]

    def notification_policy(self) -> NotificationPolicy:
        return NotificationPolicy(
            enabled=self.notifications_enabled,
            evening_before=self.notify_evening_before,
            morning_of=self.notify_morning_of,
        )

    def add_courses(self, courses: t.Iterable[tuple[t.Union[int, str], str]]) -> int:
        """Add an empty mapping for each ``(id, name)`` not mapped yet.

        :return: Number of mappings added.
        """
        added = 0
        for course_id, name in courses:
            key = str(course_id)
            if key not in self.course_mappings:
                self.course_mappings[key] = CourseMapping(canvas_course_name=name)
                added += 1
        return added


def settings_path(vault_root: t.Union[str, Path]) -> Path:
    return Path(vault_root) / SETTINGS_FILENAME


def apply_env_overrides(settings: Settings) -> Settings:
    """Environment wins over the file for the Canvas URL and token."""
    updates = {}
    base_url = os.getenv(BASE_URL_ENV)
    if base_url:
        updates["canvas_base_url"] = base_url.strip()
    token = os.getenv(API_TOKEN_ENV)
    if token:
        updates["api_token"] = token.strip()
    return settings.model_copy(update=updates) if updates else settings


def load_settings(vault_root: t.Union[str, Path], use_env: bool = True) -> Settings:
    """Load settings for a vault; defaults when the file does not exist.

    :raises SettingsError: If the file is not valid JSON or has bad values.
    """
    path = settings_path(vault_root)
    data: dict[str, t.Any] = {}
    if path.is_file():
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise SettingsError(f"Cannot read settings file {path}: {e}") from e
        if not isinstance(data, dict):
            raise SettingsError(f"Settings file {path} must contain a JSON object")

    try:
        settings = Settings.model_validate(data)
    except ValidationError as e:
        raise SettingsError(f"Invalid settings in {path}: {e}") from e

    return apply_env_overrides(settings) if use_env else settings


def save_settings(vault_root: t.Union[str, Path], settings: Settings) -> Path:
    path = settings_path(vault_root)
    path.write_text(json.dumps(settings.model_dump(mode="json"), indent=2) + "\n", encoding="utf-8")
    return path
