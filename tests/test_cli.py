"""Tests for the canvas-vault command line."""
import json

import pytest
from click.testing import CliRunner

from assignment_sync.settings import SETTINGS_FILENAME, Settings, load_settings, save_settings
from orchestrator.run import main
from vault_store.store import VaultStore


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def invoke(runner: CliRunner, tmp_path):
    def _invoke(*args: str, input: str = None):
        return runner.invoke(main, ["--vault", str(tmp_path), *args], input=input)

    return _invoke


@pytest.fixture
def configured(tmp_path, settings: Settings) -> Settings:
    save_settings(tmp_path, settings)
    return settings


def test_todo_lists_pending_notes(invoke, configured, write_todo) -> None:
    write_todo("Essay", due="2026-02-15")
    write_todo("Lab", subject="Chemistry")

    result = invoke("todo", "--sort", "subject")

    assert result.exit_code == 0, result.output
    assert "Essay" in result.output
    assert "Chemistry" in result.output


def test_todo_empty(invoke) -> None:
    result = invoke("todo")

    assert result.exit_code == 0
    assert "No pending assignments" in result.output


def test_vault_from_environment(runner: CliRunner, tmp_path, configured, write_todo) -> None:
    write_todo("Essay", due="2026-02-15")

    result = runner.invoke(main, ["todo"], env={"CANVAS_VAULT": str(tmp_path)})

    assert result.exit_code == 0
    assert "Essay" in result.output


def test_calendar_day_view(invoke, configured, write_todo) -> None:
    write_todo("Essay", due="2026-02-15")

    result = invoke("calendar", "--mode", "day", "--date", "2026-02-15")

    assert result.exit_code == 0, result.output
    assert "Sunday, February 15, 2026" in result.output
    assert "Essay" in result.output


def test_calendar_interactive_navigation(invoke, configured) -> None:
    result = invoke("calendar", "--mode", "week", "--date", "2026-02-12", "--interactive", input="n\nx\nq\n")

    assert result.exit_code == 0, result.output
    assert "Feb 8 – 14, 2026" in result.output
    assert "Feb 15 – 21, 2026" in result.output
    assert "Unknown calendar command" in result.output


def test_calendar_rejects_bad_date(invoke) -> None:
    result = invoke("calendar", "--date", "15/02/2026")

    assert result.exit_code == 2


def test_complete_moves_note(invoke, configured, write_todo, tmp_path, base_path: str) -> None:
    write_todo("Essay", due="2026-02-15")

    result = invoke("complete", "essay")

    assert result.exit_code == 0, result.output
    assert "Moved to Done: Essay" in result.output
    assert (tmp_path / base_path / "History" / "Done" / "Essay.md").is_file()


def test_complete_unknown_name_fails(invoke, configured) -> None:
    result = invoke("complete", "Nothing")

    assert result.exit_code == 1


def test_complete_reports_move_errors(
    invoke, configured, write_todo, monkeypatch: pytest.MonkeyPatch
) -> None:
    write_todo("Essay", due="2026-02-15")

    def refuse(self, file, new_path):
        raise PermissionError(13, "Permission denied", new_path)

    monkeypatch.setattr(VaultStore, "move", refuse)
    result = invoke("complete", "Essay")

    assert result.exit_code == 1
    assert "Permission denied" in result.output


def test_map_and_unmap(invoke, tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CANVAS_API_TOKEN", "from-env")

    result = invoke("map", "101", "--subject", "History", "--tag", "History/WWI")
    assert result.exit_code == 0, result.output
    stored = json.loads((tmp_path / SETTINGS_FILENAME).read_text(encoding="utf-8"))
    assert stored["course_mappings"]["101"]["subject"] == "History"
    assert stored["api_token"] == ""

    assert invoke("unmap", "101").exit_code == 0
    assert load_settings(tmp_path).course_mappings == {}
    assert invoke("unmap", "101").exit_code == 1


def test_sync_without_credentials_fails(invoke) -> None:
    result = invoke("sync")

    assert result.exit_code == 1
    assert "Please configure your Canvas URL and API token" in result.output


def test_backfill(invoke, configured, write_todo) -> None:
    write_todo("Essay", body="\n**Due:** February 15, 2026\n")

    result = invoke("backfill")

    assert result.exit_code == 0
    assert "Backfilled due dates for 1 notes" in result.output


def test_notify_disabled(invoke, configured) -> None:
    result = invoke("notify")

    assert result.exit_code == 0
    assert "Notifications are disabled" in result.output


def test_view_block(invoke, configured, write_todo) -> None:
    write_todo("Essay", due="2026-02-15")

    result = invoke("view", "canvas-todo")

    assert result.exit_code == 0
    assert "Essay" in result.output


def test_broken_settings_file(invoke, tmp_path) -> None:
    (tmp_path / SETTINGS_FILENAME).write_text("{broken", encoding="utf-8")

    assert invoke("todo").exit_code == 1
