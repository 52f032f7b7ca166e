"""Tests for the filesystem vault store and front matter parsing."""
from datetime import date

import pytest

from vault_store.frontmatter import parse_front_matter, split_front_matter
from vault_store.models import VaultFile


def test_vault_file_parts() -> None:
    file = VaultFile("Sem/History/Todo/Essay.md")

    assert file.name == "Essay.md"
    assert file.basename == "Essay"
    assert file.extension == "md"
    assert file.parent == "Sem/History/Todo"
    assert VaultFile("Top.md").parent == ""


def test_listing_skips_hidden_entries(store) -> None:
    store.create_folder("History/Todo")
    store.create_folder(".obsidian")
    store.create("History/Todo/Essay.md", "x")
    store.create(".obsidian/workspace.json", "{}")
    store.create(".canvas-sync.json", "{}")

    assert [f.path for f in store.list_all_files()] == ["History/Todo/Essay.md"]


def test_create_and_create_folder_refuse_existing(store) -> None:
    store.create_folder("History")
    store.create("History/Essay.md", "first")

    with pytest.raises(FileExistsError):
        store.create("History/Essay.md", "second")
    with pytest.raises(FileExistsError):
        store.create_folder("History")
    with pytest.raises(FileNotFoundError):
        store.create("Missing/Essay.md", "x")
    assert store.read(VaultFile("History/Essay.md")) == "first"


def test_modify_and_move(store) -> None:
    store.create_folder("Todo")
    store.create_folder("Done")
    note = store.create("Todo/Essay.md", "draft")

    store.modify(note, "final")
    moved = store.move(note, "Done/Essay.md")

    assert store.read(moved) == "final"
    assert store.get_file("Todo/Essay.md") is None
    with pytest.raises(FileNotFoundError):
        store.move(note, "Done/Other.md")
    with pytest.raises(FileNotFoundError):
        store.modify(note, "again")


def test_move_onto_existing_file_fails(store) -> None:
    store.create_folder("A")
    first = store.create("A/one.md", "1")
    store.create("A/two.md", "2")

    with pytest.raises(FileExistsError):
        store.move(first, "A/two.md")


def test_front_matter_cache_follows_edits(store) -> None:
    store.create_folder("Todo")
    note = store.create("Todo/Essay.md", "---\ndue: 2026-02-15\n---\n")
    assert store.front_matter_of(note).due == date(2026, 2, 15)

    store.modify(note, "---\ndue: 2026-03-01\n---\n")

    assert store.front_matter_of(note).due == date(2026, 3, 1)
    assert store.front_matter_of(VaultFile("Todo/Missing.md")) is None


def test_split_front_matter() -> None:
    assert split_front_matter("---\na: 1\n---\nbody") == ("a: 1\n", "body")
    assert split_front_matter("no fences") == (None, "no fences")
    assert split_front_matter("---\nnever closed\n") == (None, "---\nnever closed\n")


def test_front_matter_fields() -> None:
    front_matter = parse_front_matter(
        '---\ntags: History\ndue: 2026-02-15T23:59:00Z\ncanvas-id: 1001\ncustom: kept\n---\n'
    )

    assert front_matter.tags == ["History"]
    assert front_matter.due == date(2026, 2, 15)
    assert front_matter.canvas_id == "1001"
    assert front_matter.status is None
