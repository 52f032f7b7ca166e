"""Tests for todo list ordering, grouping and completion."""
from datetime import date

from due_planner.collector import collect
from due_planner.models import SortMode
from due_planner.todo_list import (
    EMPTY_MESSAGE,
    TodoListView,
    build_sections,
    group_by_subject,
    group_by_urgency,
    sort_by_due,
    sort_by_name,
)


def test_sort_by_due_is_stable_with_undated_last(make_item) -> None:
    a = make_item("A", date(2026, 2, 15))
    b = make_item("B")
    c = make_item("C", date(2026, 2, 10))
    d = make_item("D", date(2026, 2, 15))

    assert sort_by_due([a, b, c, d]) == [c, a, d, b]


def test_group_by_urgency_orders_and_omits_empty_sections(make_item, today: date) -> None:
    items = [
        make_item("Reading"),
        make_item("Project", date(2026, 3, 1)),
        make_item("Quiz", date(2026, 2, 12)),
        make_item("Essay", date(2026, 2, 10)),
    ]

    sections = group_by_urgency(items, today)

    assert [s.key for s in sections] == ["overdue", "today", "later", "none"]
    assert [s.label for s in sections] == ["Overdue", "Due Today", "Later", "No Due Date"]
    [overdue] = sections[0].rows
    assert overdue.name == "Essay"
    assert overdue.overdue is True
    assert overdue.due_label == "Feb 10"
    assert sections[1].rows[0].overdue is False
    assert sections[-1].rows[0].due_label is None


def test_week_and_tomorrow_sections(make_item, today: date) -> None:
    items = [make_item("Lab", date(2026, 2, 19)), make_item("Memo", date(2026, 2, 13))]

    sections = group_by_urgency(items, today)

    assert [(s.label, [r.name for r in s.rows]) for s in sections] == [
        ("Due Tomorrow", ["Memo"]),
        ("This Week", ["Lab"]),
    ]


def test_group_by_subject_sorts_subjects_case_insensitively(make_item, today: date) -> None:
    items = [
        make_item("Proof", date(2026, 2, 20), subject="math"),
        make_item("Essay", date(2026, 2, 18), subject="History"),
        make_item("Sketch", subject="Art"),
        make_item("Timeline", date(2026, 2, 14), subject="History"),
    ]

    sections = group_by_subject(items, today)

    assert [s.label for s in sections] == ["Art", "History", "math"]
    assert [r.name for r in sections[1].rows] == ["Timeline", "Essay"]


def test_sort_by_name_is_one_headerless_section(make_item, today: date) -> None:
    items = [make_item("beta"), make_item("Alpha", date(2026, 2, 20)), make_item("Gamma")]

    [section] = sort_by_name(items, today)

    assert section.label is None
    assert [r.name for r in section.rows] == ["Alpha", "beta", "Gamma"]


def test_no_items_gives_no_sections(today: date) -> None:
    for mode in SortMode:
        assert build_sections([], mode, today) == []
    assert EMPTY_MESSAGE == "No pending assignments"


def test_sort_mode_toggle(make_item, today: date) -> None:
    view = TodoListView([make_item("Essay", date(2026, 2, 15))])

    assert view.set_sort_mode(SortMode.DATE) is False
    assert view.set_sort_mode(SortMode.SUBJECT) is True
    assert [s.label for s in view.sections(today)] == ["History"]


def test_find_by_name_or_path(make_item) -> None:
    essay = make_item("Essay", date(2026, 2, 15))
    view = TodoListView([essay])

    assert view.find("essay") is essay
    assert view.find(essay.file.path) is essay
    assert view.find("Lab") is None


def test_complete_moves_note_and_drops_item(store, write_todo, base_path: str, today: date) -> None:
    write_todo("Essay", due="2026-02-15")
    write_todo("Lab", due="2026-02-16", subject="Chemistry")
    view = TodoListView(collect(store, base_path))
    notices: list[str] = []

    moved = view.complete(store, view.find("Essay"), notify=notices.append)

    assert moved.path == f"{base_path}/History/Done/Essay.md"
    assert notices == ["Moved to Done: Essay"]
    assert [item.name for item in view.items] == ["Lab"]
    assert not store.exists(f"{base_path}/History/Todo/Essay.md")
    assert [item.name for item in collect(store, base_path)] == ["Lab"]


def test_undated_items_keep_their_relative_order(make_item) -> None:
    first_undated = make_item("First")
    second_undated = make_item("Second")
    feb20 = make_item("Essay", date(2026, 2, 20))
    feb10 = make_item("Quiz", date(2026, 2, 10))

    assert sort_by_due([first_undated, feb20, second_undated, feb10]) == [
        feb10,
        feb20,
        first_undated,
        second_undated,
    ]


def test_overdue_today_later_scenario(make_item, today: date) -> None:
    items = [
        make_item("Essay", date(2026, 2, 10)),
        make_item("Quiz", date(2026, 2, 12)),
        make_item("Project", date(2026, 2, 20)),
    ]

    sections = build_sections(items, SortMode.DATE, today)

    assert [s.label for s in sections] == ["Overdue", "Due Today", "Later"]
