"""Tests for note text helpers and HTML to Markdown conversion."""
import pytest

from assignment_sync.html_markdown import html_to_markdown
from assignment_sync.text import due_display, format_date, sanitize_filename


@pytest.mark.parametrize(
    "name, expected",
    [
        ('Essay: "WWI" / Part 1?', "Essay WWI Part 1"),
        ("  Lab\t\treport  ", "Lab report"),
        ("a<b>c|d*e\\f", "abcdef"),
        ("x" * 150, "x" * 100),
    ],
)
def test_sanitize_filename(name: str, expected: str) -> None:
    assert sanitize_filename(name) == expected


def test_format_date() -> None:
    assert format_date("2026-02-15T23:59:00Z") == "February 15, 2026"
    assert format_date("not a date") == "not a date"
    assert due_display(None) == "No due date"
    assert due_display("2026-03-01T05:00:00Z") == "March 1, 2026"


def test_paragraphs_and_inline_styles() -> None:
    html = "<p>Read <strong>chapter 3</strong> and <em>take notes</em>.</p><p>See <a href=\"https://x.test/a\">the guide</a>.</p>"

    assert html_to_markdown(html) == (
        "Read **chapter 3** and *take notes*.\n\nSee [the guide](https://x.test/a)."
    )


def test_headings_lists_and_line_breaks() -> None:
    html = "<h2>Tasks</h2><ol><li>Draft</li><li>Revise</li></ol><ul><li>Cite <b>sources</b></li></ul>Line one<br>Line two"

    assert html_to_markdown(html) == (
        "## Tasks\n\n1. Draft\n2. Revise\n\n- Cite **sources**\n\nLine one\nLine two"
    )


def test_code_and_quotes() -> None:
    html = "<p>Run <code>make test</code></p><pre><code>print('hi')\n</code></pre><blockquote>Be concise.</blockquote>"

    assert html_to_markdown(html) == (
        "Run `make test`\n\n```\nprint('hi')\n\n```\n\n> Be concise."
    )


def test_table_gets_header_separator() -> None:
    html = "<table><tr><th>Part</th><th>Points</th></tr><tr><td>Essay</td><td>40</td></tr></table>"

    assert html_to_markdown(html) == "| Part | Points |\n| --- | --- |\n| Essay | 40 |"


def test_empty_input() -> None:
    assert html_to_markdown(None) == ""
    assert html_to_markdown("") == ""
