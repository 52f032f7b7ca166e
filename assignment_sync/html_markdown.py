"""
Convert Canvas assignment descriptions (HTML) to Markdown.

The HTML is parsed into a small element tree with ``html.parser`` and then
walked; unknown elements are transparent and contribute their children.
"""
from __future__ import annotations

import re
import typing as t
from html.parser import HTMLParser

VOID_ELEMENTS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "param", "source", "track", "wbr",
})

# Tags dropped together with their content
SKIPPED_ELEMENTS = frozenset({"script", "style", "head", "title"})

_EXCESS_NEWLINES_RE = re.compile(r"\n{3,}")


class Element:
    """A parsed HTML element; children are Elements or text strings."""

    def __init__(self, tag: str, attrs: t.Optional[dict[str, str]] = None,
                 parent: t.Optional["Element"] = None) -> None:
        self.tag = tag
        self.attrs = attrs or {}
        self.parent = parent
        self.children: list[t.Union["Element", str]] = []

    def text_content(self) -> str:
        return "".join(
            child if isinstance(child, str) else child.text_content()
            for child in self.children
        )

    def find(self, tag: str) -> t.Optional["Element"]:
        """First descendant with ``tag`` (depth first)."""
        for child in self.children:
            if isinstance(child, Element):
                if child.tag == tag:
                    return child
                found = child.find(tag)
                if found is not None:
                    return found
        return None

    def find_all(self, tags: t.Collection[str]) -> list["Element"]:
        """All descendants whose tag is in ``tags``, in document order."""
        found: list[Element] = []
        for child in self.children:
            if isinstance(child, Element):
                if child.tag in tags:
                    found.append(child)
                found.extend(child.find_all(tags))
        return found


class _TreeBuilder(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.root = Element("body")
        self._current = self.root

    def handle_starttag(self, tag: str, attrs: list[tuple[str, t.Optional[str]]]) -> None:
        element = Element(tag, {k: v or "" for k, v in attrs}, parent=self._current)
        self._current.children.append(element)
        if tag not in VOID_ELEMENTS:
            self._current = element

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, t.Optional[str]]]) -> None:
        self._current.children.append(Element(tag, {k: v or "" for k, v in attrs}, parent=self._current))

    def handle_endtag(self, tag: str) -> None:
        # close up to the matching open element; stray end tags are ignored
        node: t.Optional[Element] = self._current
        while node is not None and node is not self.root:
            if node.tag == tag:
                self._current = node.parent or self.root
                return
            node = node.parent

    def handle_data(self, data: str) -> None:
        self._current.children.append(data)


def parse_html(html: str) -> Element:
    builder = _TreeBuilder()
    builder.feed(html)
    builder.close()
    return builder.root


def _children(el: Element) -> str:
    return "".join(_walk(child) for child in el.children)


def _list_items(el: Element, ordered: bool) -> str:
    items = []
    index = 1
    for child in el.children:
        if isinstance(child, Element) and child.tag == "li":
            prefix = f"{index}. " if ordered else "- "
            items.append(prefix + _walk(child).strip())
            index += 1
    return "\n".join(items)


def _table(table: Element) -> str:
    rows = [
        [_walk(cell).strip() for cell in tr.find_all(("th", "td"))]
        for tr in table.find_all(("tr",))
    ]
    if not rows:
        return ""

    col_count = max(len(row) for row in rows)
    lines = []
    for i, row in enumerate(rows):
        row = row + [""] * (col_count - len(row))
        lines.append("| " + " | ".join(row) + " |")
        if i == 0:
            lines.append("| " + " | ".join("---" for _ in row) + " |")
    return "\n".join(lines)


def _walk(node: t.Union[Element, str]) -> str:
    if isinstance(node, str):
        return node

    tag = node.tag
    if tag in SKIPPED_ELEMENTS:
        return ""
    if tag == "p":
        return "\n\n" + _children(node) + "\n\n"
    if tag == "br":
        return "\n"
    if tag in ("strong", "b"):
        return "**" + _children(node) + "**"
    if tag in ("em", "i"):
        return "*" + _children(node) + "*"
    if tag == "a":
        return "[" + _children(node) + "](" + node.attrs.get("href", "") + ")"
    if len(tag) == 2 and tag[0] == "h" and tag[1] in "123456":
        return "\n\n" + "#" * int(tag[1]) + " " + _children(node) + "\n\n"
    if tag in ("ul", "ol"):
        return "\n\n" + _list_items(node, ordered=tag == "ol") + "\n\n"
    if tag == "blockquote":
        quoted = "\n".join("> " + line for line in _children(node).strip().split("\n"))
        return "\n\n" + quoted + "\n\n"
    if tag == "pre":
        code = node.find("code")
        text = code.text_content() if code is not None else node.text_content()
        return "\n\n```\n" + text + "\n```\n\n"
    if tag == "code":
        if node.parent is not None and node.parent.tag == "pre":
            return node.text_content()
        return "`" + node.text_content() + "`"
    if tag == "table":
        return "\n\n" + _table(node) + "\n\n"
    # div, span, section, li and anything unknown
    return _children(node)


def html_to_markdown(html: t.Optional[str]) -> str:
    """Convert an HTML fragment to Markdown. Empty/None input gives ""."""
    if not html:
        return ""
    markdown = _walk(parse_html(html))
    return _EXCESS_NEWLINES_RE.sub("\n\n", markdown).strip()
