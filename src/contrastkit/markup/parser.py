"""Build an :class:`ElementTree` from component or HTML markup.

Component files may start with a ``---`` frontmatter block; its CSS imports
are collected and the block is blanked out (keeping its newlines) so element
positions still point at the original lines.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from html.parser import HTMLParser

from contrastkit.errors import MarkupParseError
from contrastkit.model.element import ElementTree, InlineStyle, Position, TreeBuilder
from contrastkit.stylesheet import Stylesheet, parse_stylesheet

__all__ = ["ParsedDocument", "parse_markup", "parse_inline_style", "IGNORED_TAGS", "IGNORE_ATTRIBUTE"]

IGNORE_ATTRIBUTE = "data-contrast-ignore"
IGNORE_COMMENT = "contrast-ignore"

# Elements that never render text of their own.
IGNORED_TAGS = frozenset(
    {
        "script", "style", "head", "meta", "link", "title", "base", "br", "hr",
        "img", "input", "svg", "path", "circle", "rect", "line", "polyline",
        "polygon", "ellipse",
    }
)
_VOID_TAGS = frozenset(
    {"area", "base", "br", "col", "embed", "hr", "img", "input", "link", "meta", "source", "track", "wbr"}
)

_FRONTMATTER_RE = re.compile(r"\A(\s*)---[ \t]*\r?\n(.*?)^---[ \t]*$", re.DOTALL | re.MULTILINE)
_CSS_IMPORT_RE = re.compile(r"""import\s+['"]([^'"]+\.css)['"]""")


@dataclass(frozen=True)
class ParsedDocument:
    """Everything the analyzer needs from one markup file."""

    tree: ElementTree
    stylesheet: Stylesheet
    linked_css: tuple[str, ...] = ()
    path: str | None = None


def parse_inline_style(text: str) -> InlineStyle:
    """Read the tracked properties out of a ``style`` attribute value."""
    values: dict[str, str] = {}
    for chunk in text.split(";"):
        prop, sep, value = chunk.partition(":")
        prop = prop.strip().lower()
        value = value.strip()
        if not sep or not value:
            continue
        if prop == "background":
            if "url(" in value.lower() or "gradient" in value.lower():
                continue
            prop = "background-color"
        values[prop] = value
    return InlineStyle(
        color=values.get("color"),
        background_color=values.get("background-color"),
        font_size=values.get("font-size"),
        font_weight=values.get("font-weight"),
    )


def _is_expression(value: str | None) -> bool:
    return value is not None and value.strip().startswith("{")


class _TreeParser(HTMLParser):
    """Feeds start/end tags into a :class:`TreeBuilder`.

    The open-element stack keeps skipped tags too (with no index) so their
    end tags pair up; text and child elements are credited to the nearest
    open element that made it into the tree.
    """

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.builder = TreeBuilder()
        self.styles: list[str] = []
        self.links: list[str] = []
        self._stack: list[tuple[str, int | None]] = []
        self._ignore_next = False

    # -- helpers ---------------------------------------------------------

    def _nearest(self) -> int | None:
        for _, index in reversed(self._stack):
            if index is not None:
                return index
        return None

    def _position(self) -> Position:
        line, offset = self.getpos()
        return Position(line=line, column=offset + 1)

    # -- HTMLParser callbacks ---------------------------------------------

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self._open(tag, attrs, closes=tag in _VOID_TAGS)

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self._open(tag, attrs, closes=True)

    def _open(self, tag: str, attrs: list[tuple[str, str | None]], closes: bool) -> None:
        ignored, self._ignore_next = self._ignore_next, False
        attributes = dict(attrs)

        if tag == "link":
            rel = (attributes.get("rel") or "").lower().split()
            href = attributes.get("href")
            if "stylesheet" in rel and href and not _is_expression(href):
                self.links.append(href)

        index: int | None = None
        if tag not in IGNORED_TAGS:
            parent = self._nearest()
            if parent is not None:
                self.builder.mark_text(parent)

            class_attr = attributes.get("class")
            id_attr = attributes.get("id")
            style_attr = attributes.get("style")
            index = self.builder.add(
                tag,
                parent=parent,
                classes=[] if _is_expression(class_attr) else (class_attr or "").split(),
                id=None if _is_expression(id_attr) else (id_attr or None),
                inline=None if not style_attr or _is_expression(style_attr) else parse_inline_style(style_attr),
                ignored=ignored or IGNORE_ATTRIBUTE in attributes,
                position=self._position(),
            )

        if not closes:
            self._stack.append((tag, index))

    def handle_endtag(self, tag: str) -> None:
        self._ignore_next = False
        for depth in range(len(self._stack) - 1, -1, -1):
            if self._stack[depth][0] == tag:
                del self._stack[depth:]
                return

    def handle_data(self, data: str) -> None:
        if self._stack and self._stack[-1][0] == "style":
            self.styles.append(data)
            return
        if not data.strip():
            return
        self._ignore_next = False
        if self._stack and self._stack[-1][1] is None:
            return
        index = self._nearest()
        if index is not None:
            self.builder.mark_text(index)

    def handle_comment(self, data: str) -> None:
        if data.strip() == IGNORE_COMMENT:
            self._ignore_next = True


def _split_frontmatter(source: str) -> tuple[str, str]:
    """Return (frontmatter, body) with the frontmatter blanked in the body."""
    if not source.lstrip().startswith("---"):
        return "", source
    match = _FRONTMATTER_RE.match(source)
    if match is None:
        line = source[: len(source) - len(source.lstrip())].count("\n") + 1
        raise MarkupParseError("Unterminated frontmatter block", line=line, column=1)
    blanked = "\n" * match.group(0).count("\n")
    return match.group(2), blanked + source[match.end() :]


def parse_markup(source: str, path: str | None = None) -> ParsedDocument:
    """Parse markup into an element tree, its ``<style>`` CSS and linked CSS.

    Raises :class:`MarkupParseError` when the frontmatter block is never
    closed.
    """
    frontmatter, body = _split_frontmatter(source)
    linked = _CSS_IMPORT_RE.findall(frontmatter)

    parser = _TreeParser()
    parser.feed(body)
    parser.close()

    return ParsedDocument(
        tree=parser.builder.build(),
        stylesheet=parse_stylesheet("\n".join(parser.styles)),
        linked_css=tuple(linked + parser.links),
        path=path,
    )
