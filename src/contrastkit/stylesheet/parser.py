"""Hand-written normalizer for CSS text.

Turns a stylesheet into the flat rule list the cascade consumes:

    /* contrast-ignore */
    .badge { background: #fde047; }
    .card, .panel {
      color: var(--text);
      & .title { font-weight: 700; }
      @media (min-width: 40rem) { color: #111; }
    }

Nested rules are flattened into full selectors (``&`` is replaced by the
parent selector, otherwise the parent is joined as a descendant), selector
lists become one rule per selector, grouping at-rules are flattened without
scoping, and only the tracked color and typography declarations survive.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from contrastkit.model.style import TRACKED_PROPERTIES, Declaration, StyleRule
from contrastkit.stylesheet.model import Stylesheet

__all__ = ["parse_stylesheet", "split_selector_list", "IGNORE_MARKER"]

logger = logging.getLogger(__name__)

IGNORE_MARKER = "contrast-ignore"

_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
_IMPORTANT_RE = re.compile(r"\s*!\s*important\s*$", re.IGNORECASE)
_AT_NAME_RE = re.compile(r"@(-?[a-zA-Z][-a-zA-Z0-9]*)")
_IMPORT_RE = re.compile(
    r"""
    @import\s+
    (?:
        url\(\s*(?P<quote>['"]?)(?P<url>[^'")]*)(?P=quote)\s*\)   # url(...)
      | (?P<q>['"])(?P<path>[^'"]*)(?P=q)                         # "path"
    )
    """,
    re.VERBOSE | re.IGNORECASE,
)

# Grouping at-rules whose contents are read as if they were top level.
_FLATTENED_AT_RULES = frozenset({"media", "supports", "layer", "container", "scope", "document"})
ROOT_PROPERTY_SELECTORS = frozenset({":root", "html"})
_EXTERNAL_PREFIXES = ("http://", "https://", "//")


@dataclass(frozen=True)
class _Item:
    """One top-level piece of a block body."""

    kind: str  # "comment", "statement", "block"
    text: str
    body: str = ""


def _strip_comments(text: str) -> str:
    return _COMMENT_RE.sub("", text).strip()


def _matching_brace(source: str, index: int) -> int:
    """Index of the ``}`` closing the ``{`` at *index*, or ``len(source)``."""
    depth = 0
    quote: str | None = None
    i = index
    while i < len(source):
        ch = source[i]
        if quote:
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                quote = None
        elif source.startswith("/*", i):
            end = source.find("*/", i + 2)
            if end == -1:
                return len(source)
            i = end + 2
            continue
        elif ch in "\"'":
            quote = ch
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i
        i += 1
    return len(source)


def _scan(source: str) -> list[_Item]:
    """Split a block body into comments, ``;`` statements and ``{}`` blocks."""
    items: list[_Item] = []
    start = 0
    parens = 0
    quote: str | None = None
    i = 0
    while i < len(source):
        ch = source[i]
        if quote:
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                quote = None
        elif source.startswith("/*", i):
            end = source.find("*/", i + 2)
            end = len(source) if end == -1 else end
            if not source[start:i].strip():
                items.append(_Item("comment", source[i + 2 : end]))
                start = end + 2
            i = end + 2
            continue
        elif ch in "\"'":
            quote = ch
        elif ch == "(":
            parens += 1
        elif ch == ")":
            parens = max(0, parens - 1)
        elif parens == 0 and ch == ";":
            if source[start:i].strip():
                items.append(_Item("statement", source[start:i].strip()))
            start = i + 1
        elif parens == 0 and ch == "{":
            close = _matching_brace(source, i)
            items.append(_Item("block", source[start:i].strip(), source[i + 1 : close]))
            i = start = close + 1
            continue
        elif parens == 0 and ch == "}":
            start = i + 1
        i += 1

    if source[start:].strip():
        items.append(_Item("statement", source[start:].strip()))
    return items


def split_selector_list(text: str) -> list[str]:
    """Split ``a, b:is(c, d)`` at top-level commas into trimmed selectors."""
    parts: list[str] = []
    depth = 0
    current: list[str] = []
    for ch in text:
        if ch in "([":
            depth += 1
        elif ch in ")]":
            depth = max(0, depth - 1)
        elif ch == "," and depth == 0:
            parts.append("".join(current).strip())
            current = []
            continue
        current.append(ch)
    parts.append("".join(current).strip())
    return [part for part in parts if part]


def _nest(selectors: list[str], parents: tuple[str, ...]) -> list[str]:
    if not parents:
        return selectors
    nested: list[str] = []
    for parent in parents:
        for selector in selectors:
            if "&" in selector:
                nested.append(selector.replace("&", parent))
            else:
                nested.append(f"{parent} {selector}")
    return nested


def _declaration(text: str) -> tuple[str, str] | None:
    prop, sep, value = _strip_comments(text).partition(":")
    prop = prop.strip()
    value = _IMPORTANT_RE.sub("", value.strip())
    if not sep or not prop or not value:
        return None
    if not prop.startswith("--"):
        prop = prop.lower()
    return prop, value


def _import_target(statement: str) -> str | None:
    match = _IMPORT_RE.match(statement)
    if match is None:
        return None
    target = (match.group("url") or match.group("path") or "").strip()
    if not target or target.startswith(_EXTERNAL_PREFIXES):
        return None
    return target


class _Normalizer:
    def __init__(self) -> None:
        self.rules: list[StyleRule] = []
        self.custom_properties: dict[str, str] = {}
        self.imports: list[str] = []

    def walk(self, source: str, parents: tuple[str, ...] = ()) -> None:
        ignore_next = False
        for item in _scan(source):
            if item.kind == "comment":
                if item.text.strip() == IGNORE_MARKER:
                    ignore_next = True
                continue
            ignored, ignore_next = ignore_next, False

            if item.kind == "statement":
                if item.text.startswith("@"):
                    self._at_statement(item.text)
                continue

            prelude = _strip_comments(item.text)
            if prelude.startswith("@"):
                self._at_block(prelude, item.body, parents)
            elif prelude:
                selectors = _nest(split_selector_list(prelude), parents)
                self._emit(selectors, item.body, ignored)
                self.walk(item.body, tuple(selectors))

    def _at_statement(self, text: str) -> None:
        if text[:7].lower() == "@import":
            target = _import_target(text)
            if target is not None:
                self.imports.append(target)

    def _at_block(self, prelude: str, body: str, parents: tuple[str, ...]) -> None:
        match = _AT_NAME_RE.match(prelude)
        name = match.group(1).lower() if match else ""
        if name not in _FLATTENED_AT_RULES:
            logger.debug("Skipping @%s block", name)
            return
        if parents:
            self._emit(list(parents), body, ignored=False)
        self.walk(body, parents)

    def _emit(self, selectors: list[str], body: str, ignored: bool) -> None:
        """Record the direct declarations of *body* for every selector."""
        declarations: list[Declaration] = []
        for item in _scan(body):
            if item.kind != "statement" or item.text.startswith("@"):
                continue
            parsed = _declaration(item.text)
            if parsed is None:
                continue
            prop, value = parsed

            if prop.startswith("--"):
                if any(selector in ROOT_PROPERTY_SELECTORS for selector in selectors):
                    self.custom_properties[prop] = value
                continue
            if prop not in TRACKED_PROPERTIES:
                continue
            if prop == "background" and ("url(" in value.lower() or "gradient" in value.lower()):
                continue
            declarations.append(Declaration(prop, value))

        if not declarations:
            return
        for selector in selectors:
            self.rules.append(StyleRule(selector, tuple(declarations), ignored))


def parse_stylesheet(source: str) -> Stylesheet:
    """Normalize CSS *source* into a :class:`Stylesheet`.

    Never raises: unbalanced braces close at the end of the input and
    anything that is not a recognizable rule or declaration is dropped.
    """
    normalizer = _Normalizer()
    normalizer.walk(source)
    return Stylesheet(
        rules=tuple(normalizer.rules),
        custom_properties=normalizer.custom_properties,
        imports=tuple(normalizer.imports),
    )
