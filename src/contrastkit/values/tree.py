"""Lark-backed parser that turns a CSS value into an immutable node tree."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from lark import Lark, Token, Transformer
from lark.exceptions import LarkError

from contrastkit.errors import ValueSyntaxError

GRAMMAR_PATH = Path(__file__).parent / "grammar.lark"

# Token type -> node kind for leaf nodes.
_LEAF_KINDS: dict[str, str] = {
    "WS": "space",
    "COMMA": "comma",
    "SLASH": "slash",
    "NUMBER": "number",
    "HASH": "hash",
    "STRING": "string",
    "IDENT": "word",
    "DELIM": "delim",
}


@dataclass(frozen=True)
class ValueNode:
    """One node of a parsed CSS value.

    Leaf kinds: ``space``, ``comma``, ``slash``, ``number``, ``hash``,
    ``string``, ``word``, ``delim``. Container kinds: ``function`` (``text``
    is the function name) and ``block`` (a bare parenthesized group).
    """

    kind: str
    text: str
    children: tuple[ValueNode, ...] = ()

    @property
    def is_container(self) -> bool:
        return self.kind in ("function", "block")

    def is_function(self, name: str) -> bool:
        return self.kind == "function" and self.text.lower() == name

    def __str__(self) -> str:
        if self.kind == "function":
            return f"{self.text}({serialize(self.children)})"
        if self.kind == "block":
            return f"({serialize(self.children)})"
        return self.text


def _leaf(token: Token) -> ValueNode:
    return ValueNode(kind=_LEAF_KINDS[token.type], text=str(token))


def _nodes(items: list[object]) -> tuple[ValueNode, ...]:
    return tuple(item if isinstance(item, ValueNode) else _leaf(item) for item in items)  # type: ignore[arg-type]


class ValueTransformer(Transformer):  # type: ignore[type-arg]
    """Transform a Lark parse tree into :class:`ValueNode` objects."""

    def function(self, items: list[object]) -> ValueNode:
        name = str(items[0])[:-1]
        return ValueNode(kind="function", text=name, children=_nodes(items[1:]))

    def block(self, items: list[object]) -> ValueNode:
        return ValueNode(kind="block", text="", children=_nodes(items))

    def start(self, items: list[object]) -> tuple[ValueNode, ...]:
        return _nodes(items)


@lru_cache(maxsize=None)
def _parser() -> Lark:
    return Lark(GRAMMAR_PATH.read_text(), parser="lalr", start="start")


@lru_cache(maxsize=4096)
def parse_value(source: str) -> tuple[ValueNode, ...]:
    """Parse a CSS component value into a tuple of top-level nodes.

    Raises :class:`ValueSyntaxError` for unbalanced parentheses, unterminated
    strings and other text outside the value grammar.
    """
    try:
        tree = _parser().parse(source)
    except LarkError as e:
        line = getattr(e, "line", None)
        column = getattr(e, "column", None)
        raise ValueSyntaxError(f"Invalid value {source!r}: {e}", line=line, column=column) from e
    return ValueTransformer().transform(tree)


def serialize(nodes: tuple[ValueNode, ...] | list[ValueNode]) -> str:
    """Serialize nodes back to CSS text; ``serialize(parse_value(s)) == s``."""
    return "".join(str(node) for node in nodes)


def strip_space(nodes: tuple[ValueNode, ...]) -> tuple[ValueNode, ...]:
    """Drop leading and trailing whitespace nodes."""
    start, end = 0, len(nodes)
    while start < end and nodes[start].kind == "space":
        start += 1
    while end > start and nodes[end - 1].kind == "space":
        end -= 1
    return nodes[start:end]


def split_arguments(nodes: tuple[ValueNode, ...], maxsplit: int = -1) -> list[tuple[ValueNode, ...]]:
    """Split a node sequence at top-level commas, trimming each argument.

    Commas inside nested functions or blocks never split, so
    ``color-mix(in srgb, rgb(0, 0, 0), red)`` has three arguments.
    """
    parts: list[tuple[ValueNode, ...]] = []
    current: list[ValueNode] = []
    for node in nodes:
        if node.kind == "comma" and maxsplit != 0:
            parts.append(strip_space(tuple(current)))
            current = []
            maxsplit -= 1
            continue
        current.append(node)
    parts.append(strip_space(tuple(current)))
    return parts
