"""Lark Transformer that converts a selector parse tree into a Selector model."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from pathlib import Path

from lark import Lark, Token, Transformer
from lark.exceptions import LarkError

from contrastkit.errors import SelectorSyntaxError

GRAMMAR_PATH = Path(__file__).parent / "grammar.lark"

_ESCAPE_RE = re.compile(r"\\(.)")
_AROUND_COMBINATOR_RE = re.compile(r"\s*([>+~])\s*")
_WHITESPACE_RE = re.compile(r"\s+")


class Combinator(Enum):
    """How a compound relates to the compound on its right."""

    DESCENDANT = "descendant"
    CHILD = "child"
    # ``+`` and ``~``: the left-hand context is dropped, not evaluated.
    SIBLING = "sibling"


@dataclass(frozen=True)
class Compound:
    """A run of simple selectors with no combinator between them.

    ``universal`` is set for ``*``. A compound that held only pseudo-classes
    or attribute selectors has no constraints at all and is ``empty``.
    """

    tag: str | None = None
    ids: tuple[str, ...] = ()
    classes: tuple[str, ...] = ()
    universal: bool = False

    @property
    def empty(self) -> bool:
        return not (self.tag or self.ids or self.classes or self.universal)

    @property
    def specificity(self) -> int:
        return 100 * len(self.ids) + 10 * len(self.classes) + (1 if self.tag else 0)


@dataclass(frozen=True)
class Selector:
    """A complex selector read left to right.

    ``combinators[i]`` joins ``compounds[i]`` and ``compounds[i + 1]``.
    """

    text: str
    compounds: tuple[Compound, ...]
    combinators: tuple[Combinator, ...] = ()

    @property
    def target(self) -> Compound:
        return self.compounds[-1]

    @property
    def specificity(self) -> int:
        """id 100, class 10, tag 1, summed over every compound."""
        return sum(compound.specificity for compound in self.compounds)


_COMBINATORS: dict[str, Combinator] = {
    "DESCENDANT": Combinator.DESCENDANT,
    "CHILD": Combinator.CHILD,
    "ADJACENT": Combinator.SIBLING,
    "GENERAL": Combinator.SIBLING,
}


def _unescape(text: str) -> str:
    return _ESCAPE_RE.sub(r"\1", text)


class SelectorTransformer(Transformer):  # type: ignore[type-arg]
    """Transform a Lark parse tree into compounds and combinators."""

    def combinator(self, items: list[Token]) -> Combinator:
        return _COMBINATORS[items[0].type]

    def compound(self, items: list[Token]) -> Compound:
        tag: str | None = None
        ids: list[str] = []
        classes: list[str] = []
        universal = False
        for token in items:
            if token.type == "TAG":
                tag = str(token).lower()
            elif token.type == "UNIVERSAL":
                universal = True
            elif token.type == "CLASS":
                classes.append(_unescape(str(token)[1:]))
            elif token.type == "ID":
                ids.append(_unescape(str(token)[1:]))
            # ATTRIBUTE and PSEUDO are stripped.
        return Compound(tag=tag, ids=tuple(ids), classes=tuple(classes), universal=universal)

    def start(self, items: list[object]) -> tuple[tuple[Compound, ...], tuple[Combinator, ...]]:
        compounds = tuple(item for item in items if isinstance(item, Compound))
        combinators = tuple(item for item in items if isinstance(item, Combinator))
        return compounds, combinators


@lru_cache(maxsize=None)
def _parser() -> Lark:
    return Lark(GRAMMAR_PATH.read_text(), parser="lalr", start="start")


def normalize_selector(text: str) -> str:
    """Collapse whitespace so descendant combinators are a single space."""
    text = _WHITESPACE_RE.sub(" ", text.strip())
    return _AROUND_COMBINATOR_RE.sub(r"\1", text)


@lru_cache(maxsize=4096)
def parse_selector(text: str) -> Selector:
    """Parse a single complex selector (no top-level commas).

    Raises :class:`SelectorSyntaxError` when the text is outside the
    supported grammar.
    """
    normalized = normalize_selector(text)
    try:
        tree = _parser().parse(normalized)
    except LarkError as e:
        line = getattr(e, "line", None)
        column = getattr(e, "column", None)
        raise SelectorSyntaxError(
            f"Invalid selector {text!r}: {e}", line=line, column=column
        ) from e
    compounds, combinators = SelectorTransformer().transform(tree)
    return Selector(text=normalized, compounds=compounds, combinators=combinators)
