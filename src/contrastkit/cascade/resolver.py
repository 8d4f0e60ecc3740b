"""Pick the winning declaration for an element and property."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from contrastkit.model.element import ElementNode, ElementTree
from contrastkit.model.style import Declaration, StyleRule
from contrastkit.selectors import compile_selector, matches

__all__ = ["MatchedDeclaration", "find_best_declaration", "find_root_background", "ROOT_SELECTORS"]

# Selectors whose background paints the page.
ROOT_SELECTORS: tuple[str, ...] = ("body", "html", ":root")


@dataclass(frozen=True)
class MatchedDeclaration:
    """A declaration together with the rule that supplied it."""

    declaration: Declaration
    specificity: int
    selector: str


def _applies(declaration: Declaration, prop: str) -> bool:
    if declaration.property == prop:
        return True
    return prop == "background-color" and declaration.property == "background"


def find_best_declaration(
    tree: ElementTree,
    element: ElementNode,
    rules: Iterable[StyleRule],
    prop: str,
) -> MatchedDeclaration | None:
    """Return the highest-specificity declaration of *prop* for *element*.

    Ignored rules are skipped. A ``background-color`` lookup also accepts a
    ``background`` declaration. At equal specificity the later declaration
    wins, so *rules* must be in document order.
    """
    best: MatchedDeclaration | None = None
    for rule in rules:
        if rule.ignored:
            continue
        selector = compile_selector(rule.selector)
        if selector is None or not matches(tree, element, selector):
            continue
        for declaration in rule.declarations:
            if not _applies(declaration, prop):
                continue
            if best is None or selector.specificity >= best.specificity:
                best = MatchedDeclaration(declaration, selector.specificity, rule.selector)
    return best


def find_root_background(rules: Iterable[StyleRule]) -> MatchedDeclaration | None:
    """Return the page background declared on ``body``, ``html`` or ``:root``.

    The first non-ignored rule in document order that sets a background
    wins, whichever of the three selectors it uses.
    """
    for rule in rules:
        selector = rule.selector.strip()
        if rule.ignored or selector not in ROOT_SELECTORS:
            continue
        for declaration in rule.declarations:
            if _applies(declaration, "background-color"):
                return MatchedDeclaration(declaration, 0, selector)
    return None
