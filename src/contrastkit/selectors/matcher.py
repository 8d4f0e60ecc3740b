"""Match selectors against elements of an :class:`ElementTree`."""

from __future__ import annotations

from contrastkit.errors import SelectorSyntaxError
from contrastkit.model.element import ElementNode, ElementTree
from contrastkit.selectors.parser import Combinator, Compound, Selector, parse_selector

__all__ = ["compile_selector", "matches", "matches_compound", "specificity"]


def compile_selector(text: str) -> Selector | None:
    """Parse *text*, returning None when it cannot take part in matching.

    A selector whose target compound has no constraints after stripping
    (``:root``, ``::selection``, ``[hidden]``) never matches an element.
    """
    try:
        selector = parse_selector(text)
    except SelectorSyntaxError:
        return None
    if selector.target.empty:
        return None
    return selector


def matches_compound(element: ElementNode, compound: Compound) -> bool:
    # Empty compounds only appear left of the target and constrain nothing.
    if compound.tag is not None and element.tag_name != compound.tag:
        return False
    if any(element.id != ident for ident in compound.ids):
        return False
    return all(element.has_class(name) for name in compound.classes)


def _matches_from(tree: ElementTree, element: ElementNode, selector: Selector, index: int) -> bool:
    """Check ``compounds[:index + 1]`` with ``compounds[index]`` on *element*."""
    if not matches_compound(element, selector.compounds[index]):
        return False
    if index == 0:
        return True

    combinator = selector.combinators[index - 1]
    if combinator is Combinator.SIBLING:
        return True
    if combinator is Combinator.CHILD:
        parent = tree.parent_of(element)
        return parent is not None and _matches_from(tree, parent, selector, index - 1)
    return any(
        _matches_from(tree, ancestor, selector, index - 1)
        for ancestor in tree.ancestors(element)
    )


def matches(tree: ElementTree, element: ElementNode, selector: str | Selector) -> bool:
    """Return True when *selector* applies to *element*.

    Matching runs right to left. A descendant combinator backtracks over
    every ancestor; ``+`` and ``~`` drop the context on their left, so only
    the compounds to their right are checked.
    """
    compiled = compile_selector(selector) if isinstance(selector, str) else selector
    if compiled is None or compiled.target.empty:
        return False
    return _matches_from(tree, element, compiled, len(compiled.compounds) - 1)


def specificity(selector: str) -> int:
    """Specificity of *selector*, or 0 when it cannot be parsed."""
    compiled = compile_selector(selector)
    return compiled.specificity if compiled is not None else 0
