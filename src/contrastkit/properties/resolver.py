"""Custom property (``var()``) resolution.

Substitution works on the parsed value tree, so a ``var()`` nested inside
another function (for example a ``color-mix()`` argument) is replaced in
place and the rest of the value keeps its exact text.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Mapping

from contrastkit.errors import ValueSyntaxError
from contrastkit.model.style import StyleRule
from contrastkit.values import ValueNode, parse_value, serialize, split_arguments

__all__ = [
    "MAX_DEPTH",
    "resolve_custom_property",
    "resolve_declarations",
    "merge_properties",
]

MAX_DEPTH = 10


def _has_reference(value: str) -> bool:
    return "var(" in value.lower()


def resolve_custom_property(
    value: str, properties: Mapping[str, str], depth: int = 0
) -> str | None:
    """Substitute every ``var(name[, fallback])`` in *value*.

    A name bound in *properties* is resolved recursively; otherwise a
    non-empty fallback is resolved instead. Any reference that cannot be
    resolved, or a chain deeper than :data:`MAX_DEPTH`, makes the whole
    result None even when other references in the same value succeeded.
    """
    if depth >= MAX_DEPTH:
        return None
    if not _has_reference(value):
        return value
    try:
        nodes = parse_value(value)
    except ValueSyntaxError:
        return None
    substituted = _substitute(nodes, properties, depth)
    if substituted is None:
        return None
    return serialize(substituted).strip()


def _substitute(
    nodes: tuple[ValueNode, ...], properties: Mapping[str, str], depth: int
) -> tuple[ValueNode, ...] | None:
    out: list[ValueNode] = []
    for node in nodes:
        if node.is_function("var"):
            replacement = _resolve_reference(node, properties, depth)
            if replacement is None:
                return None
            try:
                out.extend(parse_value(replacement))
            except ValueSyntaxError:
                return None
        elif node.is_container:
            children = _substitute(node.children, properties, depth)
            if children is None:
                return None
            out.append(replace(node, children=children))
        else:
            out.append(node)
    return tuple(out)


def _resolve_reference(
    node: ValueNode, properties: Mapping[str, str], depth: int
) -> str | None:
    args = split_arguments(node.children, maxsplit=1)
    name = serialize(args[0])
    fallback = serialize(args[1]) if len(args) > 1 else ""

    if name in properties:
        return resolve_custom_property(properties[name], properties, depth + 1)
    if fallback:
        return resolve_custom_property(fallback, properties, depth + 1)
    return None


def resolve_declarations(
    rules: list[StyleRule], properties: Mapping[str, str]
) -> list[StyleRule]:
    """Return *rules* with every declaration's ``resolved_value`` filled in.

    Declarations that already carry a resolved value are left untouched, so
    running this twice over the same input yields the same rules.
    """
    resolved: list[StyleRule] = []
    for rule in rules:
        declarations = tuple(
            decl
            if decl.resolved_value is not None
            else replace(decl, resolved_value=resolve_custom_property(decl.raw_value, properties))
            for decl in rule.declarations
        )
        resolved.append(replace(rule, declarations=declarations))
    return resolved


def merge_properties(*sources: Mapping[str, str] | None) -> dict[str, str]:
    """Merge property maps given in ascending priority; later sources win."""
    merged: dict[str, str] = {}
    for source in sources:
        if source:
            merged.update(source)
    return merged
