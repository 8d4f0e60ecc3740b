"""Tests for custom property (var()) resolution."""

from contrastkit.model.style import Declaration, StyleRule
from contrastkit.properties import (
    merge_properties,
    resolve_custom_property,
    resolve_declarations,
)


class TestResolveCustomProperty:
    def test_plain_value_is_unchanged(self) -> None:
        assert resolve_custom_property("#fff", {}) == "#fff"

    def test_direct_reference(self) -> None:
        assert resolve_custom_property("var(--a)", {"--a": "#fff"}) == "#fff"

    def test_reference_chain(self) -> None:
        props = {"--a": "var(--b)", "--b": "blue"}
        assert resolve_custom_property("var(--a)", props) == "blue"

    def test_fallback(self) -> None:
        assert resolve_custom_property("var(--missing, #000)", {}) == "#000"

    def test_fallback_with_reference(self) -> None:
        props = {"--b": "red"}
        assert resolve_custom_property("var(--missing, var(--b))", props) == "red"

    def test_fallback_not_used_when_bound(self) -> None:
        assert resolve_custom_property("var(--a, red)", {"--a": "blue"}) == "blue"

    def test_missing_without_fallback(self) -> None:
        assert resolve_custom_property("var(--missing)", {}) is None

    def test_nested_inside_color_mix(self) -> None:
        props = {"--color-base": "#ffffff", "--color-main": "#000000"}
        value = "color-mix(in srgb, var(--color-base) 98%, var(--color-main))"
        assert resolve_custom_property(value, props) == "color-mix(in srgb, #ffffff 98%, #000000)"

    def test_one_unresolved_reference_fails_the_whole_value(self) -> None:
        value = "color-mix(in srgb, var(--a) 50%, var(--missing))"
        assert resolve_custom_property(value, {"--a": "red"}) is None

    def test_direct_cycle(self) -> None:
        props = {"--a": "var(--b)", "--b": "var(--a)"}
        assert resolve_custom_property("var(--a)", props) is None

    def test_self_reference(self) -> None:
        assert resolve_custom_property("var(--a)", {"--a": "var(--a)"}) is None

    def test_short_chain_resolves(self) -> None:
        props = {f"--v{i}": f"var(--v{i + 1})" for i in range(4)}
        props["--v4"] = "red"
        assert resolve_custom_property("var(--v0)", props) == "red"

    def test_deep_chain_fails_closed(self) -> None:
        props = {f"--v{i}": f"var(--v{i + 1})" for i in range(20)}
        props["--v20"] = "red"
        assert resolve_custom_property("var(--v0)", props) is None

    def test_syntax_error_fails(self) -> None:
        assert resolve_custom_property("var(--a", {"--a": "red"}) is None


class TestResolveDeclarations:
    def test_fills_resolved_values(self) -> None:
        rules = [StyleRule(".a", (Declaration("color", "var(--text)"),))]
        (rule,) = resolve_declarations(rules, {"--text": "#333"})
        assert rule.declarations[0].resolved_value == "#333"
        assert rule.declarations[0].value == "#333"

    def test_unresolvable_stays_none(self) -> None:
        rules = [StyleRule(".a", (Declaration("color", "var(--nope)"),))]
        (rule,) = resolve_declarations(rules, {})
        assert rule.declarations[0].resolved_value is None
        assert rule.declarations[0].value == "var(--nope)"

    def test_is_idempotent(self) -> None:
        rules = [StyleRule(".a", (Declaration("color", "var(--text)"),), ignored=True)]
        once = resolve_declarations(rules, {"--text": "#333"})
        twice = resolve_declarations(once, {"--text": "#999"})
        assert once == twice

    def test_input_is_not_mutated(self) -> None:
        rules = [StyleRule(".a", (Declaration("color", "red"),))]
        resolve_declarations(rules, {})
        assert rules[0].declarations[0].resolved_value is None


class TestMergeProperties:
    def test_later_sources_win(self) -> None:
        merged = merge_properties({"--a": "1"}, None, {"--a": "2", "--b": "3"})
        assert merged == {"--a": "2", "--b": "3"}
