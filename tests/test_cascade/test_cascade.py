"""Tests for the best-declaration lookup and the page background."""

from contrastkit.cascade import find_best_declaration, find_root_background
from contrastkit.model.element import ElementNode, ElementTree, TreeBuilder
from contrastkit.model.style import Declaration, StyleRule


def _rule(selector: str, prop: str, value: str, ignored: bool = False) -> StyleRule:
    return StyleRule(selector, (Declaration(prop, value),), ignored)


def _subtitle() -> tuple[ElementTree, ElementNode]:
    builder = TreeBuilder()
    section = builder.add("section", classes=["hero"])
    builder.add("p", parent=section, classes=["subtitle"], has_text_content=True)
    tree = builder.build()
    return tree, tree[1]


class TestFindBestDeclaration:
    def test_class_beats_tag(self) -> None:
        tree, p = _subtitle()
        rules = [_rule("p", "color", "#000"), _rule(".subtitle", "color", "#999")]
        found = find_best_declaration(tree, p, rules, "color")
        assert found is not None
        assert found.declaration.raw_value == "#999"
        assert found.selector == ".subtitle"

    def test_class_beats_tag_regardless_of_order(self) -> None:
        tree, p = _subtitle()
        rules = [_rule(".subtitle", "color", "#999"), _rule("p", "color", "#000")]
        found = find_best_declaration(tree, p, rules, "color")
        assert found is not None
        assert found.declaration.raw_value == "#999"

    def test_later_rule_wins_a_tie(self) -> None:
        tree, p = _subtitle()
        rules = [_rule(".subtitle", "color", "#111"), _rule(".subtitle", "color", "#222")]
        found = find_best_declaration(tree, p, rules, "color")
        assert found is not None
        assert found.declaration.raw_value == "#222"

    def test_descendant_selector_adds_specificity(self) -> None:
        tree, p = _subtitle()
        rules = [_rule(".hero .subtitle", "color", "#111"), _rule(".subtitle", "color", "#222")]
        found = find_best_declaration(tree, p, rules, "color")
        assert found is not None
        assert found.specificity == 20
        assert found.declaration.raw_value == "#111"

    def test_ignored_rules_are_skipped(self) -> None:
        tree, p = _subtitle()
        rules = [_rule("p", "color", "#000"), _rule(".subtitle", "color", "#999", ignored=True)]
        found = find_best_declaration(tree, p, rules, "color")
        assert found is not None
        assert found.declaration.raw_value == "#000"

    def test_background_lookup_accepts_shorthand(self) -> None:
        tree, p = _subtitle()
        found = find_best_declaration(tree, p, [_rule("p", "background", "#eee")], "background-color")
        assert found is not None
        assert found.declaration.property == "background"

    def test_color_lookup_ignores_background(self) -> None:
        tree, p = _subtitle()
        assert find_best_declaration(tree, p, [_rule("p", "background", "#eee")], "color") is None

    def test_no_match(self) -> None:
        tree, p = _subtitle()
        assert find_best_declaration(tree, p, [_rule("h1", "color", "red")], "color") is None

    def test_unparsable_selector_is_skipped(self) -> None:
        tree, p = _subtitle()
        assert find_best_declaration(tree, p, [_rule("p >", "color", "red")], "color") is None


class TestFindRootBackground:
    def test_first_rule_in_document_order_wins(self) -> None:
        rules = [
            _rule(":root", "background-color", "#333"),
            _rule("body", "background-color", "#111"),
            _rule("html", "background-color", "#222"),
        ]
        found = find_root_background(rules)
        assert found is not None
        assert found.selector == ":root"
        assert found.declaration.raw_value == "#333"

    def test_background_shorthand(self) -> None:
        rules = [_rule("html", "background", "#222"), _rule(":root", "background-color", "#333")]
        found = find_root_background(rules)
        assert found is not None
        assert found.declaration.raw_value == "#222"

    def test_earlier_rule_for_a_selector_wins(self) -> None:
        rules = [_rule("body", "background-color", "#111"), _rule("body", "background-color", "#444")]
        found = find_root_background(rules)
        assert found is not None
        assert found.declaration.raw_value == "#111"

    def test_rules_without_a_background_are_passed_over(self) -> None:
        rules = [_rule("body", "color", "#fff"), _rule("html", "background-color", "#000")]
        found = find_root_background(rules)
        assert found is not None
        assert found.selector == "html"

    def test_ignored_and_other_rules(self) -> None:
        rules = [
            _rule("body", "background-color", "#111", ignored=True),
            _rule("main", "background-color", "#222"),
            _rule("body", "color", "#333"),
        ]
        assert find_root_background(rules) is None
