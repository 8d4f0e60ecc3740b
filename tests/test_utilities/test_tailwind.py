"""Tests for utility-class resolution against the default palette."""

import pytest

from contrastkit.color import parse_color
from contrastkit.model.color import RgbaColor
from contrastkit.utilities import PALETTE, TailwindResolver, UtilityMatch


@pytest.fixture()
def resolver() -> TailwindResolver:
    return TailwindResolver()


class TestPalette:
    @pytest.mark.parametrize(
        "name,value",
        [
            ("blue-500", "#3b82f6"),
            ("red-600", "#dc2626"),
            ("slate-950", "#020617"),
            ("emerald-50", "#ecfdf5"),
            ("sky-400", "#38bdf8"),
            ("white", "#ffffff"),
        ],
    )
    def test_known_values(self, name: str, value: str) -> None:
        assert PALETTE[name] == value

    def test_is_read_only(self) -> None:
        with pytest.raises(TypeError):
            PALETTE["brand"] = "#000"  # type: ignore[index]


class TestResolveColor:
    def test_text_color(self, resolver: TailwindResolver) -> None:
        assert resolver.resolve_color("text-blue-500") == UtilityMatch("color", "#3b82f6", "text-blue-500")

    def test_background_color(self, resolver: TailwindResolver) -> None:
        match = resolver.resolve_color("bg-red-600")
        assert match is not None
        assert match.property == "background-color"
        assert match.value == "#dc2626"

    def test_opacity_modifier(self, resolver: TailwindResolver) -> None:
        match = resolver.resolve_color("bg-black/50")
        assert match is not None
        assert parse_color(match.value) == RgbaColor(0, 0, 0, 0.5)

    @pytest.mark.parametrize(
        "class_name",
        ["text-center", "text-lg", "bg-cover", "bg-none", "text-unknown-500", "hover:text-white", "font-bold"],
    )
    def test_non_color_classes(self, resolver: TailwindResolver, class_name: str) -> None:
        assert resolver.resolve_color(class_name) is None

    def test_arbitrary_hex(self, resolver: TailwindResolver) -> None:
        match = resolver.resolve_color("text-[#1a5276]")
        assert match is not None
        assert match.value == "#1a5276"

    def test_arbitrary_function_uses_underscores_for_spaces(self, resolver: TailwindResolver) -> None:
        match = resolver.resolve_color("bg-[rgb(26_82_118)]")
        assert match is not None
        assert match.value == "rgb(26 82 118)"

    def test_arbitrary_with_color_hint(self, resolver: TailwindResolver) -> None:
        match = resolver.resolve_color("text-[color:var(--brand)]")
        assert match is not None
        assert match.value == "var(--brand)"

    def test_arbitrary_length_is_not_a_color(self, resolver: TailwindResolver) -> None:
        assert resolver.resolve_color("text-[14px]") is None

    def test_custom_palette(self) -> None:
        match = TailwindResolver({"brand": "#123456"}).resolve_color("bg-brand")
        assert match is not None
        assert match.value == "#123456"


class TestElementLookups:
    def test_last_text_class_wins(self, resolver: TailwindResolver) -> None:
        match = resolver.foreground(["text-red-500", "p-4", "text-blue-500"])
        assert match is not None
        assert match.class_name == "text-blue-500"

    def test_background_ignores_text_classes(self, resolver: TailwindResolver) -> None:
        assert resolver.background(["text-white"]) is None

    def test_font_size_first_match(self, resolver: TailwindResolver) -> None:
        assert resolver.font_size(["text-sm", "text-lg"]) == "14px"

    def test_arbitrary_font_size(self, resolver: TailwindResolver) -> None:
        assert resolver.font_size(["text-[22px]"]) == "22px"

    def test_font_weight(self, resolver: TailwindResolver) -> None:
        assert resolver.font_weight(["italic", "font-bold"]) == "700"

    def test_nothing_found(self, resolver: TailwindResolver) -> None:
        assert resolver.font_size(["p-4"]) is None
        assert resolver.font_weight([]) is None
