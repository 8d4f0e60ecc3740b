from contrastkit.contrast.wcag import (
    AA_LARGE,
    AA_NORMAL,
    AAA_LARGE,
    AAA_NORMAL,
    contrast_ratio,
    evaluate,
    evaluate_colors,
    is_large_text,
    parse_font_size_px,
    parse_font_weight,
    relative_luminance,
)

__all__ = [
    "AA_NORMAL",
    "AAA_NORMAL",
    "AA_LARGE",
    "AAA_LARGE",
    "relative_luminance",
    "contrast_ratio",
    "parse_font_size_px",
    "parse_font_weight",
    "is_large_text",
    "evaluate",
    "evaluate_colors",
]
