from contrastkit.markup.parser import (
    IGNORE_ATTRIBUTE,
    IGNORED_TAGS,
    ParsedDocument,
    parse_inline_style,
    parse_markup,
)

__all__ = ["ParsedDocument", "parse_markup", "parse_inline_style", "IGNORED_TAGS", "IGNORE_ATTRIBUTE"]
