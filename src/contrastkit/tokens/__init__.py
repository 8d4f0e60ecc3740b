from contrastkit.tokens.reader import (
    MAX_ALIAS_DEPTH,
    flatten_tokens,
    parse_css_tokens,
    read_token_file,
    read_token_files,
)

__all__ = [
    "MAX_ALIAS_DEPTH",
    "flatten_tokens",
    "parse_css_tokens",
    "read_token_file",
    "read_token_files",
]
