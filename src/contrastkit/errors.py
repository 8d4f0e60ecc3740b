"""Exception types raised by contrastkit."""

from __future__ import annotations


class ContrastKitError(Exception):
    """Base class for every error raised by contrastkit."""


class SourceError(ContrastKitError):
    """An input text could not be parsed; carries the location when known."""

    def __init__(
        self, message: str, line: int | None = None, column: int | None = None
    ):
        self.line = line
        self.column = column
        super().__init__(message)


class ValueSyntaxError(SourceError):
    """Raised when a CSS component value cannot be tokenized."""


class SelectorSyntaxError(SourceError):
    """Raised when a selector is outside the supported grammar."""


class MarkupParseError(SourceError):
    """Raised when a markup document cannot be turned into an element tree."""


class TokenFileError(ContrastKitError):
    """Raised when a design-token file cannot be read or decoded."""


class ConfigError(ContrastKitError):
    """Raised for an unreadable or malformed configuration."""
