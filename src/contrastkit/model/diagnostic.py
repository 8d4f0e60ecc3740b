"""Diagnostic model: recoverable problems recorded during analysis."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from contrastkit.model.element import ElementNode


class ErrorKind(Enum):
    """Category of an analysis problem."""

    PARSE_ERROR = "parse-error"
    COLOR_RESOLVE_ERROR = "color-resolve-error"
    # Reserved; nothing emits it yet.
    SELECTOR_MATCH_ERROR = "selector-match-error"


@dataclass(frozen=True)
class AnalysisError:
    """A single problem that reduced the results of an analysis run.

    Attributes:
        kind: Which category of failure occurred.
        message: Human-readable description of the problem.
        element: The element involved, if applicable.
    """

    kind: ErrorKind
    message: str
    element: ElementNode | None = None

    @property
    def is_parse_error(self) -> bool:
        return self.kind is ErrorKind.PARSE_ERROR

    def __str__(self) -> str:
        location = ""
        if self.element is not None:
            location = f" [{self.element.label} @ {self.element.position}]"
        return f"{self.kind.value}{location}: {self.message}"
