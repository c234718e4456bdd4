"""Exception hierarchy for json-structural-diff.

Every error raised by the engine derives from ``JsonDiffError`` and also
from the closest built-in exception, so callers can catch either:

- ``InvalidOptionsError``:    bad ``DiffOptions`` values (a ``ValueError``).
- ``CircularReferenceError``: cyclic input built programmatically (a ``ValueError``).
- ``InvalidComparisonError``: both sides absent, an internal invariant breach.
- ``JsonSyntaxError``:        unparseable JSON text (a ``ValueError``).
- ``NestingTooDeepError``:    input nested deeper than the comparison can
                               recurse (a ``RecursionError``).
"""

from __future__ import annotations

__all__ = [
    "CircularReferenceError",
    "InvalidComparisonError",
    "InvalidOptionsError",
    "JsonDiffError",
    "JsonSyntaxError",
    "NestingTooDeepError",
]


class JsonDiffError(Exception):
    """Base class for all json-structural-diff errors."""


class InvalidOptionsError(JsonDiffError, ValueError):
    """Raised when a ``DiffOptions`` field holds an unusable value."""


class CircularReferenceError(JsonDiffError, ValueError):
    """Raised when an input value contains itself.

    Attributes:
        path: Rendered path (e.g. ``"users[0].friends"``) of the container
            that points back at one of its ancestors.
        side: ``"A"`` or ``"B"``, the input that holds the cycle.
    """

    def __init__(self, path: str, side: str) -> None:
        super().__init__(f"circular reference in value {side} at path {path}")
        self.path = path
        self.side = side


class InvalidComparisonError(JsonDiffError, AssertionError):
    """Raised when the comparator is asked to compare two absent values."""


class JsonSyntaxError(JsonDiffError, ValueError):
    """Raised when JSON text cannot be parsed.

    Attributes:
        message: Human-readable description from the parser.
        line:    1-based line of the error, or None when unknown.
        column:  1-based column of the error, or None when unknown.
    """

    def __init__(
        self,
        message: str,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        if line is not None and column is not None:
            text = f"{message} (line {line}, column {column})"
        else:
            text = message
        super().__init__(text)
        self.message = message
        self.line = line
        self.column = column


class NestingTooDeepError(JsonDiffError, RecursionError):
    """Raised when an input is nested too deeply to compare.

    Such input may still be valid JSON; ``validate_json_structure`` reports
    the depth before a comparison is attempted.
    """
