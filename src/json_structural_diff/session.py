"""JsonDiffSession: stateful comparison of two JSON texts for an editor.

The session is the outermost caller boundary of the engine.  It takes raw
text from two editor panes, validates both sides through a ``ParseCache``,
runs the comparison and keeps the latest outcome as state:

- ``result`` / ``error``: exactly one is set after a non-empty comparison.
- ``a_valid`` / ``b_valid``: whether each side parsed.
- ``summary`` / ``has_changes`` / ``change_count``: derived views.

Syntax errors and comparison failures are recorded in ``error`` and logged;
they are never raised out of ``compare_texts``.  ``export_report`` is the
one method that raises, since it has no state to record into.

A session is not thread-safe; use one per editor.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from json_structural_diff.algorithm.config import DiffOptions
from json_structural_diff.api import compare_json_values, generate_diff_report
from json_structural_diff.cache import ParseCache
from json_structural_diff.errors import JsonDiffError, JsonSyntaxError
from json_structural_diff.report.summary import summarize
from json_structural_diff.result import DiffResult, DiffStatistics, ValidationResult

__all__ = ["NO_COMPARISON", "JsonDiffSession"]

logger = logging.getLogger(__name__)

NO_COMPARISON = "No comparison performed"


class JsonDiffSession:
    """Holds the latest comparison between two JSON texts.

    Example::

        session = JsonDiffSession()
        session.compare_texts('{"age": 30}', '{"age": 31}')
        session.summary        # '1 changed (1 total change)'
        session.compare_texts('{"age": 30}', '{"age": }')
        session.error          # 'JSON B is invalid: Expecting value (line 1, column 9)'

    Args:
        options:        Default options for comparisons.  Defaults to
            ``DiffOptions()``.
        max_cache_size: Maximum number of texts kept in the parse cache.
    """

    def __init__(
        self,
        options: DiffOptions | None = None,
        max_cache_size: int = 64,
    ) -> None:
        self._options = options if options is not None else DiffOptions()
        self._cache = ParseCache(max_size=max_cache_size)
        self._result: DiffResult | None = None
        self._error: str | None = None
        self._a_valid = False
        self._b_valid = False
        self._last_comparison_time: datetime | None = None

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def options(self) -> DiffOptions:
        return self._options

    @property
    def cache(self) -> ParseCache:
        return self._cache

    @property
    def result(self) -> DiffResult | None:
        return self._result

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def a_valid(self) -> bool:
        return self._a_valid

    @property
    def b_valid(self) -> bool:
        return self._b_valid

    @property
    def last_comparison_time(self) -> datetime | None:
        """UTC time of the last successful comparison."""
        return self._last_comparison_time

    @property
    def statistics(self) -> DiffStatistics | None:
        return self._result.statistics if self._result is not None else None

    @property
    def has_changes(self) -> bool:
        return self._result is not None and self._result.has_changes

    @property
    def change_count(self) -> int:
        return self._result.statistics.total_changes if self._result is not None else 0

    @property
    def summary(self) -> str:
        if self._result is None:
            return NO_COMPARISON
        return summarize(self._result).summary

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def validate(self, text: str) -> ValidationResult:
        """Validate one text through the session's parse cache."""
        return self._cache.validate(text)

    def compare_texts(
        self,
        text_a: str,
        text_b: str,
        options: DiffOptions | None = None,
    ) -> DiffResult | None:
        """Compare two JSON texts and record the outcome.

        A blank side resets the result and both validity flags without
        reporting an error.

        Args:
            text_a:  Text of the left pane.
            text_b:  Text of the right pane.
            options: Overrides the session options for this call.

        Returns:
            The new ``DiffResult``, or None when either side is blank, invalid,
            or the comparison failed (see ``error``).
        """
        self._result = None
        self._error = None

        if not _has_content(text_a) or not _has_content(text_b):
            self._a_valid = False
            self._b_valid = False
            return None

        validation_a = self._cache.validate(text_a)
        validation_b = self._cache.validate(text_b)
        self._a_valid = validation_a.is_valid
        self._b_valid = validation_b.is_valid

        for side, validation in (("A", validation_a), ("B", validation_b)):
            if not validation.is_valid:
                self._error = f"JSON {side} is invalid: {validation.error}"
                logger.info("comparison skipped: %s", self._error)
                return None

        try:
            result = compare_json_values(
                validation_a.parsed,
                validation_b.parsed,
                options if options is not None else self._options,
            )
        except (JsonDiffError, TypeError) as exc:
            logger.exception("JSON comparison failed")
            self._error = f"Comparison failed: {exc}"
            return None

        self._result = result
        self._last_comparison_time = datetime.now(timezone.utc)
        return result

    def export_report(
        self,
        text_a: str,
        text_b: str,
        options: DiffOptions | None = None,
    ) -> str:
        """Validate both texts and render the comparison report.

        Raises:
            JsonSyntaxError: If either text is invalid; the message names the side.
            InvalidOptionsError, CircularReferenceError, NestingTooDeepError:
                As ``compare_json_values``.
        """
        parsed: list[Any] = []
        for side, text in (("A", text_a), ("B", text_b)):
            validation = self._cache.validate(text)
            if not validation.is_valid:
                raise JsonSyntaxError(
                    f"JSON {side} is invalid: {validation.error}",
                )
            parsed.append(validation.parsed)
        return generate_diff_report(
            parsed[0],
            parsed[1],
            options if options is not None else self._options,
        )

    def clear(self) -> None:
        """Reset all comparison state (the parse cache is kept)."""
        self._result = None
        self._error = None
        self._a_valid = False
        self._b_valid = False
        self._last_comparison_time = None


def _has_content(text: Any) -> bool:
    return isinstance(text, str) and bool(text.strip())
