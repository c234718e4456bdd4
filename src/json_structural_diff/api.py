"""Public API functions for json-structural-diff.

This module provides the user-facing entry points: compare_json_values,
generate_diff_report, summarize_diff, are_json_texts_equal and
extract_change_paths.  Each comparison creates a fresh ``ValueComparator``
to guarantee zero global state between calls; no partial result is ever
returned; any error aborts the whole comparison.
"""

from __future__ import annotations

from typing import Any

from json_structural_diff.algorithm.comparator import ValueComparator, check_json_value
from json_structural_diff.algorithm.config import DiffOptions
from json_structural_diff.errors import (
    InvalidOptionsError,
    JsonSyntaxError,
    NestingTooDeepError,
)
from json_structural_diff.report.markdown import render_report
from json_structural_diff.report.statistics import compute_statistics
from json_structural_diff.report.summary import summarize
from json_structural_diff.result import DiffResult, DiffSummary
from json_structural_diff.validation import parse_json_text

__all__ = [
    "are_json_texts_equal",
    "compare_json_values",
    "extract_change_paths",
    "generate_diff_report",
    "summarize_diff",
]


def _resolve_options(options: DiffOptions | None) -> DiffOptions:
    if options is None:
        return DiffOptions()
    if not isinstance(options, DiffOptions):
        msg = f"options must be a DiffOptions instance, got {type(options).__name__}"
        raise InvalidOptionsError(msg)
    return options


def compare_json_values(
    value_a: Any,
    value_b: Any,
    options: DiffOptions | None = None,
) -> DiffResult:
    """Structurally compare two parsed JSON values.

    Neither input is mutated; the returned tree references them directly.

    Args:
        value_a: First JSON value (dict, list, str, int, float, bool, None).
        value_b: Second JSON value.
        options: Comparison options.  Defaults to ``DiffOptions()`` when None.

    Returns:
        A ``DiffResult`` with the Diff Tree, its statistics and ``has_changes``.

    Raises:
        InvalidOptionsError:    If ``options`` is not a ``DiffOptions``.
        CircularReferenceError: If either value contains itself.
        TypeError:              If either value holds a non-JSON object.
        NestingTooDeepError:    If the values nest deeper than the
            comparison can recurse.
    """
    options = _resolve_options(options)
    check_json_value(value_a, "A")
    check_json_value(value_b, "B")

    try:
        tree = ValueComparator(options).compare(value_a, value_b)
    except RecursionError as exc:
        msg = "JSON values are nested too deeply to compare"
        raise NestingTooDeepError(msg) from exc
    statistics = compute_statistics(tree)
    return DiffResult(
        tree=tree,
        statistics=statistics,
        has_changes=statistics.total_changes > 0,
    )


def generate_diff_report(
    value_a: Any,
    value_b: Any,
    options: DiffOptions | None = None,
) -> str:
    """Compare two JSON values and render the textual report.

    The output is byte-identical for identical arguments.
    """
    return render_report(compare_json_values(value_a, value_b, options))


def summarize_diff(result: DiffResult) -> DiffSummary:
    """Return the one-sentence summary of ``result``.

    Example::

        summarize_diff(compare_json_values({"a": 1}, {"a": 2})).summary
        # '1 changed (1 total change)'
    """
    return summarize(result)


def extract_change_paths(result: DiffResult) -> list[str]:
    """Return the rendered path of every changed leaf, in tree pre-order."""
    return result.change_paths()


def are_json_texts_equal(
    text_a: str,
    text_b: str,
    options: DiffOptions | None = None,
) -> bool:
    """Return True when two JSON texts parse to structurally equal values.

    Invalid JSON on either side yields False rather than an exception.
    Options and nesting errors still raise as in ``compare_json_values``.
    """
    try:
        value_a = parse_json_text(text_a)
        value_b = parse_json_text(text_b)
    except JsonSyntaxError:
        return False
    return not compare_json_values(value_a, value_b, options).has_changes
