"""pytest plugin for json-structural-diff.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

from typing import Any

import pytest

from json_structural_diff import DiffOptions, compare_json_values


@pytest.fixture(scope="session")
def assert_json_unchanged() -> Any:
    """Fixture that returns a callable structural JSON equality asserter.

    The fixture is session-scoped because the returned callable is stateless
    (delegates to compare_json_values() which creates a fresh comparator per call).

    Usage in tests::

        def test_payload(assert_json_unchanged):
            assert_json_unchanged({"a": [1, 2]}, {"a": [1, 2]})

        def test_tolerance(assert_json_unchanged):
            assert_json_unchanged(
                {"t": 1.0}, {"t": 1.05}, options=DiffOptions(numeric_tolerance=0.1)
            )

    Returns:
        A callable ``_assert(actual, expected, options=None) -> None`` that
        raises ``AssertionError`` carrying the full diff report when the two
        values differ.
    """

    def _assert(
        actual: Any,
        expected: Any,
        options: DiffOptions | None = None,
    ) -> None:
        """Assert that two JSON values are structurally equal.

        Args:
            actual:   The JSON value produced by the code under test.
            expected: The expected/reference JSON value.
            options:  Optional DiffOptions (tolerance, ignore-order, ...).

        Raises:
            AssertionError: When the comparison finds changes; the message
                holds the summary sentence and the report.
        """
        result = compare_json_values(expected, actual, options)
        if result.has_changes:
            raise AssertionError(
                f"JSON values differ: {result.statistics.total_changes} change(s)\n"
                f"{result.report()}"
            )

    return _assert
