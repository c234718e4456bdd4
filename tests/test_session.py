"""Tests for JsonDiffSession, the stateful text comparison wrapper."""

from __future__ import annotations

import logging
from datetime import timezone

import pytest

from json_structural_diff import DiffOptions, JsonDiffSession, JsonSyntaxError
from json_structural_diff.session import NO_COMPARISON


@pytest.fixture
def session() -> JsonDiffSession:
    return JsonDiffSession()


class TestInitialState:
    def test_nothing_compared(self, session: JsonDiffSession) -> None:
        assert session.result is None
        assert session.error is None
        assert session.statistics is None
        assert session.has_changes is False
        assert session.change_count == 0
        assert session.summary == NO_COMPARISON == "No comparison performed"
        assert session.last_comparison_time is None

    def test_default_options(self, session: JsonDiffSession) -> None:
        assert session.options == DiffOptions()

    def test_cache_size(self) -> None:
        assert JsonDiffSession(max_cache_size=8).cache.max_size == 8


class TestCompareTexts:
    def test_successful_comparison(self, session: JsonDiffSession) -> None:
        result = session.compare_texts('{"age": 30}', '{"age": 31}')
        assert result is not None
        assert session.result is result
        assert session.error is None
        assert session.a_valid and session.b_valid
        assert session.has_changes
        assert session.change_count == 1
        assert session.summary == "1 changed (1 total change)"
        assert session.statistics is result.statistics

    def test_timestamp_is_utc(self, session: JsonDiffSession) -> None:
        session.compare_texts("1", "1")
        stamp = session.last_comparison_time
        assert stamp is not None
        assert stamp.tzinfo == timezone.utc

    def test_no_differences(self, session: JsonDiffSession) -> None:
        session.compare_texts("[1, 2, 3]", "[1,2,3]")
        assert session.summary == "No differences found"
        assert not session.has_changes

    @pytest.mark.parametrize(("text_a", "text_b"), [("", "{}"), ("{}", "  "), ("", "")])
    def test_blank_side_resets_without_error(
        self, session: JsonDiffSession, text_a: str, text_b: str
    ) -> None:
        session.compare_texts('{"a": 1}', '{"a": 2}')
        assert session.compare_texts(text_a, text_b) is None
        assert session.result is None
        assert session.error is None
        assert session.summary == NO_COMPARISON
        assert session.a_valid is False
        assert session.b_valid is False

    def test_blank_side_clears_validity_of_earlier_comparison(
        self, session: JsonDiffSession
    ) -> None:
        session.compare_texts("[1]", "[2]")
        assert (session.a_valid, session.b_valid) == (True, True)
        session.compare_texts("", "{bad")
        assert (session.a_valid, session.b_valid) == (False, False)
        assert session.error is None

    def test_invalid_b(
        self, session: JsonDiffSession, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.INFO, logger="json_structural_diff"):
            assert session.compare_texts('{"age": 30}', '{"age": }') is None
        assert session.error == "JSON B is invalid: Expecting value (line 1, column 9)"
        assert session.a_valid is True
        assert session.b_valid is False
        assert session.result is None
        assert "comparison skipped" in caplog.text

    def test_invalid_a_reported_first(self, session: JsonDiffSession) -> None:
        session.compare_texts("{", "[")
        assert session.error is not None
        assert session.error.startswith("JSON A is invalid: ")
        assert not session.a_valid
        assert not session.b_valid

    def test_options_override(self, session: JsonDiffSession) -> None:
        session.compare_texts("[1, 2]", "[2, 1]", DiffOptions(ignore_array_order=True))
        assert not session.has_changes
        session.compare_texts("[1, 2]", "[2, 1]")
        assert session.has_changes

    def test_session_options_used(self) -> None:
        session = JsonDiffSession(DiffOptions(ignore_case=True))
        session.compare_texts('"ABC"', '"abc"')
        assert not session.has_changes

    def test_comparison_failure_recorded(
        self, session: JsonDiffSession, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.ERROR, logger="json_structural_diff"):
            result = session.compare_texts(
                "1",
                "2",
                {"ignore_case": True},  # type: ignore[arg-type]
            )
        assert result is None
        assert session.error is not None
        assert session.error.startswith("Comparison failed: options must be a DiffOptions")
        assert "JSON comparison failed" in caplog.text

    def test_deeply_nested_texts_recorded_as_failure(
        self, session: JsonDiffSession, caplog: pytest.LogCaptureFixture
    ) -> None:
        depth = 600
        text_a = "[" * depth + "1" + "]" * depth
        text_b = "[" * depth + "2" + "]" * depth
        with caplog.at_level(logging.ERROR, logger="json_structural_diff"):
            result = session.compare_texts(text_a, text_b)
        assert result is None
        assert session.a_valid and session.b_valid
        assert session.error is not None
        assert session.error.startswith("Comparison failed: JSON values are nested")
        assert "JSON comparison failed" in caplog.text

    def test_texts_parsed_once(self, session: JsonDiffSession) -> None:
        session.compare_texts('{"a": 1}', '{"a": 2}')
        session.compare_texts('{"a": 1}', '{"a": 2}')
        assert session.cache.misses == 2
        assert session.cache.hits == 2


class TestExportReport:
    def test_report(self, session: JsonDiffSession) -> None:
        report = session.export_report(
            '{"name": "John", "age": 30}',
            '{"name": "John", "age": 31, "city": "NYC"}',
        )
        assert "## Added" in report
        assert "1 added, 1 changed (2 total changes)" in report

    def test_invalid_side_raises(self, session: JsonDiffSession) -> None:
        with pytest.raises(JsonSyntaxError, match="JSON B is invalid: "):
            session.export_report("{}", "{")

    def test_does_not_touch_state(self, session: JsonDiffSession) -> None:
        session.export_report("1", "2")
        assert session.result is None


class TestValidateAndClear:
    def test_validate_uses_cache(self, session: JsonDiffSession) -> None:
        session.validate("[1]")
        session.validate("[1]")
        assert session.cache.hits == 1

    def test_clear(self, session: JsonDiffSession) -> None:
        session.compare_texts("1", "2")
        session.clear()
        assert session.result is None
        assert session.error is None
        assert not session.a_valid
        assert session.last_comparison_time is None
        assert session.cache.curr_size == 2
