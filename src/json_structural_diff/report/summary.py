"""One-sentence summaries of a comparison."""

from __future__ import annotations

from json_structural_diff.result import DiffResult, DiffStatistics, DiffSummary

__all__ = ["NO_DIFFERENCES", "summarize", "summary_sentence"]

NO_DIFFERENCES = "No differences found"


def summary_sentence(statistics: DiffStatistics) -> str:
    """Return e.g. ``"3 added, 1 removed, 2 changed (6 total changes)"``.

    Zero counters are omitted; a comparison without changes yields
    ``"No differences found"``.
    """
    if statistics.total_changes == 0:
        return NO_DIFFERENCES

    counts = (
        (statistics.added, "added"),
        (statistics.removed, "removed"),
        (statistics.changed, "changed"),
        (statistics.type_changed, "type-changed"),
    )
    parts = [f"{n} {label}" for n, label in counts if n]
    noun = "change" if statistics.total_changes == 1 else "changes"
    return f"{', '.join(parts)} ({statistics.total_changes} total {noun})"


def summarize(result: DiffResult) -> DiffSummary:
    stats = result.statistics
    return DiffSummary(
        summary=summary_sentence(stats),
        has_changes=result.has_changes,
        change_count=stats.total_changes,
    )
