"""Report subpackage: statistics, textual report and summaries of a Diff Tree."""

from json_structural_diff.report.markdown import render_report, render_value
from json_structural_diff.report.statistics import compute_statistics
from json_structural_diff.report.summary import summarize, summary_sentence

__all__ = [
    "compute_statistics",
    "render_report",
    "render_value",
    "summarize",
    "summary_sentence",
]
