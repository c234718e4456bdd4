"""Structural diff - tree comparison, statistics and reports for JSON values."""

from __future__ import annotations

import logging

from json_structural_diff.algorithm.config import ArrayMatchStrategy, DiffOptions
from json_structural_diff.api import (
    are_json_texts_equal,
    compare_json_values,
    extract_change_paths,
    generate_diff_report,
    summarize_diff,
)
from json_structural_diff.errors import (
    CircularReferenceError,
    InvalidComparisonError,
    InvalidOptionsError,
    JsonDiffError,
    JsonSyntaxError,
    NestingTooDeepError,
)
from json_structural_diff.result import (
    DiffResult,
    DiffStatistics,
    DiffSummary,
    StructureReport,
    ValidationResult,
)
from json_structural_diff.session import JsonDiffSession
from json_structural_diff.tree.nodes import DiffKind, DiffNode
from json_structural_diff.tree.paths import ArrayKey
from json_structural_diff.validation import (
    StructureLimits,
    format_json_for_comparison,
    parse_json_text,
    validate_json_structure,
    validate_json_text,
)
from json_structural_diff.values import MISSING

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__: str = "0.1.0"
__all__: list[str] = [
    "MISSING",
    "ArrayKey",
    "ArrayMatchStrategy",
    "CircularReferenceError",
    "DiffKind",
    "DiffNode",
    "DiffOptions",
    "DiffResult",
    "DiffStatistics",
    "DiffSummary",
    "InvalidComparisonError",
    "InvalidOptionsError",
    "JsonDiffError",
    "JsonDiffSession",
    "JsonSyntaxError",
    "NestingTooDeepError",
    "StructureLimits",
    "StructureReport",
    "ValidationResult",
    "are_json_texts_equal",
    "compare_json_values",
    "extract_change_paths",
    "format_json_for_comparison",
    "generate_diff_report",
    "parse_json_text",
    "summarize_diff",
    "validate_json_structure",
    "validate_json_text",
]
