"""algorithm subpackage: public API for the diff engine.

Provides the value comparator, the structural differ, the similarity scorer
used for order-insensitive array correlation, and their configuration.
Import from this module (not from sub-modules directly) to stay on the
stable public interface.

Example::

    from json_structural_diff.algorithm import DiffOptions, ValueComparator

    cmp = ValueComparator(DiffOptions(key_fields_for_array_objects=["id"]))
    node = cmp.compare([{"id": 1, "v": "x"}], [{"id": 1, "v": "y"}])
    # node.children[0].path_text == "[id=1]"
"""

from __future__ import annotations

from json_structural_diff.algorithm.comparator import ValueComparator, check_json_value
from json_structural_diff.algorithm.config import ArrayMatchStrategy, DiffOptions
from json_structural_diff.algorithm.differ import StructuralDiffer
from json_structural_diff.algorithm.similarity import StructuralSimilarity

__all__ = [
    "ArrayMatchStrategy",
    "DiffOptions",
    "StructuralDiffer",
    "StructuralSimilarity",
    "ValueComparator",
    "check_json_value",
]
