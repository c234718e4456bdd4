"""StructuralSimilarity: normalized tree-edit similarity between JSON values.

Used to correlate array elements when ``ignore_array_order`` is set.  The
score is in [0, 1]: 1.0 means equal under the diff options, 0.0 means
unrelated (in particular any pair of different JSON types).

Scoring rules:
- Equal values (option-aware):   1.0
- Different JSON types:          0.0
- Unequal strings:               normalized Levenshtein similarity
- Other unequal scalars:         0.0
- Objects:  children matched by key identity; unmatched keys cost 1.0 each.
- Arrays:   ordered DP alignment, or Hungarian assignment under ignore-order.

Per-level normalization (STED formula) is applied at every container::

    sim(T1, T2) = 1 - min(1, [d_matched + lambda_ * |n_left - n_right|]
                             / max(n_left, n_right, 1))

Containers at or past ``max_depth`` degrade to plain equality.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from cachetools import LRUCache

from json_structural_diff.algorithm.config import DiffOptions
from json_structural_diff.algorithm.matcher import hungarian_match
from json_structural_diff.values import (
    JsonType,
    normalize_string,
    type_of,
    values_equal,
)

__all__ = ["StructuralSimilarity", "levenshtein_distance", "normalize_similarity"]

# Penalty multiplier for unmatched children
LAMBDA_UNMATCHED = 0.1


def normalize_similarity(
    d_matched: float,
    n_left: int,
    n_right: int,
    lambda_: float = LAMBDA_UNMATCHED,
) -> float:
    """Normalize a raw child-matching distance to a [0, 1] similarity score.

    The ``max(..., 1)`` guard in the denominator prevents ZeroDivisionError
    when both child lists are empty.
    """
    unmatched_penalty = lambda_ * abs(n_left - n_right)
    total_cost = d_matched + unmatched_penalty
    denominator = max(n_left, n_right, 1)
    return 1.0 - min(1.0, total_cost / denominator)


def levenshtein_distance(a: str, b: str) -> int:
    """Compute the Levenshtein (edit) distance between two strings.

    Uses a space-optimized rolling-row dynamic-programming implementation.
    The shorter string is always placed on the inner loop.
    """
    if a == b:
        return 0

    if len(a) < len(b):
        a, b = b, a

    if len(b) == 0:
        return len(a)

    prev_row = list(range(len(b) + 1))

    for i, ch_a in enumerate(a):
        curr_row = [i + 1] + [0] * len(b)
        for j, ch_b in enumerate(b):
            insert_cost = curr_row[j] + 1
            delete_cost = prev_row[j + 1] + 1
            replace_cost = prev_row[j] + (0 if ch_a == ch_b else 1)
            curr_row[j + 1] = min(insert_cost, delete_cost, replace_cost)
        prev_row = curr_row

    return prev_row[len(b)]


class StructuralSimilarity:
    """Similarity scorer bound to one set of ``DiffOptions``.

    Container scores are memoized per instance, keyed by the identity of the
    two values and their depth.  An instance must therefore only be used
    while the compared inputs are alive and unmodified, i.e. within a single
    comparison.

    Example::

        sim = StructuralSimilarity(DiffOptions(ignore_array_order=True))
        sim.score({"id": 1, "v": "x"}, {"id": 1, "v": "y"})   # 0.5
    """

    def __init__(self, options: DiffOptions, max_cache_size: int = 4096) -> None:
        self._options = options
        self._cache: LRUCache[tuple[int, int, int], float] = LRUCache(
            maxsize=max_cache_size
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def score(self, a: Any, b: Any, depth: int = 0) -> float:
        """Return the similarity of two JSON values found at ``depth``."""
        kind = type_of(a)
        if kind != type_of(b):
            return 0.0

        if kind not in (JsonType.OBJECT, JsonType.ARRAY):
            return self._scalar_score(a, b, kind)

        key = (id(a), id(b), depth)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        max_depth = self._options.max_depth
        if max_depth is not None and depth >= max_depth:
            result = 1.0 if values_equal(a, b, self._options) else 0.0
        elif kind == JsonType.OBJECT:
            result = self._object_score(a, b, depth)
        else:
            result = self._array_score(a, b, depth)

        self._cache[key] = result
        return result

    def matrix(self, items_a: list[Any], items_b: list[Any], depth: int) -> np.ndarray:
        """Return the ``(len(items_a), len(items_b))`` pairwise similarity matrix."""
        sim = np.zeros((len(items_a), len(items_b)), dtype=float)
        for i, a in enumerate(items_a):
            for j, b in enumerate(items_b):
                sim[i, j] = self.score(a, b, depth)
        return sim

    # ------------------------------------------------------------------
    # Per-type scores
    # ------------------------------------------------------------------

    def _scalar_score(self, a: Any, b: Any, kind: JsonType) -> float:
        if values_equal(a, b, self._options):
            return 1.0
        if kind != JsonType.STRING:
            return 0.0
        norm_a = normalize_string(a, self._options)
        norm_b = normalize_string(b, self._options)
        distance = levenshtein_distance(norm_a, norm_b)
        return 1.0 - distance / max(len(norm_a), len(norm_b), 1)

    def _object_score(self, a: dict[str, Any], b: dict[str, Any], depth: int) -> float:
        if not a and not b:
            return 1.0
        d_matched = 0.0
        for key, value in a.items():
            if key in b:
                d_matched += 1.0 - self.score(value, b[key], depth + 1)
            else:
                d_matched += 1.0
        d_matched += sum(1.0 for key in b if key not in a)
        return normalize_similarity(d_matched, len(a), len(b))

    def _array_score(self, a: list[Any], b: list[Any], depth: int) -> float:
        if not a and not b:
            return 1.0
        if self._options.ignore_array_order or self._options.key_fields_for_array_objects:
            d_matched = self._unordered_distance(a, b, depth + 1)
        else:
            d_matched = self._sequence_distance(a, b, depth + 1)
        return normalize_similarity(d_matched, len(a), len(b))

    # ------------------------------------------------------------------
    # Child matching strategies
    # ------------------------------------------------------------------

    def _unordered_distance(self, a: list[Any], b: list[Any], depth: int) -> float:
        """Optimal bipartite distance; unmatched elements cost 1.0 each."""
        m, n = len(a), len(b)
        if m == 0 or n == 0:
            return float(m + n)
        cost = 1.0 - self.matrix(a, b, depth)
        row_ind, col_ind = hungarian_match(cost)
        matched_cost = float(cost[row_ind, col_ind].sum()) if len(row_ind) else 0.0
        unmatched = (m - len(row_ind)) + (n - len(col_ind))
        return matched_cost + unmatched

    def _sequence_distance(self, a: list[Any], b: list[Any], depth: int) -> float:
        """Ordered alignment via DP edit distance (insert/delete cost 1.0)."""
        m, n = len(a), len(b)

        # dp[i][j] = min cost to align a[:i] with b[:j]
        dp = [[0.0] * (n + 1) for _ in range(m + 1)]
        for i in range(1, m + 1):
            dp[i][0] = float(i)
        for j in range(1, n + 1):
            dp[0][j] = float(j)

        for i in range(1, m + 1):
            for j in range(1, n + 1):
                sub_cost = 1.0 - self.score(a[i - 1], b[j - 1], depth)
                dp[i][j] = min(
                    dp[i - 1][j] + 1.0,  # delete
                    dp[i][j - 1] + 1.0,  # insert
                    dp[i - 1][j - 1] + sub_cost,  # substitute
                )

        return dp[m][n]
