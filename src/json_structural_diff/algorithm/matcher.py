"""Bipartite matchers over a similarity matrix.

Both matchers take an ``(m, n)`` matrix where cell ``[i, j]`` is the
similarity in [0, 1] between element ``i`` of array A and element ``j`` of
array B, and return the correlated ``(i, j)`` pairs sorted by ``i``.  Without
a ``threshold`` every row or every column (whichever is fewer) is paired,
however low the similarity.  With one, pairs scoring at or below it are
never returned.

- ``greedy_match``: takes pairs in descending similarity; ties broken by the
  lowest A index, then the lowest B index.  Deterministic, not optimal.
- ``optimal_match``: maximum total similarity via ``hungarian_match``.

``hungarian_match`` wraps scipy's ``linear_sum_assignment`` so that
infinite-cost cells never reach the solver (which would raise
``ValueError``).  After assignment, pairs that landed on originally-infinite
positions are filtered out.  Guard value formula: ``finite_max * 2.0 + 1.0``
"""

from __future__ import annotations

import numpy as np
from scipy.optimize import linear_sum_assignment  # type: ignore[import-untyped]

__all__ = ["greedy_match", "hungarian_match", "optimal_match"]


def _allowed(similarity: np.ndarray, threshold: float | None) -> np.ndarray:
    if threshold is None:
        return np.ones(similarity.shape, dtype=bool)
    return similarity > threshold


def greedy_match(
    similarity: np.ndarray, threshold: float | None = None
) -> list[tuple[int, int]]:
    """Correlate rows and columns greedily by descending similarity.

    Args:
        similarity: 2-D matrix of shape ``(m, n)`` with values in [0, 1].
        threshold:  Pairs with similarity ``<= threshold`` are skipped.
                    None keeps every pair as a candidate.

    Returns:
        List of ``(row, col)`` pairs sorted by row; each row and each column
        appears at most once.
    """
    if similarity.size == 0:
        return []

    rows, cols = np.nonzero(_allowed(similarity, threshold))
    if rows.size == 0:
        return []

    scores = similarity[rows, cols]
    # np.lexsort sorts by the LAST key first: score desc, then row, then col
    order = np.lexsort((cols, rows, -scores))

    m, n = similarity.shape
    used_rows = np.zeros(m, dtype=bool)
    used_cols = np.zeros(n, dtype=bool)
    limit = min(m, n)
    pairs: list[tuple[int, int]] = []

    for k in order.tolist():
        i = int(rows[k])
        j = int(cols[k])
        if used_rows[i] or used_cols[j]:
            continue
        used_rows[i] = True
        used_cols[j] = True
        pairs.append((i, j))
        if len(pairs) == limit:
            break

    pairs.sort()
    return pairs


def optimal_match(
    similarity: np.ndarray, threshold: float | None = None
) -> list[tuple[int, int]]:
    """Correlate rows and columns maximizing total similarity.

    Cells at or below ``threshold`` are marked forbidden (infinite cost).

    Args:
        similarity: 2-D matrix of shape ``(m, n)`` with values in [0, 1].
        threshold:  Pairs with similarity ``<= threshold`` are forbidden.
                    None forbids nothing.

    Returns:
        List of ``(row, col)`` pairs sorted by row.
    """
    if similarity.size == 0:
        return []
    sim = np.asarray(similarity, dtype=float)
    cost = np.where(_allowed(sim, threshold), 1.0 - sim, np.inf)
    row_ind, col_ind = hungarian_match(cost)
    return sorted(zip(row_ind.tolist(), col_ind.tolist(), strict=True))


def hungarian_match(
    cost_matrix: np.ndarray,
) -> tuple[np.ndarray, np.ndarray]:
    """Compute optimal bipartite assignment with np.inf guard.

    Args:
        cost_matrix: 2-D cost matrix of shape ``(m, n)``.  May contain
            ``np.inf`` to mark forbidden assignments.

    Returns:
        Tuple ``(row_ind, col_ind)`` of 1-D integer arrays giving the
        optimal assignment, with any pair whose *original* cost was
        infinite removed.  Empty arrays are returned when no valid
        assignment exists.
    """
    if cost_matrix.size == 0:
        return np.array([], dtype=int), np.array([], dtype=int)

    cost = np.asarray(cost_matrix, dtype=float)
    inf_mask = np.isinf(cost)

    if inf_mask.all():
        return np.array([], dtype=int), np.array([], dtype=int)

    if inf_mask.any():
        finite_max = float(cost[~inf_mask].max())
        guard_value = finite_max * 2.0 + 1.0
        cost = np.where(inf_mask, guard_value, cost)

    row_ind, col_ind = linear_sum_assignment(cost)

    if inf_mask.any():
        keep = ~inf_mask[row_ind, col_ind]
        row_ind = row_ind[keep]
        col_ind = col_ind[keep]

    return row_ind, col_ind
