"""Relative (row-scaled) pivot selection."""
from __future__ import annotations

import logging
from typing import Optional

from .errors import LinearlyDependentRow
from .store import MatrixStore, resolve_tolerance

logger = logging.getLogger(__name__)


def row_magnitude(store: MatrixStore, row: int, pivot: int) -> float:
    """Return ``max(|a[row][j]|)`` over the remaining columns ``j >= pivot``."""

    return max(abs(value) for value in store.segment(row, pivot))


def select_pivot(store: MatrixStore, pivot: int, tolerance: Optional[float] = None) -> int:
    """Return the row in ``[pivot, n)`` best suited to serve as pivot row.

    Each candidate row is scored by ``|a[i][pivot]| / max_j |a[i][j]|`` with
    ``j`` running over the remaining columns, so a row wins when its pivot
    entry dominates the rest of that row, not when it is largest in the
    column.  Only a strictly larger ratio replaces the current best, which
    keeps the lowest-index row on ties and returns ``pivot`` itself when no
    ratio exceeds zero.

    Every scanned row is checked against ``tolerance`` (the store's own when
    omitted); the first row whose remaining maximum falls below it raises
    :class:`LinearlyDependentRow`.  An all-zero row is rejected even with a
    zero tolerance.
    """

    n = store.n
    if pivot < 0 or pivot >= n:
        raise ValueError(f"Pivot index {pivot} outside [0, {n})")
    limit = store.tolerance if tolerance is None else resolve_tolerance(tolerance)

    best_row = pivot
    best_ratio = 0.0
    for row in range(pivot, n):
        row_max = row_magnitude(store, row, pivot)
        if row_max < limit or row_max == 0.0:
            logger.debug("Row %d below tolerance at pivot %d (max %g)", row, pivot, row_max)
            raise LinearlyDependentRow(row, pivot, row_max, limit)
        ratio = abs(store.entry(row, pivot)) / row_max
        if ratio > best_ratio:
            best_ratio = ratio
            best_row = row
    return best_row


__all__ = ["row_magnitude", "select_pivot"]
