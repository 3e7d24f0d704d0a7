"""Dense square matrix storage with O(1) row interchange.

Entries live in one contiguous row-major buffer.  Physical rows are never
moved: a row-order index maps each logical row position to the offset of
its storage block, so interchanging two rows only exchanges two integers.
The store also owns the permutation vector and swap counter that the
decomposer maintains.
"""
from __future__ import annotations

import logging
import math
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple

from .errors import (
    BadInput,
    DecompositionStateError,
    IndexOutOfBounds,
    InvalidDimension,
    RowIndexOutOfBounds,
)

logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE = 1.0 / 1024


def resolve_tolerance(tolerance: Optional[float]) -> float:
    """Return ``tolerance`` or :data:`DEFAULT_TOLERANCE` for ``None``/negative values."""

    if tolerance is None or tolerance < 0.0:
        return DEFAULT_TOLERANCE
    return float(tolerance)


class DecompositionState(str, Enum):
    PENDING = "pending"
    DECOMPOSED = "decomposed"
    FAILED = "failed"


class MatrixStore:
    """An ``n x n`` grid of floats plus its permutation bookkeeping.

    Two access conventions coexist:

    * :meth:`at` / :meth:`assign` take 1-indexed ``(i, j)`` and accept only
      ``1 <= i, j <= n - 1``.  Index ``0`` and index ``n`` are both rejected
      with :class:`IndexOutOfBounds`.
    * :meth:`row` / ``store[r]`` take a 0-indexed row ``0 <= r < n`` and
      raise :class:`RowIndexOutOfBounds` otherwise.
    """

    def __init__(self, n: int, tolerance: Optional[float] = None):
        if n < 1:
            raise InvalidDimension(n)
        self._dim = int(n)
        self._data: List[float] = [0.0] * (self._dim * self._dim)
        self._assigned: List[bool] = [False] * (self._dim * self._dim)
        self._rows: List[int] = [row * self._dim for row in range(self._dim)]
        self._order: List[int] = list(range(self._dim))
        self._swaps = 0
        self.tolerance = resolve_tolerance(tolerance)
        self.state = DecompositionState.PENDING

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[float]], tolerance: Optional[float] = None) -> "MatrixStore":
        """Build a fully populated store from a square list of rows."""

        store = cls(len(rows), tolerance=tolerance)
        store.fill(rows)
        return store

    # ------------------------------------------------------------------
    # Shape and state
    # ------------------------------------------------------------------
    @property
    def n(self) -> int:
        return self._dim

    def __len__(self) -> int:
        return self._dim

    @property
    def missing(self) -> int:
        """Number of entries that have never been written."""
        return self._assigned.count(False)

    @property
    def is_populated(self) -> bool:
        return self.missing == 0

    @property
    def permutation(self) -> Tuple[int, ...]:
        """Original row index occupying each position (0-indexed)."""
        return tuple(self._order)

    @property
    def swaps(self) -> int:
        return self._swaps

    def require_decomposed(self) -> None:
        """Raise unless the store holds the factors of a successful decomposition."""

        if self.state is not DecompositionState.DECOMPOSED:
            raise DecompositionStateError(
                f"matrix holds no valid factorization (state: {self.state.value})"
            )

    # ------------------------------------------------------------------
    # Element and row access
    # ------------------------------------------------------------------
    def _check_element(self, i: int, j: int) -> int:
        if i < 1 or j < 1 or i >= self._dim or j >= self._dim:
            raise IndexOutOfBounds(i, j, self._dim)
        return self._rows[i] + j

    def _check_row(self, row: int) -> int:
        if row < 0 or row >= self._dim:
            raise RowIndexOutOfBounds(row, self._dim)
        return self._rows[row]

    def at(self, i: int, j: int) -> float:
        """Return the entry at 1-indexed position ``(i, j)``."""

        return self._data[self._check_element(i, j)]

    def assign(self, i: int, j: int, value: float) -> None:
        """Write ``value`` at 1-indexed position ``(i, j)``."""

        offset = self._check_element(i, j)
        self._write(offset, value, row=i - 1, col=j - 1)

    def row(self, row: int) -> List[float]:
        """Return a copy of the 0-indexed ``row``."""

        start = self._check_row(row)
        return self._data[start:start + self._dim]

    def __getitem__(self, row: int) -> List[float]:
        return self.row(row)

    def set_row(self, row: int, values: Sequence[float]) -> None:
        """Overwrite the 0-indexed ``row`` with ``values``."""

        start = self._check_row(row)
        if len(values) != self._dim:
            raise ValueError(f"Row {row} must have {self._dim} entries, got {len(values)}")
        for col, value in enumerate(values):
            self._write(start + col, value, row=row, col=col)

    def fill(self, rows: Sequence[Sequence[float]]) -> None:
        """Populate every entry from a square list of rows."""

        if len(rows) != self._dim:
            raise ValueError(f"Matrix must have {self._dim} rows, got {len(rows)}")
        for index, values in enumerate(rows):
            self.set_row(index, values)

    def fill_flat(self, values: Iterable[float]) -> None:
        """Populate every entry from ``n * n`` values in row-major order."""

        flat = list(values)
        if len(flat) != self._dim * self._dim:
            raise ValueError(f"Expected {self._dim * self._dim} values, got {len(flat)}")
        for index in range(self._dim):
            self.set_row(index, flat[index * self._dim:(index + 1) * self._dim])

    def to_rows(self) -> List[List[float]]:
        """Return the current contents as a list of rows in position order."""

        return [self.row(index) for index in range(self._dim)]

    def copy(self) -> "MatrixStore":
        clone = MatrixStore(self._dim, tolerance=self.tolerance)
        clone._data = list(self._data)
        clone._assigned = list(self._assigned)
        clone._rows = list(self._rows)
        clone._order = list(self._order)
        clone._swaps = self._swaps
        clone.state = self.state
        return clone

    def _write(self, offset: int, value: float, row: Optional[int] = None, col: Optional[int] = None) -> None:
        i = None if row is None else row + 1
        j = None if col is None else col + 1
        try:
            number = float(value)
        except (TypeError, ValueError) as exc:
            raise BadInput(f"{value!r} is not a real number", i, j) from exc
        if not math.isfinite(number):
            raise BadInput(f"{value!r} is not a finite number", i, j)
        if self.state is not DecompositionState.PENDING:
            # The other slots hold factors now, not caller data.
            logger.debug("Matrix modified after decomposition; factors discarded")
            self._assigned = [False] * (self._dim * self._dim)
            self.reset_permutation()
            self.state = DecompositionState.PENDING
        self._data[offset] = number
        self._assigned[offset] = True

    # ------------------------------------------------------------------
    # Interchange and permutation bookkeeping
    # ------------------------------------------------------------------
    def swap_rows(self, first: int, second: int) -> None:
        """Exchange the storage of two 0-indexed rows.

        Only the row-order index changes; the permutation vector is left to
        the caller (see :meth:`exchange_permutation`).
        """

        self._check_row(first)
        self._check_row(second)
        self._rows[first], self._rows[second] = self._rows[second], self._rows[first]

    def exchange_permutation(self, first: int, second: int) -> None:
        """Swap two permutation entries and count the interchange."""

        self._order[first], self._order[second] = self._order[second], self._order[first]
        self._swaps += 1

    def reset_permutation(self) -> None:
        self._order = list(range(self._dim))
        self._swaps = 0

    # ------------------------------------------------------------------
    # Raw 0-indexed access for the pivot selector and decomposer
    # ------------------------------------------------------------------
    def entry(self, row: int, col: int) -> float:
        """Return ``a[row][col]`` (0-indexed, no population bookkeeping)."""

        return self._data[self._rows[row] + col]

    def put(self, row: int, col: int, value: float) -> None:
        """Overwrite ``a[row][col]`` in place without touching the state.

        Used while factoring; callers populating the matrix go through
        :meth:`assign`, :meth:`set_row` or :meth:`fill`.
        """

        self._data[self._rows[row] + col] = value

    def segment(self, row: int, start: int) -> List[float]:
        """Return a copy of ``a[row][start:]``."""

        offset = self._rows[row]
        return self._data[offset + start:offset + self._dim]

    def subtract_scaled_row(self, target: int, source: int, multiplier: float, start: int) -> None:
        """``a[target][j] -= multiplier * a[source][j]`` for ``j >= start``."""

        data = self._data
        target_start = self._rows[target]
        source_start = self._rows[source]
        for col in range(start, self._dim):
            data[target_start + col] -= multiplier * data[source_start + col]

    def __repr__(self) -> str:
        return f"MatrixStore(n={self._dim}, state={self.state.value}, swaps={self._swaps})"


__all__ = [
    "DEFAULT_TOLERANCE",
    "DecompositionState",
    "MatrixStore",
    "resolve_tolerance",
]
