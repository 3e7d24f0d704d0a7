"""In-place LU decomposition driven by relative pivoting."""
from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .errors import (
    DecompositionStateError,
    LUMatrixError,
    MatrixNotPopulated,
    NumericOverflow,
    SingularPivot,
)
from .pivot import select_pivot
from .store import DecompositionState, MatrixStore, resolve_tolerance

logger = logging.getLogger(__name__)


@dataclass
class Decomposition:
    """Snapshot of a finished factorization ``P·A = L·U``.

    ``lu`` holds the combined factors: entries strictly below the diagonal
    are the multipliers of ``L`` (whose unit diagonal is implicit), entries on
    and above it belong to ``U``.  ``permutation[k]`` is the original row now
    at position ``k``.
    """

    n: int
    lu: List[List[float]]
    permutation: Tuple[int, ...]
    swaps: int
    tolerance: float

    @classmethod
    def from_store(cls, store: MatrixStore) -> "Decomposition":
        store.require_decomposed()
        return cls(
            n=store.n,
            lu=store.to_rows(),
            permutation=store.permutation,
            swaps=store.swaps,
            tolerance=store.tolerance,
        )

    @property
    def permutation_one_based(self) -> List[int]:
        return [index + 1 for index in self.permutation]

    @property
    def sign(self) -> int:
        """Sign of the permutation, ``(-1) ** swaps``."""
        return -1 if self.swaps % 2 else 1

    def lower(self) -> List[List[float]]:
        return [
            [self.lu[i][j] if j < i else (1.0 if j == i else 0.0) for j in range(self.n)]
            for i in range(self.n)
        ]

    def upper(self) -> List[List[float]]:
        return [[self.lu[i][j] if j >= i else 0.0 for j in range(self.n)] for i in range(self.n)]

    def permutation_matrix(self) -> List[List[float]]:
        return [[1.0 if j == self.permutation[i] else 0.0 for j in range(self.n)] for i in range(self.n)]

    def permute(self, rows: Sequence[Sequence[float]]) -> List[List[float]]:
        """Return ``P·rows``: the rows of ``rows`` in pivot order."""

        if len(rows) != self.n:
            raise ValueError(f"Expected {self.n} rows, got {len(rows)}")
        return [list(rows[index]) for index in self.permutation]

    def reconstruct(self) -> List[List[float]]:
        """Multiply the factors back together, returning ``L·U``."""

        n = self.n
        product = [[0.0] * n for _ in range(n)]
        for i in range(n):
            for j in range(n):
                # L[i][k] is zero for k > i and U[k][j] is zero for k > j.
                total = self.lu[i][j] if i <= j else 0.0
                for k in range(min(i, j + 1)):
                    total += self.lu[i][k] * self.lu[k][j]
                product[i][j] = total
        return product

    def determinant(self) -> float:
        """Return ``det(A)`` as the signed product of the pivots."""

        return self.sign * math.prod(self.lu[i][i] for i in range(self.n))

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["permutation"] = list(self.permutation)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Decomposition":
        return cls(
            n=int(data["n"]),
            lu=[[float(value) for value in row] for row in data["lu"]],
            permutation=tuple(int(index) for index in data["permutation"]),
            swaps=int(data["swaps"]),
            tolerance=float(data["tolerance"]),
        )


class Decomposer:
    """Runs the elimination over pivot positions ``0 .. n-1`` on one store.

    ``pivot`` is the next position to process; the run is complete once it
    reaches ``n``.  Any failure marks the store :attr:`DecompositionState.FAILED`
    and leaves the remaining positions untouched.
    """

    def __init__(self, store: MatrixStore, tolerance: Optional[float] = None):
        if store.state is not DecompositionState.PENDING:
            raise DecompositionStateError(
                f"matrix is already {store.state.value}; repopulate it before decomposing again"
            )
        if not store.is_populated:
            raise MatrixNotPopulated(store.missing)
        # An override reaches the store only once the run succeeds.
        self.tolerance = store.tolerance if tolerance is None else resolve_tolerance(tolerance)
        self.store = store
        self.pivot = 0
        store.reset_permutation()

    @property
    def finished(self) -> bool:
        return self.pivot >= self.store.n

    def _fail(self, error: LUMatrixError) -> LUMatrixError:
        self.store.state = DecompositionState.FAILED
        return error

    def step(self) -> int:
        """Process the current pivot position and return the selected row."""

        store = self.store
        pivot = self.pivot
        if self.finished:
            raise DecompositionStateError("decomposition already finished")
        try:
            selected = select_pivot(store, pivot, self.tolerance)
        except LUMatrixError:
            self.store.state = DecompositionState.FAILED
            raise
        if selected != pivot:
            logger.debug("Pivot %d: interchanging rows %d and %d", pivot, pivot, selected)
            store.swap_rows(pivot, selected)
            store.exchange_permutation(pivot, selected)

        n = store.n
        pivot_value = store.entry(pivot, pivot)
        if pivot_value == 0.0:
            raise self._fail(SingularPivot(pivot, self.tolerance))
        for row in range(pivot + 1, n):
            multiplier = store.entry(row, pivot) / pivot_value
            store.subtract_scaled_row(row, pivot, multiplier, pivot + 1)
            store.put(row, pivot, multiplier)
            if not all(math.isfinite(value) for value in store.segment(row, pivot)):
                logger.debug("Row %d overflowed at pivot %d", row, pivot)
                raise self._fail(NumericOverflow(row, pivot))

        self.pivot += 1
        if self.finished:
            store.tolerance = self.tolerance
            store.state = DecompositionState.DECOMPOSED
        return selected

    def run(self) -> Decomposition:
        while not self.finished:
            self.step()
        logger.debug("Decomposed %dx%d matrix with %d swap(s)", self.store.n, self.store.n, self.store.swaps)
        return Decomposition.from_store(self.store)


def decompose(store: MatrixStore, tolerance: Optional[float] = None) -> Decomposition:
    """Factor ``store`` in place and return the resulting :class:`Decomposition`.

    ``tolerance`` overrides the store's own threshold; ``None`` keeps it and a
    negative value selects the default.  The override is stored on the matrix
    only when the run succeeds.  Raises :class:`LinearlyDependentRow` when the
    matrix is singular to within the tolerance and :class:`NumericOverflow`
    when elimination leaves a non-finite entry.
    """

    return Decomposer(store, tolerance).run()


@dataclass
class DecompositionOutcome:
    """Result record for callers that prefer a status flag over exceptions."""

    success: bool
    decomposition: Optional[Decomposition] = None
    error_message: str = ""
    error: Optional[LUMatrixError] = field(default=None, repr=False)


def try_decompose(store: MatrixStore, tolerance: Optional[float] = None) -> DecompositionOutcome:
    try:
        result = decompose(store, tolerance)
    except LUMatrixError as exc:
        logger.warning("Decomposition failed: %s", exc)
        return DecompositionOutcome(success=False, error_message=str(exc), error=exc)
    return DecompositionOutcome(success=True, decomposition=result)


__all__ = [
    "Decomposer",
    "Decomposition",
    "DecompositionOutcome",
    "decompose",
    "try_decompose",
]
