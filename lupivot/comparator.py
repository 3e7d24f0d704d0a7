"""
Reconstruction check for finished decompositions.

Compares ``P·A`` (the original matrix in pivot order) against ``L·U`` built
from the combined factors, and reports element-wise error statistics.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Sequence

from .decomposition import Decomposition

DEFAULT_RELATIVE_TOLERANCE = 1e-9


@dataclass
class ReconstructionCheck:
    """
    Error statistics of ``L·U`` against ``P·A``.

    Attributes:
        n: Matrix dimension
        abs_errors: Absolute error per entry, row-major
        max_abs: Maximum absolute error
        rms: Root mean square error
        scale: Largest magnitude in ``A``, used to normalise ``max_rel``
        max_rel: ``max_abs / scale``
        tolerance: Relative tolerance the check is judged against
    """
    n: int
    abs_errors: List[float] = field(default_factory=list)
    max_abs: float = 0.0
    rms: float = 0.0
    scale: float = 0.0
    max_rel: float = 0.0
    tolerance: float = DEFAULT_RELATIVE_TOLERANCE

    @property
    def within_tolerance(self) -> bool:
        return self.max_rel <= self.tolerance


def compare_reconstruction(
    original: Sequence[Sequence[float]],
    decomposition: Decomposition,
    tolerance: float = DEFAULT_RELATIVE_TOLERANCE,
) -> ReconstructionCheck:
    """
    Check that ``decomposition`` reproduces ``original`` up to row order.

    Args:
        original: The matrix as it was before decomposition
        decomposition: Factors returned by :func:`lupivot.decompose`
        tolerance: Allowed error relative to the largest entry of ``original``

    Returns:
        ReconstructionCheck with per-entry and aggregate errors
    """
    permuted = decomposition.permute(original)
    product = decomposition.reconstruct()

    errors = [
        abs(product[i][j] - permuted[i][j])
        for i in range(decomposition.n)
        for j in range(decomposition.n)
    ]
    scale = max(abs(value) for row in original for value in row)
    max_abs = max(errors)
    return ReconstructionCheck(
        n=decomposition.n,
        abs_errors=errors,
        max_abs=max_abs,
        rms=math.sqrt(sum(e * e for e in errors) / len(errors)),
        scale=scale,
        max_rel=max_abs / scale if scale > 0.0 else max_abs,
        tolerance=tolerance,
    )


__all__ = [
    "DEFAULT_RELATIVE_TOLERANCE",
    "ReconstructionCheck",
    "compare_reconstruction",
]
