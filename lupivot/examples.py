"""Reference matrices."""
from __future__ import annotations

from typing import Callable, Dict, List

from .config import MatrixConfiguration


def identity(n: int) -> List[List[float]]:
    return [[1.0 if i == j else 0.0 for j in range(n)] for i in range(n)]


def three_by_three_example() -> MatrixConfiguration:
    """Return the 3x3 walkthrough matrix.

    Rows 0 and 1 tie on the relative ratio at the first pivot, so row 0 is
    kept and the run finishes without interchanges.
    """

    return MatrixConfiguration(
        values=[
            [2.0, 1.0, 1.0],
            [4.0, 3.0, 3.0],
            [8.0, 7.0, 9.0],
        ],
        tolerance=1e-6,
        label="3x3 walkthrough",
    )


def scaled_pivot_example() -> MatrixConfiguration:
    """Return a matrix where relative pivoting and column-magnitude pivoting disagree.

    Row 0 has the largest entry in column 0, but row 1's entry dominates its
    own row, so the relative rule interchanges the two.
    """

    return MatrixConfiguration(
        values=[
            [10.0, 1000.0],
            [1.0, 1.0],
        ],
        tolerance=1e-6,
        label="scaled pivot",
    )


def permuted_example() -> MatrixConfiguration:
    """Return a 4x4 matrix that needs interchanges at several pivots."""

    return MatrixConfiguration(
        values=[
            [0.0, 2.0, 1.0, 4.0],
            [1.0, 1.0, 0.0, 2.0],
            [3.0, 0.5, 2.0, 1.0],
            [2.0, 4.0, 3.0, 0.0],
        ],
        tolerance=1e-6,
        label="4x4 permuted",
    )


def singular_example() -> MatrixConfiguration:
    """Return a matrix whose third row is the sum of the first two."""

    return MatrixConfiguration(
        values=[
            [1.0, 2.0, 3.0],
            [4.0, 5.0, 6.0],
            [5.0, 7.0, 9.0],
        ],
        tolerance=1e-6,
        label="singular",
    )


EXAMPLES: Dict[str, Callable[[], MatrixConfiguration]] = {
    "3x3": three_by_three_example,
    "scaled": scaled_pivot_example,
    "permuted": permuted_example,
    "singular": singular_example,
}


__all__ = [
    "EXAMPLES",
    "identity",
    "permuted_example",
    "scaled_pivot_example",
    "singular_example",
    "three_by_three_example",
]
