"""Exception hierarchy for the LU matrix core."""
from __future__ import annotations

from typing import Optional


class LUMatrixError(RuntimeError):
    """Base class for every failure raised by :mod:`lupivot`."""


class InvalidDimension(LUMatrixError):
    """Raised when a matrix is requested with fewer than one row."""

    def __init__(self, n: int):
        super().__init__(f"bad matrix dimensions: {n}")
        self.n = n


class IndexOutOfBounds(LUMatrixError):
    """Raised by the 1-indexed element accessor."""

    def __init__(self, i: int, j: int, n: int):
        super().__init__(f"index out of bounds: ({i},{j}) for a {n}x{n} matrix")
        self.i = i
        self.j = j
        self.n = n


class RowIndexOutOfBounds(LUMatrixError):
    """Raised by the 0-indexed row accessor."""

    def __init__(self, row: int, n: int):
        super().__init__(f"row index out of bounds: {row} for a {n}x{n} matrix")
        self.row = row
        self.n = n


class LinearlyDependentRow(LUMatrixError):
    """Raised when a row's remaining magnitude falls below the tolerance.

    ``row`` is the physical position of the offending row at the time it was
    scanned and ``pivot`` the elimination step that was being prepared.
    """

    def __init__(self, row: int, pivot: int, row_max: float, tolerance: float):
        super().__init__(
            f"linearly dependent row detected: row {row} at pivot {pivot} "
            f"(max |a| = {row_max:g} < tolerance {tolerance:g})"
        )
        self.row = row
        self.pivot = pivot
        self.row_max = row_max
        self.tolerance = tolerance


class SingularPivot(LinearlyDependentRow):
    """Raised when every remaining entry of the pivot column is zero."""

    def __init__(self, pivot: int, tolerance: float):
        LUMatrixError.__init__(self, f"linearly dependent row detected: column {pivot} has no nonzero pivot")
        self.row = pivot
        self.pivot = pivot
        self.row_max = 0.0
        self.tolerance = tolerance


class NumericOverflow(LUMatrixError):
    """Raised when elimination produces an infinite or NaN entry."""

    def __init__(self, row: int, pivot: int):
        super().__init__(f"numeric overflow eliminating row {row} at pivot {pivot}")
        self.row = row
        self.pivot = pivot


class BadInput(LUMatrixError):
    """Raised when matrix entries cannot be parsed as real numbers."""

    def __init__(self, message: str, i: Optional[int] = None, j: Optional[int] = None):
        if i is not None and j is not None:
            message = f"bad input at ({i},{j}): {message}"
        else:
            message = f"bad input: {message}"
        super().__init__(message)
        self.i = i
        self.j = j


class MatrixNotPopulated(LUMatrixError):
    """Raised when decomposition is requested before every entry is set."""

    def __init__(self, missing: int):
        super().__init__(f"matrix is not fully populated: {missing} entries missing")
        self.missing = missing


class DecompositionStateError(LUMatrixError):
    """Raised when an operation does not fit the store's decomposition state."""


__all__ = [
    "LUMatrixError",
    "InvalidDimension",
    "IndexOutOfBounds",
    "RowIndexOutOfBounds",
    "LinearlyDependentRow",
    "SingularPivot",
    "NumericOverflow",
    "BadInput",
    "MatrixNotPopulated",
    "DecompositionStateError",
]
