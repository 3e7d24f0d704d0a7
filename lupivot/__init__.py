"""Core interfaces for LU decomposition with relative partial pivoting."""

from .errors import (
    LUMatrixError,
    InvalidDimension,
    IndexOutOfBounds,
    RowIndexOutOfBounds,
    LinearlyDependentRow,
    SingularPivot,
    NumericOverflow,
    BadInput,
    MatrixNotPopulated,
    DecompositionStateError,
)
from .store import DEFAULT_TOLERANCE, DecompositionState, MatrixStore, resolve_tolerance
from .pivot import select_pivot
from .decomposition import (
    Decomposer,
    Decomposition,
    DecompositionOutcome,
    decompose,
    try_decompose,
)
from .comparator import ReconstructionCheck, compare_reconstruction
from .config import MatrixConfiguration, load_matrix_from_json

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
    "DEFAULT_TOLERANCE",
    "DecompositionState",
    "MatrixStore",
    "resolve_tolerance",
    "select_pivot",
    "Decomposer",
    "Decomposition",
    "DecompositionOutcome",
    "decompose",
    "try_decompose",
    "ReconstructionCheck",
    "compare_reconstruction",
    "MatrixConfiguration",
    "load_matrix_from_json",
]
