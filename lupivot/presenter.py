"""Text rendering of finished decompositions."""
from __future__ import annotations

import sys
from typing import IO, List, Optional, Union

import pandas as pd

from .decomposition import Decomposition
from .store import MatrixStore

COLUMN_WIDTH = 14


def _as_decomposition(source: Union[Decomposition, MatrixStore]) -> Decomposition:
    if isinstance(source, MatrixStore):
        return Decomposition.from_store(source)
    return source


def _frame(rows: List[List[float]]) -> pd.DataFrame:
    n = len(rows)
    return pd.DataFrame(rows, index=range(1, n + 1), columns=range(1, n + 1))


def lower_frame(source: Union[Decomposition, MatrixStore]) -> pd.DataFrame:
    """``L`` with its unit diagonal and zeros above it."""
    return _frame(_as_decomposition(source).lower())


def upper_frame(source: Union[Decomposition, MatrixStore]) -> pd.DataFrame:
    """``U`` with zeros below the diagonal."""
    return _frame(_as_decomposition(source).upper())


def combined_frame(source: Union[Decomposition, MatrixStore]) -> pd.DataFrame:
    return _frame(_as_decomposition(source).lu)


def permutation_frame(source: Union[Decomposition, MatrixStore]) -> pd.DataFrame:
    decomposition = _as_decomposition(source)
    return pd.DataFrame(
        {
            "Position": range(1, decomposition.n + 1),
            "Original Row": decomposition.permutation_one_based,
        }
    )


def _format_grid(frame: pd.DataFrame) -> str:
    return frame.to_string(
        header=False,
        index=False,
        col_space=COLUMN_WIDTH,
        float_format=lambda value: f"{value:g}",
    )


def render_display(source: Union[Decomposition, MatrixStore]) -> str:
    """Return L, U, the 1-indexed swap vector and the swap count as text."""

    decomposition = _as_decomposition(source)
    lines = [
        "Matrix L",
        _format_grid(lower_frame(decomposition)),
        "Matrix U",
        _format_grid(upper_frame(decomposition)),
        "Swap vector " + " ".join(str(index) for index in decomposition.permutation_one_based),
        f"swaps: {decomposition.swaps}",
    ]
    return "\n".join(lines) + "\n"


def render_combined(source: Union[Decomposition, MatrixStore]) -> str:
    """Return the combined L\\U grid followed by the swap count."""

    decomposition = _as_decomposition(source)
    return _format_grid(combined_frame(decomposition)) + f"\nswaps: {decomposition.swaps}\n"


def display(source: Union[Decomposition, MatrixStore], stream: Optional[IO[str]] = None) -> None:
    (stream or sys.stdout).write(render_display(source))


__all__ = [
    "COLUMN_WIDTH",
    "combined_frame",
    "display",
    "lower_frame",
    "permutation_frame",
    "render_combined",
    "render_display",
    "upper_frame",
]
