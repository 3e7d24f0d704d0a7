"""Stream input for matrix entries."""
from __future__ import annotations

from typing import IO, Iterator, List, Optional

from .errors import BadInput
from .store import MatrixStore


def _tokens(stream: IO[str]) -> Iterator[str]:
    for line in stream:
        yield from line.split()


def parse_value(token: str, i: int, j: int) -> float:
    """Convert one token to a float, reporting the 1-indexed position on failure."""

    try:
        return float(token)
    except ValueError as exc:
        raise BadInput(f"{token!r} is not a real number", i, j) from exc


def read_entries(stream: IO[str], n: int, prompt: Optional[IO[str]] = None) -> List[List[float]]:
    """Read ``n * n`` whitespace-separated reals in row-major order.

    When ``prompt`` is given, ``(i,j) = `` is written to it before each entry
    is read, with 1-indexed positions.  Missing or malformed values raise
    :class:`BadInput`.
    """

    tokens = _tokens(stream)
    rows: List[List[float]] = []
    for i in range(n):
        row: List[float] = []
        for j in range(n):
            if prompt is not None:
                prompt.write(f"({i + 1},{j + 1}) = ")
                prompt.flush()
            token = next(tokens, None)
            if token is None:
                raise BadInput("unexpected end of input", i + 1, j + 1)
            row.append(parse_value(token, i + 1, j + 1))
        rows.append(row)
    return rows


def read_matrix(store: MatrixStore, stream: IO[str], prompt: Optional[IO[str]] = None) -> MatrixStore:
    """Populate ``store`` from ``stream`` and return it."""

    store.fill(read_entries(stream, store.n, prompt=prompt))
    return store


def read_size(text: str) -> int:
    """Parse a matrix dimension typed by the user."""

    try:
        return int(text.strip())
    except ValueError as exc:
        raise BadInput(f"{text.strip()!r} is not an integer size") from exc


__all__ = ["parse_value", "read_entries", "read_matrix", "read_size"]
