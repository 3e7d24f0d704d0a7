"""Serialization helpers for matrix configurations."""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, IO, List, Optional, Tuple, Union

from .store import MatrixStore, resolve_tolerance

_JSONSource = Union[str, Path, IO[str]]


def _to_float_rows(rows: Any) -> List[List[float]]:
    if not isinstance(rows, list):
        raise ValueError("Matrix 'values' must be a list of rows")
    resolved: List[List[float]] = []
    for row in rows:
        if not isinstance(row, (list, tuple)):
            raise ValueError("Each matrix row must be a list of numbers")
        resolved.append([float(value) for value in row])
    return resolved


@dataclass
class MatrixConfiguration:
    """Container for a matrix to be decomposed.

    ``tolerance`` keeps the raw value as written; a negative number is the
    sentinel for the default threshold and is only resolved when the store
    is built.
    """

    values: List[List[float]]
    tolerance: float = -1.0
    label: str = ""
    description: str = ""

    @property
    def size(self) -> int:
        return len(self.values)

    @property
    def resolved_tolerance(self) -> float:
        return resolve_tolerance(self.tolerance)

    def build_store(self) -> MatrixStore:
        """Create a populated :class:`MatrixStore` for this configuration."""

        return MatrixStore.from_rows(self.values, tolerance=self.tolerance)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representing the configuration."""

        return {
            "label": self.label,
            "description": self.description,
            "size": self.size,
            "tolerance": self.tolerance,
            "values": [list(row) for row in self.values],
        }

    def to_json(self, *, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatrixConfiguration":
        values = _to_float_rows(data.get("values", []))
        size = data.get("size")
        if size is not None and int(size) != len(values):
            raise ValueError(f"Declared size {size} does not match {len(values)} rows")
        tolerance = data.get("tolerance")
        return cls(
            values=values,
            tolerance=float(tolerance) if tolerance is not None else -1.0,
            label=str(data.get("label", "")),
            description=str(data.get("description", "")),
        )

    @classmethod
    def from_json(cls, source: _JSONSource) -> "MatrixConfiguration":
        """Load a configuration from a JSON file path or file-like object."""

        if hasattr(source, "read"):
            data = json.load(source)  # type: ignore[arg-type]
        else:
            path = Path(source)
            with path.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
        if not isinstance(data, dict):
            raise ValueError("Matrix configuration JSON must contain an object at the top level")
        return cls.from_dict(data)

    def save(self, target: Union[str, Path, IO[str]], *, indent: Optional[int] = 2) -> None:
        payload = self.to_json(indent=indent)
        if hasattr(target, "write"):
            target.write(payload)  # type: ignore[arg-type]
        else:
            Path(target).write_text(payload, encoding="utf-8")


def load_matrix_from_json(source: _JSONSource) -> Tuple[MatrixStore, MatrixConfiguration]:
    """Load a populated :class:`MatrixStore` and its configuration from JSON."""

    config = MatrixConfiguration.from_json(source)
    return config.build_store(), config


__all__ = [
    "MatrixConfiguration",
    "load_matrix_from_json",
]
