"""Dense row-major matrices built from :class:`Vector` rows."""

from __future__ import annotations

import numbers
from typing import Iterable, Iterator, Tuple

import numpy as np

from .errors import DimensionMismatch
from .types import Array
from .vector import Vector, _checked_index


class Matrix:
    """Sequence of equal-length rows with a shape fixed at construction.

    Example::

        [ v1 ]   [[a11, a12, a13]]
        [ v2 ] = [[a21, a22, a23]]
        [ v3 ]   [[a31, a32, a33]]
    """

    __slots__ = ("_data",)

    def __init__(self, rows: int, cols: int) -> None:
        if rows < 0 or cols < 0:
            raise ValueError(f"Matrix dimensions must be non-negative, got {rows}x{cols}")
        self._data = np.zeros((int(rows), int(cols)), dtype=np.float64)

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[float]]) -> "Matrix":
        vectors = [row if isinstance(row, Vector) else Vector(row) for row in rows]
        widths = {len(v) for v in vectors}
        if len(widths) > 1:
            raise DimensionMismatch(f"All matrix rows must have the same length, got {sorted(widths)}")
        cols = widths.pop() if widths else 0
        matrix = cls(len(vectors), cols)
        for idx, vector in enumerate(vectors):
            matrix[idx] = vector
        return matrix

    @classmethod
    def _wrap(cls, data: Array) -> "Matrix":
        matrix = cls.__new__(cls)
        matrix._data = data
        return matrix

    # ------------------------------------------------------------------
    # Shape and element access

    @property
    def rows(self) -> int:
        return int(self._data.shape[0])

    @property
    def cols(self) -> int:
        return int(self._data.shape[1])

    @property
    def shape(self) -> Tuple[int, int]:
        return self.rows, self.cols

    def __len__(self) -> int:
        return self.rows

    def __iter__(self) -> Iterator[Vector]:
        return (Vector._wrap(row.copy()) for row in self._data)

    def __getitem__(self, index):
        if isinstance(index, tuple):
            row, col = self._position(index)
            return float(self._data[row, col])
        return Vector._wrap(self._data[_checked_index(index, self.rows, "row")].copy())

    def __setitem__(self, index, value) -> None:
        if isinstance(index, tuple):
            row, col = self._position(index)
            self._data[row, col] = float(value)
            return
        row = _checked_index(index, self.rows, "row")
        if not isinstance(value, Vector):
            value = Vector(value)
        if len(value) != self.cols:
            raise DimensionMismatch(
                f"Row length {len(value)} does not match matrix column count {self.cols}"
            )
        self._data[row] = value._data

    def _position(self, index) -> Tuple[int, int]:
        if len(index) != 2:
            raise IndexError(f"Matrix index needs (row, col), got {index!r}")
        row, col = index
        return _checked_index(row, self.rows, "row"), _checked_index(col, self.cols, "column")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._data, other._data))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Matrix(rows={self.rows}, cols={self.cols})"

    def __array__(self, dtype=None, copy=None) -> Array:
        if dtype is None:
            return self._data.copy()
        return self._data.astype(dtype)

    # ------------------------------------------------------------------
    # Arithmetic

    def __matmul__(self, vector: Vector) -> Vector:
        if not isinstance(vector, Vector):
            return NotImplemented
        if self.cols != len(vector):
            raise DimensionMismatch(
                "Number of columns of matrix must be equal to the size of vector: "
                f"{self.cols} != {len(vector)}"
            )
        return Vector._wrap(self._data @ vector._data)

    def __mul__(self, vector: Vector) -> Vector:
        return self.__matmul__(vector)

    def __sub__(self, vector: Vector) -> "Matrix":
        if not isinstance(vector, Vector):
            return NotImplemented
        if self.rows != len(vector):
            raise DimensionMismatch(
                "Number of rows of matrix must be equal to the size of vector: "
                f"{self.rows} != {len(vector)}"
            )
        return Matrix._wrap(self._data - vector._data[:, np.newaxis])

    def transpose(self) -> "Matrix":
        return Matrix._wrap(self._data.T.copy())

    @property
    def T(self) -> "Matrix":
        return self.transpose()

    def subtract_from_row(self, row: int, delta: Vector) -> None:
        """In-place ``self[row] -= delta``."""

        row = _checked_index(row, self.rows, "row")
        if len(delta) != self.cols:
            raise DimensionMismatch(
                f"Row update of length {len(delta)} does not match matrix column count {self.cols}"
            )
        self._data[row] -= delta._data

    def fill_uniform(self, low: float, high: float, rng: np.random.Generator) -> "Matrix":
        """Overwrite every entry with an independent draw from ``[low, high]``."""

        if not isinstance(low, numbers.Real) or not isinstance(high, numbers.Real):
            raise TypeError("Uniform bounds must be real numbers")
        self._data[...] = rng.uniform(float(low), float(high), size=self._data.shape)
        return self

    def copy(self) -> "Matrix":
        return Matrix._wrap(self._data.copy())

    def to_numpy(self) -> Array:
        return self._data.copy()


__all__ = ["Matrix"]
