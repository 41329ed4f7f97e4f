"""Fixed-length numeric vectors used throughout the network core."""

from __future__ import annotations

import numbers
import operator
from typing import Callable, Iterable, Iterator

import numpy as np

from .errors import DimensionMismatch
from .types import Array


def _checked_index(index, size: int, what: str = "index") -> int:
    position = operator.index(index)
    if not 0 <= position < size:
        raise IndexError(f"{what} {position} out of range for size {size}")
    return position


def _require_same_length(left: "Vector", right: "Vector", op: str) -> None:
    if len(left) != len(right):
        raise DimensionMismatch(
            f"Vectors must be the same size for {op}: {len(left)} != {len(right)}"
        )


class Vector:
    """Ordered, fixed-length sequence of ``float64`` values.

    The length is fixed at construction. Binary operations between vectors
    require equal lengths and raise :class:`DimensionMismatch` otherwise;
    nothing is truncated or broadcast.
    """

    __slots__ = ("_data",)

    def __init__(self, values: Iterable[float] | int = 0) -> None:
        if isinstance(values, numbers.Integral):
            if values < 0:
                raise ValueError(f"Vector size must be non-negative, got {values}")
            data = np.zeros(int(values), dtype=np.float64)
        else:
            source = values if isinstance(values, np.ndarray) else list(values)
            data = np.array(source, dtype=np.float64)
            if data.ndim != 1:
                raise DimensionMismatch(f"Vector data must be one-dimensional, got shape {data.shape}")
        self._data = data

    @classmethod
    def zeros(cls, size: int) -> "Vector":
        return cls(size)

    @classmethod
    def _wrap(cls, data: Array) -> "Vector":
        vector = cls.__new__(cls)
        vector._data = data
        return vector

    # ------------------------------------------------------------------
    # Sequence protocol

    def __len__(self) -> int:
        return int(self._data.shape[0])

    def __iter__(self) -> Iterator[float]:
        return (float(x) for x in self._data)

    def __getitem__(self, index: int) -> float:
        return float(self._data[_checked_index(index, len(self))])

    def __setitem__(self, index: int, value: float) -> None:
        self._data[_checked_index(index, len(self))] = float(value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return len(self) == len(other) and bool(np.array_equal(self._data, other._data))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        values = ", ".join(f"{x:g}" for x in self._data)
        return f"Vector([{values}])"

    def __array__(self, dtype=None, copy=None) -> Array:
        if dtype is None:
            return self._data.copy()
        return self._data.astype(dtype)

    # ------------------------------------------------------------------
    # Arithmetic

    def dot(self, other: "Vector") -> float:
        _require_same_length(self, other, "dot product")
        return float(np.dot(self._data, other._data))

    __xor__ = dot

    def __mul__(self, other: "Vector | float") -> "Vector":
        if isinstance(other, Vector):
            _require_same_length(self, other, "elementwise product")
            return Vector._wrap(self._data * other._data)
        if isinstance(other, numbers.Real):
            return Vector._wrap(self._data * float(other))
        return NotImplemented

    def __rmul__(self, other: float) -> "Vector":
        if isinstance(other, numbers.Real):
            return Vector._wrap(self._data * float(other))
        return NotImplemented

    def __add__(self, other: "Vector") -> "Vector":
        if not isinstance(other, Vector):
            return NotImplemented
        _require_same_length(self, other, "addition")
        return Vector._wrap(self._data + other._data)

    def __sub__(self, other: "Vector") -> "Vector":
        if not isinstance(other, Vector):
            return NotImplemented
        _require_same_length(self, other, "subtraction")
        return Vector._wrap(self._data - other._data)

    def __isub__(self, other: "Vector") -> "Vector":
        if not isinstance(other, Vector):
            return NotImplemented
        _require_same_length(self, other, "subtraction")
        self._data -= other._data
        return self

    def map(self, fn: Callable[[Array], Array]) -> "Vector":
        """Return ``fn`` applied to every element.

        ``fn`` follows numpy ufunc conventions: it receives the element array
        and must return an array of the same length.
        """

        result = np.asarray(fn(self._data.copy()), dtype=np.float64)
        if result.shape != self._data.shape:
            raise DimensionMismatch(
                f"Mapped function changed the vector shape from {self._data.shape} to {result.shape}"
            )
        return Vector._wrap(result)

    # ------------------------------------------------------------------
    # Helpers

    def fill(self, value: float) -> "Vector":
        self._data.fill(float(value))
        return self

    def copy_from(self, other: "Vector") -> "Vector":
        _require_same_length(self, other, "copy")
        self._data[:] = other._data
        return self

    def with_bias(self, value: float) -> "Vector":
        """Return a copy with ``value`` appended as the trailing element."""

        data = np.empty(self._data.shape[0] + 1, dtype=np.float64)
        data[:-1] = self._data
        data[-1] = value
        return Vector._wrap(data)

    def head(self, size: int) -> "Vector":
        if size < 0 or size > len(self):
            raise DimensionMismatch(f"Cannot take {size} leading elements of a vector of size {len(self)}")
        return Vector._wrap(self._data[:size].copy())

    def copy(self) -> "Vector":
        return Vector._wrap(self._data.copy())

    def tolist(self) -> list[float]:
        return [float(x) for x in self._data]

    def to_numpy(self) -> Array:
        return self._data.copy()


__all__ = ["Vector"]
