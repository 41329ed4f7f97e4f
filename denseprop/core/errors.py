"""Error types raised by the numeric core."""

from __future__ import annotations


class DimensionMismatch(ValueError):
    """Operands of a vector/matrix operation have incompatible shapes."""


class NotInitialized(RuntimeError):
    """A network was used before its weights were initialised."""


__all__ = ["DimensionMismatch", "NotInitialized"]
