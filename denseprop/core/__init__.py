"""Core numerical primitives for denseprop."""

from . import activations, errors, types
from .errors import DimensionMismatch, NotInitialized
from .matrix import Matrix
from .vector import Vector

__all__ = [
    "DimensionMismatch",
    "Matrix",
    "NotInitialized",
    "Vector",
    "activations",
    "errors",
    "types",
]
