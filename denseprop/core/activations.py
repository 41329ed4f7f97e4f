"""Activation registry for denseprop.

Every activation is stored with its derivative expressed in terms of the
activated output ``y = f(x)`` rather than the raw input. The trainer only
keeps layer outputs, so new activations must supply that form.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterable, Union

import numpy as np

from .types import Array

ActivationFn = Callable[[Array], Array]


class ActivationKind(str, Enum):
    """Names of the built-in activations."""

    SIGMOID = "sigmoid"
    TANH = "tanh"
    IDENTITY = "identity"


@dataclass(frozen=True)
class Activation:
    """Forward function paired with its output-parameterised derivative."""

    name: str
    fn: ActivationFn
    derivative: ActivationFn

    def __call__(self, x: Array) -> Array:
        return self.fn(x)


class ActivationRegistry:
    """Central registry for activation functions."""

    def __init__(self) -> None:
        self._registry: Dict[str, Activation] = {}

    def register(self, name: str, fn: ActivationFn, derivative: ActivationFn) -> Activation:
        activation = Activation(name, fn, derivative)
        self._registry[name] = activation
        return activation

    def get(self, name: Union[str, ActivationKind]) -> Activation:
        key = name.value if isinstance(name, ActivationKind) else str(name)
        if key not in self._registry:
            available = ", ".join(sorted(self._registry))
            raise KeyError(f"Unknown activation {key!r}. Available activations: {available}")
        return self._registry[key]

    def names(self) -> Iterable[str]:
        return sorted(self._registry)

    def __contains__(self, name: object) -> bool:
        if isinstance(name, ActivationKind):
            name = name.value
        return name in self._registry


REGISTRY = ActivationRegistry()


def sigmoid(x: Array) -> Array:
    return 1.0 / (1.0 + np.exp(-x))


def sigmoid_derivative(y: Array) -> Array:
    return y * (1.0 - y)


def tanh(x: Array) -> Array:
    return np.tanh(x)


def tanh_derivative(y: Array) -> Array:
    return 1.0 - y**2


def identity(x: Array) -> Array:
    return np.asarray(x, dtype=np.float64)


def identity_derivative(y: Array) -> Array:
    return np.ones_like(y, dtype=np.float64)


REGISTRY.register(ActivationKind.SIGMOID.value, sigmoid, sigmoid_derivative)
REGISTRY.register(ActivationKind.TANH.value, tanh, tanh_derivative)
REGISTRY.register(ActivationKind.IDENTITY.value, identity, identity_derivative)


def get_activation(name: Union[str, ActivationKind]) -> Activation:
    """Return the registered activation for ``name``."""

    return REGISTRY.get(name)


__all__ = [
    "Activation",
    "ActivationKind",
    "ActivationRegistry",
    "REGISTRY",
    "get_activation",
    "identity",
    "sigmoid",
    "sigmoid_derivative",
    "tanh",
]
