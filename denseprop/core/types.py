"""Core typing contracts for denseprop."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Tuple, Union

import numpy as np

if TYPE_CHECKING:  # pragma: no cover
    from ..data.registry import Dataset
    from .activations import ActivationKind
    from .vector import Vector

Array = np.ndarray


@dataclass(frozen=True)
class LayerConfig:
    """Configuration of a single dense layer.

    Attributes
    ----------
    neurons:
        Number of neurons (rows of the layer's weight matrix).
    activation:
        Registered activation name or :class:`ActivationKind`.
    bias:
        Constant appended to the layer's input before the weight product.
    """

    neurons: int
    activation: Union[str, "ActivationKind"] = "sigmoid"
    bias: float = 1.0

    def __post_init__(self) -> None:
        if int(self.neurons) < 1:
            raise ValueError(f"A layer needs at least one neuron, got {self.neurons}")


@dataclass(frozen=True)
class Sample:
    """A single input/target pair."""

    inputs: "Vector"
    targets: "Vector"


@dataclass(frozen=True)
class FitResult:
    """Summary returned by :meth:`denseprop.training.trainer.BackpropTrainer.fit`."""

    steps: int
    error: float
    converged: bool


@dataclass(frozen=True)
class RunResult:
    """Summary returned by :func:`denseprop.training.pipelines.run_pipeline`."""

    steps: int
    error: float
    converged: bool
    predictions: Tuple["Vector", ...] = ()
    metrics_path: str = ""
    manifest_path: str = ""
    dataset: Optional["Dataset"] = None


__all__ = ["Array", "FitResult", "LayerConfig", "RunResult", "Sample"]
