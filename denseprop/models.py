"""Layered feed-forward network with per-layer bias augmentation."""

from __future__ import annotations

import logging
from typing import Sequence, Tuple

import numpy as np

from .core.activations import Activation, get_activation
from .core.errors import DimensionMismatch, NotInitialized
from .core.matrix import Matrix
from .core.types import LayerConfig
from .core.vector import Vector

logger = logging.getLogger(__name__)


class LayeredNetwork:
    """Dense network owning one weight matrix per layer.

    Layer ``i`` has a weight matrix of shape ``neurons[i] x (width + 1)``
    where ``width`` is the previous layer's neuron count (the network input
    width for layer 0). The extra column multiplies the layer's constant bias,
    which is appended to the layer's input vector on every step.

    Weights are allocated but meaningless until initialised through a
    :class:`TrainingHandle`; :meth:`forward` refuses to run before that.
    """

    def __init__(self, inputs: int, layers: Sequence[LayerConfig]) -> None:
        if int(inputs) < 1:
            raise ValueError(f"A network needs at least one input, got {inputs}")
        if not layers:
            raise ValueError("A network needs at least one layer")
        self._inputs = int(inputs)
        self._layers: Tuple[LayerConfig, ...] = tuple(layers)
        self._activations: Tuple[Activation, ...] = tuple(
            get_activation(layer.activation) for layer in self._layers
        )
        self._weights: list[Matrix] = []
        width = self._inputs
        for layer in self._layers:
            self._weights.append(Matrix(int(layer.neurons), width + 1))
            width = int(layer.neurons)
        self._initialized = False
        logger.debug("Allocated network with weight shapes %s", self.weight_shapes)

    # ------------------------------------------------------------------
    # Shape queries

    @property
    def input_width(self) -> int:
        return self._inputs

    @property
    def output_width(self) -> int:
        return int(self._layers[-1].neurons)

    @property
    def layers(self) -> Tuple[LayerConfig, ...]:
        return self._layers

    @property
    def layer_count(self) -> int:
        return len(self._weights)

    def __len__(self) -> int:
        return self.layer_count

    @property
    def weight_shapes(self) -> Tuple[Tuple[int, int], ...]:
        return tuple(w.shape for w in self._weights)

    @property
    def initialized(self) -> bool:
        return self._initialized

    def parameter_count(self) -> int:
        return int(sum(rows * cols for rows, cols in self.weight_shapes))

    def weights(self) -> Tuple[Matrix, ...]:
        """Return copies of the weight matrices."""

        return tuple(w.copy() for w in self._weights)

    # ------------------------------------------------------------------
    # Inference

    def forward(self, inputs: Vector) -> Vector:
        """Run every layer in order and return the last layer's output."""

        if not isinstance(inputs, Vector):
            inputs = Vector(inputs)
        if len(inputs) != self._inputs:
            raise DimensionMismatch(
                f"Network expects {self._inputs} inputs, got a vector of size {len(inputs)}"
            )
        if not self._initialized:
            raise NotInitialized("Network weights must be initialised before the forward pass")
        output = inputs
        for index in range(self.layer_count):
            output = self._forward_layer(index, output)
        return output

    def _augment(self, index: int, inputs: Vector) -> Vector:
        return inputs.with_bias(self._layers[index].bias)

    def _forward_layer(self, index: int, inputs: Vector) -> Vector:
        product = self._weights[index] @ self._augment(index, inputs)
        return product.map(self._activations[index].fn)

    def training_handle(self) -> "TrainingHandle":
        """Return the privileged interface used by trainers."""

        return TrainingHandle(self)

    def __repr__(self) -> str:
        widths = [self._inputs] + [int(layer.neurons) for layer in self._layers]
        return f"LayeredNetwork(widths={widths}, initialized={self._initialized})"


class TrainingHandle:
    """Training-only access to a :class:`LayeredNetwork`.

    Exposes the single-layer forward step and weight mutation, which the
    public inference interface keeps private.
    """

    def __init__(self, network: LayeredNetwork) -> None:
        self._network = network

    @property
    def network(self) -> LayeredNetwork:
        return self._network

    @property
    def layer_count(self) -> int:
        return self._network.layer_count

    def layer(self, index: int) -> LayerConfig:
        return self._network._layers[index]

    def activation(self, index: int) -> Activation:
        return self._network._activations[index]

    def augment(self, index: int, inputs: Vector) -> Vector:
        return self._network._augment(index, inputs)

    def forward_layer(self, index: int, inputs: Vector) -> Vector:
        return self._network._forward_layer(index, inputs)

    def weight_matrix(self, index: int) -> Matrix:
        """Return the live weight matrix of layer ``index``."""

        return self._network._weights[index]

    def subtract_from_row(self, index: int, row: int, delta: Vector) -> None:
        self._network._weights[index].subtract_from_row(row, delta)

    def initialize(self, low: float, high: float, rng: np.random.Generator) -> None:
        for matrix in self._network._weights:
            matrix.fill_uniform(low, high, rng)
        self._network._initialized = True
        logger.debug(
            "Initialised %d weights uniformly in [%g, %g]",
            self._network.parameter_count(),
            low,
            high,
        )


__all__ = ["LayeredNetwork", "TrainingHandle"]
