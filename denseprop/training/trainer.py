"""Online backpropagation trainer for :class:`~denseprop.models.LayeredNetwork`."""

from __future__ import annotations

import logging
from typing import Iterable, Mapping, Sequence, Union

import numpy as np

from ..core.errors import DimensionMismatch, NotInitialized
from ..core.types import FitResult, Sample
from ..core.vector import Vector
from ..models import LayeredNetwork

logger = logging.getLogger(__name__)

RandomSource = Union[np.random.Generator, int, None]


def resolve_rng(rng: RandomSource) -> np.random.Generator:
    """Return a generator for ``rng`` (a generator, a seed or ``None``)."""

    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)


def _as_vector(values) -> Vector:
    return values if isinstance(values, Vector) else Vector(values)


class BackpropTrainer:
    """Single-sample stochastic gradient descent with manual backpropagation.

    The trainer owns the network's training handle for its lifetime. Calls to
    :meth:`train` mutate weights and the per-layer caches in place, so they
    must not run concurrently against the same network.
    """

    def __init__(
        self,
        network: LayeredNetwork,
        learning_rate: float,
        momentum: float = 0.0,
    ) -> None:
        if learning_rate <= 0:
            raise ValueError(f"learning_rate must be positive, got {learning_rate}")
        self.network = network
        self.learning_rate = float(learning_rate)
        # Reserved; the update rule is plain SGD.
        self.momentum = float(momentum)
        self._handle = network.training_handle()
        sizes = [int(layer.neurons) for layer in network.layers]
        self._outputs = [Vector.zeros(size) for size in sizes]
        self._gradients = [Vector.zeros(size) for size in sizes]

    # ------------------------------------------------------------------
    # Public API

    def init(
        self,
        low: float = -0.5,
        high: float = 0.5,
        rng: RandomSource = None,
    ) -> None:
        """Fill every weight with an independent uniform draw from ``[low, high]``."""

        if low > high:
            raise ValueError(f"Lower bound {low} exceeds upper bound {high}")
        self._handle.initialize(low, high, resolve_rng(rng))

    def train(self, inputs: Vector, targets: Vector) -> float:
        """Run one forward/backward step and return the mean squared error."""

        inputs = _as_vector(inputs)
        targets = _as_vector(targets)
        self._check_shapes(inputs, targets)

        handle = self._handle
        last = handle.layer_count - 1

        upstream = inputs
        for index in range(last + 1):
            upstream = self._outputs[index].copy_from(handle.forward_layer(index, upstream))

        output_error = self._outputs[last] - targets
        for index in range(last, -1, -1):
            if index == last:
                layer_error = output_error
            else:
                # Layer index + 1 has already been updated for this step.
                propagated = handle.weight_matrix(index + 1).transpose() @ self._gradients[index + 1]
                # The trailing entry belongs to the bias column, not to a neuron.
                layer_error = propagated.head(len(self._outputs[index]))
            self._gradients[index].copy_from(layer_error * self._derivative(index))

            upstream = inputs if index == 0 else self._outputs[index - 1]
            augmented = handle.augment(index, upstream)
            gradient = self._gradients[index]
            for row in range(len(gradient)):
                handle.subtract_from_row(
                    index, row, augmented * (self.learning_rate * gradient[row])
                )

        return (output_error ^ output_error) / len(output_error)

    def evaluate(self, samples: Iterable[Sample]) -> float:
        """Return the mean squared error over ``samples`` without training."""

        errors = []
        for sample in samples:
            output_error = self.network.forward(_as_vector(sample.inputs)) - _as_vector(
                sample.targets
            )
            errors.append((output_error ^ output_error) / len(output_error))
        if not errors:
            raise ValueError("Cannot evaluate an empty dataset")
        return float(np.mean(errors))

    def fit(
        self,
        samples: Sequence[Sample],
        *,
        max_steps: int = 1_000_000,
        epsilon: float = 1e-5,
        rng: RandomSource = None,
        report_every: int = 1000,
        callbacks: Sequence[object] = (),
    ) -> FitResult:
        """Train on randomly drawn samples until the step error reaches ``epsilon``.

        Stops after ``max_steps`` steps when the error never gets that low.
        Progress is logged, and passed to ``callbacks``, every
        ``report_every`` steps.
        """

        samples = list(samples)
        if not samples:
            raise ValueError("Cannot fit an empty dataset")
        generator = resolve_rng(rng)
        step = 0
        error = float("inf")
        while step < max_steps:
            sample = samples[int(generator.integers(0, len(samples)))]
            error = self.train(sample.inputs, sample.targets)
            step += 1
            if report_every and step % report_every == 0:
                logger.info("Step: %d, Error: %g", step, error)
                self._emit(step, {"error": error}, callbacks)
            if error <= epsilon:
                break
        converged = error <= epsilon
        logger.info("Step: %d, Error: %g (converged=%s)", step, error, converged)
        self._emit(step, {"error": error, "converged": float(converged)}, callbacks)
        return FitResult(steps=step, error=float(error), converged=converged)

    @property
    def outputs(self) -> tuple[Vector, ...]:
        """Per-layer outputs cached by the latest :meth:`train` call."""

        return tuple(v.copy() for v in self._outputs)

    @property
    def gradients(self) -> tuple[Vector, ...]:
        """Per-layer gradients computed by the latest :meth:`train` call."""

        return tuple(v.copy() for v in self._gradients)

    # ------------------------------------------------------------------
    # Internal helpers

    def _check_shapes(self, inputs: Vector, targets: Vector) -> None:
        if len(inputs) != self.network.input_width:
            raise DimensionMismatch(
                f"Network expects {self.network.input_width} inputs, got {len(inputs)}"
            )
        if len(targets) != self.network.output_width:
            raise DimensionMismatch(
                f"Network produces {self.network.output_width} outputs, "
                f"got a target of size {len(targets)}"
            )
        if not self.network.initialized:
            raise NotInitialized("Call init() before training")

    def _derivative(self, index: int) -> Vector:
        return self._outputs[index].map(self._handle.activation(index).derivative)

    @staticmethod
    def _emit(step: int, metrics: Mapping[str, float], callbacks: Sequence[object]) -> None:
        for callback in callbacks:
            if hasattr(callback, "on_step"):
                callback.on_step(step, metrics)  # type: ignore[attr-defined]
            elif callable(callback):
                callback(step, metrics)


__all__ = ["BackpropTrainer", "resolve_rng"]
