"""denseprop public API."""

from .core import activations, types  # noqa: F401
from .core.activations import ActivationKind
from .core.errors import DimensionMismatch, NotInitialized
from .core.matrix import Matrix
from .core.types import FitResult, LayerConfig, RunResult, Sample
from .core.vector import Vector
from .models import LayeredNetwork, TrainingHandle
from .training.pipelines import load_preset, presets, run_pipeline
from .training.trainer import BackpropTrainer

__version__ = "0.1.0"

__all__ = [
    "ActivationKind",
    "BackpropTrainer",
    "DimensionMismatch",
    "FitResult",
    "LayerConfig",
    "LayeredNetwork",
    "Matrix",
    "NotInitialized",
    "RunResult",
    "Sample",
    "TrainingHandle",
    "Vector",
    "activations",
    "load_preset",
    "presets",
    "run_pipeline",
    "types",
]
