"""Training loop and pipeline assembly."""

from .pipelines import build_network, load_preset, presets, run_pipeline
from .trainer import BackpropTrainer

__all__ = ["BackpropTrainer", "build_network", "load_preset", "presets", "run_pipeline"]
