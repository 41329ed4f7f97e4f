"""Pipeline assembly: presets, network construction and a full training run."""

from __future__ import annotations

import json
import logging
from copy import deepcopy
from pathlib import Path
from typing import Dict, List, Mapping

import numpy as np

from ..core.errors import DimensionMismatch
from ..core.types import LayerConfig, RunResult
from ..data import registry
from ..models import LayeredNetwork
from ..reporting.artifacts import write_manifest
from ..reporting.metrics import CsvSink, JsonlSink
from ..reporting.plots import PlotAdapter
from .trainer import BackpropTrainer

logger = logging.getLogger(__name__)

_PRESETS: Dict[str, Mapping[str, object]] = {
    "xor": {
        "data": {"name": "xor"},
        "model": {
            "inputs": 2,
            "layers": [
                {"neurons": 2, "activation": "sigmoid", "bias": 1.0},
                {"neurons": 1, "activation": "sigmoid", "bias": 1.0},
            ],
        },
        "train": {
            "learning_rate": 0.5,
            "momentum": 0.5,
            "seed": 1,
            "init_low": -0.5,
            "init_high": 0.5,
            "max_steps": 1_000_000,
            "epsilon": 1e-5,
            "report_every": 1000,
            "run_dir": None,
            "enable_plots": False,
        },
    },
    "digits": {
        "data": {"name": "digits"},
        "model": {
            "inputs": 35,
            "layers": [
                {"neurons": 35, "activation": "sigmoid", "bias": 1.0},
                {"neurons": 10, "activation": "sigmoid", "bias": 1.0},
            ],
        },
        "train": {
            "learning_rate": 0.5,
            "momentum": 0.5,
            "seed": 1,
            "init_low": -0.5,
            "init_high": 0.5,
            "max_steps": 1_000_000,
            "epsilon": 1e-6,
            "report_every": 1000,
            "run_dir": None,
            "enable_plots": False,
        },
    },
}


def presets() -> Mapping[str, Mapping[str, object]]:
    return {name: deepcopy(cfg) for name, cfg in _PRESETS.items()}


def load_preset(name: str) -> Dict[str, object]:
    try:
        return deepcopy(dict(_PRESETS[name]))
    except KeyError as exc:
        available = ", ".join(sorted(_PRESETS))
        raise KeyError(f"Unknown preset {name!r}. Available presets: {available}") from exc


def build_layers(model_cfg: Mapping[str, object]) -> List[LayerConfig]:
    layers = model_cfg.get("layers")
    if not layers:
        raise KeyError("Model config requires a non-empty `layers` list")
    return [
        LayerConfig(
            neurons=int(layer["neurons"]),
            activation=str(layer.get("activation", "sigmoid")),
            bias=float(layer.get("bias", 1.0)),
        )
        for layer in layers  # type: ignore[union-attr]
    ]


def build_network(model_cfg: Mapping[str, object]) -> LayeredNetwork:
    if "inputs" not in model_cfg:
        raise KeyError("Model config requires `inputs`")
    return LayeredNetwork(int(model_cfg["inputs"]), build_layers(model_cfg))


def run_pipeline(config: Mapping[str, object]) -> RunResult:
    """Build the network and dataset described by ``config`` and train it."""

    data_cfg = dict(config["data"])  # type: ignore[arg-type]
    model_cfg = dict(config["model"])  # type: ignore[arg-type]
    train_cfg = dict(config.get("train", {}))  # type: ignore[arg-type]

    dataset = registry.get(str(data_cfg["name"]), **data_cfg.get("options", {}))
    network = build_network(model_cfg)
    if (network.input_width, network.output_width) != (dataset.input_width, dataset.output_width):
        raise DimensionMismatch(
            f"Network shape {network.input_width}->{network.output_width} does not match "
            f"dataset {dataset.name!r} ({dataset.input_width}->{dataset.output_width})"
        )

    seed = int(train_cfg.get("seed", 0))
    rng = np.random.default_rng(seed)
    trainer = BackpropTrainer(
        network,
        learning_rate=float(train_cfg.get("learning_rate", 0.5)),
        momentum=float(train_cfg.get("momentum", 0.0)),
    )
    trainer.init(
        float(train_cfg.get("init_low", -0.5)),
        float(train_cfg.get("init_high", 0.5)),
        rng,
    )

    callbacks: list[object] = []
    metrics_path = ""
    plotter: PlotAdapter | None = None
    run_dir = train_cfg.get("run_dir")
    if run_dir:
        run_dir = Path(str(run_dir))
        metrics_path = str(run_dir / "metrics.jsonl")
        plotter = PlotAdapter(run_dir, enable_plots=bool(train_cfg.get("enable_plots", False)))
        callbacks.extend(
            [JsonlSink(metrics_path, seed=seed), CsvSink(run_dir / "metrics.csv"), plotter]
        )

    _print_startup_summary(
        dataset_name=dataset.name,
        network=network,
        learning_rate=trainer.learning_rate,
        epsilon=float(train_cfg.get("epsilon", 1e-5)),
    )
    fit = trainer.fit(
        dataset.samples,
        max_steps=int(train_cfg.get("max_steps", 1_000_000)),
        epsilon=float(train_cfg.get("epsilon", 1e-5)),
        rng=rng,
        report_every=int(train_cfg.get("report_every", 1000)),
        callbacks=callbacks,
    )
    if not fit.converged:
        logger.warning(
            "Training stopped after %d steps without reaching epsilon (error=%g)",
            fit.steps,
            fit.error,
        )
    predictions = tuple(network.forward(sample.inputs) for sample in dataset.samples)

    manifest_path = ""
    if run_dir:
        plot_path = plotter.close() if plotter is not None else ""
        manifest_path = write_manifest(
            run_dir / "manifest.json",
            config=json.loads(json.dumps(config)),
            dataset={"name": dataset.name, "samples": len(dataset), **dataset.metadata},
            result={
                "steps": fit.steps,
                "error": fit.error,
                "converged": fit.converged,
                "plot": plot_path,
            },
        )

    return RunResult(
        steps=fit.steps,
        error=fit.error,
        converged=fit.converged,
        predictions=predictions,
        metrics_path=metrics_path,
        manifest_path=manifest_path,
        dataset=dataset,
    )


def _print_startup_summary(
    *,
    dataset_name: str,
    network: LayeredNetwork,
    learning_rate: float,
    epsilon: float,
) -> None:
    widths = [network.input_width] + [layer.neurons for layer in network.layers]
    activations = [str(getattr(layer.activation, "value", layer.activation)) for layer in network.layers]
    print("=== denseprop run ===")
    print(f"Dataset       : {dataset_name}")
    print(f"Widths        : {widths}")
    print(f"Activations   : {activations}")
    print(f"Learning rate : {learning_rate}")
    print(f"Epsilon       : {epsilon}")
    print(f"Parameters    : {network.parameter_count()}")
    print("=====================")


__all__ = ["build_layers", "build_network", "load_preset", "presets", "run_pipeline"]
