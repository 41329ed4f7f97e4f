"""Command line entry point for denseprop training runs."""

from __future__ import annotations

import argparse
import json
import logging
import os
from pathlib import Path
from typing import Iterable

from denseprop.data.patterns import render_pattern
from denseprop.training import pipelines


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    preset_names = sorted(pipelines.presets().keys())
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--preset",
        choices=preset_names,
        default="xor",
        help="Preset configuration to execute",
    )
    parser.add_argument(
        "--config", type=Path, help="Optional JSON/YAML config override"
    )
    parser.add_argument("--seed", type=int, help="Seed for weight init and sampling")
    parser.add_argument("--learning-rate", type=float, help="Override the learning rate")
    parser.add_argument("--max-steps", type=int, help="Maximum number of training steps")
    parser.add_argument("--epsilon", type=float, help="Stop once the step error is this low")
    parser.add_argument("--run-dir", type=Path, help="Directory for metrics and manifest")
    parser.add_argument(
        "--enable-plots", action="store_true", help="Plot the training curve into the run directory"
    )
    parser.add_argument(
        "--show-patterns",
        action="store_true",
        help="Render bitmap inputs next to the predictions",
    )
    parser.add_argument(
        "--list-presets", action="store_true", help="List available presets and exit"
    )
    parser.add_argument(
        "--dump-config", type=Path, help="Dump the resolved config to a JSON file"
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get("DENSEPROP_LOG_LEVEL", "INFO"),
        help="Logging level (default: $DENSEPROP_LOG_LEVEL or INFO)",
    )
    return parser.parse_args(argv)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _load_override(path: Path) -> dict:
    text = path.read_text()
    if path.suffix in {".yml", ".yaml"}:
        try:
            import yaml  # type: ignore
        except ImportError as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("PyYAML is required to load YAML configs") from exc
        return yaml.safe_load(text)
    return json.loads(text)


def _merge(base: dict, override: dict) -> dict:
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            base[key] = _merge(dict(base[key]), value)
        else:
            base[key] = value
    return base


def _format_prediction(inputs, outputs) -> str:
    shown = " ".join(f"{x:g}" for x in inputs) if len(inputs) <= 8 else f"<{len(inputs)} values>"
    values = " ".join(f"{y:.6f}" for y in outputs)
    return f"X: {shown}, Output: {values}"


def _format_result(result, preset: str) -> str:
    payload = {
        "preset": preset,
        "steps": result.steps,
        "error": result.error,
        "converged": result.converged,
    }
    if result.metrics_path:
        payload["metrics"] = result.metrics_path
    if result.manifest_path:
        payload["manifest"] = result.manifest_path
    return json.dumps(payload, sort_keys=True)


def main(argv: Iterable[str] | None = None) -> None:
    args = parse_args(argv)
    configure_logging(args.log_level)

    if args.list_presets:
        for name in sorted(pipelines.presets().keys()):
            print(name)
        raise SystemExit(0)

    config = pipelines.load_preset(args.preset)
    if args.config:
        config = _merge(config, _load_override(args.config))

    train_cfg = config.setdefault("train", {})
    if args.seed is not None:
        train_cfg["seed"] = int(args.seed)
    if args.learning_rate is not None:
        train_cfg["learning_rate"] = float(args.learning_rate)
    if args.max_steps is not None:
        train_cfg["max_steps"] = int(args.max_steps)
    if args.epsilon is not None:
        train_cfg["epsilon"] = float(args.epsilon)
    if args.run_dir is not None:
        train_cfg["run_dir"] = str(args.run_dir)
    if args.enable_plots:
        train_cfg["enable_plots"] = True

    if args.dump_config:
        args.dump_config.parent.mkdir(parents=True, exist_ok=True)
        args.dump_config.write_text(json.dumps(config, indent=2))

    try:
        result = pipelines.run_pipeline(config)
    except (KeyError, ValueError) as exc:
        raise SystemExit(f"Invalid configuration: {exc}") from exc

    dataset = result.dataset
    metadata = dataset.metadata
    for sample, output in zip(dataset.samples, result.predictions):
        if args.show_patterns and "width" in metadata:
            print()
            print(render_pattern(sample.inputs, metadata["width"], metadata["height"]))
        print(_format_prediction(sample.inputs, output))

    print(_format_result(result, args.preset))


if __name__ == "__main__":
    main()
