import json
from pathlib import Path

import pytest

from denseprop.core.errors import DimensionMismatch
from denseprop.training import pipelines


def _quick_xor_config(run_dir=None):
    config = pipelines.load_preset("xor")
    config["train"].update({"max_steps": 3000, "report_every": 1000, "run_dir": run_dir})
    return config


def test_presets_mirror_demo_networks():
    presets = pipelines.presets()
    assert set(presets) == {"xor", "digits"}
    digits = presets["digits"]
    assert digits["model"]["inputs"] == 35
    assert [layer["neurons"] for layer in digits["model"]["layers"]] == [35, 10]
    assert digits["train"]["epsilon"] == 1e-6
    assert presets["xor"]["train"]["learning_rate"] == 0.5


def test_load_preset_returns_independent_copies():
    first = pipelines.load_preset("xor")
    first["train"]["seed"] = 99
    assert pipelines.load_preset("xor")["train"]["seed"] == 1
    with pytest.raises(KeyError):
        pipelines.load_preset("mnist")


def test_pipeline_writes_metrics_and_manifest(tmp_path):
    config = _quick_xor_config(str(tmp_path / "run"))
    result = pipelines.run_pipeline(config)

    assert 1 <= result.steps <= 3000
    assert len(result.predictions) == 4
    assert result.dataset.name == "xor"
    assert all(len(p) == 1 for p in result.predictions)

    records = [json.loads(line) for line in Path(result.metrics_path).read_text().splitlines()]
    assert records
    assert all("error" in record and record["seed"] == 1 for record in records)
    assert (tmp_path / "run" / "metrics.csv").exists()

    manifest = json.loads(Path(result.manifest_path).read_text())
    assert manifest["dataset"]["name"] == "xor"
    assert manifest["result"]["steps"] == result.steps


def test_pipeline_is_deterministic_for_a_seed():
    first = pipelines.run_pipeline(_quick_xor_config())
    second = pipelines.run_pipeline(_quick_xor_config())
    assert first.error == second.error
    assert first.predictions == second.predictions
    assert first.metrics_path == ""


def test_pipeline_rejects_network_dataset_mismatch():
    config = _quick_xor_config()
    config["model"]["inputs"] = 3
    with pytest.raises(DimensionMismatch):
        pipelines.run_pipeline(config)


def test_build_network_requires_layers():
    with pytest.raises(KeyError):
        pipelines.build_network({"inputs": 2, "layers": []})


def test_pipeline_plots_training_curve(tmp_path):
    config = _quick_xor_config(str(tmp_path / "plotted"))
    config["train"]["enable_plots"] = True
    result = pipelines.run_pipeline(config)
    manifest = json.loads(Path(result.manifest_path).read_text())
    assert manifest["result"]["plot"].endswith("error.png")
    assert (tmp_path / "plotted" / "error.png").exists()
