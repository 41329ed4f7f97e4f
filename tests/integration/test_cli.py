import json
from pathlib import Path

import pytest

from cli.main import main
from denseprop.core.types import Sample
from denseprop.core.vector import Vector
from denseprop.data.registry import Dataset, register_dataset


@register_dataset("scaled_identity")
def _scaled_identity(scale: float = 1.0) -> Dataset:
    samples = tuple(Sample(Vector([scale * x]), Vector([x])) for x in (0.0, 1.0))
    return Dataset(name="scaled_identity", samples=samples, metadata={})


def test_cli_xor_preset(tmp_path, capsys):
    main(["--preset", "xor", "--max-steps", "2000", "--run-dir", str(tmp_path / "run")])
    lines = capsys.readouterr().out.strip().splitlines()
    result = json.loads(lines[-1])
    assert result["preset"] == "xor"
    assert result["steps"] <= 2000
    assert sum(line.startswith("X: ") for line in lines) == 4
    assert (tmp_path / "run" / "metrics.jsonl").exists()
    assert (tmp_path / "run" / "manifest.json").exists()


def test_cli_config_override_and_dump(tmp_path, capsys):
    override = tmp_path / "override.json"
    override.write_text(json.dumps({"train": {"max_steps": 50, "seed": 3}}))
    dumped = tmp_path / "resolved.json"
    main(["--preset", "digits", "--config", str(override), "--dump-config", str(dumped),
          "--show-patterns"])
    config = json.loads(dumped.read_text())
    assert config["train"]["max_steps"] == 50
    assert config["train"]["seed"] == 3
    assert config["train"]["learning_rate"] == 0.5
    out = capsys.readouterr().out
    assert "██" in out
    assert json.loads(out.strip().splitlines()[-1])["steps"] == 50


def test_cli_list_presets(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--list-presets"])
    assert exc.value.code == 0
    assert capsys.readouterr().out.split() == ["digits", "xor"]


def test_cli_reports_invalid_configuration(tmp_path):
    override = tmp_path / "bad.json"
    override.write_text(json.dumps({"model": {"layers": [{"neurons": 2, "activation": "nope"}]}}))
    with pytest.raises(SystemExit, match="Invalid configuration"):
        main(["--config", str(override)])


def test_cli_prints_samples_built_with_data_options(tmp_path, capsys):
    override = tmp_path / "override.json"
    override.write_text(json.dumps({
        "data": {"name": "scaled_identity", "options": {"scale": 4.0}},
        "model": {"inputs": 1, "layers": [{"neurons": 1, "activation": "sigmoid"}]},
        "train": {"max_steps": 10},
    }))
    main(["--config", str(override)])
    lines = [line for line in capsys.readouterr().out.splitlines() if line.startswith("X: ")]
    assert [line.split(",")[0] for line in lines] == ["X: 0", "X: 4"]
