import json

import pytest

from recharge_basin.errors import ValidationError
from recharge_basin.scenario_runner import RunResult, run_dir, run_params


def test_single_file_writes_summary(tmp_path):
    cfg = tmp_path / "one.yaml"
    cfg.write_text("acres: 10\nsoilType: l\npipelineLength: 1000\n", encoding="utf-8")
    res = run_dir(cfg, tmp_path / "o", fmt="csv")
    assert isinstance(res, RunResult)
    assert res.summary_path.exists()
    summary = json.loads(res.summary_path.read_text(encoding="utf-8"))
    assert summary["dimensions"]["sideLength"] == "660"
    assert res.results_path.name == "one_results.csv"


def test_directory_keeps_going_past_bad_scenario(tmp_path):
    d = tmp_path / "sc"
    d.mkdir()
    (d / "a.yaml").write_text("acres: 10\nsoilType: l\n", encoding="utf-8")
    (d / "b.yaml").write_text("acres: -1\nsoilType: l\n", encoding="utf-8")
    (d / "c.json").write_text('{"soilType": "l"}', encoding="utf-8")
    res = run_dir(d, tmp_path / "o", fmt="jsonl")
    assert res.summary == {"scenarios": 3, "failed": 2}
    by_name = {r["scenario"]: r for r in res.rows}
    assert by_name["a"]["npv"] > 0
    assert by_name["b"]["error"] == "domain"
    assert by_name["c"]["error"] == "validation"


def test_empty_directory(tmp_path):
    with pytest.raises(ValidationError):
        run_dir(tmp_path, tmp_path / "o")


def test_unknown_format(tmp_path):
    with pytest.raises(ValidationError):
        run_dir(tmp_path, tmp_path / "o", fmt="xml")


def test_strict_env_applies(tmp_path, monkeypatch):
    cfg = tmp_path / "one.yaml"
    cfg.write_text("acres: 10\nsoilType: l\nextra: 1\n", encoding="utf-8")
    monkeypatch.setenv("VALIDATION_MODE", "strict")
    with pytest.raises(ValidationError):
        run_dir(cfg, tmp_path / "o")


def test_run_params():
    assert run_params({"acres": 10, "soilType": "l"})["dimensions"]["sideLength"] == "660"
