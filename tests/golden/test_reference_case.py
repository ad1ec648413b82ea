from __future__ import annotations
import json, subprocess, sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]
SCENARIO = ROOT / "recharge_basin" / "inputs" / "scenarios" / "reference_case.yaml"

# Published figures for the reference parcel, +/-1 %.
EXPECTED = {
    ("dimensions", "sideLength"): 660.0,
    ("dimensions", "wettedArea"): 9.29,
    ("costs", "totalCost"): 375424.0,
    ("costs", "annualCapitalPayment"): 47800.0,
    ("recharge", "netRecharge"): 140.4,
    ("economics", "npv"): -202000.0,
    ("economics", "bcRatio"): 0.46,
    ("economics", "roi"): -53.8,
}


def test_reference_case_is_stable(tmp_path):
    assert SCENARIO.exists(), f"Missing scenario {SCENARIO}"

    # Run via CLI to exercise the public surface and artifact writing
    out = tmp_path / "golden"
    cmd = [
        sys.executable, "-m", "recharge_basin",
        "--config", str(SCENARIO),
        "--outputs-dir", str(out),
        "--format", "csv",
    ]
    subprocess.run(cmd, check=True, cwd=ROOT)

    sj = out / "summary.json"
    assert sj.exists() and sj.stat().st_size > 0
    assert (out / "feasibility_results.csv").exists()

    got = json.loads(sj.read_text(encoding="utf-8"))
    for (section, key), want in EXPECTED.items():
        assert float(got[section][key]) == pytest.approx(want, rel=0.01), f"{section}.{key} drifted"
