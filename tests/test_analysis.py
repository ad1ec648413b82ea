from dataclasses import replace

import pytest

from recharge_basin.engine import InputParameters, evaluate
from recharge_basin.monte_carlo import generate_mc_parameters, run_monte_carlo
from recharge_basin.sensitivity import sensitivity_table

BASE = InputParameters(acres=10, soil_type="l", pipeline_length=1000)


def test_sensitivity_sorted_and_signed():
    df = sensitivity_table(BASE)
    assert list(df["npv_swing"]) == sorted(df["npv_swing"], reverse=True)
    row = df.set_index("parameter").loc["water_value"]
    assert row["npv_high"] > row["npv_low"]
    assert df.attrs["base_npv"] == pytest.approx(evaluate(BASE).economics.npv)


def test_sensitivity_clips_fractions():
    df = sensitivity_table(replace(BASE, wet_year_frequency=0.9), factors=["wet_year_frequency"])
    assert df.loc[0, "high"] == 1.0


def test_sensitivity_rejects_bad_swing():
    with pytest.raises(ValueError):
        sensitivity_table(BASE, swing=1.5)


def test_mc_draws_reproducible():
    a = generate_mc_parameters(BASE, 20, seed=3)
    b = generate_mc_parameters(BASE, 20, seed=3)
    for k in a:
        assert list(a[k]) == list(b[k])
    assert ((a["wet_year_frequency"] >= 0) & (a["wet_year_frequency"] <= 1)).all()


def test_mc_summary():
    df = run_monte_carlo(BASE, iterations=200, seed=11)
    assert len(df) == 200
    assert df.attrs["success_rate"] == 1.0
    assert df.attrs["p10_npv"] <= df.attrs["p50_npv"] <= df.attrs["p90_npv"]
    assert 0.0 <= df.attrs["prob_positive_npv"] <= 1.0
    assert (df["net_recharge"] >= 0).all()


def test_mc_rejects_zero_iterations():
    with pytest.raises(ValueError):
        run_monte_carlo(BASE, iterations=0)
