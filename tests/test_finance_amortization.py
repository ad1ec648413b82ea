import math

import pytest

from recharge_basin.errors import SingularityError, ValidationError
from recharge_basin.finance import amortization_schedule, annual_payment, irr, monthly_payment, npv, pv_factor


def test_reference_loan_payment():
    pay = annual_payment(375424.0, 0.05, 10)
    assert pay == pytest.approx(47800, rel=0.01)
    assert pay == pytest.approx(monthly_payment(375424.0, 0.05, 10) * 12)


def test_zero_rate_payment_is_exact():
    assert annual_payment(375424.0, 0.0, 10) == 375424.0 / 10
    assert monthly_payment(1200.0, 0.0, 1) == 100.0


def test_tiny_rate_stays_finite():
    pay = annual_payment(1000.0, 1e-15, 5)
    assert math.isfinite(pay)
    assert pay == pytest.approx(200.0)


def test_overflowing_rate_is_singularity():
    with pytest.raises(SingularityError):
        annual_payment(1000.0, 1e6, 500)


@pytest.mark.parametrize("rate, years", [(-0.01, 10), (0.05, 0), (0.05, 2.5), (float("nan"), 10)])
def test_bad_terms(rate, years):
    with pytest.raises(ValidationError):
        annual_payment(1000.0, rate, years)


@pytest.mark.parametrize("rate", [0.0, 0.05, 0.12])
def test_schedule_retires_principal(rate):
    rows = amortization_schedule(100000.0, rate, 8)
    assert len(rows) == 8
    assert sum(r["principal"] for r in rows) == pytest.approx(100000.0)
    assert rows[-1]["balance"] == pytest.approx(0.0, abs=1e-6)
    assert rows[0]["debt_service"] == pytest.approx(annual_payment(100000.0, rate, 8), rel=1e-9)


def test_pv_factor_zero_rate_is_years():
    assert pv_factor(0.0, 10) == 10.0


def test_pv_factor_matches_npv_of_unit_annuity():
    assert pv_factor(0.05, 10) == pytest.approx(npv(0.05, [0.0] + [1.0] * 10))
    assert pv_factor(0.05, 10) == pytest.approx(7.7217, abs=1e-4)


def test_irr_simple_and_undefined():
    r = irr([-100.0, 60.0, 60.0])
    assert 0.12 < r < 0.14
    assert irr([-100.0, -1.0, -1.0]) is None
    assert irr([0.0, 0.0]) is None


def test_irr_of_unsolvable_flows_is_none():
    assert irr([-100.0, float("inf"), 10.0]) is None
    assert irr([-100.0, float("nan"), 10.0]) is None
    # subnormal benefits leave the root solver nothing to work with
    assert irr([-375424.0] + [5e-320] * 10) is None
