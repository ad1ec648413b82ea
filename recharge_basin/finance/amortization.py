# recharge_basin/finance/amortization.py
"""
Level-payment loan helpers:
 - monthly_payment(principal, annual_rate, years)
 - annual_payment(principal, annual_rate, years)
 - amortization_schedule(principal, annual_rate, years)

The loan compounds monthly; callers see annual debt service. Keep this
module self-contained.
"""

from __future__ import annotations
from typing import Dict, List
import math

from recharge_basin.errors import SingularityError, ValidationError

MONTHS_PER_YEAR = 12
# Rates below this are treated as interest-free; (1+r)^n - 1 cancels to 0 in floats.
ZERO_RATE = 1e-12


def _check_terms(principal: float, annual_rate: float, years: int) -> None:
    if not math.isfinite(principal):
        raise ValidationError(f"loan principal must be finite, got {principal}", field="totalCost")
    if annual_rate < 0 or not math.isfinite(annual_rate):
        raise ValidationError(f"discountRate must be >= 0, got {annual_rate}", field="discountRate")
    if int(years) != years or years <= 0:
        raise ValidationError(f"loanYears must be a positive integer, got {years}", field="loanYears")


def _finite(value: float, what: str) -> float:
    if not math.isfinite(value):
        raise SingularityError(f"{what} is not finite ({value})", field="discountRate")
    return value


def monthly_payment(principal: float, annual_rate: float, years: int) -> float:
    _check_terms(principal, annual_rate, years)
    n = int(years) * MONTHS_PER_YEAR
    if annual_rate < ZERO_RATE:
        return principal / n
    r = annual_rate / MONTHS_PER_YEAR
    try:
        growth = (1.0 + r) ** n
        pmt = principal * r * growth / (growth - 1.0)
    except (OverflowError, ZeroDivisionError) as e:
        raise SingularityError(f"annuity factor undefined at rate {annual_rate} over {years} years: {e}", field="discountRate")
    return _finite(pmt, "monthly payment")


def annual_payment(principal: float, annual_rate: float, years: int) -> float:
    """Yearly debt service; at a zero rate this is exactly principal / years."""
    _check_terms(principal, annual_rate, years)
    if annual_rate < ZERO_RATE:
        return principal / int(years)
    return monthly_payment(principal, annual_rate, years) * MONTHS_PER_YEAR


def amortization_schedule(principal: float, annual_rate: float, years: int) -> List[Dict[str, float]]:
    """
    Yearly rows rolled up from the monthly loan:
    year, interest, principal, debt_service, balance (end of year).
    """
    pmt = monthly_payment(principal, annual_rate, years)
    r = annual_rate / MONTHS_PER_YEAR if annual_rate >= ZERO_RATE else 0.0
    bal = float(principal)
    out: List[Dict[str, float]] = []
    for y in range(1, int(years) + 1):
        interest_y = 0.0
        principal_y = 0.0
        for _ in range(MONTHS_PER_YEAR):
            interest = bal * r
            paid = min(bal, pmt - interest)
            bal -= paid
            interest_y += interest
            principal_y += paid
        out.append({
            "year": float(y),
            "interest": interest_y,
            "principal": principal_y,
            "debt_service": interest_y + principal_y,
            "balance": max(0.0, bal),
        })
    return out


__all__ = ["monthly_payment", "annual_payment", "amortization_schedule"]
