# recharge_basin/finance/discount.py
from __future__ import annotations

from typing import Iterable, List, Optional
import math

import numpy as np
import numpy_financial as npf

# Below this the annuity factor collapses to its zero-rate limit.
ZERO_RATE = 1e-12


# ---------- Annuity factor ----------
def pv_factor(rate: float, years: int) -> float:
    """
    Present value of 1 per year for `years` years:
        (1 - (1+r)^-n) / r,   and exactly n when r == 0.
    Returns NaN/inf untouched on overflow so the caller can decide.
    """
    r = float(rate)
    n = int(years)
    if abs(r) < ZERO_RATE:
        return float(n)
    try:
        return (1.0 - (1.0 + r) ** (-n)) / r
    except (OverflowError, ZeroDivisionError):
        return math.inf


# ---------- NPV ----------
def npv(rate: float, cashflows: Iterable[float]) -> float:
    """
    Classic discounted cash flow, t0 undiscounted:
        NPV(r) = sum_{t=0..N} CF[t] / (1+r)^t
    """
    return float(npf.npv(float(rate), [float(x) for x in cashflows]))


# ---------- IRR (periodic) ----------
def irr(cashflows: Iterable[float]) -> Optional[float]:
    """
    Periodic IRR via numpy-financial. Returns a decimal rate (0.18 = 18%),
    or None when the flows give it no finite value.
    """
    cfs = [float(x) for x in cashflows]
    if len(cfs) < 2 or all(abs(cf) < 1e-12 for cf in cfs):
        return None
    if not all(math.isfinite(cf) for cf in cfs):
        return None
    try:
        val = float(npf.irr(cfs))
    except np.linalg.LinAlgError:
        return None
    if not math.isfinite(val):
        return None
    return val


# ---------- Helpers to assemble CF series ----------
def level_cashflows(capital_t0: float, annual_amount: float, years: int) -> List[float]:
    """[-capital] followed by `years` equal annual amounts."""
    return [-float(capital_t0)] + [float(annual_amount)] * int(years)
