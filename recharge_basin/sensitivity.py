# recharge_basin/sensitivity.py
"""
One-at-a-time sensitivity of NPV to the numeric inputs.

Each factor is moved down and up by `swing` (a fraction of its base value),
clipped to the factor's allowed range, with everything else held at base.
"""

from __future__ import annotations
from dataclasses import replace
from typing import Dict, Iterable, Tuple
import logging

import pandas as pd

from .engine import InputParameters, evaluate
from .errors import FeasibilityError

logger = logging.getLogger(__name__)

DEFAULT_FACTORS: Tuple[str, ...] = (
    "acres",
    "pipeline_length",
    "land_cost_per_acre",
    "water_cost",
    "water_value",
    "discount_rate",
    "wet_year_frequency",
    "evaporation_loss",
)

# Inclusive bounds the perturbed value is clipped into.
_BOUNDS: Dict[str, Tuple[float, float]] = {
    "wet_year_frequency": (0.0, 1.0),
    "evaporation_loss": (0.0, 0.999),
}


def _perturb(name: str, base: float, k: float) -> float:
    lo, hi = _BOUNDS.get(name, (0.0, float("inf")))
    return min(hi, max(lo, base * k))


def sensitivity_table(
    params: InputParameters,
    factors: Iterable[str] = DEFAULT_FACTORS,
    swing: float = 0.2,
) -> pd.DataFrame:
    """
    Columns: parameter, base, low, high, npv_low, npv_high, npv_swing.
    Sorted with the most influential factor first.
    """
    if not 0 < swing < 1:
        raise ValueError(f"swing must be in (0, 1), got {swing}")
    base_npv = evaluate(params).economics.npv
    rows = []
    for name in factors:
        base = float(getattr(params, name))
        lo_v = _perturb(name, base, 1.0 - swing)
        hi_v = _perturb(name, base, 1.0 + swing)
        try:
            npv_lo = evaluate(replace(params, **{name: lo_v})).economics.npv
            npv_hi = evaluate(replace(params, **{name: hi_v})).economics.npv
        except FeasibilityError as e:
            logger.warning("skipping %s: %s", name, e)
            continue
        rows.append({
            "parameter": name,
            "base": base,
            "low": lo_v,
            "high": hi_v,
            "npv_low": npv_lo,
            "npv_high": npv_hi,
            "npv_swing": abs(npv_hi - npv_lo),
        })

    df = pd.DataFrame(rows, columns=["parameter", "base", "low", "high", "npv_low", "npv_high", "npv_swing"])
    df = df.sort_values("npv_swing", ascending=False, kind="mergesort").reset_index(drop=True)
    df.attrs["base_npv"] = base_npv
    return df


__all__ = ["DEFAULT_FACTORS", "sensitivity_table"]
