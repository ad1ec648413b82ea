#!/usr/bin/env python3
"""
Monte Carlo analysis for the recharge basin model.
Draws the hydrology and water-market inputs that are least certain
(wet-year frequency, evaporation loss, water value, infiltration) and
reports the spread of NPV / BC ratio / ROI.
"""
from __future__ import annotations
from dataclasses import replace
from typing import Dict, Optional
import logging

import numpy as np
import pandas as pd

from .engine import InputParameters, evaluate
from .errors import FeasibilityError

logger = logging.getLogger(__name__)


def generate_mc_parameters(
    params: InputParameters,
    n_scenarios: int,
    seed: Optional[int] = None,
    spread: float = 0.25,
) -> Dict[str, np.ndarray]:
    """
    Sample inputs around the base case.

    Args:
        params: Base case
        n_scenarios: Number of draws
        seed: Random seed for reproducibility
        spread: Relative half-width of the uniform draws

    Returns:
        Dictionary of parameter arrays
    """
    rng = np.random.default_rng(seed)
    lo, hi = 1.0 - spread, 1.0 + spread

    # wet years arrive as a binomial share of the loan term
    years = max(1, int(params.loan_years))
    wet_freq = rng.binomial(years, params.wet_year_frequency, n_scenarios) / years

    return {
        "wet_year_frequency": wet_freq,
        "evaporation_loss": np.clip(params.evaporation_loss * rng.uniform(lo, hi, n_scenarios), 0.0, 0.999),
        "water_value": params.water_value * rng.uniform(lo, hi, n_scenarios),
        "infiltration_multiplier": rng.lognormal(0.0, spread, n_scenarios),
    }


def run_monte_carlo(
    params: InputParameters,
    iterations: int = 1000,
    seed: Optional[int] = None,
    spread: float = 0.25,
) -> pd.DataFrame:
    """
    Run the draws through the engine.

    Returns:
        DataFrame with one row per successful draw; summary statistics are
        in `df.attrs` (mean/p10/p50/p90 NPV, prob_positive_npv, success_rate).
    """
    if iterations <= 0:
        raise ValueError(f"iterations must be > 0, got {iterations}")
    base = evaluate(params)
    draws = generate_mc_parameters(params, iterations, seed, spread)
    out_data = []
    failed_count = 0

    for i in range(iterations):
        p = replace(
            params,
            wet_year_frequency=float(draws["wet_year_frequency"][i]),
            evaporation_loss=float(draws["evaporation_loss"][i]),
            water_value=float(draws["water_value"][i]),
        )
        infiltration = base.infiltration_rate * float(draws["infiltration_multiplier"][i])
        try:
            res = evaluate(p, infiltration_override=infiltration)
        except FeasibilityError as e:
            failed_count += 1
            logger.warning("draw %d failed: %s", i + 1, e)
            continue
        out_data.append({
            "iteration": i + 1,
            "wet_year_frequency": p.wet_year_frequency,
            "evaporation_loss": p.evaporation_loss,
            "water_value": p.water_value,
            "infiltration_rate": infiltration,
            "net_recharge": res.recharge.net_acft,
            "npv": res.economics.npv,
            "bc_ratio": res.economics.bc_ratio,
            "roi": res.economics.roi,
        })

    if failed_count > 0:
        logger.warning("Monte Carlo: %d/%d draws failed", failed_count, iterations)

    df = pd.DataFrame(out_data)

    if len(df) > 0:
        df.attrs["base_npv"] = base.economics.npv
        df.attrs["mean_npv"] = float(df["npv"].mean())
        df.attrs["p10_npv"] = float(df["npv"].quantile(0.10))
        df.attrs["p50_npv"] = float(df["npv"].quantile(0.50))
        df.attrs["p90_npv"] = float(df["npv"].quantile(0.90))
        df.attrs["prob_positive_npv"] = float((df["npv"] > 0).mean())
    df.attrs["success_rate"] = len(df) / iterations

    return df


__all__ = ["generate_mc_parameters", "run_monte_carlo"]
