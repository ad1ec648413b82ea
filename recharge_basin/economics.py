# recharge_basin/economics.py
"""
Benefit stream and investment metrics for a recharge basin.

All money figures are per year unless prefixed pv_. Water amounts are
acre-feet of net recharge.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
import math

from .errors import SingularityError
from .finance.discount import irr, level_cashflows, pv_factor

OM_COST_PER_ACFT = 5.0


@dataclass(frozen=True)
class Economics:
    annual_benefit: float
    net_benefit: float
    total_annual_cost_per_acft: float
    pv_factor: float
    pv_benefits: float
    npv: float
    bc_ratio: float
    roi: float
    irr: Optional[float] = None


def evaluate_economics(
    annual_capital_payment: float,
    net_recharge_acft: float,
    water_cost: float,
    water_value: float,
    discount_rate: float,
    loan_years: int,
    total_cost: float,
    om_cost: float = OM_COST_PER_ACFT,
) -> Economics:
    """
    Monetize net recharge, net off O&M and purchased water, then discount
    the yearly benefit over the loan term against the capital cost.
    """
    if total_cost <= 0:
        raise SingularityError(f"total cost must be > 0 to form ratios, got {total_cost}", field="totalCost")

    capital_per_acft = annual_capital_payment / net_recharge_acft if net_recharge_acft > 0 else 0.0
    cost_per_acft = capital_per_acft + water_cost + om_cost

    annual_benefit = (
        net_recharge_acft * water_value
        - net_recharge_acft * water_cost
        - net_recharge_acft * om_cost
    )
    net_benefit = annual_benefit - annual_capital_payment

    factor = pv_factor(discount_rate, loan_years)
    if not math.isfinite(factor):
        raise SingularityError(
            f"present-value factor undefined at rate {discount_rate} over {loan_years} years",
            field="discountRate",
        )
    pv_benefits = annual_benefit * factor
    npv = pv_benefits - total_cost
    bc_ratio = pv_benefits / total_cost
    roi = (npv / total_cost) * 100

    figures = {
        "annualBenefit": annual_benefit,
        "netBenefit": net_benefit,
        "totalAnnualCostPerAcFt": cost_per_acft,
        "pvBenefits": pv_benefits,
        "npv": npv,
        "bcRatio": bc_ratio,
        "roi": roi,
    }
    for name, value in figures.items():
        if not math.isfinite(value):
            raise SingularityError(f"{name} is not finite ({value}); inputs are out of numeric range", field=name)

    return Economics(
        annual_benefit=annual_benefit,
        net_benefit=net_benefit,
        total_annual_cost_per_acft=cost_per_acft,
        pv_factor=factor,
        pv_benefits=pv_benefits,
        npv=npv,
        bc_ratio=bc_ratio,
        roi=roi,
        irr=irr(level_cashflows(total_cost, annual_benefit, loan_years)),
    )


__all__ = ["OM_COST_PER_ACFT", "Economics", "evaluate_economics"]
