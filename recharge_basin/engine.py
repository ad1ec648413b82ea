# recharge_basin/engine.py
"""
Feasibility engine: parcel + soil + money assumptions -> FeasibilityResult.

    InputParameters.from_mapping(request)  -> typed, defaulted inputs
    evaluate(inputs)                       -> FeasibilityResult
    calculate(request)                     -> {"success": True, "results": {...}}

Pure and stateless: no I/O, no logging, nothing cached between calls.
"""

from __future__ import annotations
from dataclasses import dataclass, field, asdict
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Mapping, Optional

from .basin import BasinDesign, BasinGeometry, DEFAULT_DESIGN, size_basin
from .costs import CapitalCosts, CostRates, DEFAULT_RATES, estimate_costs
from .economics import Economics, evaluate_economics
from .finance.amortization import annual_payment
from .recharge import RechargeEstimate, estimate_recharge
from .soils import SoilMatch, match_soil
from .validate import coerce_params


@dataclass(frozen=True)
class InputParameters:
    acres: float
    soil_type: str
    pipeline_length: float = 0.0
    land_cost_per_acre: float = 6000.0
    water_cost: float = 35.0
    water_value: float = 200.0
    discount_rate: float = 0.05
    loan_years: int = 10
    wet_year_frequency: float = 0.3
    wet_year_duration: int = 4
    evaporation_loss: float = 0.3
    cost_rates: CostRates = field(default=DEFAULT_RATES)
    design: BasinDesign = field(default=DEFAULT_DESIGN)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], *, mode: str = "relaxed") -> "InputParameters":
        """Build from a JSON-style request (camelCase or snake_case keys)."""
        typed = coerce_params(data, mode=mode)
        rates = CostRates(**typed.pop("cost_rates"))
        design = BasinDesign(**typed.pop("design"))
        return cls(cost_rates=rates, design=design, **typed)


# ------------------------------
# Presentation helpers
# ------------------------------
def to_fixed(value: float, digits: int) -> str:
    """Decimal string rounded half away from zero, like JavaScript's toFixed."""
    if value == 0:
        value = 0.0  # toFixed prints -0 unsigned
    q = Decimal(1).scaleb(-digits)
    out = Decimal(value).quantize(q, rounding=ROUND_HALF_UP)
    return f"{out:.{digits}f}"


def _money(value: float) -> float:
    return float(Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class FeasibilityResult:
    inputs: InputParameters
    soil: SoilMatch
    infiltration_rate: float
    geometry: BasinGeometry
    costs: CapitalCosts
    annual_capital_payment: float
    recharge: RechargeEstimate
    economics: Economics

    @property
    def total_cost(self) -> float:
        return self.costs.total

    def to_dict(self) -> Dict[str, Any]:
        """JSON view for display clients; rounding is presentation only."""
        g, c, r, e = self.geometry, self.costs, self.recharge, self.economics
        return {
            "acres": self.inputs.acres,
            "soilType": self.inputs.soil_type,
            "infiltrationRate": self.infiltration_rate,
            "soilMatch": self.soil.key,
            "soilFallback": self.soil.fallback,
            "dimensions": {
                "sideLength": to_fixed(g.side_length_ft, 0),
                "perimeter": to_fixed(g.perimeter_ft, 0),
                "wettedArea": to_fixed(g.wetted_area_acres, 2),
                "totalEarthwork": to_fixed(g.total_earthwork_cuyd, 0),
                "degenerate": g.degenerate,
            },
            "costs": {
                "landCost": _money(c.land),
                "earthworkCost": _money(c.earthwork),
                "pipelineCost": _money(c.pipeline),
                "inletCost": _money(c.inlet),
                "contingency": _money(c.contingency),
                "totalCost": _money(c.total),
                "annualCapitalPayment": _money(self.annual_capital_payment),
            },
            "recharge": {
                "grossRecharge": to_fixed(r.gross_acft, 2),
                "netRecharge": to_fixed(r.net_acft, 2),
                "daysPerYear": to_fixed(r.days_per_year, 0),
            },
            "economics": {
                "annualBenefit": to_fixed(e.annual_benefit, 2),
                "netBenefit": to_fixed(e.net_benefit, 2),
                "totalAnnualCostPerAcFt": to_fixed(e.total_annual_cost_per_acft, 2),
                "npv": to_fixed(e.npv, 2),
                "bcRatio": to_fixed(e.bc_ratio, 2),
                "roi": to_fixed(e.roi, 2),
                "irr": None if e.irr is None else to_fixed(e.irr * 100.0, 2),
            },
        }

    def to_row(self) -> Dict[str, Any]:
        """Unrounded flat record for CSV/JSONL and DataFrames."""
        g, c, r, e = self.geometry, self.costs, self.recharge, self.economics
        row: Dict[str, Any] = {
            k: v for k, v in asdict(self.inputs).items() if k not in ("cost_rates", "design")
        }
        row.update({
            "infiltration_rate": self.infiltration_rate,
            "soil_fallback": self.soil.fallback,
            "side_length_ft": g.side_length_ft,
            "perimeter_ft": g.perimeter_ft,
            "total_earthwork_cuyd": g.total_earthwork_cuyd,
            "wetted_area_acres": g.wetted_area_acres,
            "land_cost": c.land,
            "earthwork_cost": c.earthwork,
            "pipeline_cost": c.pipeline,
            "total_cost": c.total,
            "annual_capital_payment": self.annual_capital_payment,
            "days_per_year": r.days_per_year,
            "gross_recharge_acft": r.gross_acft,
            "net_recharge_acft": r.net_acft,
            "annual_benefit": e.annual_benefit,
            "net_benefit": e.net_benefit,
            "total_annual_cost_per_acft": e.total_annual_cost_per_acft,
            "npv": e.npv,
            "bc_ratio": e.bc_ratio,
            "roi": e.roi,
            "irr": e.irr,
        })
        return row


def evaluate(p: InputParameters, *, infiltration_override: Optional[float] = None) -> FeasibilityResult:
    """
    Run the full chain. `infiltration_override` replaces the classified rate
    (used by the Monte Carlo draws); the soil match is still reported.
    """
    soil = match_soil(p.soil_type)
    geom = size_basin(p.acres, p.design)
    costs = estimate_costs(
        p.acres,
        geom.total_earthwork_cuyd,
        p.pipeline_length,
        p.land_cost_per_acre,
        p.cost_rates,
    )
    payment = annual_payment(costs.total, p.discount_rate, p.loan_years)

    rate = soil.rate if infiltration_override is None else float(infiltration_override)
    recharge = estimate_recharge(
        geom.wetted_area_acres,
        rate,
        p.wet_year_frequency,
        p.wet_year_duration,
        p.evaporation_loss,
    )
    econ = evaluate_economics(
        annual_capital_payment=payment,
        net_recharge_acft=recharge.net_acft,
        water_cost=p.water_cost,
        water_value=p.water_value,
        discount_rate=p.discount_rate,
        loan_years=p.loan_years,
        total_cost=costs.total,
    )
    return FeasibilityResult(
        inputs=p,
        soil=soil,
        infiltration_rate=rate,
        geometry=geom,
        costs=costs,
        annual_capital_payment=payment,
        recharge=recharge,
        economics=econ,
    )


def calculate(payload: Mapping[str, Any], *, mode: str = "relaxed") -> Dict[str, Any]:
    """Request/response form used by hosts: JSON-style mapping in, JSON-style dict out."""
    result = evaluate(InputParameters.from_mapping(payload, mode=mode))
    return {"success": True, "results": result.to_dict()}


__all__ = ["InputParameters", "FeasibilityResult", "evaluate", "calculate", "to_fixed"]
