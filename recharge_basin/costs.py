# recharge_basin/costs.py
from __future__ import annotations
from dataclasses import dataclass

from .errors import ValidationError


@dataclass(frozen=True)
class CostRates:
    earthwork_per_cuyd: float = 12.0
    pipeline_per_ft: float = 200.0
    inlet_fixed: float = 20_000.0
    contingency_pct: float = 0.20


DEFAULT_RATES = CostRates()


@dataclass(frozen=True)
class CapitalCosts:
    land: float
    earthwork: float
    pipeline: float
    inlet: float
    contingency: float

    @property
    def subtotal(self) -> float:
        return self.land + self.earthwork + self.pipeline + self.inlet

    @property
    def total(self) -> float:
        return self.subtotal + self.contingency


def estimate_costs(
    acres: float,
    earthwork_cuyd: float,
    pipeline_length_ft: float,
    land_cost_per_acre: float,
    rates: CostRates = DEFAULT_RATES,
) -> CapitalCosts:
    """Up-front capital: land, levee earthwork, delivery pipeline, inlet, plus contingency on the lot."""
    if pipeline_length_ft < 0:
        raise ValidationError("pipelineLength must be >= 0", field="pipelineLength")
    land = acres * land_cost_per_acre
    earthwork = earthwork_cuyd * rates.earthwork_per_cuyd
    pipeline = pipeline_length_ft * rates.pipeline_per_ft
    inlet = rates.inlet_fixed
    contingency = (land + earthwork + pipeline + inlet) * rates.contingency_pct
    return CapitalCosts(land=land, earthwork=earthwork, pipeline=pipeline, inlet=inlet, contingency=contingency)


__all__ = ["CostRates", "DEFAULT_RATES", "CapitalCosts", "estimate_costs"]
