# recharge_basin/recharge.py
"""
Annual recharge from a wet-year operating model.

The basin only runs in wet years (`wet_year_frequency` of them) for
`wet_year_duration` months of 30 days, so days/year is an expectation.
"""

from __future__ import annotations
from dataclasses import dataclass

DAYS_PER_MONTH = 30


@dataclass(frozen=True)
class RechargeEstimate:
    days_per_year: float
    gross_acft: float
    net_acft: float

    @property
    def evaporated_acft(self) -> float:
        return self.gross_acft - self.net_acft


def operating_days(wet_year_frequency: float, wet_year_duration: float) -> float:
    return wet_year_frequency * (wet_year_duration * DAYS_PER_MONTH)


def estimate_recharge(
    wetted_area_acres: float,
    infiltration_ft_per_day: float,
    wet_year_frequency: float,
    wet_year_duration: float,
    evaporation_loss: float,
) -> RechargeEstimate:
    days = operating_days(wet_year_frequency, wet_year_duration)
    gross = wetted_area_acres * infiltration_ft_per_day * days
    net = gross * (1.0 - evaporation_loss)
    return RechargeEstimate(days_per_year=days, gross_acft=gross, net_acft=net)


__all__ = ["RechargeEstimate", "operating_days", "estimate_recharge"]
