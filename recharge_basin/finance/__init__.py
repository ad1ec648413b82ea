"""
Finance façade.

Design:
- NPV/IRR and the annuity factor live only in recharge_basin.finance.discount.
- Loan payments live only in recharge_basin.finance.amortization.
- This module re-exports; it must not *define* npv/irr.
"""
from .amortization import amortization_schedule, annual_payment, monthly_payment
from .discount import irr as irr, level_cashflows, npv as npv, pv_factor

__all__ = [
    "amortization_schedule",
    "annual_payment",
    "monthly_payment",
    "irr",
    "npv",
    "pv_factor",
    "level_cashflows",
]
