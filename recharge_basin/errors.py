# recharge_basin/errors.py
"""
Error taxonomy for the feasibility engine.

Every error is a ValueError so hosts that already catch ValueError keep
working; `kind` tells the four cases apart without isinstance chains.
"""

from __future__ import annotations
from typing import Any, Dict


class FeasibilityError(ValueError):
    kind = "feasibility"

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"error": self.kind, "details": str(self)}
        if self.field:
            out["field"] = self.field
        return out


class ValidationError(FeasibilityError):
    """Required input missing, unparseable, or outside its allowed range."""

    kind = "validation"


class NoSoilDataError(ValidationError):
    kind = "no_soil_data"


class DomainError(FeasibilityError):
    """Inputs parse fine but describe a basin that cannot exist."""

    kind = "domain"


class SingularityError(FeasibilityError):
    """A discounting or annuity term would come out NaN or infinite."""

    kind = "singularity"


__all__ = [
    "FeasibilityError",
    "ValidationError",
    "NoSoilDataError",
    "DomainError",
    "SingularityError",
]
