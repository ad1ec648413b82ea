"""Recharge basin techno-economic feasibility model."""

from .engine import FeasibilityResult, InputParameters, calculate, evaluate
from .errors import DomainError, FeasibilityError, SingularityError, ValidationError
from .geo import polygon_acres
from .soils import infiltration_rate, match_soil

__version__ = "0.3.0"

__all__ = [
    "FeasibilityResult",
    "InputParameters",
    "calculate",
    "evaluate",
    "FeasibilityError",
    "ValidationError",
    "DomainError",
    "SingularityError",
    "polygon_acres",
    "infiltration_rate",
    "match_soil",
]
