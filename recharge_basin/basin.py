# recharge_basin/basin.py
"""
Square basin sized to the parcel, ringed by a trapezoidal levee.

Lengths in feet, earthwork in cubic yards, wetted area in acres.
"""

from __future__ import annotations
from dataclasses import dataclass
import math

from .errors import DomainError

SQFT_PER_ACRE = 43_560.0
SQFT_PER_SQYD = 9.0
SQYD_PER_ACRE = 4_840.0
CUFT_PER_CUYD = 27.0


@dataclass(frozen=True)
class BasinDesign:
    top_width_ft: float = 8.0
    inside_slope: float = 4.0  # horizontal : 1 vertical
    outside_slope: float = 2.0
    freeboard_ft: float = 1.0
    water_depth_ft: float = 1.0

    @property
    def levee_height_ft(self) -> float:
        return self.freeboard_ft + self.water_depth_ft


DEFAULT_DESIGN = BasinDesign()


@dataclass(frozen=True)
class BasinGeometry:
    side_length_ft: float
    perimeter_ft: float
    center_levee_cuyd: float
    inside_levee_cuyd: float
    outside_levee_cuyd: float
    inside_length_ft: float
    wetted_area_acres: float
    degenerate: bool = False

    @property
    def total_earthwork_cuyd(self) -> float:
        return self.center_levee_cuyd + self.inside_levee_cuyd + self.outside_levee_cuyd


def levee_volumes(perimeter_ft: float, design: BasinDesign = DEFAULT_DESIGN) -> tuple[float, float, float]:
    """(center, inside, outside) prism volumes in cubic yards."""
    h = design.levee_height_ft
    center = perimeter_ft * design.top_width_ft * h / CUFT_PER_CUYD
    inside = perimeter_ft * design.inside_slope * h ** 2 / (2 * CUFT_PER_CUYD)
    outside = perimeter_ft * design.outside_slope * h ** 2 / (2 * CUFT_PER_CUYD)
    return center, inside, outside


def size_basin(acres: float, design: BasinDesign = DEFAULT_DESIGN) -> BasinGeometry:
    """
    Size the basin for a parcel of `acres`.

    acres <= 0 raises DomainError. When the levee base swallows the whole
    footprint (inside length <= 0) the wetted area is 0 and the result is
    flagged `degenerate`; earthwork is still reported.
    """
    acres = float(acres)
    if not math.isfinite(acres) or acres <= 0:
        raise DomainError(f"acres must be > 0 to size a basin, got {acres}", field="acres")

    side = math.sqrt(acres * SQFT_PER_ACRE)
    perimeter = 4 * side
    center, inside, outside = levee_volumes(perimeter, design)

    h = design.levee_height_ft
    inside_length = side - 2 * (design.top_width_ft / 2 + design.inside_slope * h)
    degenerate = inside_length <= 0
    if degenerate:
        wetted = 0.0
    else:
        wetted = inside_length ** 2 / SQFT_PER_SQYD / SQYD_PER_ACRE

    return BasinGeometry(
        side_length_ft=side,
        perimeter_ft=perimeter,
        center_levee_cuyd=center,
        inside_levee_cuyd=inside,
        outside_levee_cuyd=outside,
        inside_length_ft=inside_length,
        wetted_area_acres=wetted,
        degenerate=degenerate,
    )


__all__ = ["BasinDesign", "DEFAULT_DESIGN", "BasinGeometry", "levee_volumes", "size_basin"]
