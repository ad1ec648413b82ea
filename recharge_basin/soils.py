# recharge_basin/soils.py
"""
Soil map-unit helpers:
 - infiltration rate (ft/day) from a map-unit symbol
 - ranking of the soil units returned by the survey lookup

The survey lookup itself (AOI, catalog, report) lives outside this package;
only its final list of {symbol, desc, acres} is consumed here.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from .errors import NoSoilDataError, ValidationError

# Priority list, not a lookup table: order decides ties.
INFILTRATION_RATES: Tuple[Tuple[str, float], ...] = (
    ("sand", 1.0),
    ("sa", 1.0),
    ("sandy", 0.7),
    ("sl", 0.7),
    ("loam", 0.6),
    ("l", 0.6),
    ("sil", 0.5),
    ("sicl", 0.4),
    ("cl", 0.4),
    ("si", 0.3),
    ("clay", 0.05),
    ("c", 0.05),
)
DEFAULT_RATE = 0.6


@dataclass(frozen=True)
class SoilMatch:
    symbol: str
    key: Optional[str]
    rate: float

    @property
    def fallback(self) -> bool:
        return self.key is None


def match_soil(
    symbol: str,
    table: Sequence[Tuple[str, float]] = INFILTRATION_RATES,
    default: float = DEFAULT_RATE,
) -> SoilMatch:
    """
    Walk `table` in order and keep every key found inside the lower-cased
    symbol. A hit that is only part of a longer hit ("l" inside "sicl")
    is dropped; the first remaining key in table order wins.

    This differs from a plain first-hit scan wherever a short key shadows a
    longer one: "sandy loam" is 0.7 here, not 1.0, and "SiL", "Cl",
    "SiCl2" and "Clay" get their own rates instead of 0.6 from "l".
    """
    if not isinstance(symbol, str):
        raise ValidationError(f"soil symbol must be a string, got {type(symbol).__name__}", field="soilType")
    text = symbol.lower()
    hits = [(k, r) for k, r in table if k in text]
    for key, rate in hits:
        if any(key != other and key in other for other, _ in hits):
            continue
        return SoilMatch(symbol=symbol, key=key, rate=float(rate))
    return SoilMatch(symbol=symbol, key=None, rate=float(default))


def infiltration_rate(symbol: str) -> float:
    return match_soil(symbol).rate


# ------------------------------
# Survey output
# ------------------------------
@dataclass(frozen=True)
class SoilUnit:
    symbol: str
    desc: str = ""
    acres: float = 0.0


def _parse_acres(v: Any) -> float:
    if v is None or v == "":
        return 0.0
    if isinstance(v, str):
        v = v.replace(",", "").strip()
    try:
        return float(v)
    except (TypeError, ValueError):
        return 0.0


def as_soil_unit(item: Union[SoilUnit, Mapping[str, Any]]) -> SoilUnit:
    if isinstance(item, SoilUnit):
        return item
    if not isinstance(item, Mapping) or not item.get("symbol"):
        raise ValidationError(f"soil unit needs a symbol: {item!r}", field="soils")
    return SoilUnit(
        symbol=str(item["symbol"]).strip(),
        desc=str(item.get("desc") or "").strip(),
        acres=_parse_acres(item.get("acres")),
    )


def rank_soil_units(units: Iterable[Union[SoilUnit, Mapping[str, Any]]]) -> List[SoilUnit]:
    """Largest acreage first; equal acreages keep survey order."""
    return sorted((as_soil_unit(u) for u in units), key=lambda u: u.acres, reverse=True)


def primary_soil(units: Iterable[Union[SoilUnit, Mapping[str, Any]]]) -> SoilUnit:
    ranked = rank_soil_units(units or [])
    if not ranked:
        raise NoSoilDataError("no soil data found for this area", field="soils")
    return ranked[0]


__all__ = [
    "INFILTRATION_RATES",
    "DEFAULT_RATE",
    "SoilMatch",
    "match_soil",
    "infiltration_rate",
    "SoilUnit",
    "as_soil_unit",
    "rank_soil_units",
    "primary_soil",
]
