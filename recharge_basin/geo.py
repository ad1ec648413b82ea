# recharge_basin/geo.py
"""
Parcel area from a lon/lat ring.

Planar shoelace area in square degrees, scaled by a flat 69 miles per
degree on both axes. No latitude correction: only meaningful for small
parcels at mid-latitudes.

GeoJSON input is read with shapely; the area itself stays the planar
shoelace above.
"""

from __future__ import annotations
from typing import Any, List, Mapping, Sequence, Tuple

from shapely.errors import ShapelyError
from shapely.geometry import shape
from shapely.ops import unary_union

from .errors import ValidationError

MILES_PER_DEGREE = 69.0
ACRES_PER_SQ_MILE = 640.0

Point = Tuple[float, float]


def _as_points(ring: Sequence[Sequence[float]]) -> List[Point]:
    pts: List[Point] = []
    for i, pt in enumerate(ring):
        try:
            lon, lat = pt[0], pt[1]
            pts.append((float(lon), float(lat)))
        except (TypeError, ValueError, IndexError):
            raise ValidationError(f"vertex {i} is not a [lon, lat] pair: {pt!r}", field="polygon")
    return pts


def signed_area_deg2(ring: Sequence[Sequence[float]]) -> float:
    """Shoelace signed area; counter-clockwise rings come out positive."""
    pts = _as_points(ring)
    n = len(pts)
    if n < 3:
        return 0.0
    acc = 0.0
    for i in range(n):
        x0, y0 = pts[i]
        x1, y1 = pts[(i + 1) % n]
        acc += x0 * y1 - x1 * y0
    return 0.5 * acc


def polygon_acres(ring: Sequence[Sequence[float]]) -> float:
    """Area in acres of an open (or closed) ring of (lon, lat) vertices."""
    area = abs(signed_area_deg2(ring))
    return area * MILES_PER_DEGREE * MILES_PER_DEGREE * ACRES_PER_SQ_MILE


# ------------------------------
# GeoJSON
# ------------------------------
def _parcel_geometry(obj: Mapping[str, Any]):
    """Polygonal shapely geometry of a GeoJSON geometry, Feature or FeatureCollection."""
    if not isinstance(obj, Mapping):
        raise ValidationError(f"GeoJSON must be a mapping, got {type(obj).__name__}", field="geometry")
    features = (obj.get("features") or []) if obj.get("type") == "FeatureCollection" else None
    if features == []:
        raise ValidationError("FeatureCollection has no features", field="geometry")
    try:
        if features is not None:
            geom = unary_union([shape(f["geometry"]) for f in features])
        else:
            geom = shape(obj)
    except (ShapelyError, KeyError, TypeError, ValueError, AttributeError) as e:
        raise ValidationError(f"invalid GeoJSON: {e}", field="geometry")

    if geom.is_empty or geom.geom_type not in ("Polygon", "MultiPolygon"):
        raise ValidationError(f"GeoJSON must describe a polygon, got {geom.geom_type}", field="geometry")
    return geom


def _polygons(geom) -> list:
    return list(geom.geoms) if geom.geom_type == "MultiPolygon" else [geom]


def ring_from_geojson(obj: Mapping[str, Any]) -> List[List[float]]:
    """
    Outer ring of the parcel. Features of a collection are merged first;
    when the parcel is still in several pieces the largest piece is used.
    """
    geom = _parcel_geometry(obj)
    largest = max(_polygons(geom), key=lambda p: p.area)
    return [[x, y] for x, y, *_ in largest.exterior.coords]


def geojson_acres(obj: Mapping[str, Any]) -> float:
    """Shoelace acres over every piece of the parcel, holes subtracted."""
    total = 0.0
    for poly in _polygons(_parcel_geometry(obj)):
        total += polygon_acres(list(poly.exterior.coords))
        for hole in poly.interiors:
            total -= polygon_acres(list(hole.coords))
    return total


__all__ = ["signed_area_deg2", "polygon_acres", "ring_from_geojson", "geojson_acres"]
