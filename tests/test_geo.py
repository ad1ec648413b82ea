import pytest

from recharge_basin.errors import ValidationError
from recharge_basin.geo import geojson_acres, polygon_acres, ring_from_geojson, signed_area_deg2


def _square(lon0, lat0, width):
    return [[lon0, lat0], [lon0 + width, lat0], [lon0 + width, lat0 + width], [lon0, lat0 + width]]


def _closed(ring):
    return ring + [ring[0]]


def _polygon(*rings):
    return {"type": "Polygon", "coordinates": [_closed(r) for r in rings]}


def test_square_tenth_degree_matches_shoelace_reference():
    ring = _square(-119.5, 36.7, 0.1)
    # 0.01 deg^2 * 69^2 mi^2/deg^2 * 640 ac/mi^2
    assert polygon_acres(ring) == pytest.approx(0.01 * 69 * 69 * 640, rel=1e-4)


def test_orientation_does_not_change_area():
    ring = _square(-119.5, 36.7, 0.01)
    assert signed_area_deg2(ring) > 0
    assert signed_area_deg2(ring[::-1]) < 0
    assert polygon_acres(ring) == pytest.approx(polygon_acres(ring[::-1]))


def test_closed_ring_same_as_open():
    ring = _square(-120.0, 37.0, 0.02)
    assert polygon_acres(_closed(ring)) == pytest.approx(polygon_acres(ring))


@pytest.mark.parametrize("ring", [[], [[0, 0]], [[0, 0], [1, 1]]])
def test_fewer_than_three_points_is_zero(ring):
    assert polygon_acres(ring) == 0.0


def test_bad_vertex_is_validation_error():
    with pytest.raises(ValidationError):
        polygon_acres([[0, 0], [1, "x"], [1, 1]])


def test_ring_from_feature_collection():
    ring = _square(-119.0, 36.0, 0.01)
    fc = {
        "type": "FeatureCollection",
        "features": [{"type": "Feature", "properties": {}, "geometry": _polygon(ring)}],
    }
    out = ring_from_geojson(fc)
    assert out[0] == out[-1]
    assert polygon_acres(out) == pytest.approx(polygon_acres(ring))


def test_multipolygon_counts_every_piece():
    a = _square(-119.0, 36.0, 0.01)
    b = _square(-118.0, 36.0, 0.02)
    multi = {"type": "MultiPolygon", "coordinates": [[_closed(a)], [_closed(b)]]}
    assert geojson_acres(multi) == pytest.approx(polygon_acres(a) + polygon_acres(b))
    assert polygon_acres(ring_from_geojson(multi)) == pytest.approx(polygon_acres(b))


def test_touching_features_are_merged():
    left = _square(-119.0, 36.0, 0.125)
    right = _square(-118.875, 36.0, 0.125)
    fc = {
        "type": "FeatureCollection",
        "features": [
            {"type": "Feature", "properties": {}, "geometry": _polygon(left)},
            {"type": "Feature", "properties": {}, "geometry": _polygon(right)},
        ],
    }
    assert polygon_acres(ring_from_geojson(fc)) == pytest.approx(2 * polygon_acres(left), rel=1e-6)


def test_hole_is_subtracted():
    outer = _square(-119.0, 36.0, 0.02)
    hole = _square(-118.995, 36.005, 0.01)
    assert geojson_acres(_polygon(outer, hole)) == pytest.approx(
        polygon_acres(outer) - polygon_acres(hole), rel=1e-9
    )


@pytest.mark.parametrize(
    "obj",
    [
        {"type": "Point", "coordinates": [0, 0]},
        {"type": "FeatureCollection", "features": []},
        {"type": "Feature", "properties": {}},
        {"type": "Polygon"},
        "not geojson",
    ],
)
def test_non_polygon_geojson_is_validation_error(obj):
    with pytest.raises(ValidationError):
        ring_from_geojson(obj)
