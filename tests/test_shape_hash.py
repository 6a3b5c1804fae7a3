"""
Tests for geometry helpers and the shape hash API.
"""

import hashlib

import pytest

from infrastructure.geometry import geo_point, geometry_hash, multi_polygon, polygon
from shape_hash.service import ShapeHashService
from shape_hash.triggers import (
    MultiPolygonHashTrigger,
    PointHashTrigger,
    PolygonHashTrigger,
    get_hash_triggers,
)
from tests.conftest import response_json

SQUARE = [[[0, 0], [1, 0], [1, 1], [0, 1], [0, 0]]]


# ============================================================================
# GEOMETRY HASH
# ============================================================================

class TestGeometryHash:
    """Tests for infrastructure.geometry."""

    def test_point_coordinates_are_lon_lat(self):
        assert geo_point(45.0, 12.5) == {"type": "Point", "coordinates": [12.5, 45.0]}

    def test_hash_is_md5_of_compact_json(self):
        expected = hashlib.md5(b'{"type":"Point","coordinates":[12.5,45]}').hexdigest()

        assert geometry_hash(geo_point(45.0, 12.5)) == expected

    def test_hash_is_32_hex_chars(self):
        digest = geometry_hash(polygon(SQUARE))

        assert len(digest) == 32
        assert int(digest, 16) >= 0

    def test_integral_floats_hash_as_integers(self):
        assert geometry_hash(geo_point(12.0, 3.0)) == geometry_hash(geo_point(12, 3))

    def test_key_order_does_not_matter(self):
        forward = {"type": "Polygon", "coordinates": SQUARE}
        reverse = {"coordinates": SQUARE, "type": "Polygon"}

        assert geometry_hash(forward) == geometry_hash(reverse)

    def test_polygon_and_multipolygon_differ(self):
        assert geometry_hash(polygon(SQUARE)) != geometry_hash(multi_polygon([SQUARE]))


# ============================================================================
# SHAPE HASH API
# ============================================================================

class TestShapeHashAPI:
    """Tests for the /hash endpoints."""

    def test_routes(self):
        routes = {(t['route'], tuple(t['methods'])) for t in get_hash_triggers()}

        assert routes == {("hash", ("GET",)), ("hash/poly", ("POST",)), ("hash/multipoly", ("POST",))}

    def test_point_hash(self, make_request):
        response = PointHashTrigger().handle(
            make_request("GET", "hash", params={"lat": "45", "lon": "12.5"})
        )

        assert response.status_code == 200
        body = response_json(response)
        assert body["geometry"] == {"type": "Point", "coordinates": [12.5, 45.0]}
        assert body["geometry_hash"] == ShapeHashService().point_hash(45, 12.5).geometry_hash

    def test_point_hash_rejects_out_of_range_latitude(self, make_request):
        response = PointHashTrigger().handle(
            make_request("GET", "hash", params={"lat": "91", "lon": "0"})
        )

        assert response.status_code == 400
        assert response_json(response)["code"] == "BadRequest"

    @pytest.mark.parametrize("trigger,kind,coordinates", [
        (PolygonHashTrigger, "Polygon", SQUARE),
        (MultiPolygonHashTrigger, "MultiPolygon", [SQUARE]),
    ])
    def test_polygon_hashes(self, make_request, trigger, kind, coordinates):
        response = trigger().handle(
            make_request("POST", "hash/poly", body={"coordinates": coordinates})
        )

        body = response_json(response)
        assert response.status_code == 200
        assert body["geometry"]["type"] == kind
        assert body["geometry_hash"] == geometry_hash({"type": kind, "coordinates": coordinates})

    def test_polygon_hash_requires_coordinates(self, make_request):
        response = PolygonHashTrigger().handle(make_request("POST", "hash/poly", body={}))

        assert response.status_code == 400
