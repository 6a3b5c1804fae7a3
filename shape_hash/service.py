"""
Shape Hash Service

Builds GeoJSON geometries from request input and returns them with their
geometry hash. No database access.
"""

import logging
from typing import Any, List

from infrastructure.geometry import geo_point, geometry_hash, multi_polygon, polygon
from .models import HashResponse

logger = logging.getLogger(__name__)


class ShapeHashService:
    """Geometry hash calculations for points and polygons."""

    def _hashed(self, geometry) -> HashResponse:
        digest = geometry_hash(geometry)
        logger.debug(f"{geometry['type']} hashed to {digest}")
        return HashResponse(geometry=geometry, geometry_hash=digest)

    def point_hash(self, lat: float, lon: float) -> HashResponse:
        return self._hashed(geo_point(lat, lon))

    def polygon_hash(self, coordinates: List[Any]) -> HashResponse:
        return self._hashed(polygon(coordinates))

    def multipolygon_hash(self, coordinates: List[Any]) -> HashResponse:
        return self._hashed(multi_polygon(coordinates))
