# ============================================================================
# MODULE CONTEXT - SHAPE HASH TRIGGERS
# ============================================================================
# STATUS: Trigger Layer - HTTP handlers for geometry hashes
# PURPOSE: Azure Functions HTTP handlers for /hash endpoints
# EXPORTS: get_hash_triggers
# DEPENDENCIES: azure-functions, infrastructure.triggers, .service
# ============================================================================
"""
Shape Hash HTTP Triggers.

Endpoints:
- GET  /api/hash?lat=&lon=     - Point geometry and hash
- POST /api/hash/poly          - Polygon geometry and hash
- POST /api/hash/multipoly     - MultiPolygon geometry and hash
"""

import azure.functions as func
from typing import Any, Dict, List

from infrastructure.models import Coordinates
from infrastructure.triggers import BaseGeoTrigger
from .models import CoordinatesBody, HashResponse
from .service import ShapeHashService


def get_hash_triggers() -> List[Dict[str, Any]]:
    """
    Get list of shape hash trigger configurations for function_app.py.

    Returns:
        List of dicts with keys route, methods and handler
    """
    return [
        {
            'route': 'hash',
            'methods': ['GET'],
            'handler': PointHashTrigger().handle
        },
        {
            'route': 'hash/poly',
            'methods': ['POST'],
            'handler': PolygonHashTrigger().handle
        },
        {
            'route': 'hash/multipoly',
            'methods': ['POST'],
            'handler': MultiPolygonHashTrigger().handle
        },
    ]


class BaseHashTrigger(BaseGeoTrigger):
    """Base class for hash triggers."""

    service_class = ShapeHashService


class PointHashTrigger(BaseHashTrigger):
    """GET /api/hash?lat={lat}&lon={lon}"""

    name = "hash/point"

    def process(self, req: func.HttpRequest) -> HashResponse:
        point = self._query(req, Coordinates)
        return self.service.point_hash(point.lat, point.lon)


class PolygonHashTrigger(BaseHashTrigger):
    """POST /api/hash/poly with body {"coordinates": [...]}"""

    name = "hash/poly"

    def process(self, req: func.HttpRequest) -> HashResponse:
        body = self._body(req, CoordinatesBody)
        return self.service.polygon_hash(body.coordinates)


class MultiPolygonHashTrigger(BaseHashTrigger):
    """POST /api/hash/multipoly with body {"coordinates": [...]}"""

    name = "hash/multipoly"

    def process(self, req: func.HttpRequest) -> HashResponse:
        body = self._body(req, CoordinatesBody)
        return self.service.multipolygon_hash(body.coordinates)
