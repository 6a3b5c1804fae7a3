# ============================================================================
# MODULE CONTEXT - UNIT SHAPES TRIGGERS
# ============================================================================
# STATUS: Trigger Layer - HTTP handlers for unit shapes
# PURPOSE: Azure Functions HTTP handlers for /shape endpoints
# EXPORTS: get_shapes_triggers
# DEPENDENCIES: azure-functions, infrastructure.triggers, .service
# ============================================================================
"""
Unit Shapes HTTP Triggers.

Endpoints:
- GET  /api/shape?geometry_hash=    - Shape by geometry hash
- GET  /api/shape/click?lat=&lon=   - Shapes intersecting a point
- POST /api/shape/search            - Shapes matching a selection
"""

import azure.functions as func
from typing import Any, Dict, List

from infrastructure.models import Coordinates
from infrastructure.triggers import BaseGeoTrigger
from units_api.models import GeometryHashQuery
from .models import ShapeSearch
from .service import ShapesService


def get_shapes_triggers() -> List[Dict[str, Any]]:
    """Get list of unit shape trigger configurations for function_app.py."""
    return [
        {
            'route': 'shape',
            'methods': ['GET'],
            'handler': ShapeTrigger().handle
        },
        {
            'route': 'shape/click',
            'methods': ['GET'],
            'handler': ShapeClickTrigger().handle
        },
        {
            'route': 'shape/search',
            'methods': ['POST'],
            'handler': ShapeSearchTrigger().handle
        },
    ]


class BaseShapesTrigger(BaseGeoTrigger):
    service_class = ShapesService


class ShapeTrigger(BaseShapesTrigger):
    """GET /api/shape?geometry_hash={hash}"""

    name = "shape"

    def process(self, req: func.HttpRequest) -> List[Dict[str, Any]]:
        query = self._query(req, GeometryHashQuery)
        return self.service.get_shape(query.geometry_hash)


class ShapeClickTrigger(BaseShapesTrigger):
    """GET /api/shape/click?lat={lat}&lon={lon}"""

    name = "shape/click"

    def process(self, req: func.HttpRequest) -> List[Dict[str, Any]]:
        point = self._query(req, Coordinates)
        return self.service.click(point.lat, point.lon)


class ShapeSearchTrigger(BaseShapesTrigger):
    """POST /api/shape/search"""

    name = "shape/search"

    def process(self, req: func.HttpRequest) -> List[Dict[str, Any]]:
        selection = self._body(req, ShapeSearch)
        return self.service.search(selection)
