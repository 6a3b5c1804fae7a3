# ============================================================================
# MODULE CONTEXT - WORLDCLIM TRIGGERS
# ============================================================================
# STATUS: Trigger Layer - HTTP handlers for WorldClim climate data
# PURPOSE: Azure Functions HTTP handlers for /worldclim endpoints
# EXPORTS: get_worldclim_triggers
# DEPENDENCIES: azure-functions, infrastructure.triggers, .service
# ============================================================================
"""
WorldClim HTTP Triggers.

Endpoints:
- GET  /api/worldclim/click?lat=&lon=               - Cell containing a coordinate
- POST /api/worldclim/dist?what=&min=&max=&sort=    - Cells in a distance range
- POST /api/worldclim/contain?what=                 - Cells with centroid inside a polygon
- POST /api/worldclim/intersect?what=               - Cells intersecting a geometry
"""

import azure.functions as func
from typing import Any, Dict, List

from infrastructure.models import Coordinates, GeometryTarget, PolygonTarget
from infrastructure.triggers import BaseGeoTrigger
from .models import WorldClimDistanceQuery, WorldClimQuery
from .service import WorldClimService


def get_worldclim_triggers() -> List[Dict[str, Any]]:
    """Get list of WorldClim trigger configurations for function_app.py."""
    return [
        {
            'route': 'worldclim/click',
            'methods': ['GET'],
            'handler': WorldClimClickTrigger().handle
        },
        {
            'route': 'worldclim/dist',
            'methods': ['POST'],
            'handler': WorldClimDistanceTrigger().handle
        },
        {
            'route': 'worldclim/contain',
            'methods': ['POST'],
            'handler': WorldClimContainTrigger().handle
        },
        {
            'route': 'worldclim/intersect',
            'methods': ['POST'],
            'handler': WorldClimIntersectTrigger().handle
        },
    ]


class BaseWorldClimTrigger(BaseGeoTrigger):
    service_class = WorldClimService


class WorldClimClickTrigger(BaseWorldClimTrigger):
    name = "worldclim/click"

    def process(self, req: func.HttpRequest) -> List[Dict[str, Any]]:
        point = self._query(req, Coordinates)
        return self.service.click(point.lat, point.lon)


class WorldClimDistanceTrigger(BaseWorldClimTrigger):
    name = "worldclim/dist"

    def process(self, req: func.HttpRequest) -> List[Any]:
        query = self._query(req, WorldClimDistanceQuery)
        target = self._body(req, GeometryTarget)
        return self.service.distance(target, query.what, query.min, query.max, query.sort)


class WorldClimContainTrigger(BaseWorldClimTrigger):
    name = "worldclim/contain"

    def process(self, req: func.HttpRequest) -> List[Any]:
        query = self._query(req, WorldClimQuery)
        return self.service.contain(self._body(req, PolygonTarget), query.what)


class WorldClimIntersectTrigger(BaseWorldClimTrigger):
    name = "worldclim/intersect"

    def process(self, req: func.HttpRequest) -> List[Any]:
        query = self._query(req, WorldClimQuery)
        return self.service.intersect(self._body(req, GeometryTarget), query.what)
