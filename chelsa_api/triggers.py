# ============================================================================
# MODULE CONTEXT - CHELSA TRIGGERS
# ============================================================================
# STATUS: Trigger Layer - HTTP handlers for CHELSA climate data
# PURPOSE: Azure Functions HTTP handlers for /chelsa endpoints
# EXPORTS: get_chelsa_triggers
# DEPENDENCIES: azure-functions, infrastructure.triggers, .service
# ============================================================================
"""
CHELSA HTTP Triggers.

Endpoints:
- GET  /api/chelsa/click?lat=&lon=&what=           - Data points at a coordinate
- POST /api/chelsa/dist?what=&min=&max=&sort=      - Data points in a distance range
- POST /api/chelsa/contain?what=                   - Data points inside a polygon
- POST /api/chelsa/intersect?what=                 - Data points intersecting a geometry
- POST /api/chelsa/mean/contain                    - Variable averages inside a polygon
"""

import azure.functions as func
from typing import Any, Dict, List

from infrastructure.models import GeometryTarget, PolygonTarget
from infrastructure.triggers import BaseGeoTrigger
from .models import ChelsaClickQuery, ChelsaDistanceQuery, ChelsaQuery
from .service import ChelsaService


def get_chelsa_triggers() -> List[Dict[str, Any]]:
    """Get list of CHELSA trigger configurations for function_app.py."""
    return [
        {
            'route': 'chelsa/click',
            'methods': ['GET'],
            'handler': ChelsaClickTrigger().handle
        },
        {
            'route': 'chelsa/dist',
            'methods': ['POST'],
            'handler': ChelsaDistanceTrigger().handle
        },
        {
            'route': 'chelsa/contain',
            'methods': ['POST'],
            'handler': ChelsaContainTrigger().handle
        },
        {
            'route': 'chelsa/intersect',
            'methods': ['POST'],
            'handler': ChelsaIntersectTrigger().handle
        },
        {
            'route': 'chelsa/mean/contain',
            'methods': ['POST'],
            'handler': ChelsaMeanContainTrigger().handle
        },
    ]


class BaseChelsaTrigger(BaseGeoTrigger):
    service_class = ChelsaService


class ChelsaClickTrigger(BaseChelsaTrigger):
    name = "chelsa/click"

    def process(self, req: func.HttpRequest) -> List[Any]:
        query = self._query(req, ChelsaClickQuery)
        return self.service.click(query.lat, query.lon, query.what)


class ChelsaDistanceTrigger(BaseChelsaTrigger):
    name = "chelsa/dist"

    def process(self, req: func.HttpRequest) -> List[Any]:
        query = self._query(req, ChelsaDistanceQuery)
        target = self._body(req, GeometryTarget)
        return self.service.distance(target, query.what, query.min, query.max, query.sort)


class ChelsaContainTrigger(BaseChelsaTrigger):
    name = "chelsa/contain"

    def process(self, req: func.HttpRequest) -> List[Any]:
        query = self._query(req, ChelsaQuery)
        return self.service.contain(self._body(req, PolygonTarget), query.what)


class ChelsaIntersectTrigger(BaseChelsaTrigger):
    name = "chelsa/intersect"

    def process(self, req: func.HttpRequest) -> List[Any]:
        query = self._query(req, ChelsaQuery)
        return self.service.intersect(self._body(req, GeometryTarget), query.what)


class ChelsaMeanContainTrigger(BaseChelsaTrigger):
    name = "chelsa/mean/contain"

    def process(self, req: func.HttpRequest) -> List[Dict[str, Any]]:
        return self.service.mean_contain(self._body(req, PolygonTarget))
