# ============================================================================
# MODULE CONTEXT - UNITS TRIGGERS
# ============================================================================
# STATUS: Trigger Layer - HTTP handlers for genetic conservation units
# PURPOSE: Azure Functions HTTP handlers for /gcu endpoints
# EXPORTS: get_units_triggers
# DEPENDENCIES: azure-functions, infrastructure.triggers, .service
# ============================================================================
"""
Units HTTP Triggers.

Endpoints:
- GET /api/gcu/id?gcu_id_number=        - Unit IDs of a unit number
- GET /api/gcu/shape?gcu_id_unit-id=    - Shape references of a unit ID
- GET /api/gcu/rec?geometry_hash=       - Unit records of a shape
"""

import azure.functions as func
from typing import Any, Dict, List

from infrastructure.triggers import BaseGeoTrigger
from .models import GeometryHashQuery, UnitIdQuery, UnitNumberQuery
from .service import UnitsService


def get_units_triggers() -> List[Dict[str, Any]]:
    """Get list of units trigger configurations for function_app.py."""
    return [
        {
            'route': 'gcu/id',
            'methods': ['GET'],
            'handler': UnitIdsTrigger().handle
        },
        {
            'route': 'gcu/shape',
            'methods': ['GET'],
            'handler': UnitShapesTrigger().handle
        },
        {
            'route': 'gcu/rec',
            'methods': ['GET'],
            'handler': UnitRecordsTrigger().handle
        },
    ]


class BaseUnitsTrigger(BaseGeoTrigger):
    service_class = UnitsService


class UnitIdsTrigger(BaseUnitsTrigger):
    """GET /api/gcu/id - unit ID list by unit number."""

    name = "gcu/id"

    def process(self, req: func.HttpRequest) -> List[Dict[str, Any]]:
        query = self._query(req, UnitNumberQuery)
        return self.service.unit_ids(query.gcu_id_number)


class UnitShapesTrigger(BaseUnitsTrigger):
    """GET /api/gcu/shape - unit geometry references by unit ID."""

    name = "gcu/shape"

    def process(self, req: func.HttpRequest) -> List[Dict[str, Any]]:
        query = self._query(req, UnitIdQuery)
        return self.service.unit_shapes(query.gcu_id_unit_id)


class UnitRecordsTrigger(BaseUnitsTrigger):
    """GET /api/gcu/rec - unit by geometry reference."""

    name = "gcu/rec"

    def process(self, req: func.HttpRequest) -> List[Dict[str, Any]]:
        query = self._query(req, GeometryHashQuery)
        return self.service.unit_records(query.geometry_hash)
