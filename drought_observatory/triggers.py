# ============================================================================
# MODULE CONTEXT - DROUGHT OBSERVATORY TRIGGERS
# ============================================================================
# STATUS: Trigger Layer - HTTP handlers for drought observatory data
# PURPOSE: Azure Functions HTTP handlers for /do endpoints
# EXPORTS: get_drought_observatory_triggers
# DEPENDENCIES: azure-functions, infrastructure.triggers, .service
# ============================================================================
"""
Drought Observatory HTTP Triggers.

All endpoints take ?lat=&lon= and a DroughtSelection body.

Endpoints:
- POST /api/do/meta          - Summary at the point
- POST /api/do/meta/shape    - Summary per observation area
- POST /api/do/meta/dataset  - Summary per dataset
- POST /api/do/data/shape    - Time series per observation area
- POST /api/do/data/date     - Measurements merged per date
"""

import azure.functions as func
from typing import Any, Dict, List

from infrastructure.models import Coordinates
from infrastructure.triggers import BaseGeoTrigger
from .models import DroughtSelection
from .service import DroughtObservatoryService


def get_drought_observatory_triggers() -> List[Dict[str, Any]]:
    """Get list of drought observatory trigger configurations for function_app.py."""
    return [
        {
            'route': f'do/{trigger.name}',
            'methods': ['POST'],
            'handler': trigger.handle
        }
        for trigger in (
            DroughtTrigger("meta", "metadata"),
            DroughtTrigger("meta/shape", "metadata_by_geometry"),
            DroughtTrigger("meta/dataset", "metadata_by_dataset"),
            DroughtTrigger("data/shape", "data_by_geometry"),
            DroughtTrigger("data/date", "data_by_date"),
        )
    ]


class DroughtTrigger(BaseGeoTrigger):
    """
    POST /api/do/{operation}?lat={lat}&lon={lon}

    One trigger class serves every endpoint; `operation` names the service
    method the endpoint calls.
    """

    service_class = DroughtObservatoryService

    def __init__(self, name: str, operation: str, service: Any = None):
        super().__init__(service)
        self.name = name
        self.operation = operation

    def process(self, req: func.HttpRequest) -> List[Dict[str, Any]]:
        point = self._query(req, Coordinates)
        selection = self._body(req, DroughtSelection)
        return getattr(self.service, self.operation)(point.lat, point.lon, selection)
