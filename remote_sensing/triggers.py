# ============================================================================
# MODULE CONTEXT - REMOTE SENSING TRIGGERS
# ============================================================================
# STATUS: Trigger Layer - HTTP handlers for remote sensing data
# PURPOSE: Azure Functions HTTP handlers for /rs endpoints
# EXPORTS: get_remote_sensing_triggers
# DEPENDENCIES: azure-functions, infrastructure.triggers, .service
# ============================================================================
"""
Remote Sensing HTTP Triggers.

Endpoints:
- POST /api/rs/meta/span/shape                    - Summary per date span
- POST /api/rs/meta/shape                         - Summary per shape
- POST /api/rs/data/shape?geometry_hash=          - Time series of a shape
- POST /api/rs/meta/span/unit                     - Summary per date span, by unit
- POST /api/rs/meta/unit                          - Summary per shape, by unit
- POST /api/rs/data/unit?gcu_id_number=           - Time series of a unit's shapes
"""

import azure.functions as func
from typing import Any, Dict, List

from infrastructure.triggers import BaseGeoTrigger
from units_api.models import GeometryHashQuery, UnitNumberQuery
from .models import DataSelection, ShapesSelection, UnitsSelection
from .service import RemoteSensingService


def get_remote_sensing_triggers() -> List[Dict[str, Any]]:
    """Get list of remote sensing trigger configurations for function_app.py."""
    return [
        {
            'route': 'rs/meta/span/shape',
            'methods': ['POST'],
            'handler': MetadataBySpanTrigger().handle
        },
        {
            'route': 'rs/meta/shape',
            'methods': ['POST'],
            'handler': MetadataByShapeTrigger().handle
        },
        {
            'route': 'rs/data/shape',
            'methods': ['POST'],
            'handler': DataByShapeTrigger().handle
        },
        {
            'route': 'rs/meta/span/unit',
            'methods': ['POST'],
            'handler': UnitMetadataBySpanTrigger().handle
        },
        {
            'route': 'rs/meta/unit',
            'methods': ['POST'],
            'handler': UnitMetadataByShapeTrigger().handle
        },
        {
            'route': 'rs/data/unit',
            'methods': ['POST'],
            'handler': DataByUnitTrigger().handle
        },
    ]


class BaseRemoteSensingTrigger(BaseGeoTrigger):
    service_class = RemoteSensingService


class MetadataBySpanTrigger(BaseRemoteSensingTrigger):
    name = "rs/meta/span/shape"

    def process(self, req: func.HttpRequest) -> List[Dict[str, Any]]:
        return self.service.metadata_by_span(self._body(req, ShapesSelection))


class MetadataByShapeTrigger(BaseRemoteSensingTrigger):
    name = "rs/meta/shape"

    def process(self, req: func.HttpRequest) -> List[Dict[str, Any]]:
        return self.service.metadata_by_shape(self._body(req, ShapesSelection))


class DataByShapeTrigger(BaseRemoteSensingTrigger):
    """POST /api/rs/data/shape?geometry_hash={hash}"""

    name = "rs/data/shape"

    def process(self, req: func.HttpRequest) -> List[Dict[str, Any]]:
        query = self._query(req, GeometryHashQuery)
        return self.service.data_by_shape(query.geometry_hash, self._body(req, DataSelection))


class UnitMetadataBySpanTrigger(BaseRemoteSensingTrigger):
    name = "rs/meta/span/unit"

    def process(self, req: func.HttpRequest) -> List[Dict[str, Any]]:
        return self.service.unit_metadata_by_span(self._body(req, UnitsSelection))


class UnitMetadataByShapeTrigger(BaseRemoteSensingTrigger):
    name = "rs/meta/unit"

    def process(self, req: func.HttpRequest) -> List[Dict[str, Any]]:
        return self.service.unit_metadata_by_shape(self._body(req, UnitsSelection))


class DataByUnitTrigger(BaseRemoteSensingTrigger):
    """POST /api/rs/data/unit?gcu_id_number={number}"""

    name = "rs/data/unit"

    def process(self, req: func.HttpRequest) -> List[Dict[str, Any]]:
        query = self._query(req, UnitNumberQuery)
        return self.service.data_by_unit(query.gcu_id_number, self._body(req, DataSelection))
