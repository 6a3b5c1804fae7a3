# ============================================================================
# MODULE CONTEXT - DATASET TRIGGERS
# ============================================================================
# STATUS: Trigger Layer - HTTP handler for dataset search
# PURPOSE: Azure Functions HTTP handler for /dataset endpoints
# EXPORTS: get_datasets_triggers
# DEPENDENCIES: azure-functions, infrastructure.triggers, .service
# ============================================================================
"""
Dataset HTTP Triggers.

Endpoints:
- POST /api/dataset/query?op=AND|OR   - Datasets matching the body selection
"""

import azure.functions as func
from typing import Any, Dict, List

from infrastructure.triggers import BaseGeoTrigger
from .models import DatasetOperatorQuery, DatasetQuery
from .service import DatasetsService


def get_datasets_triggers() -> List[Dict[str, Any]]:
    """Get list of dataset trigger configurations for function_app.py."""
    return [
        {
            'route': 'dataset/query',
            'methods': ['POST'],
            'handler': DatasetQueryTrigger().handle
        },
    ]


class DatasetQueryTrigger(BaseGeoTrigger):
    """POST /api/dataset/query?op={AND|OR}"""

    name = "dataset/query"
    service_class = DatasetsService

    def process(self, req: func.HttpRequest) -> List[Dict[str, Any]]:
        operator = self._query(req, DatasetOperatorQuery)
        selection = self._body(req, DatasetQuery)
        return self.service.query(selection, operator.op)
