# ============================================================================
# MODULE CONTEXT - AZURE FUNCTIONS ENTRY POINT
# ============================================================================
# STATUS: Core Infrastructure - Function App Entry Point
# PURPOSE: Main entry point for Azure Functions runtime with the geoservice APIs
# EXPORTS: app (FunctionApp instance)
# DEPENDENCIES: azure-functions, shape_hash, units_api, shapes_api, remote_sensing,
#               drought_observatory, chelsa_api, worldclim_api, datasets_api
# ============================================================================

"""
Azure Functions Entry Point for geoservice

This module serves as the main entry point for the Azure Functions runtime.
It registers the HTTP triggers of every API module plus the health checks.

Architecture:
    - Shape hash API: geometry hashes of points and polygons
    - Units API: genetic conservation unit lookups (UnitShapes)
    - Unit shapes API: shape records, click and search (Shapes, VIEW_SHAPE)
    - Remote sensing API: time series per shape or unit (ShapeData)
    - Drought observatory API: EDO measurements by point
    - CHELSA and WorldClim APIs: climate data by location
    - Datasets API: dataset catalog search (VIEW_DATASET)
    - Health checks: /api/health and /api/health/detailed

Each API module exposes get_<module>_triggers(), a list of
{'route', 'methods', 'handler'} entries. A module that fails to import is
logged and skipped; the others are still served.

Deployment:
    - Local: func start
    - Azure: func azure functionapp publish <app-name> --python --build remote
"""

import azure.functions as func
import json
import logging
from typing import Any, Callable, Dict, List

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Initialize Azure Function App
app = func.FunctionApp()

NO_CACHE = {"Cache-Control": "no-cache, no-store, must-revalidate"}


def _endpoint(handler: Callable[[func.HttpRequest], func.HttpResponse]) -> Callable:
    def endpoint(req: func.HttpRequest) -> func.HttpResponse:
        return handler(req)
    return endpoint


def register_triggers(module: str, triggers: List[Dict[str, Any]]) -> int:
    """
    Register trigger configurations as anonymous HTTP functions.

    Function names are derived from the routes, e.g. rs/meta/span/shape
    becomes rs_meta_span_shape.

    Returns:
        Number of endpoints registered
    """
    for trigger in triggers:
        name = trigger['route'].replace('/', '_')
        app.function_name(name=name)(
            app.route(
                route=trigger['route'],
                methods=trigger['methods'],
                auth_level=func.AuthLevel.ANONYMOUS
            )(_endpoint(trigger['handler']))
        )
        logger.debug(f"  {'/'.join(trigger['methods'])} /api/{trigger['route']}")

    logger.info(f"✅ {module} registered successfully ({len(triggers)} endpoints)")
    return len(triggers)


# ============================================================================
# Shape Hash API
# ============================================================================

try:
    from shape_hash import get_hash_triggers
    register_triggers("Shape hash API", get_hash_triggers())
except ImportError as e:
    logger.warning(f"⚠️ Shape hash module not available: {e}")

# ============================================================================
# Units API
# ============================================================================

try:
    from units_api import get_units_triggers
    register_triggers("Units API", get_units_triggers())
except ImportError as e:
    logger.warning(f"⚠️ Units module not available: {e}")

# ============================================================================
# Unit Shapes API
# ============================================================================

try:
    from shapes_api import get_shapes_triggers
    register_triggers("Unit shapes API", get_shapes_triggers())
except ImportError as e:
    logger.warning(f"⚠️ Unit shapes module not available: {e}")

# ============================================================================
# Remote Sensing API
# ============================================================================

try:
    from remote_sensing import get_remote_sensing_triggers
    register_triggers("Remote sensing API", get_remote_sensing_triggers())
except ImportError as e:
    logger.warning(f"⚠️ Remote sensing module not available: {e}")

# ============================================================================
# Drought Observatory API
# ============================================================================

try:
    from drought_observatory import get_drought_observatory_triggers
    register_triggers("Drought observatory API", get_drought_observatory_triggers())
except ImportError as e:
    logger.warning(f"⚠️ Drought observatory module not available: {e}")

# ============================================================================
# Climate APIs
# ============================================================================

try:
    from chelsa_api import get_chelsa_triggers
    register_triggers("CHELSA API", get_chelsa_triggers())
except ImportError as e:
    logger.warning(f"⚠️ CHELSA module not available: {e}")

try:
    from worldclim_api import get_worldclim_triggers
    register_triggers("WorldClim API", get_worldclim_triggers())
except ImportError as e:
    logger.warning(f"⚠️ WorldClim module not available: {e}")

# ============================================================================
# Datasets API
# ============================================================================

try:
    from datasets_api import get_datasets_triggers
    register_triggers("Datasets API", get_datasets_triggers())
except ImportError as e:
    logger.warning(f"⚠️ Datasets module not available: {e}")

# ============================================================================
# Health Check Endpoints - Public + Detailed
# ============================================================================

@app.route(route="health", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
def health_check(req: func.HttpRequest) -> func.HttpResponse:
    """
    Public health check endpoint - minimal response for external callers.

    Always returns 200 - status in body indicates health.

    Returns:
        JSON: {"status": "healthy|unhealthy", "timestamp": "..."}
    """
    from health import get_public_health

    result = get_public_health()

    return func.HttpResponse(
        json.dumps(result, default=str),
        mimetype="application/json",
        status_code=200,
        headers=NO_CACHE
    )


@app.route(route="health/detailed", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
def health_detailed(req: func.HttpRequest) -> func.HttpResponse:
    """
    Detailed health check endpoint - for probes and operations.

    Returns 503 if unhealthy, 200 otherwise.

    Returns:
        JSON with ArangoDB connectivity and latency, missing collections
        and views, and API module availability
    """
    from health import get_detailed_health, HealthStatus

    result = get_detailed_health()

    status_code = 503 if result["status"] == HealthStatus.UNHEALTHY.value else 200

    return func.HttpResponse(
        json.dumps(result, default=str, indent=2),
        mimetype="application/json",
        status_code=status_code,
        headers=NO_CACHE
    )

# ============================================================================
# Application Startup
# ============================================================================

from health import get_app_identity
_app_identity = get_app_identity()

logger.info("="*60)
logger.info(f"{_app_identity['name']} - {_app_identity['description']}")
logger.info("="*60)
logger.info("Function App initialized successfully")
logger.info("  - GET /api/health - Public health check (minimal)")
logger.info("  - GET /api/health/detailed - Detailed health")
logger.info("="*60)
