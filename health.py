# ============================================================================
# MODULE CONTEXT - HEALTH CHECK MODULE
# ============================================================================
# STATUS: Core Infrastructure - Health Monitoring
# PURPOSE: Two-tier health checks for probes and monitoring
# EXPORTS: get_public_health, get_detailed_health, get_app_identity, HealthStatus
# DEPENDENCIES: python-arango (via infrastructure.arangodb), config, util_logger
# PATTERNS: Two-tier health checks (public/detailed)
# ============================================================================

"""
Health Check Module for geoservice

Provides two-tier health monitoring:

1. Public Health (/api/health):
   - Minimal response for external callers
   - Returns only status and timestamp
   - Always returns 200 (status in body indicates health)

2. Detailed Health (/api/health/detailed):
   - ArangoDB connectivity with latency and server version
   - Required collections and views
   - API module status
   - Returns 503 if unhealthy

Usage:
    from health import get_public_health, get_detailed_health

    result = get_public_health()
    # {"status": "healthy", "timestamp": "2026-10-14T12:00:00+00:00"}

    result = get_detailed_health()
    # Full metrics with latency, missing collections, modules
"""

import importlib
import time
import uuid
from enum import Enum
from datetime import datetime, timezone
from dataclasses import dataclass
from typing import Optional, Dict, Any, List

from infrastructure.arangodb import ArangoDBRepository
from util_logger import LoggerFactory, ComponentType

# Create module logger
logger = LoggerFactory.create_logger(ComponentType.SERVICE, "HealthService")

APP_NAME = "geoservice"
APP_DESCRIPTION = "Genetic conservation unit, remote sensing and climate data API"

# (module, trigger factory)
API_MODULES = [
    ("shape_hash", "get_hash_triggers"),
    ("units_api", "get_units_triggers"),
    ("shapes_api", "get_shapes_triggers"),
    ("remote_sensing", "get_remote_sensing_triggers"),
    ("drought_observatory", "get_drought_observatory_triggers"),
    ("chelsa_api", "get_chelsa_triggers"),
    ("worldclim_api", "get_worldclim_triggers"),
    ("datasets_api", "get_datasets_triggers"),
]


# ============================================================================
# Health Status Enum
# ============================================================================

class HealthStatus(str, Enum):
    """Health status values."""
    HEALTHY = "healthy"
    DEGRADED = "degraded"      # Non-critical components failing
    UNHEALTHY = "unhealthy"    # Critical components failing


# ============================================================================
# Data Classes
# ============================================================================

@dataclass
class CheckResult:
    """Result of a single health check."""
    status: str              # "pass" or "fail"
    latency_ms: float
    message: str
    details: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, excluding None values."""
        result = {
            "status": self.status,
            "latency_ms": round(self.latency_ms, 2),
            "message": self.message
        }
        if self.details:
            result["details"] = self.details
        return result


def get_app_identity() -> Dict[str, str]:
    return {"name": APP_NAME, "description": APP_DESCRIPTION}


# ============================================================================
# Health Check Functions
# ============================================================================

def check_database_connectivity(repository: Optional[ArangoDBRepository] = None) -> CheckResult:
    """
    Check ArangoDB connectivity.

    Reads the server version to verify the database is reachable and the
    credentials are accepted. This is a critical check - failure means
    UNHEALTHY status.

    Returns:
        CheckResult with connection status and latency
    """
    start_time = time.perf_counter()

    try:
        repository = repository or ArangoDBRepository()
        config = repository.config
        version = repository.server_version()

        latency_ms = (time.perf_counter() - start_time) * 1000

        return CheckResult(
            status="pass",
            latency_ms=latency_ms,
            message="ArangoDB connection successful",
            details={
                "host": config.arango_host,
                "database": config.arango_database,
                "auth_mode": config.auth_mode,
                "version": version
            }
        )

    except Exception as e:
        latency_ms = (time.perf_counter() - start_time) * 1000
        logger.error(f"Database connectivity check failed: {e}")

        return CheckResult(
            status="fail",
            latency_ms=latency_ms,
            message=f"Database connection failed: {type(e).__name__}",
            details={"error": str(e)}
        )


def check_collections(repository: Optional[ArangoDBRepository] = None) -> CheckResult:
    """
    Check that every collection and view the APIs read exists.

    This is a critical check - failure means UNHEALTHY status.
    """
    start_time = time.perf_counter()

    try:
        repository = repository or ArangoDBRepository()
        config = repository.config
        missing_collections = repository.missing_collections(config.required_collections())
        missing_views = repository.missing_views(config.required_views())

        latency_ms = (time.perf_counter() - start_time) * 1000

        if missing_collections or missing_views:
            return CheckResult(
                status="fail",
                latency_ms=latency_ms,
                message="Required collections or views missing",
                details={
                    "missing_collections": missing_collections,
                    "missing_views": missing_views
                }
            )

        return CheckResult(
            status="pass",
            latency_ms=latency_ms,
            message=(
                f"{len(config.required_collections())} collections, "
                f"{len(config.required_views())} views available"
            )
        )

    except Exception as e:
        latency_ms = (time.perf_counter() - start_time) * 1000
        logger.error(f"Collection check failed: {e}")

        return CheckResult(
            status="fail",
            latency_ms=latency_ms,
            message=f"Collection check failed: {type(e).__name__}",
            details={"error": str(e)}
        )


def check_api_modules() -> CheckResult:
    """
    Check API module availability.

    Imports each API module and builds its trigger list. This is a
    non-critical check - failure means DEGRADED status.
    """
    start_time = time.perf_counter()

    modules: Dict[str, Dict[str, Any]] = {}
    for module_name, factory in API_MODULES:
        try:
            module = importlib.import_module(module_name)
            triggers = getattr(module, factory)()
            modules[module_name] = {"available": True, "endpoints": len(triggers)}
        except Exception as e:
            modules[module_name] = {"available": False, "error": str(e)}

    latency_ms = (time.perf_counter() - start_time) * 1000

    available: List[str] = [name for name, status in modules.items() if status["available"]]

    if len(available) == len(modules):
        message = "All modules loaded"
        status = "pass"
    elif available:
        message = "Some modules unavailable"
        status = "pass"  # Partial availability is still a pass
    else:
        message = "No API modules available"
        status = "fail"

    return CheckResult(
        status=status,
        latency_ms=latency_ms,
        message=message,
        details=modules
    )


# ============================================================================
# Main Entry Points
# ============================================================================

def get_public_health() -> Dict[str, Any]:
    """
    Get minimal health status for public endpoint.

    Returns:
        Dict with status and timestamp only
    """
    start_time = time.perf_counter()

    db_result = check_database_connectivity()

    if db_result.status == "pass":
        status = HealthStatus.HEALTHY
    else:
        status = HealthStatus.UNHEALTHY

    total_duration = (time.perf_counter() - start_time) * 1000

    logger.info("Public health check completed", extra={
        'custom_dimensions': {
            'status': status.value,
            'duration_ms': round(total_duration, 2),
            'check_type': 'public'
        }
    })

    return {
        "status": status.value,
        "timestamp": datetime.now(timezone.utc).isoformat()
    }


def get_detailed_health() -> Dict[str, Any]:
    """
    Get detailed health status for probes and operations.

    Returns:
        Dict with full health metrics
    """
    start_time = time.perf_counter()
    request_id = str(uuid.uuid4())[:8]

    checks = {}
    critical_failures = []
    non_critical_failures = []

    # Critical: Database connectivity
    db_result = check_database_connectivity()
    checks["database"] = db_result.to_dict()
    if db_result.status == "fail":
        critical_failures.append("database")

    # Critical: Collections and views, only meaningful once connected
    if db_result.status == "pass":
        collections_result = check_collections()
        checks["collections"] = collections_result.to_dict()
        if collections_result.status == "fail":
            critical_failures.append("collections")

    # Non-critical: API modules
    modules_result = check_api_modules()
    checks["api_modules"] = modules_result.to_dict()
    if modules_result.status == "fail":
        non_critical_failures.append("api_modules")

    if critical_failures:
        status = HealthStatus.UNHEALTHY
    elif non_critical_failures:
        status = HealthStatus.DEGRADED
    else:
        status = HealthStatus.HEALTHY

    total_duration = (time.perf_counter() - start_time) * 1000

    logger.info("Detailed health check completed", extra={
        'custom_dimensions': {
            'status': status.value,
            'duration_ms': round(total_duration, 2),
            'check_type': 'detailed',
            'request_id': request_id,
            'critical_failures': critical_failures,
            'non_critical_failures': non_critical_failures,
            'database_latency_ms': db_result.latency_ms
        }
    })

    return {
        "status": status.value,
        "app": APP_NAME,
        "description": APP_DESCRIPTION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "request_id": request_id,
        "checks": checks,
        "total_duration_ms": round(total_duration, 2)
    }
