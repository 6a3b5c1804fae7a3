# ============================================================================
# MODULE CONTEXT - INFRASTRUCTURE MODULE
# ============================================================================
# STATUS: Core Infrastructure - Database and Utilities
# PURPOSE: Shared infrastructure components for the geoservice APIs
# EXPORTS: ArangoDBRepository, AQL composition, geometry helpers
# DEPENDENCIES: python-arango, pydantic, config
# ============================================================================

"""
Infrastructure Module

Provides shared infrastructure components for geoservice:
- ArangoDB connection management (ArangoDBRepository)
- AQL composition with bind parameters (aql, Collection)
- Search and selection filter clauses
- GeoJSON construction and geometry hashes
- Base HTTP trigger and shared request models

All API access is read-only; database_setup manages collections.
"""

from .aql import AQL, AQLQuery, Collection, aql, literal
from .arangodb import ArangoDBRepository
from .geometry import geo_point, geometry_hash, multi_polygon, polygon

__version__ = "1.0.0"
__all__ = [
    "AQL",
    "AQLQuery",
    "Collection",
    "aql",
    "literal",
    "ArangoDBRepository",
    "geo_point",
    "geometry_hash",
    "multi_polygon",
    "polygon"
]
