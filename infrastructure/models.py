# ============================================================================
# MODULE CONTEXT - SHARED REQUEST MODELS
# ============================================================================
# STATUS: Core Infrastructure - Pydantic request models
# PURPOSE: Query parameter and body schemas shared by the API modules
# EXPORTS: Coordinates, Geometry, PolygonGeometry, Paging, ValueRange, GeometryTarget,
#          PolygonTarget, DistanceRange, DATE_PATTERN, GEOMETRY_HASH_PATTERN, DateSpan, ResultKind, SortOrder
# DEPENDENCIES: pydantic
# PATTERNS: Data Transfer Objects (DTOs)
# ============================================================================

"""
Shared Request Models

Pydantic v2 models for the inputs that recur across the API modules:
clicked coordinates, GeoJSON reference geometries, paging and value ranges.

References:
- GeoJSON RFC 7946: https://tools.ietf.org/html/rfc7946

Date: 14 OCT 2026
"""

from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

DATE_PATTERN = r"^[0-9]{4,8}$"
GEOMETRY_HASH_PATTERN = r"^[0-9a-f]{32}$"
UNIT_NUMBER_PATTERN = r"^[A-Z]{3}[0-9]{5}$"
UNIT_ID_PATTERN = r"^[A-Z]{3}[0-9]{9}$"

DateSpan = Literal["std_date_span_day", "std_date_span_month", "std_date_span_year"]
ResultKind = Literal["KEY", "SHAPE", "DATA"]
SortOrder = Literal["NO", "ASC", "DESC"]


class Coordinates(BaseModel):
    """Clicked point in decimal degrees."""
    lat: float = Field(ge=-90, le=90, description="Coordinate decimal latitude")
    lon: float = Field(ge=-180, le=180, description="Coordinate decimal longitude")


class Geometry(BaseModel):
    """
    GeoJSON geometry used as a query reference.

    Coordinates are passed to the database untouched; GEO_* functions
    reject malformed ones.
    """
    model_config = ConfigDict(extra="allow")

    type: Literal[
        "Point", "MultiPoint",
        "LineString", "MultiLineString",
        "Polygon", "MultiPolygon"
    ] = Field(description="GeoJSON geometry type")
    coordinates: List[Any] = Field(description="GeoJSON coordinates")


class PolygonGeometry(Geometry):
    """GeoJSON Polygon or MultiPolygon, required by containment queries."""
    type: Literal["Polygon", "MultiPolygon"] = Field(description="GeoJSON geometry type")


class Paging(BaseModel):
    """Result window; paging applies only when limit is set."""
    offset: Optional[int] = Field(default=None, ge=0, description="Zero based start index")
    limit: Optional[int] = Field(default=None, ge=0, description="Number of records to return")


class ValueRange(BaseModel):
    """Inclusive range; either bound may be omitted."""
    min: Optional[float] = Field(default=None, description="Minimum value inclusive")
    max: Optional[float] = Field(default=None, description="Maximum value inclusive")


class GeometryTarget(BaseModel):
    """Reference geometry with an optional result window."""
    geometry: Geometry = Field(description="Reference geometry")
    start: Optional[int] = Field(default=None, ge=0, description="Initial record index, zero based")
    limit: Optional[int] = Field(default=None, ge=0, description="Number of records to return")


class PolygonTarget(GeometryTarget):
    """Reference polygon with an optional result window."""
    geometry: PolygonGeometry = Field(description="Reference polygon or multipolygon")


class DistanceRange(BaseModel):
    """Distance query parameters, in meters."""
    min: float = Field(description="Minimum distance inclusive in meters")
    max: float = Field(description="Maximum distance inclusive in meters")
    sort: SortOrder = Field(default="NO", description="Sort by distance: NO, ASC or DESC")
