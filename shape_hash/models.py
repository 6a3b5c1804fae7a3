"""
Shape hash request and response models.
"""

from typing import Any, Dict, List

from pydantic import BaseModel, Field


class CoordinatesBody(BaseModel):
    """Body for polygon hashes: the GeoJSON coordinates array only."""
    coordinates: List[Any] = Field(
        min_length=1,
        description="GeoJSON Polygon or MultiPolygon coordinates"
    )


class HashResponse(BaseModel):
    """Geometry with its hash, the `_key` used by the shape collections."""
    geometry: Dict[str, Any] = Field(description="GeoJSON geometry")
    geometry_hash: str = Field(description="MD5 hash of the geometry")
