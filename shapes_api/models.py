"""
Unit shape search models.

Search bodies select shapes through the ArangoSearch shape view. Every
field is optional; present fields are combined with AND.
"""

from typing import List, Optional

from pydantic import AliasChoices, BaseModel, Field

from infrastructure.models import Geometry, ValueRange

RANGE_PROPERTIES = (
    "geo_shape_area",
    "chr_AvElevation",
    "chr_StdElevation",
    "chr_AvSlope",
    "chr_AvAspect",
)


class DistanceFilter(BaseModel):
    """Distance in meters between each shape and a reference geometry."""
    reference: Geometry = Field(description="Reference geometry")
    range: ValueRange = Field(default_factory=ValueRange, description="Distance range in meters")


class SearchPaging(BaseModel):
    offset: int = Field(default=0, ge=0, description="Zero based start index")
    limit: int = Field(default=100, ge=1, description="Number of records to return")


class ShapeSearch(BaseModel):
    """Shape selection body for POST /shape/search."""
    geometry_hash_list: Optional[List[str]] = Field(
        default=None,
        validation_alias=AliasChoices("geometry_hash_list", "geometry_hash"),
        description="Shape geometry hashes"
    )
    std_dataset_ids: Optional[List[str]] = Field(default=None, description="Any of these datasets")
    geo_shape_area: Optional[ValueRange] = Field(default=None, description="Shape area range")
    chr_AvElevation: Optional[ValueRange] = Field(default=None, description="Average elevation range")
    chr_StdElevation: Optional[ValueRange] = Field(default=None, description="Elevation standard deviation range")
    chr_AvSlope: Optional[ValueRange] = Field(default=None, description="Average slope range")
    chr_AvAspect: Optional[ValueRange] = Field(default=None, description="Average aspect range")
    intersects: Optional[Geometry] = Field(default=None, description="Geometry the shapes must intersect")
    distance: Optional[DistanceFilter] = Field(default=None, description="Distance range from a reference")
    paging: Optional[SearchPaging] = Field(default=None, description="Result window")
