"""
Remote sensing selection models.

Selections constrain the ShapeData time series. Fields left out, or sent
as null, add no constraint.
"""

from typing import Annotated, List, Optional

from pydantic import BaseModel, Field

from infrastructure.models import (
    DATE_PATTERN,
    GEOMETRY_HASH_PATTERN,
    UNIT_NUMBER_PATTERN,
    DateSpan,
    Paging,
)

GeometryHash = Annotated[str, Field(pattern=GEOMETRY_HASH_PATTERN)]
UnitNumber = Annotated[str, Field(pattern=UNIT_NUMBER_PATTERN)]


class DataSelection(BaseModel):
    """Constraints on the remote sensing time series records."""
    std_date_span: Optional[List[DateSpan]] = Field(default=None, description="Date spans")
    std_date_start: Optional[str] = Field(default=None, pattern=DATE_PATTERN, description="Start date, inclusive")
    std_date_end: Optional[str] = Field(default=None, pattern=DATE_PATTERN, description="End date, inclusive")
    std_terms: Optional[List[str]] = Field(default=None, description="Any of these variables")
    std_dataset_ids: Optional[List[str]] = Field(default=None, description="Any of these datasets")


class ShapesSelection(DataSelection):
    """Selection over unit shapes given by geometry hash."""
    geometry_hash_list: Optional[List[GeometryHash]] = Field(default=None, description="Unit shape geometry hashes")
    paging: Optional[Paging] = Field(default=None, description="Shape window")


class UnitsSelection(DataSelection):
    """Selection over the shapes of genetic conservation units."""
    gcu_id_number_list: Optional[List[UnitNumber]] = Field(default=None, description="Unit numbers")
    paging: Optional[Paging] = Field(default=None, description="Shape window")
