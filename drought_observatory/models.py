"""
Drought observatory selection model.

The observatory records are gridded: each DroughtObservatoryMap record is
an observation area around a point, with a radius, and its
DroughtObservatory records hold the daily measurements.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from infrastructure.models import DATE_PATTERN, DateSpan, Paging


class DroughtSelection(BaseModel):
    """Constraints on the observation areas and their measurements."""
    std_date_span: Optional[List[DateSpan]] = Field(default=None, description="Any of these date spans")
    std_date_start: Optional[str] = Field(default=None, pattern=DATE_PATTERN, description="Start date, inclusive")
    std_date_end: Optional[str] = Field(default=None, pattern=DATE_PATTERN, description="End date, inclusive")
    std_terms: Optional[List[str]] = Field(default=None, description="Any of these variables")
    std_dataset_ids: Optional[List[str]] = Field(default=None, description="Any of these datasets")
    geometry_point_radius: Optional[List[float]] = Field(default=None, description="Observation area radii")
    paging: Optional[Paging] = Field(default=None, description="Result window")
