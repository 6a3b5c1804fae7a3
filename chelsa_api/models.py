"""
CHELSA climate query models.

`what` selects the record layout: KEY for the geometry hash only, SHAPE
for the hash and geometries, DATA for geometries and climate properties.
"""

from pydantic import BaseModel, Field

from infrastructure.models import Coordinates, DistanceRange, ResultKind


class ChelsaQuery(BaseModel):
    what: ResultKind = Field(description="Result type: KEY, SHAPE or DATA")


class ChelsaClickQuery(Coordinates):
    what: ResultKind = Field(default="DATA", description="Result type: KEY, SHAPE or DATA")


class ChelsaDistanceQuery(ChelsaQuery, DistanceRange):
    pass
