"""
WorldClim climate query models.

`what` selects either a selection of records (KEY, SHAPE, DATA) or one
aggregate record of the selection (MIN, AVG, MAX, STD, VAR).
"""

from typing import Literal

from pydantic import BaseModel, Field

from infrastructure.models import DistanceRange

AGGREGATES = ("MIN", "AVG", "MAX", "STD", "VAR")

WorldClimResult = Literal["KEY", "SHAPE", "DATA", "MIN", "AVG", "MAX", "STD", "VAR"]


class WorldClimQuery(BaseModel):
    what: WorldClimResult = Field(description="Selection (KEY, SHAPE, DATA) or aggregate (MIN, AVG, MAX, STD, VAR)")


class WorldClimDistanceQuery(WorldClimQuery, DistanceRange):
    pass
