"""
Genetic conservation unit query models.

A unit number (`gcu_id_number`, e.g. GBR00001) may have several unit IDs
(`gcu_id_unit-id`, the number followed by the field collection date), and
each unit ID may reference several shapes by geometry hash.
"""

from pydantic import BaseModel, ConfigDict, Field

from infrastructure.models import GEOMETRY_HASH_PATTERN, UNIT_ID_PATTERN, UNIT_NUMBER_PATTERN


class UnitNumberQuery(BaseModel):
    gcu_id_number: str = Field(pattern=UNIT_NUMBER_PATTERN, description="Unit number")


class UnitIdQuery(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    gcu_id_unit_id: str = Field(
        alias="gcu_id_unit-id",
        pattern=UNIT_ID_PATTERN,
        description="Unit ID"
    )


class GeometryHashQuery(BaseModel):
    geometry_hash: str = Field(pattern=GEOMETRY_HASH_PATTERN, description="Unit shape geometry hash")
