"""
Remote Sensing Service - metadata and time series of unit shapes.
"""

import logging
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from config import AppConfig, get_app_config
from infrastructure.arangodb import ArangoDBRepository
from . import queries
from .models import DataSelection, ShapesSelection, UnitsSelection

logger = logging.getLogger(__name__)


def _selection(body: BaseModel) -> Dict[str, Any]:
    return body.model_dump(exclude_none=True)


class RemoteSensingService:
    """
    Remote sensing data of unit shapes.

    Shapes are selected by geometry hash or, for the unit variants, through
    the UnitShapes records of unit numbers.
    """

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        repository: Optional[ArangoDBRepository] = None
    ):
        self.config = config or get_app_config()
        self.repository = repository or ArangoDBRepository(self.config)

    def metadata_by_span(self, selection: ShapesSelection) -> List[Dict[str, Any]]:
        return self.repository.execute(queries.shape_metadata_by_span(
            self.config.collection_shapes,
            self.config.collection_shape_data,
            _selection(selection)
        ))

    def metadata_by_shape(self, selection: ShapesSelection) -> List[Dict[str, Any]]:
        return self.repository.execute(queries.shape_metadata_by_shape(
            self.config.collection_shapes,
            self.config.collection_shape_data,
            _selection(selection)
        ))

    def data_by_shape(self, geometry_hash: str, selection: DataSelection) -> List[Dict[str, Any]]:
        return self.repository.execute(queries.shape_data_by_shape(
            self.config.collection_shape_data,
            _selection(selection),
            geometry_hash
        ))

    def unit_metadata_by_span(self, selection: UnitsSelection) -> List[Dict[str, Any]]:
        return self.repository.execute(queries.shape_metadata_by_span(
            self.config.collection_shapes,
            self.config.collection_shape_data,
            _selection(selection),
            units=self.config.collection_unit_shapes
        ))

    def unit_metadata_by_shape(self, selection: UnitsSelection) -> List[Dict[str, Any]]:
        return self.repository.execute(queries.shape_metadata_by_shape(
            self.config.collection_shapes,
            self.config.collection_shape_data,
            _selection(selection),
            units=self.config.collection_unit_shapes
        ))

    def data_by_unit(self, gcu_id_number: str, selection: DataSelection) -> List[Dict[str, Any]]:
        logger.debug(f"Remote sensing series for unit {gcu_id_number}")
        return self.repository.execute(queries.shape_data_by_unit(
            self.config.collection_unit_shapes,
            self.config.collection_shape_data,
            _selection(selection),
            gcu_id_number
        ))
