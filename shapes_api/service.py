"""
Shapes Service - unit shape retrieval and search.
"""

import logging
from typing import Any, Dict, List, Optional

from config import AppConfig, get_app_config
from infrastructure.arangodb import ArangoDBRepository
from . import queries
from .models import ShapeSearch

logger = logging.getLogger(__name__)


class ShapesService:
    """Unit shapes by geometry hash, by point and by search selection."""

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        repository: Optional[ArangoDBRepository] = None
    ):
        self.config = config or get_app_config()
        self.repository = repository or ArangoDBRepository(self.config)

    def get_shape(self, geometry_hash: str) -> List[Dict[str, Any]]:
        return self.repository.execute(
            queries.shape_by_hash(self.config.collection_shapes, geometry_hash)
        )

    def click(self, lat: float, lon: float) -> List[Dict[str, Any]]:
        return self.repository.execute(
            queries.shapes_by_point(self.config.view_shape, lat, lon)
        )

    def search(self, selection: ShapeSearch) -> List[Dict[str, Any]]:
        """
        Select shapes matching all present search fields.

        An empty selection returns every shape in the view, limited only
        by paging.
        """
        criteria = selection.model_dump(exclude_none=True)
        logger.debug(f"Shape search on {sorted(criteria)}")
        return self.repository.execute(
            queries.shape_search(self.config.view_shape, criteria)
        )
