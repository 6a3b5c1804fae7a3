"""
CHELSA Service - CHELSA climate data points by location.
"""

import logging
from typing import Any, Dict, List, Optional

from config import AppConfig, get_app_config
from infrastructure.arangodb import ArangoDBRepository
from infrastructure.models import GeometryTarget
from . import queries

logger = logging.getLogger(__name__)


class ChelsaService:
    """CHELSA data points selected by click, distance, containment or intersection."""

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        repository: Optional[ArangoDBRepository] = None
    ):
        self.config = config or get_app_config()
        self.repository = repository or ArangoDBRepository(self.config)

    @property
    def _collections(self):
        return self.config.collection_chelsa_map, self.config.collection_chelsa

    def click(self, lat: float, lon: float, what: str = "DATA") -> List[Any]:
        return self.repository.execute(queries.click_query(*self._collections, lat, lon, what))

    def distance(
        self,
        target: GeometryTarget,
        what: str,
        min_distance: float,
        max_distance: float,
        sort: str = "NO"
    ) -> List[Any]:
        return self.repository.execute(queries.distance_query(
            *self._collections,
            _reference(target),
            what,
            min_distance,
            max_distance,
            sort,
            target.start,
            target.limit
        ))

    def contain(self, target: GeometryTarget, what: str) -> List[Any]:
        return self.repository.execute(queries.contain_query(
            *self._collections, _reference(target), what, target.start, target.limit
        ))

    def intersect(self, target: GeometryTarget, what: str) -> List[Any]:
        return self.repository.execute(queries.intersect_query(
            *self._collections, _reference(target), what, target.start, target.limit
        ))

    def mean_contain(self, target: GeometryTarget) -> List[Dict[str, Any]]:
        """Averages of all climate variables over the points in the polygon."""
        logger.debug(f"Averaging CHELSA points in a {target.geometry.type}")
        return self.repository.execute(queries.mean_contain_query(
            *self._collections, _reference(target)
        ))


def _reference(target: GeometryTarget) -> Dict[str, Any]:
    return target.geometry.model_dump(mode="json")
