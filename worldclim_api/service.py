"""
WorldClim Service - WorldClim climate cells by location, with aggregates.
"""

import logging
from typing import Any, Dict, List, Optional

from config import AppConfig, get_app_config
from infrastructure.aql import AQL
from infrastructure.arangodb import ArangoDBRepository
from infrastructure.models import GeometryTarget
from . import queries
from .aggregation import aggregate_properties
from .models import AGGREGATES

logger = logging.getLogger(__name__)


class WorldClimService:
    """
    WorldClim cells selected by click, distance, containment or intersection.

    Selections return records shaped by `what`; aggregates return a single
    {count, properties} record over the whole selection, ignoring the
    result window.
    """

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        repository: Optional[ArangoDBRepository] = None
    ):
        self.config = config or get_app_config()
        self.repository = repository or ArangoDBRepository(self.config)

    def _run(self, query: AQL, what: str) -> List[Any]:
        result = self.repository.execute(query)
        if what in AGGREGATES:
            logger.debug(f"WorldClim {what} over {len(result)} records")
            return [aggregate_properties(result, what)]
        return result

    def click(self, lat: float, lon: float) -> List[Dict[str, Any]]:
        return self.repository.execute(
            queries.click_query(self.config.collection_worldclim, lat, lon)
        )

    def distance(
        self,
        target: GeometryTarget,
        what: str,
        min_distance: float,
        max_distance: float,
        sort: str = "NO"
    ) -> List[Any]:
        query = queries.distance_query(
            self.config.collection_worldclim,
            target.geometry.model_dump(mode="json"),
            what,
            min_distance,
            max_distance,
            sort,
            target.start,
            target.limit
        )
        return self._run(query, what)

    def contain(self, target: GeometryTarget, what: str) -> List[Any]:
        query = queries.contain_query(
            self.config.collection_worldclim,
            target.geometry.model_dump(mode="json"),
            what,
            target.start,
            target.limit
        )
        return self._run(query, what)

    def intersect(self, target: GeometryTarget, what: str) -> List[Any]:
        query = queries.intersect_query(
            self.config.collection_worldclim,
            target.geometry.model_dump(mode="json"),
            what,
            target.start,
            target.limit
        )
        return self._run(query, what)
