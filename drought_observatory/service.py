"""
Drought Observatory Service - drought measurements around a clicked point.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from config import AppConfig, get_app_config
from infrastructure.aql import AQL
from infrastructure.arangodb import ArangoDBRepository
from . import queries
from .models import DroughtSelection

logger = logging.getLogger(__name__)


class DroughtObservatoryService:
    """
    Drought observatory summaries and time series.

    All operations take the clicked coordinates and a selection; the
    observation areas are those whose geometry contains the point.
    """

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        repository: Optional[ArangoDBRepository] = None
    ):
        self.config = config or get_app_config()
        self.repository = repository or ArangoDBRepository(self.config)

    def _execute(
        self,
        builder: Callable[..., AQL],
        lat: float,
        lon: float,
        selection: DroughtSelection
    ) -> List[Dict[str, Any]]:
        return self.repository.execute(builder(
            self.config.collection_drought_observatory_map,
            self.config.collection_drought_observatory,
            lat,
            lon,
            selection.model_dump(exclude_none=True)
        ))

    def metadata(self, lat: float, lon: float, selection: DroughtSelection) -> List[Dict[str, Any]]:
        """
        Summary of the measurements at the point.

        The aggregate always yields one record; it is dropped when nothing
        matched, which shows as an empty std_terms list.
        """
        result = self._execute(queries.edo_metadata, lat, lon, selection)
        if not result or not result[0].get("std_terms"):
            logger.debug(f"No drought observatory data at ({lat}, {lon})")
            return []
        return result

    def metadata_by_geometry(self, lat: float, lon: float, selection: DroughtSelection) -> List[Dict[str, Any]]:
        return self._execute(queries.edo_metadata_by_geometry, lat, lon, selection)

    def metadata_by_dataset(self, lat: float, lon: float, selection: DroughtSelection) -> List[Dict[str, Any]]:
        return self._execute(queries.edo_metadata_by_dataset, lat, lon, selection)

    def data_by_geometry(self, lat: float, lon: float, selection: DroughtSelection) -> List[Dict[str, Any]]:
        return self._execute(queries.edo_data_by_geometry, lat, lon, selection)

    def data_by_date(self, lat: float, lon: float, selection: DroughtSelection) -> List[Dict[str, Any]]:
        return self._execute(queries.edo_data_by_date, lat, lon, selection)
