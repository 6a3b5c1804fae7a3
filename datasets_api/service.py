"""
Datasets Service - dataset search.
"""

import logging
from typing import Any, Dict, List, Optional

from config import AppConfig, get_app_config
from infrastructure.arangodb import ArangoDBRepository
from . import queries
from .models import DatasetQuery

logger = logging.getLogger(__name__)


class DatasetsService:
    def __init__(
        self,
        config: Optional[AppConfig] = None,
        repository: Optional[ArangoDBRepository] = None
    ):
        self.config = config or get_app_config()
        self.repository = repository or ArangoDBRepository(self.config)

    def query(self, selection: DatasetQuery, op: str = "AND") -> List[Dict[str, Any]]:
        """
        Search datasets; an empty selection matches nothing.

        Args:
            selection: Search parameters
            op: AND or OR

        Returns:
            Dataset records without _id, _rev and _oldRev
        """
        query = queries.dataset_query(
            self.config.view_dataset,
            selection.model_dump(exclude_none=True, by_alias=True),
            op
        )
        if query is None:
            logger.debug("Dataset query without conditions")
            return []
        return self.repository.execute(query)
