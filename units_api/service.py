"""
Units Service - genetic conservation unit lookups.
"""

import logging
from typing import Any, Dict, List, Optional

from config import AppConfig, get_app_config
from infrastructure.arangodb import ArangoDBRepository
from . import queries

logger = logging.getLogger(__name__)


class UnitsService:
    """Lookups between unit numbers, unit IDs and unit shapes."""

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        repository: Optional[ArangoDBRepository] = None
    ):
        self.config = config or get_app_config()
        self.repository = repository or ArangoDBRepository(self.config)
        self.collection = self.config.collection_unit_shapes

    def unit_ids(self, gcu_id_number: str) -> List[Dict[str, Any]]:
        return self.repository.execute(queries.unit_ids_by_number(self.collection, gcu_id_number))

    def unit_shapes(self, gcu_id_unit_id: str) -> List[Dict[str, Any]]:
        return self.repository.execute(queries.unit_shapes_by_id(self.collection, gcu_id_unit_id))

    def unit_records(self, geometry_hash: str) -> List[Dict[str, Any]]:
        return self.repository.execute(queries.unit_records_by_shape(self.collection, geometry_hash))
