# ============================================================================
# MODULE CONTEXT - ARANGODB REPOSITORY
# ============================================================================
# STATUS: Core Infrastructure - ArangoDB connection management
# PURPOSE: Read access to the GeoService database for all query APIs
# EXPORTS: ArangoDBRepository
# DEPENDENCIES: python-arango, config, util_logger, infrastructure.aql
# SCOPE: AQL execution and collection/view existence checks
# PATTERNS: Repository pattern, Per-request connections
# ============================================================================

"""
ArangoDB Repository - Database Access

Provides ArangoDB connection management for geoservice with support for:
- Password or JWT user token authentication (see config.py)
- Per-request client creation (no pooling)
- Execution of composed AQL fragments with bind variables only
- Collection and view verification for health checks

Usage:
    from infrastructure.arangodb import ArangoDBRepository
    from infrastructure.aql import aql, Collection

    repo = ArangoDBRepository()
    rows = repo.execute(aql(
        "FOR doc IN ${coll} LIMIT 1 RETURN doc",
        coll=Collection("Shapes")
    ))
"""

from contextlib import contextmanager
from typing import Any, Iterator, List, Optional

from arango import ArangoClient
from arango.database import StandardDatabase
from arango.exceptions import ArangoError

from config import AppConfig, get_app_config, get_arango_connection_args
from util_logger import ComponentType, LoggerFactory
from .aql import AQL

logger = LoggerFactory.create_logger(ComponentType.REPOSITORY, "ArangoDBRepository")


class ArangoDBRepository:
    """
    ArangoDB repository with connection management.

    Connection Strategy:
    -------------------
    Each operation creates a NEW client and closes it after use. Azure
    Functions instances are short lived and the driver session holds no
    state worth keeping between requests.

    Example:
    -------
    ```python
    repo = ArangoDBRepository()

    with repo.get_database() as db:
        db.has_collection("Shapes")
    ```
    """

    def __init__(self, config: Optional[AppConfig] = None):
        """
        Initialize repository.

        Args:
            config: Application configuration (uses singleton if not provided)
        """
        self.config = config or get_app_config()
        logger.debug(f"ArangoDBRepository initialized for database: {self.config.arango_database}")

    @contextmanager
    def get_database(self) -> Iterator[StandardDatabase]:
        """
        Context manager for ArangoDB database handles.

        Yields:
            StandardDatabase bound to the configured database

        Raises:
            ArangoError: On connection or authentication failures
        """
        client_args = {
            "hosts": self.config.arango_host,
            "request_timeout": self.config.arango_request_timeout,
        }
        if self.config.arango_verify_override is not None:
            client_args["verify_override"] = self.config.arango_verify_override

        client = ArangoClient(**client_args)
        try:
            logger.debug(f"🔗 Connecting to ArangoDB database: {self.config.arango_database}")
            yield client.db(**get_arango_connection_args(self.config))

        except ArangoError as e:
            logger.error(f"❌ ArangoDB error: {e}")
            logger.error(f"  Error type: {type(e).__name__}")
            raise

        finally:
            client.close()
            logger.debug("🔒 Client closed")

    def execute(self, query: AQL) -> List[Any]:
        """
        Execute a composed AQL query and return all results.

        Args:
            query: AQL fragment; user values must be bind parameters

        Returns:
            List of result documents

        Raises:
            TypeError: If query is not an AQL fragment
            ArangoError: For any database failure
        """
        if not isinstance(query, AQL):
            raise TypeError(f"Query must be AQL, got {type(query)}")

        rendered = query.render()
        logger.debug(
            "Executing AQL",
            extra={'custom_dimensions': {
                'query': rendered.query,
                'bind_vars': sorted(rendered.bind_vars)
            }}
        )

        with self.get_database() as db:
            cursor = db.aql.execute(rendered.query, bind_vars=rendered.bind_vars)
            try:
                results = list(cursor)
            finally:
                cursor.close(ignore_missing=True)

        logger.debug(f"✅ Query returned {len(results)} records")
        return results

    def server_version(self) -> str:
        """Server version string, used as a connectivity probe."""
        with self.get_database() as db:
            return db.version()

    def missing_collections(self, names: List[str]) -> List[str]:
        """Names from the list that do not exist as collections."""
        with self.get_database() as db:
            return [name for name in names if not db.has_collection(name)]

    def missing_views(self, names: List[str]) -> List[str]:
        """Names from the list that do not exist as views."""
        with self.get_database() as db:
            existing = {view["name"] for view in db.views()}
        return [name for name in names if name not in existing]
