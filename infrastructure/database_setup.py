# ============================================================================
# MODULE CONTEXT - DATABASE SETUP
# ============================================================================
# STATUS: Administration - Collection lifecycle
# PURPOSE: Create or drop the document collections the geoservice reads
# EXPORTS: COLLECTIONS, setup_collections, teardown_collections, main
# DEPENDENCIES: python-arango, util_logger, infrastructure.arangodb
# ============================================================================

"""
Database Setup

Creates the geoservice document collections when missing, or drops them.
Views, analyzers and indexes are managed with the data loaders, not here.

Usage:
    python -m infrastructure.database_setup setup
    python -m infrastructure.database_setup teardown
"""

import argparse
import sys
from typing import List, Optional

from arango.database import StandardDatabase

from util_logger import ComponentType, LoggerFactory, log_exceptions
from .arangodb import ArangoDBRepository

logger = LoggerFactory.create_logger(ComponentType.ADMIN, "DatabaseSetup")

COLLECTIONS = [
    "Chelsa",
    "ChelsaMap",
    "Climate",
    "ClimateMap",
    "Shapes",
    "ShapeData",
    "UnitShapes",
    "WorldClim",
    "WorldClimMap",
    "DroughtObservatory",
    "DroughtObservatoryMap",
]


@log_exceptions(logger=logger)
def setup_collections(db: StandardDatabase, names: Optional[List[str]] = None) -> List[str]:
    """
    Create missing document collections; existing ones are left untouched.

    Returns:
        Names of the collections created
    """
    created = []
    for name in names or COLLECTIONS:
        if db.has_collection(name):
            logger.debug(f"Collection {name} exists")
            continue
        db.create_collection(name)
        created.append(name)
        logger.info(f"✅ Created collection {name}")
    return created


@log_exceptions(logger=logger)
def teardown_collections(db: StandardDatabase, names: Optional[List[str]] = None) -> List[str]:
    """
    Drop the collections that exist.

    Returns:
        Names of the collections dropped
    """
    dropped = []
    for name in names or COLLECTIONS:
        if not db.has_collection(name):
            continue
        db.delete_collection(name)
        dropped.append(name)
        logger.info(f"🗑️ Dropped collection {name}")
    return dropped


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Create or drop the geoservice collections",
    )
    parser.add_argument(
        "action", choices=["setup", "teardown"],
        help="setup creates missing collections, teardown drops them",
    )
    args = parser.parse_args(argv)

    repository = ArangoDBRepository()
    with repository.get_database() as db:
        if args.action == "setup":
            changed = setup_collections(db)
        else:
            changed = teardown_collections(db)

    logger.info(f"{args.action}: {len(changed)} collections changed")
    return 0


if __name__ == "__main__":
    sys.exit(main())
