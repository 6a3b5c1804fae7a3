"""
AQL builders for the UnitShapes collection.
"""

from infrastructure.aql import AQL, Collection, aql


def unit_ids_by_number(units: str, gcu_id_number: str) -> AQL:
    """All unit IDs of a unit number."""
    return aql(
        """
        FOR doc IN ${units}
            FILTER doc.gcu_id_number == ${number}
            COLLECT number = doc.gcu_id_number
            INTO items
        RETURN {
            gcu_id_number: number,
            `gcu_id_unit-id_list`: UNIQUE(FLATTEN(items[*].doc['gcu_id_unit-id']))
        }
        """,
        units=Collection(units),
        number=gcu_id_number
    )


def unit_shapes_by_id(units: str, gcu_id_unit_id: str) -> AQL:
    """Unit number and shape references of a unit ID."""
    return aql(
        """
        FOR doc IN ${units}
            FILTER doc.`gcu_id_unit-id` == ${unit_id}
            COLLECT id = doc.`gcu_id_unit-id`, number = doc.gcu_id_number INTO items
        RETURN {
            gcu_id_number: number,
            `gcu_id_unit-id`: id,
            geometry_hash_list: items[*].doc.geometry_hash
        }
        """,
        units=Collection(units),
        unit_id=gcu_id_unit_id
    )


def unit_records_by_shape(units: str, geometry_hash: str) -> AQL:
    """Unit records referencing a shape, without system attributes."""
    return aql(
        """
        FOR doc IN ${units}
            FILTER doc.geometry_hash == ${shape}
        RETURN UNSET(doc, '_id', '_key', '_rev')
        """,
        units=Collection(units),
        shape=geometry_hash
    )
