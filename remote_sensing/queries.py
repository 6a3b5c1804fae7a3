"""
AQL builders for remote sensing metadata and time series.

Shapes are iterated as `shape` and their ShapeData records as `data`; the
selection filters fill in the FILTER lines of both loops.
"""

from typing import Any, Dict, Optional

from infrastructure.aql import AQL, Collection, aql
from infrastructure.selection_filters import (
    paging_clause,
    shape_query_filter,
    shapes_query_filter,
    unit_query_filter,
)

SPAN_SUMMARY = """
    COLLECT span = data.std_date_span
    AGGREGATE terms = UNIQUE(data.std_terms),
              sets = UNIQUE(data.std_dataset_ids),
              start = MIN(data.std_date),
              end = MAX(data.std_date),
              count = COUNT()
    RETURN {
        count: count,
        std_date_span: span,
        std_date_start: start,
        std_date_end: end,
        std_terms: UNIQUE(FLATTEN(terms)),
        std_dataset_ids: REMOVE_VALUE(UNIQUE(FLATTEN(sets)), null)
    }
"""


def shape_metadata_by_span(
    shapes: str,
    data: str,
    selection: Dict[str, Any],
    units: Optional[str] = None
) -> AQL:
    """Data summary of all selected shapes, one record per date span."""
    selected = shapes_query_filter(selection, units)
    return aql(
        """
        FOR shape IN ${shapes}
            ${shape_filter}
            FOR data IN ${data}
                ${data_filter}
        """ + SPAN_SUMMARY,
        shapes=Collection(shapes),
        data=Collection(data),
        shape_filter=selected.shape,
        data_filter=selected.data
    )


def shape_metadata_by_shape(
    shapes: str,
    data: str,
    selection: Dict[str, Any],
    units: Optional[str] = None
) -> AQL:
    """
    Data summary per selected shape.

    Paging applies to the shapes, after the shape filters.
    """
    selected = shapes_query_filter(selection, units)
    return aql(
        """
        FOR shape IN ${shapes}
            ${shape_filter}
            ${paging}
            LET summary = (
                FOR data IN ${data}
                    ${data_filter}
        """ + SPAN_SUMMARY + """
            )
        RETURN {
            geometry_hash: shape._key,
            properties: summary
        }
        """,
        shapes=Collection(shapes),
        data=Collection(data),
        shape_filter=selected.shape,
        paging=paging_clause(selected.paging),
        data_filter=selected.data
    )


def shape_data_by_shape(data: str, selection: Dict[str, Any], geometry_hash: str) -> AQL:
    """Time series of one shape grouped by date span, sorted by span and date."""
    selected = shape_query_filter(selection, geometry_hash)
    return aql(
        """
        FOR data IN ${data}
            ${data_filter}
            SORT data.std_date_span, data.std_date ASC
            LET props = {
                std_date: data.std_date,
                properties: data.properties
            }
            COLLECT span = data.std_date_span
            INTO groups
            KEEP props
        RETURN {
            std_date_span: span,
            std_date_series: groups[*].props
        }
        """,
        data=Collection(data),
        data_filter=selected.data
    )


def shape_data_by_unit(
    units: str,
    data: str,
    selection: Dict[str, Any],
    gcu_id_number: str
) -> AQL:
    """Time series of every shape of a unit, grouped by shape and date span."""
    selected = unit_query_filter(selection)
    return aql(
        """
        LET hashes = UNIQUE(
            FOR unit IN ${units}
                FILTER unit.gcu_id_number == ${number}
            RETURN unit.geometry_hash
        )
        FOR data IN ${data}
            ${data_filter}
            SORT data.geometry_hash, data.std_date_span, data.std_date ASC
            LET props = {
                std_date: data.std_date,
                properties: data.properties
            }
            COLLECT shape = data.geometry_hash, span = data.std_date_span
            INTO groups
            KEEP props
        RETURN {
            geometry_hash: shape,
            std_date_span: span,
            std_date_series: groups[*].props
        }
        """,
        units=Collection(units),
        number=gcu_id_number,
        data=Collection(data),
        data_filter=selected.data
    )
