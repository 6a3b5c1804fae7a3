# ============================================================================
# MODULE CONTEXT - SELECTION FILTERS
# ============================================================================
# STATUS: Core Infrastructure - Selection to AQL translation
# PURPOSE: Translate sparse selection bodies into FILTER clauses over `data`/`shape`
# EXPORTS: SelectionFilter, edo_query_filter, shape_query_filter, shapes_query_filter,
#          unit_query_filter, paging_clause
# DEPENDENCIES: infrastructure.aql
# ============================================================================

"""
Selection Filters

The remote sensing and drought observatory queries iterate a shape
collection as `shape` and its time series collection as `data`. A selection
body lists optional constraints; each present key adds one FILTER to the
data loop or to the shape loop.

The three variants differ in how data records are tied to shapes:

    edo_query_filter     data.geometry_hash == shape._key, shapes hit by `click`
    shape_query_filter   data.geometry_hash == <one geometry hash>
    shapes_query_filter  data.geometry_hash == shape._key, shapes from a key list
                         or from the UnitShapes records of unit numbers
    unit_query_filter    data.geometry_hash IN hashes, the shapes of one unit number

Keys that are absent or None add nothing. Unknown keys are ignored.

Date: 14 OCT 2026
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .aql import AQL, Collection, aql


@dataclass
class SelectionFilter:
    """
    Translated selection.

    Attributes:
        data: FILTER lines for the `data` loop
        shape: FILTER lines for the `shape` loop (empty when unused)
        terms: Selected variable names, in request order
        paging: {'offset', 'limit'} when a limit was requested, else empty
    """
    data: AQL
    shape: AQL = field(default_factory=AQL)
    terms: List[str] = field(default_factory=list)
    paging: Dict[str, int] = field(default_factory=dict)


def _paging(value: Optional[Dict[str, Any]]) -> Dict[str, int]:
    if not value or value.get("limit") is None:
        return {}
    offset = value.get("offset")
    return {"offset": 0 if offset is None else offset, "limit": value["limit"]}


def paging_clause(paging: Dict[str, int]) -> AQL:
    """LIMIT clause for a translated paging dict, empty without a limit."""
    if "limit" not in paging:
        return AQL()
    return aql("LIMIT ${offset}, ${limit}", offset=paging["offset"], limit=paging["limit"])


def _data_filters(selection: Dict[str, Any], span_any: bool, terms: List[str]) -> List[AQL]:
    """FILTER lines shared by all variants, in selection key order."""
    filters: List[AQL] = []
    for key, value in selection.items():
        if value is None:
            continue
        if key == "std_date_span":
            if span_any:
                filters.append(aql("FILTER ${value} ANY IN data.std_date_span", value=value))
            else:
                filters.append(aql("FILTER data.std_date_span IN ${value}", value=value))
        elif key == "std_date_start":
            filters.append(aql("FILTER data.std_date >= ${value}", value=value))
        elif key == "std_date_end":
            filters.append(aql("FILTER data.std_date <= ${value}", value=value))
        elif key == "std_terms":
            terms.extend(value)
            filters.append(aql("FILTER ${value} ANY IN data.std_terms", value=value))
        elif key == "std_dataset_ids":
            filters.append(aql("FILTER ${value} ANY IN data.std_dataset_ids", value=value))
    return filters


def edo_query_filter(selection: Dict[str, Any]) -> SelectionFilter:
    """
    Drought observatory selection around a clicked point.

    Expects the enclosing query to define `click` as a GEO_POINT.
    """
    terms: List[str] = []
    data = [aql("FILTER data.geometry_hash == shape._key")]
    data.extend(_data_filters(selection, span_any=True, terms=terms))

    shape = [aql("FILTER GEO_INTERSECTS(click, shape.geometry)")]
    radius = selection.get("geometry_point_radius")
    if radius is not None:
        shape.append(aql("FILTER shape.geometry_point_radius IN ${value}", value=radius))

    return SelectionFilter(
        data=AQL.join(data),
        shape=AQL.join(shape),
        terms=terms,
        paging=_paging(selection.get("paging"))
    )


def shape_query_filter(selection: Dict[str, Any], geometry_hash: str) -> SelectionFilter:
    """Remote sensing selection for a single shape, no paging."""
    terms: List[str] = []
    data = [aql("FILTER data.geometry_hash == ${shape}", shape=geometry_hash)]
    data.extend(_data_filters(selection, span_any=False, terms=terms))

    return SelectionFilter(data=AQL.join(data), terms=terms)


def shapes_query_filter(selection: Dict[str, Any], units: Optional[str] = None) -> SelectionFilter:
    """
    Remote sensing selection over a list of shapes.

    Args:
        selection: Selection body without None values
        units: UnitShapes collection name, required to honour gcu_id_number_list
    """
    terms: List[str] = []
    data = [aql("FILTER data.geometry_hash == shape._key")]
    data.extend(_data_filters(selection, span_any=False, terms=terms))

    shape: List[AQL] = []
    hashes = selection.get("geometry_hash_list")
    if hashes is not None:
        shape.append(aql("FILTER shape._key IN ${value}", value=hashes))
    numbers = selection.get("gcu_id_number_list")
    if numbers is not None and units is not None:
        shape.append(aql(
            "FILTER shape._key IN (\n"
            "    FOR unit IN ${units}\n"
            "        FILTER unit.gcu_id_number IN ${value}\n"
            "    RETURN unit.geometry_hash\n"
            ")",
            units=Collection(units),
            value=numbers
        ))

    return SelectionFilter(
        data=AQL.join(data),
        shape=AQL.join(shape),
        terms=terms,
        paging=_paging(selection.get("paging"))
    )


def unit_query_filter(selection: Dict[str, Any]) -> SelectionFilter:
    """
    Remote sensing selection for the shapes of one unit, no paging.

    Expects the enclosing query to define `hashes` as the geometry hashes
    of the unit.
    """
    terms: List[str] = []
    data = [aql("FILTER data.geometry_hash IN hashes")]
    data.extend(_data_filters(selection, span_any=False, terms=terms))

    return SelectionFilter(data=AQL.join(data), terms=terms)
