"""
AQL builders for the drought observatory.

Every query starts from the clicked point, bound as `click`, selects the
observation areas containing it and then their measurements.
"""

from typing import Any, Dict

from infrastructure.aql import AQL, Collection, aql
from infrastructure.selection_filters import edo_query_filter, paging_clause

CLICK_LOOP = """
    LET click = GEO_POINT(${lon}, ${lat})
    FOR shape IN ${areas}
        ${shape_filter}
        FOR data IN ${data}
            ${data_filter}
"""


def _click_query(
    body: str,
    areas: str,
    data: str,
    lat: float,
    lon: float,
    selection: Dict[str, Any],
    **params: Any
) -> AQL:
    selected = edo_query_filter(selection)
    return aql(
        CLICK_LOOP + body,
        areas=Collection(areas),
        data=Collection(data),
        lat=lat,
        lon=lon,
        shape_filter=selected.shape,
        data_filter=selected.data,
        paging=paging_clause(selected.paging),
        **params
    )


def edo_metadata(areas: str, data: str, lat: float, lon: float, selection: Dict[str, Any]) -> AQL:
    """Single summary of all measurements at the point."""
    return _click_query(
        """
            COLLECT AGGREGATE start = MIN(data.std_date),
                              end = MAX(data.std_date),
                              terms = UNIQUE(data.std_terms),
                              sets = UNIQUE(data.std_dataset_ids),
                              radius = UNIQUE(shape.geometry_point_radius),
                              points = UNIQUE(shape.geometry_point),
                              bounds = UNIQUE(shape.geometry),
                              count = COUNT()
        RETURN {
            count: count,
            std_date_start: start,
            std_date_end: end,
            std_terms: UNIQUE(FLATTEN(terms)),
            std_dataset_ids: REMOVE_VALUE(UNIQUE(FLATTEN(sets)), null),
            geometry_point_radius: UNIQUE(FLATTEN(radius)),
            geometry_point: UNIQUE(FLATTEN(points)),
            geometry_bounds: UNIQUE(FLATTEN(bounds))
        }
        """,
        areas, data, lat, lon, selection
    )


def edo_metadata_by_geometry(areas: str, data: str, lat: float, lon: float, selection: Dict[str, Any]) -> AQL:
    """Summary per observation area containing the point."""
    return _click_query(
        """
            COLLECT bounds = shape.geometry,
                    points = shape.geometry_point,
                    radius = shape.geometry_point_radius
            AGGREGATE start = MIN(data.std_date),
                      end = MAX(data.std_date),
                      terms = UNIQUE(data.std_terms),
                      sets = UNIQUE(data.std_dataset_ids),
                      count = COUNT()
        RETURN {
            count: count,
            std_date_start: start,
            std_date_end: end,
            std_terms: UNIQUE(FLATTEN(terms)),
            std_dataset_ids: REMOVE_VALUE(UNIQUE(FLATTEN(sets)), null),
            geometry_point_radius: radius,
            geometry_point: points,
            geometry_bounds: bounds
        }
        """,
        areas, data, lat, lon, selection
    )


def edo_metadata_by_dataset(areas: str, data: str, lat: float, lon: float, selection: Dict[str, Any]) -> AQL:
    """Summary per dataset identifier of the measurements at the point."""
    return _click_query(
        """
            FOR set IN NOT_NULL(data.std_dataset_ids, [])
                FILTER set != null
                COLLECT dataset = set
                AGGREGATE start = MIN(data.std_date),
                          end = MAX(data.std_date),
                          terms = UNIQUE(data.std_terms),
                          radius = UNIQUE(shape.geometry_point_radius),
                          points = UNIQUE(shape.geometry_point),
                          bounds = UNIQUE(shape.geometry),
                          count = COUNT()
        RETURN {
            count: count,
            std_date_start: start,
            std_date_end: end,
            std_terms: UNIQUE(FLATTEN(terms)),
            std_dataset_id: dataset,
            geometry_point_radius: UNIQUE(FLATTEN(radius)),
            geometry_point: UNIQUE(FLATTEN(points)),
            geometry_bounds: UNIQUE(FLATTEN(bounds))
        }
        """,
        areas, data, lat, lon, selection
    )


def edo_data_by_geometry(areas: str, data: str, lat: float, lon: float, selection: Dict[str, Any]) -> AQL:
    """Measurement time series per observation area, sorted by date."""
    return _click_query(
        """
            SORT data.std_date ASC
            COLLECT radius = shape.geometry_point_radius,
                    bounds = shape.geometry,
                    point = shape.geometry_point
            AGGREGATE sets = UNIQUE(data.std_dataset_ids)
            INTO groups
        RETURN {
            geometry_point_radius: radius,
            geometry_point: point,
            geometry_bounds: bounds,
            std_dataset_ids: UNIQUE(FLATTEN(sets)),
            properties: (
                FOR doc IN groups[*].data
                RETURN MERGE_RECURSIVE(
                    { std_date: doc.std_date },
                    doc.properties
                )
            )
        }
        """,
        areas, data, lat, lon, selection
    )


def edo_data_by_date(areas: str, data: str, lat: float, lon: float, selection: Dict[str, Any]) -> AQL:
    """
    Measurements at the point merged per date.

    With selected terms the merged properties keep only those variables and
    the dataset identifiers are left out.
    """
    terms = edo_query_filter(selection).terms
    if terms:
        properties = aql("KEEP(MERGE_RECURSIVE(groups[*].data.properties), ${terms})", terms=terms)
        datasets = AQL()
    else:
        properties = aql("MERGE_RECURSIVE(groups[*].data.properties)")
        datasets = aql(",\n            std_dataset_ids: UNIQUE(FLATTEN(sets))")

    return _click_query(
        """
            SORT data.std_date ASC
            COLLECT date = data.std_date
            AGGREGATE sets = UNIQUE(data.std_dataset_ids)
            INTO groups
            ${paging}
        RETURN {
            std_date: date,
            properties: ${properties}${datasets}
        }
        """,
        areas, data, lat, lon, selection,
        properties=properties,
        datasets=datasets
    )
