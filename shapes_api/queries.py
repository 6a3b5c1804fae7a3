"""
AQL builders for unit shapes.

Point and search queries go through the shape view so that the geojson
analyzer's geo index answers GEO_INTERSECTS and GEO_DISTANCE.
"""

from typing import Any, Dict, List

from infrastructure.aql import AQL, Collection, aql
from .models import RANGE_PROPERTIES

SHAPE_FIELDS = """
    geometry_hash: doc._key,
    std_dataset_ids: doc.std_dataset_ids,
    properties: doc.properties,
    geometry: doc.geometry,
    geometry_bounds: doc.geometry_bounds
"""


def shape_by_hash(shapes: str, geometry_hash: str) -> AQL:
    return aql(
        "FOR doc IN ${shapes}\n"
        "    FILTER doc._key == ${hash}\n"
        "RETURN {" + SHAPE_FIELDS + "}",
        shapes=Collection(shapes),
        hash=geometry_hash
    )


def shapes_by_point(view: str, lat: float, lon: float) -> AQL:
    """Shapes intersecting a point, with the point echoed back."""
    return aql(
        "LET point = GEO_POINT(${lon}, ${lat})\n"
        "FOR doc IN ${view}\n"
        "    SEARCH ANALYZER(GEO_INTERSECTS(point, doc.geometry), \"geojson\")\n"
        "RETURN {\n"
        "    geometry_point: point," + SHAPE_FIELDS + "}",
        view=Collection(view),
        lat=lat,
        lon=lon
    )


def shape_search(view: str, selection: Dict[str, Any]) -> AQL:
    """
    Shapes matching a search selection.

    Args:
        view: Shape view name
        selection: ShapeSearch dump without None values

    Returns:
        AQL selecting the shapes; records carry `distance` when the
        selection has a distance filter
    """
    filters: List[AQL] = []
    dist = None

    for key, value in selection.items():
        if key == "geometry_hash_list":
            filters.append(aql("doc._key IN ${value}", value=value))
        elif key == "std_dataset_ids":
            filters.append(aql("${value} ANY IN doc.std_dataset_ids", value=value))
        elif key in RANGE_PROPERTIES:
            if value.get("min") is not None:
                filters.append(aql("doc.properties[${key}] >= ${min}", key=key, min=value["min"]))
            if value.get("max") is not None:
                filters.append(aql("doc.properties[${key}] <= ${max}", key=key, max=value["max"]))
        elif key == "intersects":
            filters.append(aql("ANALYZER(GEO_INTERSECTS(${value}, doc.geometry), \"geojson\")", value=value))
        elif key == "distance":
            dist = aql("GEO_DISTANCE(doc.geometry, ${reference})", reference=value["reference"])
            bounds = value.get("range") or {}
            if bounds.get("min") is not None:
                filters.append(aql("ANALYZER(${dist} >= ${min}, \"geojson\")", dist=dist, min=bounds["min"]))
            if bounds.get("max") is not None:
                filters.append(aql("ANALYZER(${dist} <= ${max}, \"geojson\")", dist=dist, max=bounds["max"]))

    search = AQL()
    if filters:
        search = aql("SEARCH ${conditions}", conditions=AQL.join(filters, " AND "))

    paging = AQL()
    if selection.get("paging") is not None:
        paging = aql(
            "LIMIT ${offset}, ${limit}",
            offset=selection["paging"]["offset"],
            limit=selection["paging"]["limit"]
        )

    distance = aql("distance: ${dist},", dist=dist) if dist is not None else AQL()

    return aql(
        "FOR doc IN ${view}\n"
        "    ${search}\n"
        "    ${paging}\n"
        "RETURN {\n"
        "    ${distance}" + SHAPE_FIELDS + "}",
        view=Collection(view),
        search=search,
        paging=paging,
        distance=distance
    )
