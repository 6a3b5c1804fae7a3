"""
AQL builders for WorldClim climate data.

Each WorldClim record is a measurement cell: `geometry_point` is the cell
centroid, `geometry_bounds` the cell polygon and `properties` the climate
variables. Aggregate requests select the properties only; reduction
happens in aggregation.py.
"""

from typing import Any, Dict, Optional

from infrastructure.aql import AQL, Collection, aql, literal
from .models import AGGREGATES


def _result(what: str, distance: bool = False) -> AQL:
    if what in AGGREGATES:
        return literal("dat.properties")
    if what == "KEY":
        return literal("dat._key")
    fields = ["geometry_hash: dat._key"]
    if distance:
        fields.append("distance: distance")
    fields += ["geometry_point: dat.geometry_point", "geometry_bounds: dat.geometry_bounds"]
    if what == "DATA":
        fields.append("properties: dat.properties")
    return literal("{\n    " + ",\n    ".join(fields) + "\n}")


def _window(what: str, start: Optional[int], limit: Optional[int]) -> AQL:
    """LIMIT clause for record selections with a limit."""
    if what in AGGREGATES or limit is None:
        return AQL()
    return aql("LIMIT ${start}, ${limit}", start=start or 0, limit=limit)


def _target_query(collection: str, reference: Dict[str, Any], body: AQL, result: AQL) -> AQL:
    return aql(
        "LET target = ${reference}\n"
        "FOR dat IN ${collection}\n"
        "    ${body}\n"
        "RETURN ${result}",
        reference=reference,
        collection=Collection(collection),
        body=body,
        result=result
    )


def click_query(collection: str, lat: float, lon: float) -> AQL:
    """Measurement cell containing a coordinate."""
    return aql(
        "FOR dat IN ${collection}\n"
        "    FILTER GEO_INTERSECTS(GEO_POINT(${lon}, ${lat}), dat.geometry_bounds)\n"
        "RETURN ${result}",
        collection=Collection(collection),
        lat=lat,
        lon=lon,
        result=_result("DATA")
    )


def distance_query(
    collection: str,
    reference: Dict[str, Any],
    what: str,
    min_distance: float,
    max_distance: float,
    sort: str = "NO",
    start: Optional[int] = None,
    limit: Optional[int] = None
) -> AQL:
    """Cells whose centroid lies within a distance range of a reference geometry."""
    order = AQL()
    if sort in ("ASC", "DESC") and what not in AGGREGATES:
        order = literal(f"SORT distance {sort}")

    body = AQL.join([
        literal("LET distance = GEO_DISTANCE(target, dat.geometry_point)"),
        aql("FILTER distance >= ${min}", min=min_distance),
        aql("FILTER distance <= ${max}", max=max_distance),
        order,
        _window(what, start, limit),
    ], "\n    ")
    return _target_query(collection, reference, body, _result(what, distance=True))


def contain_query(
    collection: str,
    reference: Dict[str, Any],
    what: str,
    start: Optional[int] = None,
    limit: Optional[int] = None
) -> AQL:
    """Cells whose centroid is contained by a reference polygon."""
    body = AQL.join([
        literal("FILTER GEO_CONTAINS(target, dat.geometry_point)"),
        _window(what, start, limit),
    ], "\n    ")
    return _target_query(collection, reference, body, _result(what))


def intersect_query(
    collection: str,
    reference: Dict[str, Any],
    what: str,
    start: Optional[int] = None,
    limit: Optional[int] = None
) -> AQL:
    """Cells whose bounds intersect a reference geometry."""
    body = AQL.join([
        literal("FILTER GEO_INTERSECTS(target, dat.geometry_bounds)"),
        _window(what, start, limit),
    ], "\n    ")
    return _target_query(collection, reference, body, _result(what))
