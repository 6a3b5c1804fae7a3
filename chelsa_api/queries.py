"""
AQL builders for CHELSA climate data.

ChelsaMap holds one record per 30 arc second data point, with the point as
`geometry` and its cell as `geometry_bounds`; Chelsa holds the climate
properties under the same key.

The averaging query is generated from CLIMATE_PERIODS, which lists the
variables stored for each period.
"""

from typing import Any, Dict, List, Optional, Tuple

from infrastructure.aql import AQL, Collection, aql, literal

# Half the side of a data cell, in degrees
CELL_RADIUS = 0.004167

PRESENT_VARIABLES = (
    [f"bio{index:02d}" for index in range(1, 20)]
    + ["gdd0", "gdd10", "gdd5", "gsl", "gsp", "gst"]
    + ["hurs_max", "hurs_mean", "hurs_min", "hurs_range"]
    + ["ngd0", "ngd10", "ngd5", "npp"]
    + ["rsds_max", "rsds_mean", "rsds_min", "rsds_range"]
    + ["scd"]
    + ["vpd_max", "vpd_mean", "vpd_min", "vpd_range"]
)

FUTURE_VARIABLES = (
    [f"bio{index:02d}" for index in range(1, 20)]
    + ["gdd0", "gdd10", "gdd5", "gsl", "gsp", "gst"]
    + ["ngd0", "ngd10", "ngd5", "npp", "scd"]
)

MONTHLY_VARIABLES = ["pr", "tas", "tasmax", "tasmin"]

FUTURE_SCENARIO = ("MPI-ESM1-2-HR", "ssp370")

# (period, nesting below the period, variables)
CLIMATE_PERIODS: List[Tuple[str, Tuple[str, ...], List[str]]] = [
    ("1981-2010", (), PRESENT_VARIABLES),
    ("2011-2040", FUTURE_SCENARIO, FUTURE_VARIABLES),
    ("2041-2070", FUTURE_SCENARIO, FUTURE_VARIABLES),
    ("2071-2100", FUTURE_SCENARIO, FUTURE_VARIABLES),
]

VARIABLE_PREFIX = "env_climate_"


def _source(maps: str, data: str, what: str) -> AQL:
    """Map loop, joined to the data records when properties are returned."""
    if what == "DATA":
        return aql(
            "FOR doc IN ${maps}\n"
            "    FOR dat IN ${data}\n"
            "        FILTER dat._key == doc._key",
            maps=Collection(maps),
            data=Collection(data)
        )
    return aql("FOR doc IN ${maps}", maps=Collection(maps))


def _result(what: str, distance: bool = False) -> AQL:
    if what == "KEY":
        return literal("doc._key")
    fields = ["geometry_hash: doc._key"]
    if distance:
        fields.append("distance: distance")
    fields += ["geometry_point: doc.geometry", "geometry_bounds: doc.geometry_bounds"]
    if what == "DATA":
        fields.append("properties: dat.properties")
    return literal("{\n    " + ",\n    ".join(fields) + "\n}")


def _window(start: Optional[int], limit: Optional[int]) -> AQL:
    """LIMIT clause, only when a limit is given."""
    if limit is None:
        return AQL()
    return aql("LIMIT ${start}, ${limit}", start=start or 0, limit=limit)


def _selection(source: AQL, head: AQL, body: AQL, result: AQL) -> AQL:
    return aql(
        "${head}\n"
        "${source}\n"
        "    ${body}\n"
        "RETURN ${result}",
        head=head,
        source=source,
        body=body,
        result=result
    )


def click_query(maps: str, data: str, lat: float, lon: float, what: str = "DATA") -> AQL:
    """Data points inside the cell sized box around a coordinate."""
    head = aql(
        "LET radius = ${radius}\n"
        "LET box = GEO_POLYGON([\n"
        "    [ ${lon} - radius, ${lat} - radius ],\n"
        "    [ ${lon} + radius, ${lat} - radius ],\n"
        "    [ ${lon} + radius, ${lat} + radius ],\n"
        "    [ ${lon} - radius, ${lat} + radius ],\n"
        "    [ ${lon} - radius, ${lat} - radius ]\n"
        "])",
        radius=CELL_RADIUS,
        lat=lat,
        lon=lon
    )
    return _selection(
        _source(maps, data, what),
        head,
        literal("FILTER GEO_CONTAINS(box, doc.geometry)"),
        _result(what)
    )


def distance_query(
    maps: str,
    data: str,
    reference: Dict[str, Any],
    what: str,
    min_distance: float,
    max_distance: float,
    sort: str = "NO",
    start: Optional[int] = None,
    limit: Optional[int] = None
) -> AQL:
    """Data points within a distance range of a reference geometry."""
    order = AQL()
    if sort in ("ASC", "DESC"):
        order = literal(f"SORT distance {sort}")

    body = AQL.join([
        literal("LET distance = GEO_DISTANCE(target, doc.geometry)"),
        aql("FILTER distance >= ${min}", min=min_distance),
        aql("FILTER distance <= ${max}", max=max_distance),
        order,
        _window(start, limit),
    ], "\n    ")
    return _selection(
        _source(maps, data, what),
        aql("LET target = ${reference}", reference=reference),
        body,
        _result(what, distance=True)
    )


def contain_query(
    maps: str,
    data: str,
    reference: Dict[str, Any],
    what: str,
    start: Optional[int] = None,
    limit: Optional[int] = None
) -> AQL:
    """Data points contained by a reference polygon."""
    body = AQL.join([
        literal("FILTER GEO_CONTAINS(target, doc.geometry)"),
        _window(start, limit),
    ], "\n    ")
    return _selection(
        _source(maps, data, what),
        aql("LET target = ${reference}", reference=reference),
        body,
        _result(what)
    )


def intersect_query(
    maps: str,
    data: str,
    reference: Dict[str, Any],
    what: str,
    start: Optional[int] = None,
    limit: Optional[int] = None
) -> AQL:
    """Data points intersecting a reference geometry."""
    body = AQL.join([
        literal("FILTER GEO_INTERSECTS(target, doc.geometry)"),
        _window(start, limit),
    ], "\n    ")
    return _selection(
        _source(maps, data, what),
        aql("LET target = ${reference}", reference=reference),
        body,
        _result(what)
    )


# ============================================================================
# AVERAGES
# ============================================================================

def _average_clauses() -> Tuple[List[str], str]:
    """
    AGGREGATE assignments and the RETURN object for the averaging query.

    Returns:
        (assignments, properties object text); aggregate names are
        p<period>_<variable> and p<period>_<month>_<variable>
    """
    assignments: List[str] = []
    periods: List[str] = []

    for number, (period, nesting, variables) in enumerate(CLIMATE_PERIODS, start=1):
        path = "dat.properties." + ".".join(f"`{name}`" for name in (period,) + nesting)

        fields: List[str] = []
        for variable in variables:
            name = f"p{number}_{variable}"
            assignments.append(f"{name} = AVERAGE({path}.{VARIABLE_PREFIX}{variable})")
            fields.append(f"{VARIABLE_PREFIX}{variable}: {name}")

        months: List[str] = []
        for month in range(1, 13):
            entry = [f"std_month: {month}"]
            for variable in MONTHLY_VARIABLES:
                name = f"p{number}_{month:02d}_{variable}"
                assignments.append(
                    f"{name} = AVERAGE({path}.monthly[{month - 1}].{VARIABLE_PREFIX}{variable})"
                )
                entry.append(f"{VARIABLE_PREFIX}{variable}: {name}")
            months.append("{ " + ", ".join(entry) + " }")
        fields.append("monthly: [\n" + ",\n".join(months) + "\n]")

        block = "{\n" + ",\n".join(fields) + "\n}"
        for name in reversed(nesting):
            block = f"{{ `{name}`: {block} }}"
        periods.append(f"`{period}`: {block}")

    return assignments, "{\n" + ",\n".join(periods) + "\n}"


def mean_contain_query(maps: str, data: str, reference: Dict[str, Any]) -> AQL:
    """Average of every climate variable over the points inside a polygon."""
    assignments, properties = _average_clauses()
    return aql(
        "LET target = ${reference}\n"
        "${source}\n"
        "    FILTER GEO_CONTAINS(target, doc.geometry)\n"
        "    COLLECT AGGREGATE ${assignments}\n"
        "RETURN {\n"
        "    geometry: target,\n"
        "    properties: ${properties}\n"
        "}",
        reference=reference,
        source=_source(maps, data, "DATA"),
        assignments=literal(",\n        ".join(assignments)),
        properties=literal(properties)
    )
