"""
Tests for the CHELSA and WorldClim APIs.

Covers:
- Record layouts selected by `what`
- Click, distance, containment and intersection queries
- Result windows and distance sorting
- CHELSA averaging query generation
- WorldClim aggregation of selected properties
"""

import math
import statistics

import pytest

from chelsa_api import queries as chelsa_queries
from chelsa_api.service import ChelsaService
from chelsa_api.triggers import ChelsaClickTrigger, ChelsaContainTrigger, ChelsaDistanceTrigger
from infrastructure.models import GeometryTarget, PolygonTarget
from worldclim_api.aggregation import aggregate_properties
from worldclim_api.service import WorldClimService
from worldclim_api.triggers import WorldClimDistanceTrigger, get_worldclim_triggers
from tests.conftest import FakeRepository, bound, response_json

POINT = {"type": "Point", "coordinates": [12.5, 45.0]}
SQUARE = {"type": "Polygon", "coordinates": [[[12, 45], [13, 45], [13, 46], [12, 46], [12, 45]]]}


# ============================================================================
# CHELSA QUERIES
# ============================================================================

class TestChelsaQueries:
    """Tests for chelsa_api.queries."""

    def test_click_box_around_point(self):
        query = chelsa_queries.click_query("ChelsaMap", "Chelsa", 45.0, 12.5).render()

        assert query.bind_vars["value0"] == chelsa_queries.CELL_RADIUS
        assert "[ @value1 - radius, @value2 - radius ]" in query.query
        assert query.bind_vars["value1"] == 12.5
        assert query.bind_vars["value2"] == 45.0
        assert "FILTER GEO_CONTAINS(box, doc.geometry)" in query.query

    def test_data_joins_data_collection(self):
        query = chelsa_queries.click_query("ChelsaMap", "Chelsa", 45.0, 12.5, "DATA").render()

        assert query.bind_vars["@value3"] == "ChelsaMap"
        assert query.bind_vars["@value4"] == "Chelsa"
        assert "FILTER dat._key == doc._key" in query.query
        assert "properties: dat.properties" in query.query

    def test_key_does_not_join(self):
        query = chelsa_queries.click_query("ChelsaMap", "Chelsa", 45.0, 12.5, "KEY").render()

        assert "Chelsa" not in query.bind_vars.values()
        assert query.query.endswith("RETURN doc._key")

    def test_shape_layout(self):
        query = chelsa_queries.contain_query("ChelsaMap", "Chelsa", SQUARE, "SHAPE").render()

        assert "geometry_point: doc.geometry" in query.query
        assert "geometry_bounds: doc.geometry_bounds" in query.query
        assert "properties" not in query.query

    @pytest.mark.parametrize("sort,expected", [("ASC", True), ("DESC", True), ("NO", False)])
    def test_distance_sort(self, sort, expected):
        query = chelsa_queries.distance_query("ChelsaMap", "Chelsa", POINT, "SHAPE", 0, 1000, sort).render()

        assert ("SORT distance" in query.query) is expected
        assert "distance: distance" in query.query

    def test_window_only_with_limit(self):
        unlimited = chelsa_queries.intersect_query("ChelsaMap", "Chelsa", POINT, "KEY", start=10).render()
        limited = chelsa_queries.intersect_query("ChelsaMap", "Chelsa", POINT, "KEY", limit=5).render()

        assert "LIMIT" not in unlimited.query
        assert f"LIMIT {bound(limited, 0)}, {bound(limited, 5)}" in limited.query


class TestChelsaAverages:
    """Tests for the averaging query."""

    def test_assignment_count(self):
        assignments, _ = chelsa_queries._average_clauses()

        present = len(chelsa_queries.PRESENT_VARIABLES)
        future = len(chelsa_queries.FUTURE_VARIABLES)
        monthly = 12 * len(chelsa_queries.MONTHLY_VARIABLES)
        assert len(assignments) == present + 3 * future + 4 * monthly

    def test_future_periods_nest_scenario(self):
        assignments, properties = chelsa_queries._average_clauses()

        assert "p2_bio01 = AVERAGE(dat.properties.`2011-2040`.`MPI-ESM1-2-HR`.`ssp370`.env_climate_bio01)" in assignments
        assert "p1_01_pr = AVERAGE(dat.properties.`1981-2010`.monthly[0].env_climate_pr)" in assignments
        assert "`2011-2040`: { `MPI-ESM1-2-HR`: { `ssp370`: {" in properties

    def test_mean_contain_query(self):
        query = chelsa_queries.mean_contain_query("ChelsaMap", "Chelsa", SQUARE).render()

        assert query.bind_vars["value0"] == SQUARE
        assert "COLLECT AGGREGATE p1_bio01 = AVERAGE(" in query.query
        assert "geometry: target" in query.query


class TestChelsaService:
    """Tests for ChelsaService and its triggers."""

    def test_reference_geometry_is_bound(self, app_config, repository):
        ChelsaService(app_config, repository).contain(PolygonTarget.model_validate({"geometry": SQUARE}), "KEY")

        assert repository.last.bind_vars["value0"] == SQUARE

    def test_click_defaults_to_data(self, app_config, repository, make_request):
        trigger = ChelsaClickTrigger(service=ChelsaService(app_config, repository))

        response = trigger.handle(make_request("GET", "chelsa/click", params={"lat": "45", "lon": "12.5"}))

        assert response.status_code == 200
        assert "Chelsa" in repository.last.bind_vars.values()

    def test_distance_parameters(self, app_config, repository, make_request):
        trigger = ChelsaDistanceTrigger(service=ChelsaService(app_config, repository))

        response = trigger.handle(make_request(
            "POST", "chelsa/dist",
            params={"what": "SHAPE", "min": "0", "max": "5000", "sort": "ASC"},
            body={"geometry": POINT, "limit": 10}
        ))

        assert response.status_code == 200
        query = repository.last
        assert "SORT distance ASC" in query.query
        assert f"FILTER distance <= {bound(query, 5000.0)}" in query.query

    def test_contain_requires_polygon(self, app_config, repository, make_request):
        trigger = ChelsaContainTrigger(service=ChelsaService(app_config, repository))

        response = trigger.handle(make_request("POST", "chelsa/contain", params={"what": "KEY"}, body={"geometry": POINT}))

        assert response.status_code == 400
        assert repository.queries == []

    def test_what_is_required(self, app_config, repository, make_request):
        trigger = ChelsaContainTrigger(service=ChelsaService(app_config, repository))

        response = trigger.handle(make_request("POST", "chelsa/contain", body={"geometry": SQUARE}))

        assert response.status_code == 400


# ============================================================================
# WORLDCLIM
# ============================================================================

class TestWorldClimAggregation:
    """Tests for worldclim_api.aggregation."""

    PROPERTIES = [
        {"1970-2000": {"env_climate_bio01": 10.0, "monthly": [{"env_climate_tavg": 1.0}, {"env_climate_tavg": 3.0}]}},
        {"1970-2000": {"env_climate_bio01": 14.0, "monthly": [{"env_climate_tavg": 5.0}, {"env_climate_tavg": 7.0}]}},
    ]

    @pytest.mark.parametrize("operation,bio01,month1", [
        ("MIN", 10.0, 1.0),
        ("MAX", 14.0, 5.0),
        ("AVG", 12.0, 3.0),
        ("STD", 2.0, 2.0),
        ("VAR", 4.0, 4.0),
    ])
    def test_operations(self, operation, bio01, month1):
        result = aggregate_properties(self.PROPERTIES, operation)

        period = result["properties"]["1970-2000"]
        assert result["count"] == 2
        assert math.isclose(period["env_climate_bio01"], bio01)
        assert math.isclose(period["monthly"][0]["env_climate_tavg"], month1)

    def test_missing_values_are_skipped(self):
        result = aggregate_properties([{"a": 1, "b": "text"}, {"a": 3, "b": None}, {"c": True}], "AVG")

        assert result["properties"] == {"a": 2}

    def test_empty_selection(self):
        assert aggregate_properties([], "AVG") == {"count": 0, "properties": {}}

    def test_unknown_operation(self):
        with pytest.raises(ValueError):
            aggregate_properties([{"a": 1}], "SUM")

    def test_matches_statistics(self):
        values = [1.0, 2.0, 4.0, 8.0]
        result = aggregate_properties([{"x": value} for value in values], "STD")

        assert math.isclose(result["properties"]["x"], statistics.pstdev(values))


class TestWorldClimService:
    """Tests for WorldClimService queries and aggregate results."""

    def test_click(self, app_config, repository):
        WorldClimService(app_config, repository).click(45.0, 12.5)

        query = repository.last
        assert query.bind_vars["@value0"] == "WorldClim"
        assert "GEO_INTERSECTS(GEO_POINT(@value1, @value2), dat.geometry_bounds)" in query.query
        assert "properties: dat.properties" in query.query

    def test_contain_uses_centroid(self, app_config, repository):
        target = PolygonTarget.model_validate({"geometry": SQUARE})

        WorldClimService(app_config, repository).contain(target, "SHAPE")

        assert "FILTER GEO_CONTAINS(target, dat.geometry_point)" in repository.last.query

    def test_aggregate_ignores_window(self, app_config):
        repository = FakeRepository([{"x": 1.0}, {"x": 3.0}])
        target = GeometryTarget.model_validate({"geometry": SQUARE, "limit": 1})

        result = WorldClimService(app_config, repository).intersect(target, "AVG")

        assert result == [{"count": 2, "properties": {"x": 2.0}}]
        assert "LIMIT" not in repository.last.query
        assert repository.last.query.endswith("RETURN dat.properties")

    def test_distance_aggregate_not_sorted(self, app_config, repository, make_request):
        trigger = WorldClimDistanceTrigger(service=WorldClimService(app_config, repository))

        response = trigger.handle(make_request(
            "POST", "worldclim/dist",
            params={"what": "MAX", "min": "0", "max": "100000", "sort": "DESC"},
            body={"geometry": POINT}
        ))

        assert response.status_code == 200
        assert response_json(response) == [{"count": 0, "properties": {}}]
        assert "SORT" not in repository.last.query

    def test_routes(self):
        assert [t['route'] for t in get_worldclim_triggers()] == [
            'worldclim/click', 'worldclim/dist', 'worldclim/contain', 'worldclim/intersect'
        ]
