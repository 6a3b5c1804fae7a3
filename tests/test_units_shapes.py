"""
Tests for the units and unit shapes APIs.

Services run against FakeRepository; the assertions check the AQL and bind
variables handed to the database.
"""

import pytest

from config import AppConfig
from shapes_api.models import ShapeSearch
from shapes_api.service import ShapesService
from shapes_api.triggers import ShapeClickTrigger, ShapeSearchTrigger, ShapeTrigger, get_shapes_triggers
from units_api.service import UnitsService
from units_api.triggers import UnitIdsTrigger, UnitRecordsTrigger, UnitShapesTrigger, get_units_triggers
from tests.conftest import FakeRepository, bound, response_json

HASH = "0123456789abcdef0123456789abcdef"


# ============================================================================
# UNITS API
# ============================================================================

class TestUnitsService:
    """Tests for UnitsService queries."""

    def test_unit_ids_by_number(self, app_config, repository):
        UnitsService(app_config, repository).unit_ids("ITA00001")

        query = repository.last
        assert query.bind_vars["@value0"] == "UnitShapes"
        assert f"doc.gcu_id_number == {bound(query, 'ITA00001')}" in query.query
        assert "`gcu_id_unit-id_list`" in query.query

    def test_unit_shapes_by_id(self, app_config, repository):
        UnitsService(app_config, repository).unit_shapes("ITA000012020")

        query = repository.last
        assert f"doc.`gcu_id_unit-id` == {bound(query, 'ITA000012020')}" in query.query
        assert "geometry_hash_list: items[*].doc.geometry_hash" in query.query

    def test_unit_records_hide_system_fields(self, app_config, repository):
        UnitsService(app_config, repository).unit_records(HASH)

        assert "UNSET(doc, '_id', '_key', '_rev')" in repository.last.query

    def test_collection_from_config(self, repository):
        config = AppConfig(arango_password="test", collection_unit_shapes="Units")
        UnitsService(config, repository).unit_records(HASH)

        assert repository.last.bind_vars["@value0"] == "Units"


class TestUnitsTriggers:
    """Tests for /gcu endpoints."""

    def test_routes(self):
        assert [t['route'] for t in get_units_triggers()] == ['gcu/id', 'gcu/shape', 'gcu/rec']

    def test_unit_ids(self, app_config, make_request):
        rows = [{"gcu_id_number": "ITA00001", "gcu_id_unit-id_list": ["ITA000012020"]}]
        trigger = UnitIdsTrigger(service=UnitsService(app_config, FakeRepository(rows)))

        response = trigger.handle(make_request("GET", "gcu/id", params={"gcu_id_number": "ITA00001"}))

        assert response.status_code == 200
        assert response_json(response) == rows

    def test_unit_id_parameter_with_dash(self, app_config, repository, make_request):
        trigger = UnitShapesTrigger(service=UnitsService(app_config, repository))

        response = trigger.handle(
            make_request("GET", "gcu/shape", params={"gcu_id_unit-id": "ITA000012020"})
        )

        assert response.status_code == 200
        bound(repository.last, "ITA000012020")

    @pytest.mark.parametrize("trigger_class,params", [
        (UnitIdsTrigger, {"gcu_id_number": "ita00001"}),
        (UnitShapesTrigger, {"gcu_id_unit-id": "ITA00001"}),
        (UnitRecordsTrigger, {"geometry_hash": "not-a-hash"}),
        (UnitRecordsTrigger, {}),
    ])
    def test_invalid_parameters(self, app_config, repository, make_request, trigger_class, params):
        trigger = trigger_class(service=UnitsService(app_config, repository))

        response = trigger.handle(make_request("GET", "gcu", params=params))

        assert response.status_code == 400
        assert repository.queries == []


# ============================================================================
# UNIT SHAPES API
# ============================================================================

class TestShapesService:
    """Tests for ShapesService queries."""

    def test_get_shape(self, app_config, repository):
        ShapesService(app_config, repository).get_shape(HASH)

        query = repository.last
        assert query.bind_vars["@value0"] == "Shapes"
        assert f"FILTER doc._key == {bound(query, HASH)}" in query.query
        assert "geometry_hash: doc._key" in query.query

    def test_click_uses_view_and_lon_lat(self, app_config, repository):
        ShapesService(app_config, repository).click(45.0, 12.5)

        query = repository.last
        assert query.bind_vars["@value2"] == "VIEW_SHAPE"
        assert query.query.startswith("LET point = GEO_POINT(@value0, @value1)")
        assert query.bind_vars["value0"] == 12.5
        assert query.bind_vars["value1"] == 45.0
        assert "geometry_point: point" in query.query

    def test_empty_search_has_no_search_clause(self, app_config, repository):
        ShapesService(app_config, repository).search(ShapeSearch())

        assert "SEARCH" not in repository.last.query
        assert "LIMIT" not in repository.last.query

    def test_search_combines_filters_with_and(self, app_config, repository):
        selection = ShapeSearch.model_validate({
            "geometry_hash": [HASH],
            "std_dataset_ids": ["ds1"],
            "chr_AvElevation": {"min": 100, "max": 500},
            "paging": {"limit": 10},
        })

        ShapesService(app_config, repository).search(selection)

        query = repository.last
        assert query.query.count(" AND ") == 3
        assert f"doc._key IN {bound(query, [HASH])}" in query.query
        assert f"{bound(query, ['ds1'])} ANY IN doc.std_dataset_ids" in query.query
        assert "doc.properties[" in query.query
        assert f"LIMIT {bound(query, 0)}, {bound(query, 10)}" in query.query

    def test_search_distance_returns_distance(self, app_config, repository):
        selection = ShapeSearch.model_validate({
            "distance": {
                "reference": {"type": "Point", "coordinates": [12.5, 45.0]},
                "range": {"max": 1000}
            }
        })

        ShapesService(app_config, repository).search(selection)

        query = repository.last
        assert "distance: GEO_DISTANCE(doc.geometry, " in query.query
        assert "<= " in query.query
        assert ">= " not in query.query


class TestShapesTriggers:
    """Tests for /shape endpoints."""

    def test_routes(self):
        routes = [(t['route'], t['methods']) for t in get_shapes_triggers()]

        assert routes == [('shape', ['GET']), ('shape/click', ['GET']), ('shape/search', ['POST'])]

    def test_shape_by_hash(self, app_config, repository, make_request):
        trigger = ShapeTrigger(service=ShapesService(app_config, repository))

        response = trigger.handle(make_request("GET", "shape", params={"geometry_hash": HASH}))

        assert response.status_code == 200
        assert response_json(response) == []

    def test_click_requires_coordinates(self, app_config, repository, make_request):
        trigger = ShapeClickTrigger(service=ShapesService(app_config, repository))

        response = trigger.handle(make_request("GET", "shape/click", params={"lat": "45"}))

        assert response.status_code == 400

    def test_search_with_empty_body(self, app_config, repository, make_request):
        trigger = ShapeSearchTrigger(service=ShapesService(app_config, repository))

        response = trigger.handle(make_request("POST", "shape/search"))

        assert response.status_code == 200
        assert len(repository.queries) == 1

    def test_search_rejects_non_object_body(self, app_config, repository, make_request):
        trigger = ShapeSearchTrigger(service=ShapesService(app_config, repository))

        response = trigger.handle(make_request("POST", "shape/search", body=[1, 2]))

        assert response.status_code == 400
        assert response_json(response)["description"] == "Request body must be a JSON object"
