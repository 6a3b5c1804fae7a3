"""
Tests for the datasets API.
"""

import pytest
from pydantic import ValidationError

from datasets_api.models import DatasetQuery
from datasets_api.queries import dataset_filters, dataset_query
from datasets_api.service import DatasetsService
from datasets_api.triggers import DatasetQueryTrigger
from tests.conftest import FakeRepository, bound, response_json


def dump(body):
    return DatasetQuery.model_validate(body).model_dump(exclude_none=True, by_alias=True)


# ============================================================================
# MODELS
# ============================================================================

class TestDatasetModels:
    """Tests for dataset search models."""

    def test_underscore_fields_by_alias(self):
        assert dump({"_key": ["a"], "_title": "forest"}) == {"_key": ["a"], "_title": "forest"}

    def test_item_selection_do_all_alias(self):
        assert dump({"_tag": {"items": ["x"], "doAll": True}}) == {"_tag": {"items": ["x"], "doAll": True}}

    @pytest.mark.parametrize("body", [
        {"std_date": {}},
        {"count": {}},
        {"std_date_submission": {}},
        {"std_date": {"std_date_start": "2020-01"}},
        {"_tag": {"doAll": True}},
    ])
    def test_invalid_bodies(self, body):
        with pytest.raises(ValidationError):
            DatasetQuery.model_validate(body)


# ============================================================================
# QUERIES
# ============================================================================

class TestDatasetQueries:
    """Tests for datasets_api.queries."""

    def test_one_condition_per_field(self):
        filters = dataset_filters(dump({
            "_key": ["a"],
            "std_dataset": "%FOREST%",
            "_title": "forest",
            "count": {"min": 10},
            "std_terms": {"items": ["ndvi"]},
        }))

        rendered = [f.render().query for f in filters]
        assert rendered == [
            "doc[@value0] IN @value1",
            "LIKE(doc[@value0], @value1)",
            "ANALYZER(doc[@value0][@value1] IN TOKENS(@value2, @value3), @value3)",
            "doc[@value0] >= @value1",
            "@value0 ANY IN doc[@value1]",
        ]

    def test_title_searches_english_text(self):
        query = dataset_filters(dump({"_title": "forest"}))[0].render()

        assert query.bind_vars["value0"] == "_title"
        assert query.bind_vars["value1"] == "iso_639_3_eng"

    def test_do_all(self):
        query = dataset_filters(dump({"_domain": {"items": ["a", "b"], "doAll": True}}))[0].render()

        assert query.query == "@value0 ALL IN doc[@value1]"

    def test_date_range(self):
        query = dataset_filters(dump({"std_date": {"std_date_end": "2020"}}))[0].render()

        assert query.query == "doc.std_date_end <= @value0"

    @pytest.mark.parametrize("op", ["AND", "OR"])
    def test_chaining(self, op):
        query = dataset_query("VIEW_DATASET", dump({"_key": ["a"], "std_project": ["p"]}), op).render()

        assert query.bind_vars["@value0"] == "VIEW_DATASET"
        assert f"SEARCH doc[@value1] IN @value2 {op} doc[@value3] IN @value4" in query.query
        assert query.query.endswith("RETURN UNSET(doc, '_id', '_rev', '_oldRev')")

    def test_no_conditions(self):
        assert dataset_query("VIEW_DATASET", {}) is None

    def test_invalid_operator(self):
        with pytest.raises(ValueError):
            dataset_query("VIEW_DATASET", {"_key": ["a"]}, "XOR")


# ============================================================================
# SERVICE AND TRIGGER
# ============================================================================

class TestDatasetsService:
    """Tests for DatasetsService and /dataset/query."""

    def test_empty_selection_returns_nothing(self, app_config, repository):
        assert DatasetsService(app_config, repository).query(DatasetQuery()) == []
        assert repository.queries == []

    def test_query(self, app_config):
        rows = [{"_key": "ds1", "std_project": "GCU"}]
        repository = FakeRepository(rows)

        result = DatasetsService(app_config, repository).query(
            DatasetQuery.model_validate({"std_project": ["GCU"]})
        )

        assert result == rows
        bound(repository.last, ["GCU"])

    def test_trigger_operator(self, app_config, repository, make_request):
        trigger = DatasetQueryTrigger(service=DatasetsService(app_config, repository))

        response = trigger.handle(make_request(
            "POST", "dataset/query", params={"op": "OR"}, body={"_key": ["a"], "_subject": ["b"]}
        ))

        assert response.status_code == 200
        assert " OR " in repository.last.query

    def test_trigger_rejects_operator(self, app_config, repository, make_request):
        trigger = DatasetQueryTrigger(service=DatasetsService(app_config, repository))

        response = trigger.handle(make_request("POST", "dataset/query", params={"op": "NOT"}, body={"_key": ["a"]}))

        assert response.status_code == 400
        assert response_json(response)["code"] == "BadRequest"
