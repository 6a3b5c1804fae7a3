"""
Tests for configuration, the base trigger, the repository, database setup and logging.
"""

import json
import logging
from unittest.mock import MagicMock, patch

import pytest
from pydantic import BaseModel, ValidationError

from config import AppConfig, get_app_config, get_arango_connection_args
from infrastructure.aql import aql
from infrastructure.arangodb import ArangoDBRepository
from infrastructure.database_setup import COLLECTIONS, main, setup_collections, teardown_collections
from infrastructure.triggers import BaseGeoTrigger
from tests.conftest import response_json
from util_logger import ComponentType, JSONFormatter, LogContext, LoggerFactory, LogLevel, log_exceptions


# ============================================================================
# CONFIGURATION
# ============================================================================

class TestConfig:
    """Tests for config.py."""

    def test_password_required_without_token(self, monkeypatch):
        monkeypatch.delenv("ARANGO_PASSWORD", raising=False)
        monkeypatch.delenv("ARANGO_USER_TOKEN", raising=False)

        with pytest.raises(ValidationError):
            AppConfig(_env_file=None)

    def test_token_replaces_password(self, monkeypatch):
        monkeypatch.delenv("ARANGO_PASSWORD", raising=False)

        config = AppConfig(_env_file=None, arango_user_token="jwt")

        assert config.auth_mode == "token"
        assert get_arango_connection_args(config) == {"name": "GeoService", "user_token": "jwt"}

    def test_password_connection_args(self, app_config):
        assert get_arango_connection_args(app_config) == {
            "name": "GeoService",
            "username": "root",
            "password": "test",
        }

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("ARANGO_DATABASE", "Other")
        monkeypatch.setenv("COLLECTION_SHAPES", "ShapesV2")

        config = get_app_config()

        assert config.arango_database == "Other"
        assert config.collection_shapes == "ShapesV2"

    def test_required_collections_and_views(self, app_config):
        assert len(app_config.required_collections()) == 8
        assert app_config.required_views() == ["VIEW_DATASET", "VIEW_SHAPE"]


# ============================================================================
# BASE TRIGGER
# ============================================================================

class EchoBody(BaseModel):
    value: int


class EchoTrigger(BaseGeoTrigger):
    name = "echo"

    def __init__(self, error=None):
        super().__init__(service=object())
        self.error = error

    def process(self, req):
        if self.error is not None:
            raise self.error
        return [self._body(req, EchoBody).model_dump()]


class TestBaseGeoTrigger:
    """Error mapping and JSON responses."""

    def test_success(self, make_request):
        response = EchoTrigger().handle(make_request("POST", "echo", body={"value": 3}))

        assert response.status_code == 200
        assert response.mimetype == "application/json"
        assert response_json(response) == [{"value": 3}]

    def test_validation_error_is_bad_request(self, make_request):
        response = EchoTrigger().handle(make_request("POST", "echo", body={"value": "three"}))

        body = response_json(response)
        assert response.status_code == 400
        assert body["code"] == "BadRequest"
        assert body["description"].startswith("Invalid request:")

    def test_value_error_is_bad_request(self, make_request):
        response = EchoTrigger(ValueError("bad value")).handle(make_request())

        assert response.status_code == 400
        assert response_json(response) == {"code": "BadRequest", "description": "bad value"}

    def test_other_errors_are_internal(self, make_request):
        response = EchoTrigger(RuntimeError("down")).handle(make_request())

        body = response_json(response)
        assert response.status_code == 500
        assert body["code"] == "InternalServerError"
        assert "down" in body["description"]

    def test_service_created_lazily(self):
        class Lazy(BaseGeoTrigger):
            service_class = MagicMock

        trigger = Lazy()
        assert trigger._service is None
        assert trigger.service is trigger.service


# ============================================================================
# REPOSITORY
# ============================================================================

class TestArangoDBRepository:
    """Tests for ArangoDBRepository with a mocked driver."""

    @patch("infrastructure.arangodb.ArangoClient")
    def test_execute_binds_rendered_query(self, client_class, app_config):
        db = client_class.return_value.db.return_value
        cursor = MagicMock()
        cursor.__iter__.return_value = iter([{"a": 1}])
        db.aql.execute.return_value = cursor

        rows = ArangoDBRepository(app_config).execute(aql("RETURN ${x}", x=1))

        assert rows == [{"a": 1}]
        db.aql.execute.assert_called_once_with("RETURN @value0", bind_vars={"value0": 1})
        client_class.return_value.db.assert_called_once_with(name="GeoService", username="root", password="test")
        client_class.return_value.close.assert_called_once()

    def test_execute_rejects_text(self, app_config):
        with pytest.raises(TypeError):
            ArangoDBRepository(app_config).execute("RETURN 1")

    @patch("infrastructure.arangodb.ArangoClient")
    def test_missing_collections_and_views(self, client_class, app_config):
        db = client_class.return_value.db.return_value
        db.has_collection.side_effect = lambda name: name != "Shapes"
        db.views.return_value = [{"name": "VIEW_SHAPE"}]
        repository = ArangoDBRepository(app_config)

        assert repository.missing_collections(["Shapes", "Chelsa"]) == ["Shapes"]
        assert repository.missing_views(["VIEW_DATASET", "VIEW_SHAPE"]) == ["VIEW_DATASET"]


# ============================================================================
# DATABASE SETUP
# ============================================================================

class TestDatabaseSetup:
    """Tests for infrastructure.database_setup."""

    def test_setup_creates_missing(self):
        db = MagicMock()
        db.has_collection.side_effect = lambda name: name == "Shapes"

        created = setup_collections(db)

        assert "Shapes" not in created
        assert len(created) == len(COLLECTIONS) - 1
        assert db.create_collection.call_count == len(COLLECTIONS) - 1

    def test_teardown_drops_existing(self):
        db = MagicMock()
        db.has_collection.side_effect = lambda name: name in ("Chelsa", "ChelsaMap")

        assert teardown_collections(db) == ["Chelsa", "ChelsaMap"]
        assert db.delete_collection.call_count == 2

    def test_selected_names(self):
        db = MagicMock()
        db.has_collection.return_value = False

        assert setup_collections(db, ["Climate"]) == ["Climate"]

    @patch("infrastructure.database_setup.ArangoDBRepository")
    def test_main(self, repository_class):
        db = MagicMock()
        db.has_collection.return_value = True
        repository_class.return_value.get_database.return_value.__enter__.return_value = db

        assert main(["teardown"]) == 0
        assert db.delete_collection.call_count == len(COLLECTIONS)

    def test_main_rejects_action(self):
        with pytest.raises(SystemExit):
            main(["migrate"])


# ============================================================================
# LOGGING
# ============================================================================

class TestUtilLogger:
    """Tests for util_logger."""

    def test_log_level_from_string(self):
        assert LogLevel.from_string("warning") is LogLevel.WARNING
        assert LogLevel.WARNING.to_python_level() == logging.WARNING

    def test_context_drops_empty_fields(self):
        context = LogContext(request_id="abc", method="POST")

        assert context.to_dict() == {"request_id": "abc", "method": "POST"}

    def test_json_formatter(self):
        record = logging.LogRecord("service.Test", logging.INFO, __file__, 1, "hello %s", ("world",), None)
        record.custom_dimensions = {"records": 3}

        output = json.loads(JSONFormatter().format(record))

        assert output["message"] == "hello world"
        assert output["level"] == "INFO"
        assert output["customDimensions"] == {"records": 3}

    def test_logger_adds_component_dimensions(self):
        logger = LoggerFactory.create_with_context(ComponentType.TRIGGER, "test", request_id="abc")
        records = []
        handler = logging.Handler()
        handler.emit = records.append
        logger.addHandler(handler)

        logger.info("done", extra={"custom_dimensions": {"records": 1}})

        assert logger.name == "trigger.test"
        assert records[0].custom_dimensions == {
            "request_id": "abc",
            "component_type": "trigger",
            "component_name": "test",
            "records": 1,
        }

    def test_log_exceptions_reraises(self):
        @log_exceptions(ComponentType.ADMIN, "Test")
        def fail():
            raise KeyError("missing")

        with pytest.raises(KeyError):
            fail()
