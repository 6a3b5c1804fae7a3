"""
Root conftest.py - sys.path, env vars, shared fixtures.

Sets up the test environment so every API module can be imported and
exercised without an ArangoDB server: services get a FakeRepository that
records the rendered AQL and returns canned rows.
"""

import json
import os
import sys
from typing import Any, Dict, List, Optional

import azure.functions as func
import pytest

# Add project root to sys.path so 'config', 'infrastructure', etc. are importable
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from config import AppConfig, get_app_config  # noqa: E402
from infrastructure.aql import AQL, AQLQuery  # noqa: E402


@pytest.fixture(autouse=True, scope="session")
def set_minimal_env_vars():
    """Credentials so that get_app_config() succeeds without a .env file."""
    os.environ.setdefault("ARANGO_PASSWORD", "test-password")


@pytest.fixture(autouse=True)
def clear_config_cache():
    get_app_config.cache_clear()
    yield
    get_app_config.cache_clear()


class FakeRepository:
    """Stands in for ArangoDBRepository; keeps every executed query."""

    def __init__(self, rows: Optional[List[Any]] = None):
        self.rows = rows if rows is not None else []
        self.queries: List[AQLQuery] = []

    def execute(self, query: AQL) -> List[Any]:
        assert isinstance(query, AQL)
        self.queries.append(query.render())
        return list(self.rows)

    @property
    def last(self) -> AQLQuery:
        return self.queries[-1]


@pytest.fixture
def app_config() -> AppConfig:
    return AppConfig(arango_password="test")


@pytest.fixture
def repository() -> FakeRepository:
    return FakeRepository()


@pytest.fixture
def make_request():
    """Factory fixture: build an Azure Functions HttpRequest."""
    def _make(
        method: str = "GET",
        route: str = "",
        params: Optional[Dict[str, str]] = None,
        body: Any = None
    ) -> func.HttpRequest:
        payload = b""
        if body is not None:
            payload = body if isinstance(body, bytes) else json.dumps(body).encode("utf-8")
        return func.HttpRequest(
            method=method,
            url=f"http://localhost/api/{route}",
            headers={"Content-Type": "application/json"},
            params=params or {},
            route_params={},
            body=payload
        )
    return _make


def response_json(response: func.HttpResponse) -> Any:
    return json.loads(response.get_body())


def bound(query: AQLQuery, value: Any) -> str:
    """Placeholder (with @) that carries a bind value in a rendered query."""
    for name, bind in query.bind_vars.items():
        if bind == value:
            return f"@{name}"
    raise AssertionError(f"{value!r} is not bound in {query.bind_vars}")
