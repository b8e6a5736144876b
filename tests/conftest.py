"""Shared fixtures for the test suite."""

import pytest
import requests
from unittest.mock import MagicMock

from fastapi.testclient import TestClient

from monarch_proxy.config import Settings
from monarch_proxy.main import create_app


PROXY_KEY = "test-proxy-key"


@pytest.fixture
def settings():
    """Settings with a known proxy secret."""
    return Settings(PROXY_API_KEY=PROXY_KEY, UPSTREAM_TIMEOUT=5.0)


@pytest.fixture
def client(settings):
    """TestClient for an app built from the settings fixture."""
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture
def auth_headers():
    """Factory for request headers — call with overrides."""
    def _make(api_key=PROXY_KEY, token="fake-token", **extra):
        headers = {}
        if api_key is not None:
            headers["x-api-key"] = api_key
        if token is not None:
            headers["Authorization"] = f"Token {token}"
        headers.update(extra)
        return headers
    return _make


@pytest.fixture
def mock_response():
    """Factory for mock requests responses."""
    def _make(status_code=200, json_data=None, text=""):
        resp = MagicMock()
        resp.status_code = status_code
        resp.ok = 200 <= status_code < 300
        resp.text = text
        resp.json.return_value = json_data if json_data is not None else {}
        return resp
    return _make


@pytest.fixture
def raw_response():
    """Factory for real requests.Response objects with a raw body."""
    def _make(body, status_code=200):
        resp = requests.Response()
        resp.status_code = status_code
        resp._content = body.encode("utf-8")
        resp.encoding = "utf-8"
        return resp
    return _make


@pytest.fixture
def summary_response():
    """Upstream response for the transactions summary query."""
    return {"data": {"aggregates": {"summary": {"sumExpense": -123.45}}}}
