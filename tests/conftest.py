"""Pytest configuration for commerce MCP server tests."""

import pytest
from fastapi.testclient import TestClient

from commerce_mcp.api.server import create_app
from commerce_mcp.core.config import DEFAULT_CATALOG_PATH, DEFAULT_WIDGET_PATH, ServerConfig
from commerce_mcp.data.assets import load_widget_markup
from commerce_mcp.data.catalog_store import load_catalog


# ---------------------------------------------------------------------------
# Environment isolation: config tests set PORT/HOST/... via monkeypatch, but
# a developer shell may already export them. Clear before every test.
# ---------------------------------------------------------------------------

_CONFIG_ENV_VARS = (
    "PORT",
    "HOST",
    "LOG_LEVEL",
    "COMMERCE_MCP_CONFIG",
    "COMMERCE_CATALOG_PATH",
    "COMMERCE_WIDGET_PATH",
)


@pytest.fixture(scope="function", autouse=True)
def _isolate_env(monkeypatch):
    for name in _CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config():
    return ServerConfig(catalog_path=DEFAULT_CATALOG_PATH, widget_path=DEFAULT_WIDGET_PATH)


@pytest.fixture
def catalog():
    return load_catalog(DEFAULT_CATALOG_PATH)


@pytest.fixture
def widget_html():
    return load_widget_markup(DEFAULT_WIDGET_PATH)


@pytest.fixture
def client(config):
    """TestClient with the lifespan (catalog + widget preload) running."""
    app = create_app(config)
    with TestClient(app) as test_client:
        yield test_client
