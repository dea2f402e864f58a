"""Shared test fixtures and configuration."""

import os
from pathlib import Path
import sys

import pytest


REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


# Complete test environment that overrides every config value
TEST_ENV = {
    "PORTAL_SEARCH_DEFAULT_PAGE_SIZE": "20",
    "PORTAL_SEARCH_MAX_PAGE_SIZE": "100",
    "PORTAL_SEARCH_CASE_SENSITIVE": "false",
    "PORTAL_SEARCH_DEFAULT_TERM_MODE": "all",
    "PORTAL_SEARCH_LOG_LEVEL": "info",
    "PORTAL_SEARCH_LOG_JSON": "true",
    "PORTAL_SEARCH_METRICS_ENABLED": "true",
    "PORTAL_SEARCH_TRACING_ENABLED": "true",
    "PORTAL_SEARCH_SERVICE_NAME": "portal-search-test",
}


# Set environment variables immediately when conftest.py is loaded
for key, value in TEST_ENV.items():
    os.environ[key] = value

# Now we can safely import config-dependent modules
from portal_search.adapters import InMemoryCandidateSource
from portal_search.config import Settings, get_settings
from portal_search.registry import EntityRegistry, default_registry
from portal_search.service_layer import SearchService


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Set test defaults and drop any cached settings."""
    for key, value in TEST_ENV.items():
        monkeypatch.setenv(key, value)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def registry() -> EntityRegistry:
    return default_registry()


@pytest.fixture
def source(registry: EntityRegistry) -> InMemoryCandidateSource:
    return InMemoryCandidateSource.for_registry(registry)


@pytest.fixture
def service(source: InMemoryCandidateSource, registry: EntityRegistry, settings: Settings) -> SearchService:
    return SearchService(source, registry=registry, settings=settings)
