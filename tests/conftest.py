"""Shared pytest fixtures."""

import pytest
from prometheus_client import CollectorRegistry

from neba_pipeline import AsyncMemoryAdapter, CacheMetrics, Environment, Settings


@pytest.fixture
def store() -> AsyncMemoryAdapter:
    """Create a fresh AsyncMemoryAdapter for each test."""
    return AsyncMemoryAdapter()


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from the environment and any .env file."""
    return Settings(_env_file=None, environment=Environment.TEST)


@pytest.fixture
def metrics() -> CacheMetrics:
    """Metrics on a private registry so tests don't collide."""
    return CacheMetrics(CollectorRegistry())
