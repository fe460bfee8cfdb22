"""Tests for adapter selection and logging setup."""

import pytest
import structlog

from neba_pipeline import (
    AsyncMemoryAdapter,
    CacheEntry,
    Settings,
    configure_logging,
    create_adapter,
)


class TestCreateAdapter:
    def test_memory_without_redis_url(self) -> None:
        adapter = create_adapter(Settings(_env_file=None, max_memory_items=10))
        assert isinstance(adapter, AsyncMemoryAdapter)

    def test_redis_with_url(self) -> None:
        pytest.importorskip("redis")
        from neba_pipeline.adapters.redis import AsyncRedisAdapter

        adapter = create_adapter(
            Settings(_env_file=None, redis_url="redis://localhost:6379/0")
        )
        assert isinstance(adapter, AsyncRedisAdapter)


class TestConfigureLogging:
    @pytest.fixture(autouse=True)
    def _reset_structlog(self):
        yield
        structlog.reset_defaults()

    @pytest.mark.parametrize("json_logs", [True, False])
    def test_configures_structlog(self, json_logs: bool) -> None:
        configure_logging(json_logs=json_logs, log_level="debug")
        assert structlog.is_configured()
        renderer = structlog.get_config()["processors"][-1]
        expected = (
            structlog.processors.JSONRenderer
            if json_logs
            else structlog.dev.ConsoleRenderer
        )
        assert isinstance(renderer, expected)


class TestMemoryBound:
    async def test_default_settings_bound_memory_store(self) -> None:
        adapter = create_adapter(Settings(_env_file=None))
        entry = CacheEntry(b"1", (), 0, 2**62)

        for i in range(10_001):
            await adapter.set(f"website:query:GetBowler:{i}", entry)

        assert len(adapter) == 10_000
        assert await adapter.get("website:query:GetBowler:0") is None
