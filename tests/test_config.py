"""Tests for settings."""

import pytest
from pydantic import ValidationError

from neba_pipeline import Environment, Settings


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings(_env_file=None)
        assert settings.caching_enabled is True
        assert settings.redis_url is None
        assert settings.cache_prefix == "neba"
        assert settings.max_memory_items == 10_000

    def test_default_expiration_by_environment(self) -> None:
        dev = Settings(_env_file=None, environment=Environment.DEVELOPMENT)
        prod = Settings(_env_file=None, environment=Environment.PRODUCTION)
        assert dev.default_expiration_ms == 300_000
        assert prod.default_expiration_ms == 43_200_000

    def test_explicit_expiration_wins(self) -> None:
        settings = Settings(
            _env_file=None, environment=Environment.PRODUCTION, default_expiration="30s"
        )
        assert settings.default_expiration_ms == 30_000

    def test_invalid_expiration_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, default_expiration="soon")

    def test_environment_variables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NEBA_CACHING_ENABLED", "false")
        monkeypatch.setenv("NEBA_ENVIRONMENT", "production")
        monkeypatch.setenv("NEBA_DEFAULT_EXPIRATION", "1h")
        settings = Settings(_env_file=None)
        assert settings.caching_enabled is False
        assert settings.environment is Environment.PRODUCTION
        assert settings.default_expiration_ms == 3_600_000
