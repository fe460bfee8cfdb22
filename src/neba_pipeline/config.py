"""Pipeline configuration via pydantic-settings.

Settings are read from ``NEBA_``-prefixed environment variables or a
``.env`` file.
"""

from __future__ import annotations

from enum import Enum
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from neba_pipeline.duration import parse_duration


class Environment(str, Enum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TEST = "test"


_DEFAULT_EXPIRATIONS = {
    Environment.DEVELOPMENT: "5m",
    Environment.TEST: "5m",
    Environment.PRODUCTION: "12h",
}


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="NEBA_", env_file=".env", extra="ignore"
    )

    environment: Environment = Environment.DEVELOPMENT

    # Caching
    caching_enabled: bool = True
    default_expiration: str | None = Field(
        default=None,
        description="Expiration for queries that do not set one, e.g. '12h'",
    )
    cache_prefix: str = "neba"
    redis_url: str | None = None
    max_memory_items: int | None = Field(default=10_000, gt=0)

    # Logging
    log_level: str = "INFO"
    json_logs: bool = False

    @field_validator("default_expiration")
    @classmethod
    def _check_expiration(cls, value: str | None) -> str | None:
        if value is not None:
            parse_duration(value)
        return value

    @property
    def default_expiration_ms(self) -> int:
        """Default cache expiration in milliseconds."""
        if self.default_expiration is not None:
            return parse_duration(self.default_expiration)
        return parse_duration(_DEFAULT_EXPIRATIONS[self.environment])


@lru_cache
def get_settings() -> Settings:
    return Settings()
