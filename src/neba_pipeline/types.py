"""Core types for the request pipeline cache."""

from dataclasses import dataclass
from datetime import timedelta
from typing import TypeVar

T = TypeVar("T")

# Tags are flat strings: "website", "website:awards", "website:award:high-block"
Tag = str

# Duration type alias
Duration = str | int | timedelta  # "30s", "5m", "12h", "1d", ms, or timedelta


@dataclass(frozen=True, slots=True)
class CacheEntry:
    """A serialized query result with metadata."""

    payload: bytes
    tags: tuple[Tag, ...]
    created_at: int  # Unix timestamp ms
    expires_at: int  # Absolute expiration, Unix timestamp ms

    def is_expired(self, now: int) -> bool:
        """Check if the entry has passed its expiration."""
        return now >= self.expires_at

    @property
    def ttl_ms(self) -> int:
        return self.expires_at - self.created_at
