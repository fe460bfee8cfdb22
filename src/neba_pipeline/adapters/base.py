"""Base adapter protocol for cache stores."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from neba_pipeline.types import CacheEntry, Tag


@runtime_checkable
class AsyncCacheStore(Protocol):
    """Async cache store with a tag index.

    Writes to a single key are atomic. Nothing locks across keys, so an
    entry and its tags are recorded by separate calls.
    """

    async def get(self, key: str) -> CacheEntry | None:
        """Get a live cache entry by key."""
        ...

    async def set(self, key: str, entry: CacheEntry) -> None:
        """Store an entry, expiring it at ``entry.expires_at``."""
        ...

    async def delete(self, *keys: str) -> None:
        """Delete entries. Unknown keys are ignored."""
        ...

    async def tag(self, key: str, tags: Iterable[Tag], expires_at: int) -> None:
        """Record ``key`` under each tag in the tag index."""
        ...

    async def keys_for_tag(self, tag: Tag) -> set[str]:
        """Get the keys currently recorded under a tag."""
        ...

    async def untag(self, tag: Tag, keys: Iterable[str]) -> None:
        """Remove the given keys from a tag, leaving other members in place."""
        ...

    async def clear(self) -> None:
        """Clear all entries and the tag index."""
        ...

    async def disconnect(self) -> None:
        """Disconnect from the storage backend."""
        ...
