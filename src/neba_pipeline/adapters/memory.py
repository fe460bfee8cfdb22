"""In-memory cache store."""

from __future__ import annotations

import asyncio
import time
from collections import OrderedDict
from collections.abc import Iterable

from neba_pipeline.types import CacheEntry, Tag

DEFAULT_SWEEP_INTERVAL_MS = 60_000


def _now_ms() -> int:
    return int(time.time() * 1000)


class AsyncMemoryAdapter:
    """Async in-memory cache store with optional LRU eviction.

    Expired entries are dropped when read and, at most once per
    ``sweep_interval_ms``, swept from the whole store on write together
    with tag members whose entries are gone.
    """

    def __init__(
        self,
        max_items: int | None = None,
        *,
        sweep_interval_ms: int = DEFAULT_SWEEP_INTERVAL_MS,
    ) -> None:
        self._cache: OrderedDict[str, CacheEntry] = OrderedDict()
        self._tags: dict[Tag, set[str]] = {}
        self._max_items = max_items
        self._sweep_interval_ms = sweep_interval_ms
        self._next_sweep_ms = _now_ms() + sweep_interval_ms
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._cache)

    async def get(self, key: str) -> CacheEntry | None:
        """Get a cache entry by key, dropping it if expired."""
        async with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                return None
            if entry.is_expired(_now_ms()):
                del self._cache[key]
                return None
            self._cache.move_to_end(key)  # LRU touch
            return entry

    async def set(self, key: str, entry: CacheEntry) -> None:
        """Store a cache entry."""
        async with self._lock:
            now = _now_ms()
            if now >= self._next_sweep_ms:
                self._sweep(now)
            self._cache[key] = entry
            self._cache.move_to_end(key)
            if self._max_items and len(self._cache) > self._max_items:
                self._cache.popitem(last=False)

    def _sweep(self, now: int) -> None:
        expired = [k for k, entry in self._cache.items() if entry.is_expired(now)]
        for key in expired:
            del self._cache[key]
        for tag in list(self._tags):
            live = {key for key in self._tags[tag] if key in self._cache}
            if live:
                self._tags[tag] = live
            else:
                del self._tags[tag]
        self._next_sweep_ms = now + self._sweep_interval_ms

    async def delete(self, *keys: str) -> None:
        """Delete cache entries."""
        async with self._lock:
            for key in keys:
                self._cache.pop(key, None)

    async def tag(self, key: str, tags: Iterable[Tag], expires_at: int) -> None:
        """Record a key under each tag."""
        _ = expires_at  # Expired members are pruned on read and on sweep
        async with self._lock:
            for tag in tags:
                self._tags.setdefault(tag, set()).add(key)

    async def keys_for_tag(self, tag: Tag) -> set[str]:
        """Get the keys under a tag, pruning ones whose entries are gone."""
        async with self._lock:
            keys = self._tags.get(tag)
            if not keys:
                return set()
            now = _now_ms()
            live = {
                key
                for key in keys
                if key in self._cache and not self._cache[key].is_expired(now)
            }
            if live:
                self._tags[tag] = live
            else:
                del self._tags[tag]
            return set(live)

    async def untag(self, tag: Tag, keys: Iterable[str]) -> None:
        """Remove keys from a tag, dropping the tag once it is empty."""
        async with self._lock:
            members = self._tags.get(tag)
            if members is None:
                return
            members.difference_update(keys)
            if not members:
                del self._tags[tag]

    async def clear(self) -> None:
        """Clear all cached entries."""
        async with self._lock:
            self._cache.clear()
            self._tags.clear()

    async def disconnect(self) -> None:
        """Disconnect from the storage backend (no-op for memory)."""
        pass
