"""Redis cache store."""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from typing import Any

from redis.exceptions import RedisError

from neba_pipeline.errors import CacheStoreError, PayloadDecodeError
from neba_pipeline.types import CacheEntry, Tag


def _serialize_entry(entry: CacheEntry) -> str:
    """Serialize a cache entry to JSON."""
    return json.dumps(
        {
            "payload": entry.payload.decode("utf-8"),
            "tags": list(entry.tags),
            "created_at": entry.created_at,
            "expires_at": entry.expires_at,
        }
    )


def _deserialize_entry(data: bytes | str) -> CacheEntry:
    """Deserialize JSON to a cache entry."""
    try:
        if isinstance(data, bytes):
            data = data.decode("utf-8")
        obj = json.loads(data)
        return CacheEntry(
            payload=obj["payload"].encode("utf-8"),
            tags=tuple(obj["tags"]),
            created_at=obj["created_at"],
            expires_at=obj["expires_at"],
        )
    except (ValueError, KeyError, TypeError, AttributeError) as e:
        raise PayloadDecodeError(f"Malformed cache entry: {e}") from e


def _decode(value: bytes | str) -> str:
    return value.decode("utf-8") if isinstance(value, bytes) else value


@contextmanager
def _store_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except RedisError as e:
        raise CacheStoreError(operation, e) from e


class AsyncRedisAdapter:
    """Async Redis cache store.

    Entries live under ``{prefix}:cache:{key}`` and expire with PXAT. Each
    tag is a set under ``{prefix}:tag:{tag}`` whose expiry is only ever
    extended, so it outlives every entry recorded in it.
    """

    def __init__(
        self,
        client: Any,  # redis.asyncio.Redis
        *,
        prefix: str = "neba",
    ) -> None:
        self._client = client
        self._prefix = prefix

    def _cache_key(self, key: str) -> str:
        """Generate full Redis key for cache entries."""
        return f"{self._prefix}:cache:{key}"

    def _tag_key(self, tag: Tag) -> str:
        """Generate full Redis key for a tag's key set."""
        return f"{self._prefix}:tag:{tag}"

    async def get(self, key: str) -> CacheEntry | None:
        """Get a cache entry by key."""
        with _store_errors("get"):
            data = await self._client.get(self._cache_key(key))
        if data is None:
            return None
        return _deserialize_entry(data)

    async def set(self, key: str, entry: CacheEntry) -> None:
        """Store a cache entry with automatic expiration."""
        with _store_errors("set"):
            await self._client.set(
                self._cache_key(key),
                _serialize_entry(entry),
                pxat=entry.expires_at,
            )

    async def delete(self, *keys: str) -> None:
        """Delete cache entries."""
        if not keys:
            return
        with _store_errors("delete"):
            await self._client.delete(*(self._cache_key(key) for key in keys))

    async def tag(self, key: str, tags: Iterable[Tag], expires_at: int) -> None:
        """Add a key to each tag set and stretch the set's expiry to cover it."""
        tags = list(tags)
        if not tags:
            return
        with _store_errors("tag"):
            async with self._client.pipeline(transaction=False) as pipe:
                for tag in tags:
                    tag_key = self._tag_key(tag)
                    pipe.sadd(tag_key, key)
                    # NX sets a first expiry, GT only ever extends it
                    pipe.pexpireat(tag_key, expires_at, nx=True)
                    pipe.pexpireat(tag_key, expires_at, gt=True)
                await pipe.execute()

    async def keys_for_tag(self, tag: Tag) -> set[str]:
        """Get the keys under a tag, pruning members whose entries expired."""
        tag_key = self._tag_key(tag)
        with _store_errors("keys_for_tag"):
            members = [_decode(m) for m in await self._client.smembers(tag_key)]
            if not members:
                return set()

            async with self._client.pipeline(transaction=False) as pipe:
                for member in members:
                    pipe.exists(self._cache_key(member))
                exists = await pipe.execute()

            dead = [m for m, alive in zip(members, exists, strict=True) if not alive]
            if dead:
                await self._client.srem(tag_key, *dead)
        return {m for m, alive in zip(members, exists, strict=True) if alive}

    async def untag(self, tag: Tag, keys: Iterable[str]) -> None:
        """Remove keys from a tag set. Redis drops the set once it is empty."""
        keys = list(keys)
        if not keys:
            return
        with _store_errors("untag"):
            await self._client.srem(self._tag_key(tag), *keys)

    async def clear(self) -> None:
        """Clear all cached entries and tag sets under this prefix."""
        with _store_errors("clear"):
            for pattern in (f"{self._prefix}:cache:*", f"{self._prefix}:tag:*"):
                cursor: int = 0
                while True:
                    result = await self._client.scan(cursor, match=pattern, count=100)
                    cursor = result[0]
                    keys = result[1]
                    if keys:
                        await self._client.delete(*keys)
                    if cursor == 0:
                        break

    async def disconnect(self) -> None:
        """Close the Redis connection."""
        await self._client.aclose()
