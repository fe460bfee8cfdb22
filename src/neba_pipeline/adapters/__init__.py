"""Cache store adapters (async only)."""

from contextlib import suppress

from neba_pipeline.adapters.base import AsyncCacheStore
from neba_pipeline.adapters.memory import AsyncMemoryAdapter
from neba_pipeline.config import Settings

# Optional adapters - only available when dependencies are installed
with suppress(ImportError):
    from neba_pipeline.adapters.redis import AsyncRedisAdapter


def create_adapter(settings: Settings) -> AsyncCacheStore:
    """Create the cache store selected by settings.

    Redis when ``redis_url`` is configured, in-memory otherwise.
    """
    if settings.redis_url:
        import redis.asyncio

        from neba_pipeline.adapters.redis import AsyncRedisAdapter

        client = redis.asyncio.from_url(settings.redis_url)
        return AsyncRedisAdapter(client, prefix=settings.cache_prefix)
    return AsyncMemoryAdapter(max_items=settings.max_memory_items)


__all__ = [
    "AsyncCacheStore",
    "AsyncMemoryAdapter",
    "AsyncRedisAdapter",
    "create_adapter",
]
