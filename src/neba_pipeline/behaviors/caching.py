"""Read-through caching behavior."""

from __future__ import annotations

import time
from typing import Any

import structlog

from neba_pipeline.adapters.base import AsyncCacheStore
from neba_pipeline.behaviors.base import NextStage
from neba_pipeline.config import Settings
from neba_pipeline.duration import parse_duration
from neba_pipeline.errors import PayloadDecodeError
from neba_pipeline.messages import CacheableQuery, Request
from neba_pipeline.metrics import CacheMetrics, get_metrics
from neba_pipeline.results import Result
from neba_pipeline.serialization import PayloadSerializer
from neba_pipeline.types import CacheEntry

logger = structlog.get_logger(__name__)

_MISSING = object()


class QueryCachingBehavior:
    """Serves cacheable queries from the store, filling it on a miss.

    Cache failures never fail the request: an unreadable store means the
    handler runs uncached, a corrupt entry counts as a miss. Failed results
    are not cached. There is no stampede protection; concurrent misses on
    one key each run the handler and the last write wins.
    """

    def __init__(
        self,
        store: AsyncCacheStore,
        settings: Settings,
        *,
        serializer: PayloadSerializer | None = None,
        metrics: CacheMetrics | None = None,
    ) -> None:
        self._store = store
        self._settings = settings
        self._serializer = serializer or PayloadSerializer()
        self._metrics = metrics or get_metrics()
        self._default_expiration_ms = settings.default_expiration_ms

    async def handle(self, request: Request, next_stage: NextStage) -> Result[Any]:
        if not self._settings.caching_enabled:
            return await next_stage()
        if not isinstance(request, CacheableQuery):
            return await next_stage()

        # Without a declared type a hit could not rebuild the handler's value
        response_type = getattr(request, "response_type", None)
        if response_type is None:
            return await next_stage()

        name = request.request_name
        key = request.key

        started = time.perf_counter()
        try:
            cached = await self._lookup(name, key, response_type)
        except Exception as e:
            # Store unreachable: run the handler and skip caching entirely
            self._metrics.record_error(name, "get")
            logger.error("cache.unavailable", request_name=name, key=key, error=str(e))
            return await next_stage()
        elapsed = time.perf_counter() - started

        if cached is not _MISSING:
            self._metrics.record_hit(name, elapsed)
            logger.debug("cache.hit", request_name=name, key=key)
            return Result.ok(cached)

        self._metrics.record_miss(name, elapsed)
        logger.debug("cache.miss", request_name=name, key=key)

        result = await next_stage()
        if not result.is_error:
            await self._store_result(request, name, key, result.value, response_type)
        return result

    async def _lookup(self, name: str, key: str, response_type: Any) -> Any:
        """Return the cached value or ``_MISSING``.

        Corrupt entries are reported as misses; store failures raise.
        """
        try:
            entry = await self._store.get(key)
            if entry is None:
                return _MISSING
            return self._serializer.decode(entry.payload, response_type)
        except PayloadDecodeError as e:
            logger.warning(
                "cache.entry_corrupt", request_name=name, key=key, error=str(e)
            )
            return _MISSING

    async def _store_result(
        self,
        request: CacheableQuery,
        name: str,
        key: str,
        value: Any,
        response_type: Any,
    ) -> None:
        expiration = request.expiration
        ttl_ms = (
            parse_duration(expiration)
            if expiration is not None
            else self._default_expiration_ms
        )
        tags = tuple(sorted(request.tags))
        now = int(time.time() * 1000)

        try:
            entry = CacheEntry(
                payload=self._serializer.encode(value, response_type),
                tags=tags,
                created_at=now,
                expires_at=now + ttl_ms,
            )
            # Entry first, then tags: an interrupted write leaves an untagged
            # entry that still expires, never a tag pointing at nothing.
            await self._store.set(key, entry)
            if tags:
                await self._store.tag(key, tags, entry.expires_at)
        except Exception as e:
            self._metrics.record_error(name, "set")
            logger.error("cache.store_failed", request_name=name, key=key, error=str(e))
