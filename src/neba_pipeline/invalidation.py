"""Tag-based cache invalidation.

Command handlers call the invalidator after a successful write:

    async def handle(self, command: RecordHighBlock) -> Result[None]:
        await self._awards.add(command.award)
        await self._invalidator.invalidate(f"website:award:{AwardTypes.HIGH_BLOCK}")
        return Result.ok(None)
"""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from neba_pipeline.adapters.base import AsyncCacheStore
from neba_pipeline.types import Tag

logger = structlog.get_logger(__name__)


class CacheInvalidator:
    """Removes every cache entry recorded under a tag."""

    def __init__(self, store: AsyncCacheStore) -> None:
        self._store = store

    async def invalidate(self, tag: Tag) -> int:
        """Delete all entries under ``tag`` and remove them from the index.

        Only the keys that were deleted leave the tag; a key tagged while
        the invalidation runs stays indexed. Returns the number of keys
        removed. Store failures propagate so the caller knows stale data
        may remain.
        """
        keys = await self._store.keys_for_tag(tag)
        if keys:
            await self._store.delete(*keys)
            await self._store.untag(tag, keys)
        logger.debug("cache.invalidated", tag=tag, keys=len(keys))
        return len(keys)

    async def invalidate_many(self, tags: Iterable[Tag]) -> int:
        removed = 0
        for tag in tags:
            removed += await self.invalidate(tag)
        return removed
