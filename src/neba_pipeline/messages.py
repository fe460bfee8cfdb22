"""Request types dispatched through the pipeline.

Queries and commands are frozen dataclasses, so two requests with the
same parameters compare equal and build the same cache key:

    @dataclass(frozen=True)
    class GetBowlerTitles(CachedQuery):
        response_type = list[str]

        bowler_id: str

        @property
        def tags(self) -> frozenset[str]:
            return bowler_tags(self.bowler_id)

    GetBowlerTitles("01ARZ").key  # "website:query:GetBowlerTitles:01ARZ"
"""

from __future__ import annotations

import dataclasses
from typing import Any, ClassVar, Protocol, runtime_checkable

from neba_pipeline.keys import build_key
from neba_pipeline.types import Duration, Tag


class Request:
    """Base class for everything the dispatcher accepts."""

    @property
    def request_name(self) -> str:
        return type(self).__name__


class Query(Request):
    """A read-only request."""


class Command(Request):
    """A request that changes state."""


@runtime_checkable
class CacheableQuery(Protocol):
    """Contract for queries whose results may be cached."""

    @property
    def key(self) -> str: ...

    @property
    def expiration(self) -> Duration | None: ...

    @property
    def tags(self) -> frozenset[Tag]: ...


# Query name -> defining class, so two classes never share cache keys
_query_origins: dict[str, str] = {}


class CachedQuery(Query):
    """Query base implementing the cacheable contract.

    The key is built from the class name and the dataclass field values in
    declaration order. Subclasses must set ``response_type`` (the type a
    cached payload is rebuilt into), override ``tags`` (and ``key`` when a
    fixed key is wanted) and may set ``cache_expiration``.
    """

    cache_expiration: ClassVar[Duration | None] = None
    response_type: ClassVar[Any] = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if cls.response_type is None:
            raise TypeError(f"{cls.__qualname__} must declare a response_type")

        origin = f"{cls.__module__}.{cls.__qualname__}"
        registered = _query_origins.setdefault(cls.__name__, origin)
        if registered != origin:
            raise TypeError(
                f"Query name {cls.__name__!r} is already used by {registered}"
            )

    def cache_parameters(self) -> tuple[Any, ...]:
        if dataclasses.is_dataclass(self):
            return tuple(getattr(self, f.name) for f in dataclasses.fields(self))
        return ()

    @property
    def key(self) -> str:
        return build_key(self.request_name, *self.cache_parameters())

    @property
    def expiration(self) -> Duration | None:
        return self.cache_expiration

    @property
    def tags(self) -> frozenset[Tag]:
        return frozenset()
