"""Request dispatcher composing behaviors around handlers.

The chain is fixed at construction. With the standard wiring the order,
outermost first, is:

    RequestLoggingBehavior -> QueryCachingBehavior -> ValidationBehavior -> handler

Logging sees cache hits and misses alike, cache hits skip validation, and
validation runs immediately before the handler.
"""

from __future__ import annotations

from collections.abc import Awaitable, Iterable, Mapping, Sequence
from functools import partial
from typing import Any, Protocol

from neba_pipeline.adapters.base import AsyncCacheStore
from neba_pipeline.behaviors import (
    PipelineBehavior,
    QueryCachingBehavior,
    RequestLoggingBehavior,
    ValidationBehavior,
)
from neba_pipeline.behaviors.base import NextStage
from neba_pipeline.config import Settings
from neba_pipeline.errors import HandlerNotFoundError
from neba_pipeline.messages import Request
from neba_pipeline.metrics import CacheMetrics
from neba_pipeline.results import Result
from neba_pipeline.validation import Validator, ValidatorRegistry


class RequestHandler(Protocol):
    """Terminal stage: performs the query or command."""

    async def handle(self, request: Any) -> Result[Any]: ...


class Dispatcher:
    """Resolves the handler for a request and runs it through the behaviors."""

    def __init__(
        self,
        handlers: Mapping[type[Request], RequestHandler],
        behaviors: Sequence[PipelineBehavior] = (),
    ) -> None:
        self._handlers = dict(handlers)
        self._behaviors = tuple(behaviors)

    @property
    def behaviors(self) -> tuple[PipelineBehavior, ...]:
        return self._behaviors

    def handler_for(self, request_type: type[Request]) -> RequestHandler:
        try:
            return self._handlers[request_type]
        except KeyError:
            raise HandlerNotFoundError(request_type) from None

    async def send(self, request: Request) -> Result[Any]:
        """Dispatch a request through the pipeline and return its result."""
        handler = self.handler_for(type(request))

        async def invoke_handler() -> Result[Any]:
            return await handler.handle(request)

        chain: NextStage = invoke_handler
        for behavior in reversed(self._behaviors):
            chain = partial(_run_stage, behavior, request, chain)
        return await chain()


def _run_stage(
    behavior: PipelineBehavior, request: Request, next_stage: NextStage
) -> Awaitable[Result[Any]]:
    return behavior.handle(request, next_stage)


def build_dispatcher(
    handlers: Mapping[type[Request], RequestHandler],
    *,
    store: AsyncCacheStore,
    settings: Settings,
    validators: ValidatorRegistry | Iterable[Validator[Any]] = (),
    metrics: CacheMetrics | None = None,
) -> Dispatcher:
    """Wire the standard logging, caching and validation chain."""
    if not isinstance(validators, ValidatorRegistry):
        validators = ValidatorRegistry(validators)
    validators.freeze()

    return Dispatcher(
        handlers,
        (
            RequestLoggingBehavior(),
            QueryCachingBehavior(store, settings, metrics=metrics),
            ValidationBehavior(validators),
        ),
    )
