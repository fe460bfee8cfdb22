"""Pipeline behavior protocol."""

from collections.abc import Awaitable, Callable
from typing import Any, Protocol, runtime_checkable

from neba_pipeline.messages import Request
from neba_pipeline.results import Result

# Invokes the rest of the chain; called at most once per request.
NextStage = Callable[[], Awaitable[Result[Any]]]


@runtime_checkable
class PipelineBehavior(Protocol):
    """A stage wrapping request dispatch."""

    async def handle(self, request: Request, next_stage: NextStage) -> Result[Any]:
        """Run the stage, calling ``next_stage`` once or not at all."""
        ...
