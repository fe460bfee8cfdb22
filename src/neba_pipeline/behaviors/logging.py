"""Request logging behavior."""

from __future__ import annotations

import asyncio
import time
import uuid
from typing import Any

import structlog

from neba_pipeline.behaviors.base import NextStage
from neba_pipeline.messages import Request
from neba_pipeline.results import Result

logger = structlog.get_logger(__name__)


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 3)


class RequestLoggingBehavior:
    """Logs start, outcome and duration of every request.

    A ``correlation_id`` already bound in structlog contextvars (by an HTTP
    middleware, say) is reused; otherwise a new one is generated. Results
    and exceptions pass through untouched.
    """

    async def handle(self, request: Request, next_stage: NextStage) -> Result[Any]:
        correlation_id = structlog.contextvars.get_contextvars().get(
            "correlation_id"
        ) or uuid.uuid4().hex

        with structlog.contextvars.bound_contextvars(
            request_name=request.request_name, correlation_id=correlation_id
        ):
            logger.debug("request.started")
            started = time.perf_counter()
            try:
                result = await next_stage()
            except asyncio.CancelledError:
                logger.info("request.cancelled", duration_ms=_elapsed_ms(started))
                raise
            except Exception:
                logger.exception("request.raised", duration_ms=_elapsed_ms(started))
                raise

            if result.is_error:
                logger.error(
                    "request.failed",
                    duration_ms=_elapsed_ms(started),
                    errors=[
                        {
                            "code": e.code,
                            "kind": e.kind.value,
                            "description": e.description,
                        }
                        for e in result.errors
                    ],
                )
            else:
                logger.debug("request.succeeded", duration_ms=_elapsed_ms(started))
            return result
