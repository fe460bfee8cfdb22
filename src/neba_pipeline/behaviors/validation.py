"""Validation behavior."""

from __future__ import annotations

import asyncio
from typing import Any

import structlog

from neba_pipeline.behaviors.base import NextStage
from neba_pipeline.messages import Request
from neba_pipeline.results import Error, Result
from neba_pipeline.validation import ValidatorRegistry

logger = structlog.get_logger(__name__)


class ValidationBehavior:
    """Runs every validator for the request type before the handler.

    Any failure short-circuits the chain with a validation result carrying
    every failure from every validator.
    """

    def __init__(self, validators: ValidatorRegistry) -> None:
        self._validators = validators

    async def handle(self, request: Request, next_stage: NextStage) -> Result[Any]:
        validators = self._validators.for_type(type(request))
        if not validators:
            return await next_stage()

        results = await asyncio.gather(*(v.validate(request) for v in validators))
        failures = [failure for found in results for failure in found]

        if not failures:
            return await next_stage()

        logger.info(
            "validation.failed",
            request_name=request.request_name,
            failures=len(failures),
        )
        return Result.fail(
            Error.validation(f.code, f.message, field_name=f.field) for f in failures
        )
