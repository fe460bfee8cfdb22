"""Exceptions raised by the pipeline."""

from __future__ import annotations


class PipelineError(Exception):
    """Base class for pipeline errors."""


class HandlerNotFoundError(PipelineError):
    """No handler is registered for a request type."""

    def __init__(self, request_type: type) -> None:
        super().__init__(f"No handler registered for {request_type.__name__}")
        self.request_type = request_type


class PayloadDecodeError(PipelineError):
    """A cached payload could not be decoded into the expected type."""


class CacheStoreError(PipelineError):
    """The cache store failed to complete an operation."""

    def __init__(self, operation: str, cause: BaseException) -> None:
        super().__init__(f"Cache store {operation} failed: {cause}")
        self.operation = operation
