"""Pipeline behaviors."""

from neba_pipeline.behaviors.base import NextStage, PipelineBehavior
from neba_pipeline.behaviors.caching import QueryCachingBehavior
from neba_pipeline.behaviors.logging import RequestLoggingBehavior
from neba_pipeline.behaviors.validation import ValidationBehavior

__all__ = [
    "NextStage",
    "PipelineBehavior",
    "QueryCachingBehavior",
    "RequestLoggingBehavior",
    "ValidationBehavior",
]
