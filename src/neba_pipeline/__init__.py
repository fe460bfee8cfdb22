"""neba-pipeline - request pipeline with read-through query caching."""

from contextlib import suppress

# Adapters (async only)
from neba_pipeline.adapters import (
    AsyncCacheStore,
    AsyncMemoryAdapter,
    create_adapter,
)

# Behaviors and composition
from neba_pipeline.behaviors import (
    PipelineBehavior,
    QueryCachingBehavior,
    RequestLoggingBehavior,
    ValidationBehavior,
)
from neba_pipeline.config import Environment, Settings, get_settings
from neba_pipeline.dispatcher import Dispatcher, RequestHandler, build_dispatcher

# Duration parsing
from neba_pipeline.duration import parse_duration
from neba_pipeline.errors import (
    CacheStoreError,
    HandlerNotFoundError,
    PayloadDecodeError,
    PipelineError,
)
from neba_pipeline.invalidation import CacheInvalidator
from neba_pipeline.keys import build_key, is_valid_cache_key
from neba_pipeline.logging import configure_logging
from neba_pipeline.messages import CacheableQuery, CachedQuery, Command, Query, Request
from neba_pipeline.metrics import CacheMetrics
from neba_pipeline.results import Error, ErrorKind, Result
from neba_pipeline.serialization import PayloadSerializer
from neba_pipeline.tags import build_tags

# Core types
from neba_pipeline.types import CacheEntry, Duration, Tag
from neba_pipeline.validation import (
    Rule,
    RuleValidator,
    ValidationFailure,
    Validator,
    ValidatorRegistry,
)

# Optional adapter imports - only available when dependencies are installed
with suppress(ImportError):
    from neba_pipeline.adapters import AsyncRedisAdapter

__version__ = "0.1.0"

__all__ = [
    "AsyncCacheStore",
    "AsyncMemoryAdapter",
    "AsyncRedisAdapter",
    "CacheEntry",
    "CacheInvalidator",
    "CacheMetrics",
    "CacheStoreError",
    "CacheableQuery",
    "CachedQuery",
    "Command",
    "Dispatcher",
    "Duration",
    "Environment",
    "Error",
    "ErrorKind",
    "HandlerNotFoundError",
    "PayloadDecodeError",
    "PayloadSerializer",
    "PipelineBehavior",
    "PipelineError",
    "Query",
    "QueryCachingBehavior",
    "Request",
    "RequestHandler",
    "RequestLoggingBehavior",
    "Result",
    "Rule",
    "RuleValidator",
    "Settings",
    "Tag",
    "ValidationBehavior",
    "ValidationFailure",
    "Validator",
    "ValidatorRegistry",
    "build_dispatcher",
    "build_key",
    "build_tags",
    "configure_logging",
    "create_adapter",
    "get_settings",
    "parse_duration",
]
