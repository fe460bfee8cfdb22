"""Prometheus metrics for cache lookups."""

from __future__ import annotations

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Histogram


class CacheMetrics:
    """Hit, miss and error counters plus lookup latency, per query type.

    Pass a dedicated ``CollectorRegistry`` in tests to avoid duplicate
    registration on the global registry.
    """

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        registry = registry if registry is not None else REGISTRY
        self.registry = registry
        self.hits = Counter(
            "neba_cache_hits_total",
            "Number of cache hits",
            ["query_type"],
            registry=registry,
        )
        self.misses = Counter(
            "neba_cache_misses_total",
            "Number of cache misses",
            ["query_type"],
            registry=registry,
        )
        self.errors = Counter(
            "neba_cache_errors_total",
            "Cache store failures absorbed by the pipeline",
            ["query_type", "operation"],
            registry=registry,
        )
        self.lookup_duration = Histogram(
            "neba_cache_lookup_duration_seconds",
            "Duration of cache lookups",
            ["query_type", "hit"],
            buckets=(0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25),
            registry=registry,
        )

    def record_hit(self, query_type: str, seconds: float) -> None:
        self.hits.labels(query_type=query_type).inc()
        self.lookup_duration.labels(query_type=query_type, hit="true").observe(seconds)

    def record_miss(self, query_type: str, seconds: float) -> None:
        self.misses.labels(query_type=query_type).inc()
        self.lookup_duration.labels(query_type=query_type, hit="false").observe(seconds)

    def record_error(self, query_type: str, operation: str) -> None:
        self.errors.labels(query_type=query_type, operation=operation).inc()


_default_metrics: CacheMetrics | None = None


def get_metrics() -> CacheMetrics:
    """Get the process-wide metrics registered on the default registry."""
    global _default_metrics
    if _default_metrics is None:
        _default_metrics = CacheMetrics()
    return _default_metrics
