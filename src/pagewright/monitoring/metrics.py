"""
Metrics Collection
Prometheus metrics for export and compilation tracking
"""

import time
from contextlib import contextmanager
from typing import Callable, Iterator

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Gauge, Histogram, generate_latest


class MetricsCollector:
    """
    Collects and exposes Prometheus metrics for the compiler pipeline.

    Pass a fresh ``CollectorRegistry`` to keep instances isolated (tests,
    embedded use); the module-level collector registers globally.
    """

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        self.registry = registry if registry is not None else REGISTRY

        # Export metrics
        self.exports_total = Counter(
            "pagewright_exports_total",
            "Total number of export runs",
            ["status"],
            registry=self.registry,
        )
        self.export_duration = Histogram(
            "pagewright_export_duration_seconds",
            "Export duration in seconds",
            buckets=[0.1, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0],
            registry=self.registry,
        )
        self.batches_total = Counter(
            "pagewright_batches_total",
            "Total number of page batches compiled",
            registry=self.registry,
        )

        # Page metrics
        self.pages_total = Counter(
            "pagewright_pages_total",
            "Total number of pages compiled",
            ["status"],
            registry=self.registry,
        )
        self.page_duration = Histogram(
            "pagewright_page_duration_seconds",
            "Page compilation duration in seconds",
            buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0],
            registry=self.registry,
        )

        # Cache metrics
        self.cache_hits = Counter(
            "pagewright_cache_hits_total",
            "Total number of cache hits",
            ["cache_type"],
            registry=self.registry,
        )
        self.cache_misses = Counter(
            "pagewright_cache_misses_total",
            "Total number of cache misses",
            ["cache_type"],
            registry=self.registry,
        )
        self.cache_size = Gauge(
            "pagewright_cache_entries",
            "Current number of cache entries",
            ["cache_type"],
            registry=self.registry,
        )

        # Error metrics
        self.errors_total = Counter(
            "pagewright_errors_total",
            "Total number of errors",
            ["code", "component"],
            registry=self.registry,
        )

    def record_export(self, status: str, duration: float) -> None:
        self.exports_total.labels(status=status).inc()
        self.export_duration.observe(duration)

    def record_page(self, status: str, duration: float) -> None:
        self.pages_total.labels(status=status).inc()
        self.page_duration.observe(duration)

    def record_batch(self) -> None:
        self.batches_total.inc()

    def record_cache_hit(self, cache_type: str) -> None:
        self.cache_hits.labels(cache_type=cache_type).inc()

    def record_cache_miss(self, cache_type: str) -> None:
        self.cache_misses.labels(cache_type=cache_type).inc()

    def set_cache_size(self, cache_type: str, size: int) -> None:
        self.cache_size.labels(cache_type=cache_type).set(size)

    def record_error(self, code: str, component: str) -> None:
        self.errors_total.labels(code=code, component=component).inc()

    @contextmanager
    def measure_duration(self, callback: Callable[[float], None]) -> Iterator[None]:
        """Context manager to measure operation duration."""
        start = time.time()
        try:
            yield
        finally:
            callback(time.time() - start)

    def get_metrics(self) -> bytes:
        """Get metrics in Prometheus format."""
        return generate_latest(self.registry)


# Global metrics collector instance
metrics_collector = MetricsCollector()
