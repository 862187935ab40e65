"""
Prometheus metrics integration for segmove.

Quick Start:
    >>> from segmove.monitoring.prometheus import PrometheusMetrics, start_metrics_server
    >>>
    >>> start_metrics_server(port=8000)
    >>> mover = SegmentMover(store, metrics=PrometheusMetrics())

Requirements:
    pip install prometheus-client
"""

import logging
from typing import Any

# Check if prometheus_client is installed
try:
    from prometheus_client import REGISTRY, Counter, Histogram, start_http_server

    PROMETHEUS_AVAILABLE = True
except ImportError:  # pragma: no cover
    PROMETHEUS_AVAILABLE = False
    REGISTRY: Any = None  # type: ignore[no-redef]
    Counter: Any = None  # type: ignore[no-redef]
    Histogram: Any = None  # type: ignore[no-redef]
    start_http_server: Any = None  # type: ignore[no-redef]


logger = logging.getLogger(__name__)


class PrometheusMetrics:
    """
    Prometheus-compatible metrics collector for segment moves.

    Exposes the following metrics:
        - segmove_moves_total: Counter of successful moves by outcome
        - segmove_move_failures_total: Counter of failed moves by reason
        - segmove_delete_failures_total: Counter of source objects left behind
        - segmove_move_duration_seconds: Histogram of move durations
    """

    def __init__(self, prefix: str = "segmove", registry: Any = None):
        """
        Initialize Prometheus metrics.

        Args:
            prefix: Metric name prefix (default: "segmove")
            registry: Collector registry (default: the global registry)
        """
        if not PROMETHEUS_AVAILABLE:
            logger.warning(
                "prometheus-client not installed. Metrics will not be collected. "
                "Install with: pip install prometheus-client"
            )
            self._enabled = False
            return

        self._enabled = True
        self._prefix = prefix
        registry = registry if registry is not None else REGISTRY

        self._moves_total = Counter(
            f"{prefix}_moves_total",
            "Total successful segment moves",
            ["outcome"],
            registry=registry,
        )

        self._failures_total = Counter(
            f"{prefix}_move_failures_total",
            "Total failed segment moves",
            ["reason"],
            registry=registry,
        )

        self._delete_failures_total = Counter(
            f"{prefix}_delete_failures_total",
            "Source objects that could not be deleted after a copy",
            registry=registry,
        )

        self._move_duration = Histogram(
            f"{prefix}_move_duration_seconds",
            "Segment move duration in seconds",
            ["outcome"],
            buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
            registry=registry,
        )

    @property
    def enabled(self) -> bool:
        return self._enabled

    def record_move(self, outcome: str, duration_ms: float) -> None:
        if not self._enabled:
            return

        self._moves_total.labels(outcome=outcome).inc()
        self._move_duration.labels(outcome=outcome).observe(duration_ms / 1000.0)

    def record_failure(self, reason: str) -> None:
        if not self._enabled:
            return

        self._failures_total.labels(reason=reason).inc()

    def record_delete_failure(self) -> None:
        if not self._enabled:
            return

        self._delete_failures_total.inc()


def start_metrics_server(port: int = 8000, addr: str = "0.0.0.0") -> None:
    """
    Start a Prometheus HTTP metrics server.

    Example:
        >>> start_metrics_server(port=8000)
        >>> # Metrics available at http://localhost:8000/metrics
    """
    if not PROMETHEUS_AVAILABLE:
        logger.error(
            "Cannot start metrics server: prometheus-client not installed. "
            "Install with: pip install prometheus-client"
        )
        return

    start_http_server(port, addr)
    logger.info(f"Prometheus metrics server started on port {port}")


def is_prometheus_available() -> bool:
    """Check if prometheus-client is installed."""
    return PROMETHEUS_AVAILABLE
