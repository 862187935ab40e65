"""
Relocation monitoring: structured logging and metrics.

Quick Start:
    >>> from segmove.monitoring import setup_move_logging, MoveMetrics
    >>> setup_move_logging(json_format=True)
    >>> metrics = MoveMetrics()

    # Prometheus (requires prometheus-client)
    >>> from segmove.monitoring import PrometheusMetrics, start_metrics_server
    >>> start_metrics_server(port=8000)
"""

from .logging import MoveContextFilter, MoveJsonFormatter, MoveLogger, segment_context, setup_move_logging
from .metrics import MoveMetrics
from .prometheus import PrometheusMetrics, is_prometheus_available, start_metrics_server

__all__ = [
    "MoveContextFilter",
    "MoveJsonFormatter",
    "MoveLogger",
    "MoveMetrics",
    "PrometheusMetrics",
    "is_prometheus_available",
    "segment_context",
    "setup_move_logging",
    "start_metrics_server",
]
