"""Observability layer - logging and metrics."""

from butji.observability.logging import setup_logging
from butji.observability.metrics import MetricsCollector, get_metrics

__all__ = ["setup_logging", "MetricsCollector", "get_metrics"]
