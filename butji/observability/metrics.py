"""
Prometheus metrics for the directory service.

Counts news ingestion outcomes, moderation actions, public
submissions and abuse reports. Metrics are exposed via an HTTP
endpoint for Prometheus scraping.
"""

import logging

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Histogram,
    start_http_server,
)

from butji.config.settings import get_settings

logger = logging.getLogger(__name__)

# Buckets for feed fetch latency (in seconds)
LATENCY_BUCKETS = (0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0)


class MetricsCollector:
    """
    Prometheus metrics collector.

    Usage:
        metrics = MetricsCollector()
        metrics.articles_ingested.labels(source="Example Feed").inc()
    """

    def __init__(self, registry: CollectorRegistry | None = None):
        self.registry = registry or CollectorRegistry()

        self.articles_ingested = Counter(
            "butji_news_articles_ingested_total",
            "News articles inserted by the ingestion loop",
            ["source"],
            registry=self.registry,
        )

        self.articles_skipped = Counter(
            "butji_news_articles_skipped_total",
            "Feed items skipped because the article URL is already stored",
            ["source"],
            registry=self.registry,
        )

        self.ingestion_errors = Counter(
            "butji_news_ingestion_errors_total",
            "Feed or item failures during ingestion",
            ["source", "stage"],  # stage: fetch, item
            registry=self.registry,
        )

        self.feed_fetch_latency = Histogram(
            "butji_news_feed_fetch_latency_seconds",
            "Time to fetch and parse a syndication feed",
            ["source"],
            buckets=LATENCY_BUCKETS,
            registry=self.registry,
        )

        self.submissions_received = Counter(
            "butji_submissions_received_total",
            "Public submissions accepted for review",
            ["kind"],  # kind: resource, company
            registry=self.registry,
        )

        self.moderation_actions = Counter(
            "butji_moderation_actions_total",
            "Admin moderation actions applied",
            ["kind", "action"],
            registry=self.registry,
        )

        self.reports_received = Counter(
            "butji_reports_received_total",
            "Correction reports filed",
            ["type"],
            registry=self.registry,
        )

    def start_server(self, port: int | None = None) -> None:
        """Start the Prometheus HTTP endpoint."""
        port = port or get_settings().metrics_port
        start_http_server(port, registry=self.registry)
        logger.info(f"Metrics server started on port {port}")


_metrics: MetricsCollector | None = None


def get_metrics() -> MetricsCollector:
    """Get the process metrics collector."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsCollector()
    return _metrics
