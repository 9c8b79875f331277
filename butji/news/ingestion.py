"""
News ingestion loop.

Walks every enabled source, fetches its feed and inserts articles whose
URL is not stored yet. Failures are isolated: a broken feed never stops
the remaining sources, and a broken item never stops the rest of its feed.
"""

import logging
import time
from datetime import datetime, timezone

from butji.news.feed import (
    FeedFetcher,
    extract_image_url,
    html_to_text,
    resolve_published_at,
)
from butji.news.repository import NewsArticleRepository, NewsSourceRepository
from butji.news.schemas import FeedItem, IngestionSummary, NewsArticle, NewsSource
from butji.observability.metrics import MetricsCollector, get_metrics

logger = logging.getLogger(__name__)


class NewsIngestionService:
    """
    Pull articles from configured feeds into the article table.

    Deduplication is an exact match on the article link. Two overlapping
    runs may both insert the same link; nothing serializes runs.
    """

    def __init__(
        self,
        sources: NewsSourceRepository,
        articles: NewsArticleRepository,
        fetcher: FeedFetcher | None = None,
        metrics: MetricsCollector | None = None,
    ):
        self._sources = sources
        self._articles = articles
        self._fetcher = fetcher or FeedFetcher()
        self._metrics = metrics or get_metrics()

    async def run(self) -> IngestionSummary:
        """Run one ingestion pass over all enabled sources."""
        summary = IngestionSummary()
        sources = await self._sources.list_sources(enabled_only=True)
        logger.info("Starting news ingestion for %d sources", len(sources))

        for source in sources:
            if source.type != "rss":
                # API sources have no fetcher
                continue
            try:
                await self._ingest_source(source, summary)
            except Exception as e:
                logger.error("Error fetching from %s: %s", source.name, e)
                self._metrics.ingestion_errors.labels(source=source.name, stage="fetch").inc()
                summary.errors.append(f"Error fetching from {source.name}: {e}")

        logger.info(
            "News ingestion finished: fetched=%d skipped=%d errors=%d",
            summary.fetched,
            summary.skipped,
            len(summary.errors),
        )
        return summary

    async def _ingest_source(self, source: NewsSource, summary: IngestionSummary) -> None:
        """Ingest one feed. The source is stamped ``last_fetched`` even if its fetch fails."""
        try:
            await self._ingest_items(source, summary)
        finally:
            await self._sources.mark_fetched(source.id, datetime.now(timezone.utc))

    async def _ingest_items(self, source: NewsSource, summary: IngestionSummary) -> None:
        started = time.perf_counter()
        items = await self._fetcher.fetch(source.url)
        self._metrics.feed_fetch_latency.labels(source=source.name).observe(
            time.perf_counter() - started
        )

        for item in items:
            try:
                if await self._ingest_item(source, item):
                    summary.fetched += 1
                    self._metrics.articles_ingested.labels(source=source.name).inc()
                else:
                    summary.skipped += 1
                    self._metrics.articles_skipped.labels(source=source.name).inc()
            except Exception as e:
                logger.warning("Failed to process item %r from %s: %s", item.title, source.name, e)
                self._metrics.ingestion_errors.labels(source=source.name, stage="item").inc()
                summary.errors.append(f"Failed to process: {item.title}")

    async def _ingest_item(self, source: NewsSource, item: FeedItem) -> bool:
        """Insert one item. Returns False if its link is already stored."""
        if not item.link:
            raise ValueError("item has no link")
        if await self._articles.exists_by_url(item.link):
            return False

        article = NewsArticle(
            title=item.title,
            description=html_to_text(item.description or item.content) or None,
            url=item.link,
            source=source.name,
            source_url=source.url,
            image_url=extract_image_url(item),
            published_at=resolve_published_at(item),
            tags=[],
            featured=False,
            approved=True,
        )
        await self._articles.create(article)
        return True
