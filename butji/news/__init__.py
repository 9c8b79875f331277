"""News: syndication sources, feed fetching and article ingestion."""

from butji.news.config import NewsConfig
from butji.news.feed import FeedFetcher, FeedFetchError, extract_image_url, resolve_published_at
from butji.news.ingestion import NewsIngestionService
from butji.news.repository import NewsArticleRepository, NewsSourceRepository
from butji.news.schemas import (
    NEWS_SOURCE_TYPES,
    FeedItem,
    IngestionSummary,
    NewsArticle,
    NewsSource,
)

__all__ = [
    "NEWS_SOURCE_TYPES",
    "FeedFetchError",
    "FeedFetcher",
    "FeedItem",
    "IngestionSummary",
    "NewsArticle",
    "NewsArticleRepository",
    "NewsConfig",
    "NewsIngestionService",
    "NewsSource",
    "NewsSourceRepository",
    "extract_image_url",
    "resolve_published_at",
]
