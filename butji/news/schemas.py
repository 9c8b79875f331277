"""Data models for news sources, articles and the ingestion loop."""

from dataclasses import dataclass, field
from datetime import datetime

NEWS_SOURCE_TYPES: frozenset[str] = frozenset({"rss", "api"})


@dataclass
class NewsSource:
    """A syndication feed the ingestion loop pulls from."""

    name: str
    url: str
    type: str = "rss"
    enabled: bool = True
    id: str | None = None
    last_fetched: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        if self.type not in NEWS_SOURCE_TYPES:
            raise ValueError(
                f"Invalid source type {self.type!r}. "
                f"Must be one of: {sorted(NEWS_SOURCE_TYPES)}"
            )


@dataclass
class NewsArticle:
    """A published news article."""

    title: str
    url: str
    source: str
    published_at: datetime
    description: str | None = None
    source_url: str | None = None
    image_url: str | None = None
    tags: list[str] = field(default_factory=list)
    featured: bool = False
    approved: bool = True
    id: str | None = None
    fetched_at: datetime | None = None


@dataclass
class FeedItem:
    """One entry parsed out of a feed, before it becomes an article.

    Attributes:
        link: Canonical article URL, the deduplication key.
        iso_date: ISO-8601 date string when the feed provides one.
        pub_date: RFC 2822 publication date string.
        description: Summary HTML.
        content: Full content HTML when present.
        enclosure_url / enclosure_type: First enclosure and its MIME type.
        media_thumbnail_url: ``media:thumbnail`` URL.
    """

    title: str
    link: str
    iso_date: str | None = None
    pub_date: str | None = None
    description: str = ""
    content: str = ""
    enclosure_url: str | None = None
    enclosure_type: str | None = None
    media_thumbnail_url: str | None = None


@dataclass
class IngestionSummary:
    """Outcome of one ingestion run."""

    fetched: int = 0
    skipped: int = 0
    errors: list[str] = field(default_factory=list)
