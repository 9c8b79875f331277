"""Database repositories for news sources and articles."""

import logging
from datetime import datetime
from typing import Any

from butji.news.schemas import NewsArticle, NewsSource
from butji.storage.columns import string_list, to_json_text
from butji.storage.database import Database, affected_rows

logger = logging.getLogger(__name__)


def _row_to_source(row: Any) -> NewsSource:
    return NewsSource(
        id=row["id"],
        name=row["name"],
        url=row["url"],
        type=row["type"],
        enabled=row["enabled"],
        last_fetched=row.get("last_fetched"),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


def _row_to_article(row: Any) -> NewsArticle:
    return NewsArticle(
        id=row["id"],
        title=row["title"],
        description=row.get("description"),
        url=row["url"],
        source=row["source"],
        source_url=row.get("source_url"),
        image_url=row.get("image_url"),
        published_at=row["published_at"],
        fetched_at=row.get("fetched_at"),
        tags=string_list(row.get("tags")),
        featured=row.get("featured", False),
        approved=row.get("approved", True),
    )


class NewsSourceRepository:
    """CRUD operations for the ``news_sources`` table."""

    def __init__(self, database: Database) -> None:
        self._db = database

    async def list_sources(self, enabled_only: bool = False) -> list[NewsSource]:
        """List sources alphabetically."""
        where = " WHERE enabled = TRUE" if enabled_only else ""
        rows = await self._db.fetch(f"SELECT * FROM news_sources{where} ORDER BY name ASC")
        return [_row_to_source(row) for row in rows]

    async def get_by_id(self, source_id: str) -> NewsSource | None:
        row = await self._db.fetchrow("SELECT * FROM news_sources WHERE id = $1", source_id)
        return _row_to_source(row) if row else None

    async def create(self, source: NewsSource) -> NewsSource:
        row = await self._db.fetchrow(
            """
            INSERT INTO news_sources (name, url, type, enabled)
            VALUES ($1, $2, $3, $4)
            RETURNING *
            """,
            source.name,
            source.url,
            source.type,
            source.enabled,
        )
        logger.info("News source created: %s (%s)", source.name, row["id"])
        return _row_to_source(row)

    async def set_enabled(self, source_id: str, enabled: bool) -> NewsSource | None:
        """Toggle a source. Returns None if no row matched."""
        row = await self._db.fetchrow(
            """
            UPDATE news_sources SET enabled = $1, updated_at = NOW()
            WHERE id = $2
            RETURNING *
            """,
            enabled,
            source_id,
        )
        return _row_to_source(row) if row else None

    async def mark_fetched(self, source_id: str, fetched_at: datetime) -> None:
        """Stamp ``last_fetched`` after an ingestion pass."""
        await self._db.execute(
            "UPDATE news_sources SET last_fetched = $1, updated_at = NOW() WHERE id = $2",
            fetched_at,
            source_id,
        )

    async def delete(self, source_id: str) -> bool:
        """Hard-delete a source. Returns True if a row was removed."""
        result = await self._db.execute("DELETE FROM news_sources WHERE id = $1", source_id)
        return affected_rows(result) == 1


class NewsArticleRepository:
    """Operations on the ``news_articles`` table."""

    def __init__(self, database: Database) -> None:
        self._db = database

    async def list_approved(self, limit: int = 100) -> list[NewsArticle]:
        """Latest approved articles, newest first."""
        rows = await self._db.fetch(
            """
            SELECT * FROM news_articles
            WHERE approved = TRUE
            ORDER BY published_at DESC
            LIMIT $1
            """,
            limit,
        )
        return [_row_to_article(row) for row in rows]

    async def exists_by_url(self, url: str) -> bool:
        """Exact-match check on the canonical article URL."""
        found = await self._db.fetchval(
            "SELECT 1 FROM news_articles WHERE url = $1 LIMIT 1", url
        )
        return found is not None

    async def create(self, article: NewsArticle) -> NewsArticle:
        row = await self._db.fetchrow(
            """
            INSERT INTO news_articles (
                title, description, url, source, source_url, image_url,
                published_at, tags, featured, approved
            ) VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10)
            RETURNING *
            """,
            article.title,
            article.description,
            article.url,
            article.source,
            article.source_url,
            article.image_url,
            article.published_at,
            to_json_text(article.tags),
            article.featured,
            article.approved,
        )
        return _row_to_article(row)
