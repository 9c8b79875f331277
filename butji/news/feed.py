"""
RSS/Atom feed fetching and item normalization.

Provides:
- FeedFetcher: async HTTP fetch + feedparser parse into FeedItem records
- extract_image_url: lead image selection for an item
- resolve_published_at: publication date selection for an item
- html_to_text: plain-text snippet from HTML summaries
"""

import html
import logging
import re
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any

import feedparser
import httpx
from bs4 import BeautifulSoup

from butji.errors import ButjiError
from butji.news.config import NewsConfig
from butji.news.schemas import FeedItem

logger = logging.getLogger(__name__)

_IMG_SRC_PATTERN = re.compile(r"<img[^>]+src=[\"']([^\"']+)[\"']", re.IGNORECASE)


class FeedFetchError(ButjiError):
    """A feed could not be downloaded or parsed."""


class FeedFetcher:
    """
    Download and parse syndication feeds.

    A shared ``httpx.AsyncClient`` may be injected; otherwise a short-lived
    client is opened per fetch.
    """

    def __init__(
        self,
        config: NewsConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self._config = config or NewsConfig()
        self._client = client

    async def fetch(self, url: str) -> list[FeedItem]:
        """
        Fetch a feed and return its items in document order.

        Raises:
            FeedFetchError: On HTTP failure or an unparseable document.
        """
        try:
            if self._client is not None:
                text = await self._get(self._client, url)
            else:
                async with httpx.AsyncClient(
                    timeout=self._config.fetch_timeout_seconds,
                    follow_redirects=True,
                ) as client:
                    text = await self._get(client, url)
        except httpx.HTTPStatusError as e:
            raise FeedFetchError(f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise FeedFetchError(str(e) or e.__class__.__name__) from e

        feed = feedparser.parse(text)
        entries = feed.get("entries", [])
        if feed.get("bozo") and not entries:
            raise FeedFetchError(f"Unparseable feed: {feed.get('bozo_exception')}")

        items = [_entry_to_item(entry) for entry in entries]
        logger.debug("Parsed %d items from %s", len(items), url)
        return items

    async def _get(self, client: httpx.AsyncClient, url: str) -> str:
        response = await client.get(url, headers={"User-Agent": self._config.user_agent})
        response.raise_for_status()
        return response.text


def _entry_to_item(entry: dict[str, Any]) -> FeedItem:
    """Flatten a feedparser entry into a FeedItem."""
    content = ""
    if entry.get("content"):
        content = entry["content"][0].get("value", "")

    enclosure_url = enclosure_type = None
    enclosures = entry.get("enclosures") or []
    if enclosures:
        enclosure_url = enclosures[0].get("href") or enclosures[0].get("url")
        enclosure_type = enclosures[0].get("type")

    thumbnail_url = None
    thumbnails = entry.get("media_thumbnail") or []
    if thumbnails:
        thumbnail_url = thumbnails[0].get("url")

    # Atom dates are ISO-8601, RSS pubDate is RFC 2822
    raw_date = entry.get("published") or entry.get("updated")
    iso_date = raw_date if raw_date and _parse_iso(raw_date) else None
    pub_date = raw_date if raw_date and iso_date is None else None

    return FeedItem(
        title=entry.get("title", ""),
        link=entry.get("link", ""),
        iso_date=iso_date,
        pub_date=pub_date,
        description=entry.get("summary", ""),
        content=content,
        enclosure_url=enclosure_url,
        enclosure_type=enclosure_type,
        media_thumbnail_url=thumbnail_url,
    )


def _parse_iso(value: str) -> datetime | None:
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def extract_image_url(item: FeedItem) -> str | None:
    """
    Pick an item's lead image.

    Precedence: an image enclosure, then ``media:thumbnail``, then the
    first ``<img src>`` in the summary (or the content if there is no
    summary).
    """
    if item.enclosure_url and (item.enclosure_type or "").startswith("image/"):
        return item.enclosure_url
    if item.media_thumbnail_url:
        return item.media_thumbnail_url

    match = _IMG_SRC_PATTERN.search(item.description or item.content or "")
    return match.group(1) if match else None


def resolve_published_at(item: FeedItem, now: datetime | None = None) -> datetime:
    """ISO date, else RFC 2822 pub date, else ``now``."""
    if item.iso_date:
        parsed = _parse_iso(item.iso_date)
        if parsed is not None:
            return parsed
    if item.pub_date:
        try:
            return parsedate_to_datetime(item.pub_date)
        except (TypeError, ValueError):
            logger.debug("Unparseable pubDate %r", item.pub_date)
    return now or datetime.now(timezone.utc)


def html_to_text(html_content: str) -> str:
    """Strip markup and collapse whitespace."""
    if not html_content:
        return ""
    soup = BeautifulSoup(html_content, "html.parser")
    for element in soup(["script", "style"]):
        element.decompose()
    text = html.unescape(soup.get_text(separator=" "))
    return re.sub(r"\s+", " ", text).strip()
