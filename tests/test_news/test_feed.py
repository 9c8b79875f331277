"""Tests for feed fetching and item normalization."""

from datetime import datetime, timezone

import httpx
import pytest
import respx

from butji.news.config import NewsConfig
from butji.news.feed import (
    FeedFetchError,
    FeedFetcher,
    extract_image_url,
    html_to_text,
    resolve_published_at,
)
from butji.news.schemas import FeedItem

FEED_URL = "https://news.example/feed.xml"

RSS_FEED = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:media="http://search.yahoo.com/mrss/">
  <channel>
    <title>Example News</title>
    <link>https://news.example</link>
    <item>
      <title>Artists sue over training data</title>
      <link>https://news.example/artists-sue</link>
      <pubDate>Tue, 10 Feb 2026 09:30:00 GMT</pubDate>
      <description>&lt;p&gt;A &lt;b&gt;class action&lt;/b&gt; was filed.&lt;/p&gt;</description>
      <enclosure url="https://cdn.example/lead.jpg" type="image/jpeg" length="1000"/>
    </item>
    <item>
      <title>Opt-out registry launches</title>
      <link>https://news.example/opt-out</link>
      <description>&lt;img src="https://cdn.example/inline.png"&gt; Registry is live</description>
      <media:thumbnail url="https://cdn.example/thumb.jpg"/>
    </item>
  </channel>
</rss>
"""


class TestFeedFetcher:
    @pytest.mark.asyncio
    @respx.mock
    async def test_fetch_parses_items(self):
        route = respx.get(FEED_URL).mock(return_value=httpx.Response(200, text=RSS_FEED))

        items = await FeedFetcher().fetch(FEED_URL)

        assert route.called
        assert route.calls.last.request.headers["User-Agent"] == NewsConfig().user_agent
        assert [i.link for i in items] == [
            "https://news.example/artists-sue",
            "https://news.example/opt-out",
        ]
        first = items[0]
        assert first.pub_date == "Tue, 10 Feb 2026 09:30:00 GMT"
        assert first.iso_date is None
        assert first.enclosure_url == "https://cdn.example/lead.jpg"
        assert first.enclosure_type == "image/jpeg"
        assert items[1].media_thumbnail_url == "https://cdn.example/thumb.jpg"

    @pytest.mark.asyncio
    @respx.mock
    async def test_uses_injected_client(self):
        respx.get(FEED_URL).mock(return_value=httpx.Response(200, text=RSS_FEED))

        async with httpx.AsyncClient() as client:
            items = await FeedFetcher(client=client).fetch(FEED_URL)

        assert len(items) == 2

    @pytest.mark.asyncio
    @respx.mock
    async def test_http_error_status(self):
        respx.get(FEED_URL).mock(return_value=httpx.Response(503))

        with pytest.raises(FeedFetchError, match="HTTP 503"):
            await FeedFetcher().fetch(FEED_URL)

    @pytest.mark.asyncio
    @respx.mock
    async def test_transport_error(self):
        respx.get(FEED_URL).mock(side_effect=httpx.ConnectError("connection refused"))

        with pytest.raises(FeedFetchError, match="connection refused"):
            await FeedFetcher().fetch(FEED_URL)

    @pytest.mark.asyncio
    @respx.mock
    async def test_unparseable_document(self):
        respx.get(FEED_URL).mock(return_value=httpx.Response(200, text="<html><body"))

        with pytest.raises(FeedFetchError, match="Unparseable feed"):
            await FeedFetcher().fetch(FEED_URL)


class TestExtractImageUrl:
    def test_image_enclosure_wins(self):
        item = FeedItem(
            title="t",
            link="l",
            enclosure_url="https://cdn.example/a.jpg",
            enclosure_type="image/jpeg",
            media_thumbnail_url="https://cdn.example/thumb.jpg",
            description='<img src="https://cdn.example/inline.png">',
        )
        assert extract_image_url(item) == "https://cdn.example/a.jpg"

    def test_non_image_enclosure_ignored(self):
        item = FeedItem(
            title="t",
            link="l",
            enclosure_url="https://cdn.example/episode.mp3",
            enclosure_type="audio/mpeg",
            media_thumbnail_url="https://cdn.example/thumb.jpg",
        )
        assert extract_image_url(item) == "https://cdn.example/thumb.jpg"

    def test_inline_img_from_description(self):
        item = FeedItem(title="t", link="l", description="<p><IMG class='x' src='https://cdn.example/i.png'></p>")
        assert extract_image_url(item) == "https://cdn.example/i.png"

    def test_falls_back_to_content(self):
        item = FeedItem(title="t", link="l", content='<img src="https://cdn.example/c.png">')
        assert extract_image_url(item) == "https://cdn.example/c.png"

    def test_no_image(self):
        assert extract_image_url(FeedItem(title="t", link="l", description="plain")) is None


class TestResolvePublishedAt:
    NOW = datetime(2026, 3, 1, tzinfo=timezone.utc)

    def test_iso_date_preferred(self):
        item = FeedItem(
            title="t",
            link="l",
            iso_date="2026-02-01T08:00:00Z",
            pub_date="Tue, 10 Feb 2026 09:30:00 GMT",
        )
        assert resolve_published_at(item, self.NOW) == datetime(2026, 2, 1, 8, tzinfo=timezone.utc)

    def test_rfc2822_pub_date(self):
        item = FeedItem(title="t", link="l", pub_date="Tue, 10 Feb 2026 09:30:00 GMT")
        assert resolve_published_at(item, self.NOW) == datetime(
            2026, 2, 10, 9, 30, tzinfo=timezone.utc
        )

    def test_defaults_to_now(self):
        item = FeedItem(title="t", link="l", pub_date="not a date")
        assert resolve_published_at(item, self.NOW) == self.NOW


def test_html_to_text():
    assert html_to_text("<p>A <b>bold</b>\n claim &amp; more</p><script>x()</script>") == (
        "A bold claim & more"
    )
    assert html_to_text("") == ""
