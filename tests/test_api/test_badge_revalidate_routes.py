"""Tests for the badge and revalidation routes."""

from unittest.mock import AsyncMock

from butji.api.dependencies import get_revalidator


def test_badge_defaults(client):
    resp = client.get("/badge")

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("image/svg+xml")
    assert resp.headers["Cache-Control"] == "public, max-age=3600"
    assert "Butlerian Jihad" in resp.text
    assert 'id="glow-cyberpunk"' in resp.text


def test_badge_custom(client):
    resp = client.get("/badge", params={"style": "red", "text": "A&B", "link": "https://x.example"})

    assert "A&amp;B" in resp.text
    assert 'href="https://x.example"' in resp.text
    assert 'id="glow-red"' in resp.text


def test_revalidate(client):
    resp = client.post("/revalidate?path=/companies")

    assert resp.status_code == 200
    data = resp.json()
    assert data["revalidated"] is True
    assert data["path"] == "/companies"
    assert isinstance(data["now"], int)


def test_revalidate_default_path(client):
    assert client.post("/revalidate").json()["path"] == "/"


def test_revalidate_failure(app, client):
    failing = AsyncMock()
    failing.revalidate = AsyncMock(side_effect=RuntimeError("hook down"))
    app.dependency_overrides[get_revalidator] = lambda: failing

    resp = client.post("/revalidate")

    assert resp.status_code == 500
    assert resp.json()["detail"] == "Error revalidating"
