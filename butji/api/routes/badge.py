"""Embeddable SVG badge."""

from fastapi import APIRouter, Query, Response

from butji.badge import DEFAULT_STYLE, DEFAULT_TEXT, render_badge
from butji.config.settings import get_settings

router = APIRouter()


@router.get(
    "/badge",
    response_class=Response,
    responses={200: {"content": {"image/svg+xml": {}}}},
    summary="Render the site badge as SVG",
)
async def badge(
    style: str | None = Query(default=None),
    text: str | None = Query(default=None),
    link: str | None = Query(default=None),
) -> Response:
    svg = render_badge(
        text or DEFAULT_TEXT,
        style or DEFAULT_STYLE,
        link or get_settings().site_url,
    )
    return Response(
        content=svg,
        media_type="image/svg+xml",
        headers={"Cache-Control": "public, max-age=3600"},
    )
