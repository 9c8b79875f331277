"""News endpoints: article list, ingestion trigger and source admin."""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from starlette.requests import Request
import structlog

from butji.api.auth import verify_api_key
from butji.api.dependencies import (
    get_ingestion_service,
    get_news_article_repository,
    get_news_config,
    get_news_source_repository,
)
from butji.api.models import (
    ErrorResponse,
    NewsArticleItem,
    NewsFetchResponse,
    NewsSourceCreateRequest,
    NewsSourceItem,
    NewsSourceUpdateRequest,
    SuccessResponse,
)
from butji.api.rate_limit import limiter, news_fetch_limit
from butji.news.config import NewsConfig
from butji.news.ingestion import NewsIngestionService
from butji.news.repository import NewsArticleRepository, NewsSourceRepository
from butji.news.schemas import NewsSource
from butji.validation import is_valid_url

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.get(
    "/news",
    response_model=list[NewsArticleItem],
    responses={500: {"model": ErrorResponse}},
    summary="Latest approved news articles",
)
async def list_news(
    repo: NewsArticleRepository = Depends(get_news_article_repository),
    config: NewsConfig = Depends(get_news_config),
) -> list[NewsArticleItem]:
    try:
        articles = await repo.list_approved(limit=config.article_list_limit)
        return [NewsArticleItem.model_validate(a) for a in articles]
    except Exception as e:
        logger.error(f"Failed to list news: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch news articles")


@router.post(
    "/news/fetch",
    response_model=NewsFetchResponse,
    response_model_exclude_none=True,
    responses={500: {"model": ErrorResponse}},
    summary="Run one ingestion pass over enabled sources",
)
@limiter.limit(news_fetch_limit)
async def fetch_news(
    request: Request,
    service: NewsIngestionService = Depends(get_ingestion_service),
) -> NewsFetchResponse:
    try:
        summary = await service.run()
        return NewsFetchResponse(
            fetched=summary.fetched,
            skipped=summary.skipped,
            errors=summary.errors or None,
        )
    except Exception as e:
        logger.error(f"News ingestion failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch news")


@router.get(
    "/news/sources",
    response_model=list[NewsSourceItem],
    responses={500: {"model": ErrorResponse}},
    summary="List news sources",
)
async def list_news_sources(
    enabled_only: bool = Query(default=False, alias="enabledOnly"),
    repo: NewsSourceRepository = Depends(get_news_source_repository),
) -> list[NewsSourceItem]:
    try:
        sources = await repo.list_sources(enabled_only=enabled_only)
        return [NewsSourceItem.model_validate(s) for s in sources]
    except Exception as e:
        logger.error(f"Failed to list news sources: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch news sources")


@router.post(
    "/news/sources",
    response_model=NewsSourceItem,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Add a news source",
)
async def create_news_source(
    body: NewsSourceCreateRequest,
    api_key: str = Depends(verify_api_key),
    repo: NewsSourceRepository = Depends(get_news_source_repository),
) -> NewsSourceItem:
    if not (body.name and body.name.strip() and body.url and body.url.strip()):
        raise HTTPException(status_code=400, detail="Name and URL are required")
    if not is_valid_url(body.url):
        raise HTTPException(status_code=400, detail="Invalid URL format")

    try:
        source = await repo.create(
            NewsSource(
                name=body.name.strip(),
                url=body.url.strip(),
                type="api" if body.type == "api" else "rss",
                enabled=True if body.enabled is None else body.enabled,
            )
        )
        return NewsSourceItem.model_validate(source)
    except Exception as e:
        logger.error(f"Failed to create news source: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to create news source")


@router.patch(
    "/news/sources/{source_id}",
    response_model=NewsSourceItem,
    responses={
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Enable or disable a news source",
)
async def update_news_source(
    source_id: str,
    body: NewsSourceUpdateRequest,
    api_key: str = Depends(verify_api_key),
    repo: NewsSourceRepository = Depends(get_news_source_repository),
) -> NewsSourceItem:
    try:
        source = await repo.set_enabled(source_id, body.enabled)
        if source is None:
            raise HTTPException(status_code=404, detail="News source not found")
        logger.info("News source updated", source_id=source_id, enabled=body.enabled)
        return NewsSourceItem.model_validate(source)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to update news source: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to update news source")


@router.delete(
    "/news/sources/{source_id}",
    response_model=SuccessResponse,
    responses={
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Delete a news source",
)
async def delete_news_source(
    source_id: str,
    api_key: str = Depends(verify_api_key),
    repo: NewsSourceRepository = Depends(get_news_source_repository),
) -> SuccessResponse:
    try:
        if not await repo.delete(source_id):
            raise HTTPException(status_code=404, detail="News source not found")
        logger.info("News source deleted", source_id=source_id)
        return SuccessResponse()
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to delete news source: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to delete news source")
