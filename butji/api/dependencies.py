"""
Dependency injection for FastAPI endpoints.

Shared resources (database pool, HTTP client, metrics collector) are
created by the application lifespan and stored on ``app.state``; every
repository and service below is built per request from them.
"""

import httpx
from fastapi import Depends, Request

from butji.companies.repository import CompanyRepository, CompanySubmissionRepository
from butji.companies.service import CompanyService
from butji.config.settings import get_settings
from butji.moderation.workflow import ModerationWorkflow
from butji.news.config import NewsConfig
from butji.news.feed import FeedFetcher
from butji.news.ingestion import NewsIngestionService
from butji.news.repository import NewsArticleRepository, NewsSourceRepository
from butji.observability.metrics import MetricsCollector
from butji.reports.repository import ReportRepository
from butji.reports.service import ReportService
from butji.resources.repository import ResourceRepository, ResourceSubmissionRepository
from butji.revalidate import Revalidator
from butji.storage.database import Database


def get_database(request: Request) -> Database:
    """Database pool opened by the application lifespan."""
    return request.app.state.database


def get_metrics_collector(request: Request) -> MetricsCollector:
    return request.app.state.metrics


def get_http_client(request: Request) -> httpx.AsyncClient:
    """Outbound HTTP client shared by feed fetching and revalidation."""
    return request.app.state.http_client


def get_news_config() -> NewsConfig:
    return NewsConfig()


# ── Repositories ──────────────────────────────────────


def get_resource_repository(db: Database = Depends(get_database)) -> ResourceRepository:
    return ResourceRepository(db)


def get_resource_submission_repository(
    db: Database = Depends(get_database),
) -> ResourceSubmissionRepository:
    return ResourceSubmissionRepository(db)


def get_company_repository(db: Database = Depends(get_database)) -> CompanyRepository:
    return CompanyRepository(db)


def get_company_submission_repository(
    db: Database = Depends(get_database),
) -> CompanySubmissionRepository:
    return CompanySubmissionRepository(db)


def get_news_source_repository(db: Database = Depends(get_database)) -> NewsSourceRepository:
    return NewsSourceRepository(db)


def get_news_article_repository(db: Database = Depends(get_database)) -> NewsArticleRepository:
    return NewsArticleRepository(db)


# ── Services ──────────────────────────────────────────


def get_company_service(
    repo: CompanyRepository = Depends(get_company_repository),
) -> CompanyService:
    return CompanyService(repo)


def get_resource_workflow(
    store: ResourceSubmissionRepository = Depends(get_resource_submission_repository),
    metrics: MetricsCollector = Depends(get_metrics_collector),
) -> ModerationWorkflow:
    return ModerationWorkflow(store, kind="resource", metrics=metrics)


def get_company_workflow(
    store: CompanySubmissionRepository = Depends(get_company_submission_repository),
    metrics: MetricsCollector = Depends(get_metrics_collector),
) -> ModerationWorkflow:
    return ModerationWorkflow(store, kind="company", metrics=metrics)


def get_feed_fetcher(
    client: httpx.AsyncClient = Depends(get_http_client),
    config: NewsConfig = Depends(get_news_config),
) -> FeedFetcher:
    return FeedFetcher(config=config, client=client)


def get_ingestion_service(
    sources: NewsSourceRepository = Depends(get_news_source_repository),
    articles: NewsArticleRepository = Depends(get_news_article_repository),
    fetcher: FeedFetcher = Depends(get_feed_fetcher),
    metrics: MetricsCollector = Depends(get_metrics_collector),
) -> NewsIngestionService:
    return NewsIngestionService(sources, articles, fetcher=fetcher, metrics=metrics)


def get_report_service(
    db: Database = Depends(get_database),
    companies: CompanyRepository = Depends(get_company_repository),
    resources: ResourceRepository = Depends(get_resource_repository),
    metrics: MetricsCollector = Depends(get_metrics_collector),
) -> ReportService:
    return ReportService(
        ReportRepository(db),
        companies=companies,
        resources=resources,
        metrics=metrics,
    )


def get_revalidator(client: httpx.AsyncClient = Depends(get_http_client)) -> Revalidator:
    return Revalidator(webhook_url=get_settings().revalidate_webhook_url, client=client)
