"""Shared fixtures for API tests."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from butji.api.app import create_app
from butji.api.auth import verify_api_key
from butji.api.dependencies import (
    get_company_repository,
    get_company_submission_repository,
    get_ingestion_service,
    get_metrics_collector,
    get_news_article_repository,
    get_news_source_repository,
    get_report_service,
    get_resource_repository,
    get_resource_submission_repository,
    get_revalidator,
)
from butji.companies.schemas import Company, CompanySubmission
from butji.config.settings import Settings
from butji.news.schemas import IngestionSummary, NewsArticle, NewsSource
from butji.reports.schemas import Report
from butji.reports.service import ReportService
from butji.resources.schemas import Resource, ResourceSubmission
from butji.revalidate import Revalidator

NOW = datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)
ADMIN_KEY = "admin-secret"


def _make_resource(**kwargs) -> Resource:
    defaults = dict(
        id="res-1",
        title="Glaze",
        description="Protects artwork from style mimicry",
        url="https://glaze.cs.uchicago.edu",
        category="tool",
        tags=["protection"],
        slug="glaze",
    )
    defaults.update(kwargs)
    return Resource(**defaults)


def _make_resource_submission(**kwargs) -> ResourceSubmission:
    defaults = dict(
        id="submission-1767225600000-abc123xyz",
        title="Nightshade",
        description="Poisons training data",
        url="https://nightshade.cs.uchicago.edu",
        category="tool",
        tags=["protection"],
        submitted_at=NOW,
        submitted_by="Anonymous",
    )
    defaults.update(kwargs)
    return ResourceSubmission(**defaults)


def _make_company(**kwargs) -> Company:
    defaults = dict(
        id="company-1",
        name="Example AI",
        description="Builds large language models",
        website="https://example.ai",
        founders=["Ada Example"],
        tags=["llm"],
        controversies=[{"text": "Scraped art", "date": "2024-02-10"}],
        created_at=NOW,
        updated_at=NOW,
    )
    defaults.update(kwargs)
    return Company(**defaults)


def _make_company_submission(**kwargs) -> CompanySubmission:
    defaults = dict(
        id="company-sub-1",
        name="Example AI",
        description="Builds large language models",
        submitted_at=NOW,
    )
    defaults.update(kwargs)
    return CompanySubmission(**defaults)


def _make_report(**kwargs) -> Report:
    defaults = dict(
        id="report-1",
        type="company",
        target_id="company-1",
        message="CEO is outdated",
        field="CEO",
        created_at=NOW,
    )
    defaults.update(kwargs)
    return Report(**defaults)


def _make_news_source(**kwargs) -> NewsSource:
    defaults = dict(id="src-1", name="Example Feed", url="https://news.example/feed")
    defaults.update(kwargs)
    return NewsSource(**defaults)


def _make_article(**kwargs) -> NewsArticle:
    defaults = dict(
        id="article-1",
        title="Artists sue over training data",
        url="https://news.example/artists-sue",
        source="Example Feed",
        published_at=NOW,
    )
    defaults.update(kwargs)
    return NewsArticle(**defaults)


@pytest.fixture
def mock_resource_repo():
    repo = AsyncMock()
    repo.list_approved = AsyncMock(return_value=[])
    repo.get_by_id = AsyncMock(return_value=None)
    repo.get_by_slug = AsyncMock(return_value=None)
    return repo


@pytest.fixture
def mock_resource_submission_repo():
    repo = AsyncMock()
    repo.create = AsyncMock(side_effect=lambda submission: submission)
    repo.list_submissions = AsyncMock(return_value=[])
    repo.update_fields = AsyncMock(return_value=True)
    repo.delete = AsyncMock(return_value=True)
    return repo


@pytest.fixture
def mock_company_repo():
    repo = AsyncMock()

    async def create(company):
        company.id = "company-new"
        return company

    repo.list_approved = AsyncMock(return_value=[])
    repo.get_by_id = AsyncMock(return_value=None)
    repo.create = AsyncMock(side_effect=create)
    repo.update = AsyncMock(return_value=None)
    repo.delete = AsyncMock(return_value=True)
    return repo


@pytest.fixture
def mock_company_submission_repo():
    repo = AsyncMock()

    async def create(submission):
        submission.id = "company-sub-new"
        return submission

    repo.create = AsyncMock(side_effect=create)
    repo.list_submissions = AsyncMock(return_value=[])
    repo.update_fields = AsyncMock(return_value=True)
    repo.delete = AsyncMock(return_value=True)
    return repo


@pytest.fixture
def mock_news_source_repo():
    repo = AsyncMock()
    repo.list_sources = AsyncMock(return_value=[])
    repo.create = AsyncMock(side_effect=lambda source: _make_news_source(
        name=source.name, url=source.url, type=source.type, enabled=source.enabled
    ))
    repo.set_enabled = AsyncMock(return_value=None)
    repo.delete = AsyncMock(return_value=True)
    return repo


@pytest.fixture
def mock_news_article_repo():
    repo = AsyncMock()
    repo.list_approved = AsyncMock(return_value=[])
    return repo


@pytest.fixture
def mock_ingestion_service():
    service = AsyncMock()
    service.run = AsyncMock(return_value=IngestionSummary(fetched=0, skipped=0))
    return service


@pytest.fixture
def mock_report_repo():
    repo = AsyncMock()

    async def create(report):
        report.id = "report-new"
        report.created_at = NOW
        return report

    repo.create = AsyncMock(side_effect=create)
    repo.get_by_id = AsyncMock(return_value=None)
    repo.list_reports = AsyncMock(return_value=[])
    repo.update_status = AsyncMock(return_value=None)
    return repo


@pytest.fixture
def app(
    mock_database,
    metrics,
    mock_resource_repo,
    mock_resource_submission_repo,
    mock_company_repo,
    mock_company_submission_repo,
    mock_news_source_repo,
    mock_news_article_repo,
    mock_ingestion_service,
    mock_report_repo,
):
    """Application wired to mocked repositories."""
    app = create_app(database=mock_database)

    app.dependency_overrides[get_metrics_collector] = lambda: metrics
    app.dependency_overrides[get_resource_repository] = lambda: mock_resource_repo
    app.dependency_overrides[get_resource_submission_repository] = (
        lambda: mock_resource_submission_repo
    )
    app.dependency_overrides[get_company_repository] = lambda: mock_company_repo
    app.dependency_overrides[get_company_submission_repository] = (
        lambda: mock_company_submission_repo
    )
    app.dependency_overrides[get_news_source_repository] = lambda: mock_news_source_repo
    app.dependency_overrides[get_news_article_repository] = lambda: mock_news_article_repo
    app.dependency_overrides[get_ingestion_service] = lambda: mock_ingestion_service
    app.dependency_overrides[get_report_service] = lambda: ReportService(
        mock_report_repo,
        companies=mock_company_repo,
        resources=mock_resource_repo,
        metrics=metrics,
    )
    app.dependency_overrides[get_revalidator] = lambda: Revalidator()

    yield app

    app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    """Client with admin auth bypassed."""
    app.dependency_overrides[verify_api_key] = lambda: "test-key"
    with TestClient(app) as c:
        yield c


@pytest.fixture
def secured_client(app):
    """Client with a configured admin key and real auth."""
    with patch(
        "butji.api.auth.get_settings",
        return_value=Settings(api_keys=ADMIN_KEY),
    ):
        with TestClient(app) as c:
            yield c
