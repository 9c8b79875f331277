"""
Application factory for the directory API.

The lifespan owns the database pool and the outbound HTTP client used for
feed fetching and revalidation webhooks; both live on ``app.state`` so the
dependency providers can hand them to routes.
"""

import time
import uuid
from contextlib import asynccontextmanager

import httpx
import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from butji import __version__
from butji.api.middleware.timeout import TimeoutMiddleware
from butji.api.rate_limit import limiter
from butji.api.routes import (
    badge,
    companies,
    company_submissions,
    health,
    news,
    reports,
    resources,
    revalidate,
    submissions,
)
from butji.config.settings import Settings, get_settings
from butji.news.config import NewsConfig
from butji.observability.logging import bind_context, clear_context, setup_logging
from butji.observability.metrics import get_metrics
from butji.storage.database import Database

logger = structlog.get_logger(__name__)

SERVICE_NAME = "Butji Directory API"

# (router module, tag, tag description)
_ROUTERS = (
    (health, "health", "Service health checks"),
    (resources, "resources", "Published resources"),
    (submissions, "submissions", "Resource submission intake and moderation"),
    (companies, "companies", "Published companies and company intake"),
    (company_submissions, "company-submissions", "Company submission moderation"),
    (news, "news", "News articles, sources and ingestion"),
    (reports, "reports", "Correction reports"),
    (badge, "badge", "Embeddable SVG badge"),
    (revalidate, "revalidate", "Site cache invalidation"),
)

_DESCRIPTION = """
Directory of anti-AI resources and AI companies, with moderated
submissions, news aggregation and correction reports.

## Authentication

Admin endpoints require the `X-API-KEY` header. Public reads, submissions
and reports need no credentials.
"""


def _request_id(request: Request) -> str:
    return (
        request.headers.get("X-Request-ID")
        or request.headers.get("X-Correlation-ID")
        or str(uuid.uuid4())
    )


def _install_middleware(app: FastAPI, settings: Settings) -> None:
    origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    # Wraps the logging middleware below, so timed-out requests are not logged twice
    if settings.request_timeout_seconds > 0:
        app.add_middleware(
            TimeoutMiddleware,
            timeout_seconds=settings.request_timeout_seconds,
            path_timeouts={"/news/fetch": settings.news_fetch_timeout_seconds},
        )

    @app.middleware("http")
    async def access_log(request: Request, call_next):
        request_id = _request_id(request)
        bind_context(request_id=request_id)
        started = time.perf_counter()
        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            logger.info(
                "HTTP request",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )
            return response
        finally:
            clear_context()


def create_app(database: Database | None = None) -> FastAPI:
    """
    Build the directory API.

    Args:
        database: An already-connected database to use instead of opening
            a pool from settings. The caller keeps ownership of it.
    """
    settings = get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging()
        logger.info("Directory API starting up", version=__version__)

        db = database if database is not None else Database()
        if database is None:
            await db.connect()

        app.state.database = db
        app.state.metrics = get_metrics()
        app.state.http_client = httpx.AsyncClient(
            timeout=NewsConfig().fetch_timeout_seconds,
            follow_redirects=True,
        )
        try:
            yield
        finally:
            logger.info("Directory API shutting down")
            await app.state.http_client.aclose()
            if database is None:
                await db.close()

    app = FastAPI(
        title=SERVICE_NAME,
        description=_DESCRIPTION,
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
        openapi_tags=[{"name": tag, "description": text} for _, tag, text in _ROUTERS],
    )

    _install_middleware(app, settings)

    # Always registered; RATE_LIMIT_ENABLED decides whether limits apply
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        logger.error("Unhandled exception", path=request.url.path, exc_info=exc)
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})

    for module, tag, _ in _ROUTERS:
        app.include_router(module.router, tags=[tag])

    @app.get("/", include_in_schema=False)
    async def root():
        return {"service": SERVICE_NAME, "version": __version__, "docs": "/docs"}

    return app
