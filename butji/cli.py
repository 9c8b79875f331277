"""
Command-line interface for the butji directory service.

Usage:
    butji serve        # Run the API server
    butji init-db      # Create all tables
    butji fetch-news   # Run one news ingestion pass
    butji health       # Check service health
"""

import asyncio
import os
import sys

import click
import structlog

from butji.config.settings import get_settings
from butji.observability.logging import setup_logging
from butji.observability.metrics import get_metrics

logger = structlog.get_logger(__name__)


def _status_line(name: str, ok: bool) -> str:
    mark = "✓" if ok else "✗"
    return click.style(f"  {mark} {name}: {ok}", fg="green" if ok else "red")


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool) -> None:
    """Butji - anti-AI resource and company directory."""
    if debug:
        os.environ["LOG_LEVEL"] = "DEBUG"
        get_settings.cache_clear()
    setup_logging()


@main.command()
@click.option("--host", default=None, help="Bind address (default: API_HOST)")
@click.option("--port", default=None, type=int, help="Bind port (default: API_PORT)")
@click.option("--reload", is_flag=True, help="Reload on code changes (dev only)")
@click.option("--metrics/--no-metrics", default=True, help="Expose Prometheus metrics")
def serve(host: str | None, port: int | None, reload: bool, metrics: bool) -> None:
    """Run the directory API under uvicorn."""
    import uvicorn

    settings = get_settings()
    bind_host = host or settings.api_host
    bind_port = port or settings.api_port

    if metrics:
        get_metrics().start_server(port=settings.metrics_port)
        click.echo(f"Metrics on :{settings.metrics_port}/metrics")
    click.echo(f"Serving on {bind_host}:{bind_port} (docs at /docs)")

    uvicorn.run(
        "butji.api.app:create_app",
        factory=True,
        host=bind_host,
        port=bind_port,
        reload=reload,
        log_level="info",
    )


@main.command("init-db")
def init_db() -> None:
    """Create the directory tables if they do not exist."""
    from butji.storage.database import Database
    from butji.storage.schema import create_tables

    async def run() -> None:
        async with Database() as db:
            await create_tables(db)

    asyncio.run(run())
    click.echo("Database initialized successfully")


@main.command("fetch-news")
def fetch_news() -> None:
    """Fetch every enabled news source once and store new articles."""
    from butji.news.ingestion import NewsIngestionService
    from butji.news.repository import NewsArticleRepository, NewsSourceRepository
    from butji.storage.database import Database

    async def run():
        async with Database() as db:
            service = NewsIngestionService(NewsSourceRepository(db), NewsArticleRepository(db))
            return await service.run()

    summary = asyncio.run(run())

    click.echo(f"Fetched: {summary.fetched}")
    click.echo(f"Skipped: {summary.skipped}")
    if summary.errors:
        click.secho(f"Errors ({len(summary.errors)}):", fg="yellow")
        for error in summary.errors:
            click.echo(f"  - {error}")


@main.command()
def health() -> None:
    """Check the database and report which integrations are configured."""
    from butji.storage.database import Database

    async def postgres_ok() -> bool:
        db = Database()
        try:
            await db.connect()
            return await db.health_check()
        except Exception as e:
            logger.error("Postgres health check failed", error=str(e))
            return False
        finally:
            await db.close()

    settings = get_settings()
    results = {
        "postgres": asyncio.run(postgres_ok()),
        "admin_keys_configured": bool(settings.admin_keys),
        "revalidate_webhook_configured": bool(settings.revalidate_webhook_url),
    }

    click.echo("\nHealth Check Results:")
    for name, ok in results.items():
        click.echo(_status_line(name, ok))

    if not results["postgres"]:
        click.secho("Database unreachable", fg="red")
        sys.exit(1)
    click.secho("Database healthy", fg="green")


if __name__ == "__main__":
    main()
