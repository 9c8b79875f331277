"""Table definitions for every persisted entity.

List-valued and structured fields (tags, founders, products,
controversies, citations, layoffs) are stored as JSON text columns.
"""

import logging

from butji.storage.database import Database

logger = logging.getLogger(__name__)

_CREATE_TABLES_SQL = """
CREATE TABLE IF NOT EXISTS resources (
    id           TEXT PRIMARY KEY DEFAULT gen_random_uuid()::text,
    title        TEXT NOT NULL,
    description  TEXT NOT NULL,
    url          TEXT NOT NULL,
    category     TEXT NOT NULL,
    tags         TEXT NOT NULL DEFAULT '[]',
    slug         TEXT UNIQUE,
    featured     BOOLEAN NOT NULL DEFAULT FALSE,
    approved     BOOLEAN NOT NULL DEFAULT TRUE,
    created_at   TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    updated_at   TIMESTAMPTZ NOT NULL DEFAULT NOW()
);

CREATE TABLE IF NOT EXISTS resource_submissions (
    id               TEXT PRIMARY KEY,
    title            TEXT NOT NULL,
    description      TEXT NOT NULL,
    url              TEXT NOT NULL,
    category         TEXT NOT NULL,
    tags             TEXT NOT NULL DEFAULT '[]',
    featured         BOOLEAN NOT NULL DEFAULT FALSE,
    status           TEXT NOT NULL DEFAULT 'pending',
    submitted_at     TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    submitted_by     TEXT,
    reviewed_at      TIMESTAMPTZ,
    reviewed_by      TEXT,
    rejection_reason TEXT
);

CREATE INDEX IF NOT EXISTS idx_resource_submissions_status
    ON resource_submissions(status);

CREATE TABLE IF NOT EXISTS companies (
    id             TEXT PRIMARY KEY DEFAULT gen_random_uuid()::text,
    name           TEXT NOT NULL,
    description    TEXT NOT NULL,
    website        TEXT,
    logo_url       TEXT,
    founders       TEXT NOT NULL DEFAULT '[]',
    ceo            TEXT,
    founded_year   INTEGER,
    funding        TEXT,
    valuation      TEXT,
    products       TEXT NOT NULL DEFAULT '[]',
    controversies  TEXT,
    layoffs        TEXT,
    tags           TEXT NOT NULL DEFAULT '[]',
    citations      TEXT,
    featured       BOOLEAN NOT NULL DEFAULT FALSE,
    approved       BOOLEAN NOT NULL DEFAULT TRUE,
    created_at     TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    updated_at     TIMESTAMPTZ NOT NULL DEFAULT NOW()
);

CREATE TABLE IF NOT EXISTS company_submissions (
    id               TEXT PRIMARY KEY DEFAULT gen_random_uuid()::text,
    name             TEXT NOT NULL,
    description      TEXT NOT NULL,
    website          TEXT,
    logo_url         TEXT,
    founders         TEXT NOT NULL DEFAULT '[]',
    ceo              TEXT,
    founded_year     INTEGER,
    funding          TEXT,
    valuation        TEXT,
    products         TEXT NOT NULL DEFAULT '[]',
    controversies    TEXT,
    layoffs          TEXT,
    tags             TEXT NOT NULL DEFAULT '[]',
    citations        TEXT,
    featured         BOOLEAN NOT NULL DEFAULT FALSE,
    status           TEXT NOT NULL DEFAULT 'pending',
    submitted_at     TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    submitted_by     TEXT,
    reviewed_at      TIMESTAMPTZ,
    reviewed_by      TEXT,
    rejection_reason TEXT
);

CREATE INDEX IF NOT EXISTS idx_company_submissions_status
    ON company_submissions(status);

CREATE TABLE IF NOT EXISTS news_sources (
    id            TEXT PRIMARY KEY DEFAULT gen_random_uuid()::text,
    name          TEXT NOT NULL,
    url           TEXT NOT NULL,
    type          TEXT NOT NULL DEFAULT 'rss',
    enabled       BOOLEAN NOT NULL DEFAULT TRUE,
    last_fetched  TIMESTAMPTZ,
    created_at    TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    updated_at    TIMESTAMPTZ NOT NULL DEFAULT NOW()
);

CREATE INDEX IF NOT EXISTS idx_news_sources_enabled
    ON news_sources(enabled);

CREATE TABLE IF NOT EXISTS news_articles (
    id            TEXT PRIMARY KEY DEFAULT gen_random_uuid()::text,
    title         TEXT NOT NULL,
    description   TEXT,
    url           TEXT NOT NULL,
    source        TEXT NOT NULL,
    source_url    TEXT,
    image_url     TEXT,
    published_at  TIMESTAMPTZ NOT NULL,
    fetched_at    TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    tags          TEXT,
    featured      BOOLEAN NOT NULL DEFAULT FALSE,
    approved      BOOLEAN NOT NULL DEFAULT TRUE
);

CREATE INDEX IF NOT EXISTS idx_news_articles_published_at
    ON news_articles(published_at);
CREATE INDEX IF NOT EXISTS idx_news_articles_url
    ON news_articles(url);

CREATE TABLE IF NOT EXISTS reports (
    id              TEXT PRIMARY KEY DEFAULT gen_random_uuid()::text,
    type            TEXT NOT NULL,
    target_id       TEXT NOT NULL,
    reporter_email  TEXT,
    field           TEXT,
    new_value       TEXT,
    source          TEXT,
    message         TEXT NOT NULL,
    status          TEXT NOT NULL DEFAULT 'pending',
    created_at      TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    reviewed_at     TIMESTAMPTZ,
    reviewed_by     TEXT,
    admin_notes     TEXT
);

CREATE INDEX IF NOT EXISTS idx_reports_status ON reports(status);
CREATE INDEX IF NOT EXISTS idx_reports_target ON reports(type, target_id);
"""


async def create_tables(database: Database) -> None:
    """Create every table and index (idempotent)."""
    await database.execute(_CREATE_TABLES_SQL)
    logger.info("Database schema ensured")
