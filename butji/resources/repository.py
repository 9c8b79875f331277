"""Database repositories for resources and resource submissions."""

import logging
import re
import time
from typing import Any

from butji.resources.schemas import Resource, ResourceSubmission
from butji.storage.columns import string_list, to_json_text
from butji.storage.database import Database, affected_rows

logger = logging.getLogger(__name__)

# Columns an admin edit or moderation transition may write.
_SUBMISSION_WRITABLE_COLUMNS: frozenset[str] = frozenset({
    "title",
    "description",
    "url",
    "category",
    "tags",
    "featured",
    "status",
    "reviewed_at",
    "reviewed_by",
    "rejection_reason",
})

_JSON_COLUMNS: frozenset[str] = frozenset({"tags"})

_MAX_SLUG_ATTEMPTS = 1000


def slugify(text: str) -> str:
    """Build a URL-friendly slug: lowercase, hyphen-separated ASCII."""
    slug = text.lower().strip()
    slug = re.sub(r"[\s_]+", "-", slug)
    slug = re.sub(r"[^a-z0-9-]", "", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")


def _row_to_resource(row: Any) -> Resource:
    return Resource(
        id=row["id"],
        title=row["title"],
        description=row["description"],
        url=row["url"],
        category=row["category"],
        tags=string_list(row["tags"]),
        slug=row.get("slug"),
        featured=row["featured"],
        approved=row.get("approved", True),
        submitted_at=row.get("submitted_at"),
        submitted_by=row.get("submitted_by"),
    )


def _row_to_submission(row: Any) -> ResourceSubmission:
    return ResourceSubmission(
        id=row["id"],
        title=row["title"],
        description=row["description"],
        url=row["url"],
        category=row["category"],
        tags=string_list(row["tags"]),
        featured=row["featured"],
        status=row["status"],
        submitted_at=row["submitted_at"],
        submitted_by=row.get("submitted_by"),
        reviewed_at=row.get("reviewed_at"),
        reviewed_by=row.get("reviewed_by"),
        rejection_reason=row.get("rejection_reason"),
    )


class ResourceRepository:
    """Read and create operations for published resources."""

    def __init__(self, database: Database) -> None:
        self._db = database

    async def list_approved(self) -> list[Resource]:
        """Approved curated resources followed by approved submissions."""
        sql = """
            SELECT id, title, description, url, category, tags, slug,
                   featured, approved, NULL::timestamptz AS submitted_at,
                   NULL::text AS submitted_by, 0 AS origin, created_at AS sort_at
            FROM resources
            WHERE approved = TRUE
            UNION ALL
            SELECT id, title, description, url, category, tags, NULL AS slug,
                   featured, TRUE AS approved, submitted_at,
                   submitted_by, 1 AS origin, submitted_at AS sort_at
            FROM resource_submissions
            WHERE status = 'approved'
            ORDER BY origin, sort_at DESC
        """
        rows = await self._db.fetch(sql)
        return [_row_to_resource(row) for row in rows]

    async def get_by_id(self, resource_id: str) -> Resource | None:
        """Look up an approved resource, falling back to approved submissions."""
        row = await self._db.fetchrow(
            "SELECT * FROM resources WHERE id = $1 AND approved = TRUE",
            resource_id,
        )
        if row:
            return _row_to_resource(row)

        row = await self._db.fetchrow(
            "SELECT * FROM resource_submissions WHERE id = $1 AND status = 'approved'",
            resource_id,
        )
        return _row_to_submission(row).to_resource() if row else None

    async def get_by_slug(self, slug: str) -> Resource | None:
        """Look up an approved curated resource by slug.

        Submissions carry no slug, so only the ``resources`` table is searched.
        """
        row = await self._db.fetchrow(
            "SELECT * FROM resources WHERE slug = $1 AND approved = TRUE",
            slug,
        )
        return _row_to_resource(row) if row else None

    async def unique_slug(self, base_slug: str, exclude_id: str | None = None) -> str:
        """Return ``base_slug`` or the first free ``base_slug-N``."""
        slug = base_slug
        for counter in range(1, _MAX_SLUG_ATTEMPTS):
            existing_id = await self._db.fetchval(
                "SELECT id FROM resources WHERE slug = $1", slug
            )
            if existing_id is None or existing_id == exclude_id:
                return slug
            slug = f"{base_slug}-{counter}"
        return f"{base_slug}-{int(time.time() * 1000)}"

    async def create(self, resource: Resource) -> Resource:
        """Insert a curated resource, generating a unique slug from its title."""
        base_slug = resource.slug or slugify(resource.title)
        slug = await self.unique_slug(base_slug) if base_slug else None

        row = await self._db.fetchrow(
            """
            INSERT INTO resources (title, description, url, category, tags,
                                   slug, featured, approved)
            VALUES ($1, $2, $3, $4, $5, $6, $7, $8)
            RETURNING *
            """,
            resource.title,
            resource.description,
            resource.url,
            resource.category,
            to_json_text(resource.tags),
            slug,
            resource.featured,
            resource.approved,
        )
        logger.info("Resource created: %s", row["id"])
        return _row_to_resource(row)


class ResourceSubmissionRepository:
    """CRUD operations for the ``resource_submissions`` table."""

    def __init__(self, database: Database) -> None:
        self._db = database

    async def create(self, submission: ResourceSubmission) -> ResourceSubmission:
        """Insert a new submission and return the stored row."""
        row = await self._db.fetchrow(
            """
            INSERT INTO resource_submissions (
                id, title, description, url, category, tags,
                featured, status, submitted_at, submitted_by
            ) VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10)
            RETURNING *
            """,
            submission.id,
            submission.title,
            submission.description,
            submission.url,
            submission.category,
            to_json_text(submission.tags),
            submission.featured,
            submission.status,
            submission.submitted_at,
            submission.submitted_by,
        )
        return _row_to_submission(row)

    async def get_by_id(self, submission_id: str) -> ResourceSubmission | None:
        row = await self._db.fetchrow(
            "SELECT * FROM resource_submissions WHERE id = $1", submission_id
        )
        return _row_to_submission(row) if row else None

    async def list_submissions(self, status: str | None = None) -> list[ResourceSubmission]:
        """List submissions newest first, optionally filtered by status."""
        if status:
            rows = await self._db.fetch(
                "SELECT * FROM resource_submissions WHERE status = $1 "
                "ORDER BY submitted_at DESC",
                status,
            )
        else:
            rows = await self._db.fetch(
                "SELECT * FROM resource_submissions ORDER BY submitted_at DESC"
            )
        return [_row_to_submission(row) for row in rows]

    async def update_fields(self, submission_id: str, changes: dict[str, Any]) -> bool:
        """Write ``changes`` to one row. Returns False if no row matched."""
        assignments: list[str] = []
        params: list[Any] = []
        for idx, (column, value) in enumerate(changes.items(), start=1):
            if column not in _SUBMISSION_WRITABLE_COLUMNS:
                raise ValueError(f"Column {column!r} is not writable")
            assignments.append(f"{column} = ${idx}")
            params.append(to_json_text(value) if column in _JSON_COLUMNS else value)

        if not assignments:
            return await self._db.fetchval(
                "SELECT id FROM resource_submissions WHERE id = $1", submission_id
            ) is not None

        params.append(submission_id)
        sql = (
            f"UPDATE resource_submissions SET {', '.join(assignments)} "
            f"WHERE id = ${len(params)} RETURNING id"
        )
        row = await self._db.fetchrow(sql, *params)
        return row is not None

    async def delete(self, submission_id: str) -> bool:
        """Hard-delete a submission. Returns True if a row was removed."""
        result = await self._db.execute(
            "DELETE FROM resource_submissions WHERE id = $1", submission_id
        )
        return affected_rows(result) == 1
