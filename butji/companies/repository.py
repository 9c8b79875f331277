"""Database repositories for companies and company submissions."""

import json
import logging
from typing import Any

from butji.companies.cleaning import parse_controversies
from butji.companies.schemas import Company, CompanyProfile, CompanySubmission
from butji.storage.columns import from_json_text, string_list, to_json_text
from butji.storage.database import Database, affected_rows

logger = logging.getLogger(__name__)

# Payload columns shared by both tables, in insert order.
_PROFILE_COLUMNS: tuple[str, ...] = (
    "name",
    "description",
    "website",
    "logo_url",
    "founders",
    "ceo",
    "founded_year",
    "funding",
    "valuation",
    "products",
    "controversies",
    "layoffs",
    "tags",
    "citations",
    "featured",
)

_JSON_COLUMNS: frozenset[str] = frozenset({
    "founders",
    "products",
    "controversies",
    "layoffs",
    "tags",
    "citations",
})

# Columns that may not be written as NULL.
_NOT_NULL_COLUMNS: frozenset[str] = frozenset({
    "name",
    "description",
    "founders",
    "products",
    "tags",
    "featured",
})

_COMPANY_WRITABLE_COLUMNS: frozenset[str] = frozenset(_PROFILE_COLUMNS) | {"approved"}

_SUBMISSION_WRITABLE_COLUMNS: frozenset[str] = frozenset(_PROFILE_COLUMNS) | {
    "status",
    "reviewed_at",
    "reviewed_by",
    "rejection_reason",
}


def _encode(column: str, value: Any) -> Any:
    """Convert a Python value into its column representation."""
    if column == "funding":
        if value is None or isinstance(value, str):
            return value
        return json.dumps(value)
    if column in _JSON_COLUMNS:
        return to_json_text(value)
    return value


def _decode_funding(raw: str | None) -> str | dict[str, Any] | None:
    if not raw:
        return None
    parsed = from_json_text(raw)
    return parsed if isinstance(parsed, dict) else raw


def _decode_controversies(raw: str | None) -> Any:
    if not raw:
        return None
    try:
        return parse_controversies(json.loads(raw))
    except ValueError:
        # Legacy rows hold plain, non-JSON text.
        return parse_controversies(raw)


def _profile_kwargs(row: Any) -> dict[str, Any]:
    citations = from_json_text(row.get("citations"))
    layoffs = from_json_text(row.get("layoffs"))
    return {
        "name": row["name"],
        "description": row["description"],
        "website": row.get("website"),
        "logo_url": row.get("logo_url"),
        "founders": string_list(row.get("founders")),
        "ceo": row.get("ceo"),
        "founded_year": row.get("founded_year"),
        "funding": _decode_funding(row.get("funding")),
        "valuation": row.get("valuation"),
        "products": string_list(row.get("products")),
        "controversies": _decode_controversies(row.get("controversies")),
        "layoffs": layoffs if isinstance(layoffs, list) else None,
        "tags": string_list(row.get("tags")),
        "citations": citations if isinstance(citations, dict) else None,
        "featured": row.get("featured", False),
    }


def _row_to_company(row: Any) -> Company:
    return Company(
        id=row["id"],
        approved=row.get("approved", True),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
        **_profile_kwargs(row),
    )


def _row_to_submission(row: Any) -> CompanySubmission:
    return CompanySubmission(
        id=row["id"],
        status=row["status"],
        submitted_at=row["submitted_at"],
        submitted_by=row.get("submitted_by"),
        reviewed_at=row.get("reviewed_at"),
        reviewed_by=row.get("reviewed_by"),
        rejection_reason=row.get("rejection_reason"),
        **_profile_kwargs(row),
    )


def _profile_values(profile: CompanyProfile) -> list[Any]:
    return [_encode(column, getattr(profile, column)) for column in _PROFILE_COLUMNS]


def _build_update(
    table: str,
    row_id: str,
    changes: dict[str, Any],
    writable: frozenset[str],
    extra_assignments: tuple[str, ...] = (),
) -> tuple[str, list[Any]]:
    """Build a single-row ``UPDATE ... RETURNING *`` for ``changes``."""
    assignments: list[str] = list(extra_assignments)
    params: list[Any] = []
    for column, value in changes.items():
        if column not in writable:
            raise ValueError(f"Column {column!r} is not writable")
        if value is None and column in _NOT_NULL_COLUMNS:
            raise ValueError(f"Column {column!r} cannot be cleared")
        params.append(_encode(column, value))
        assignments.append(f"{column} = ${len(params)}")

    params.append(row_id)
    if not assignments:
        return f"SELECT * FROM {table} WHERE id = ${len(params)}", params

    sql = (
        f"UPDATE {table} SET {', '.join(assignments)} "
        f"WHERE id = ${len(params)} RETURNING *"
    )
    return sql, params


class CompanyRepository:
    """CRUD operations for the ``companies`` table."""

    def __init__(self, database: Database) -> None:
        self._db = database

    async def list_approved(self) -> list[Company]:
        """Approved companies, newest first."""
        rows = await self._db.fetch(
            "SELECT * FROM companies WHERE approved = TRUE ORDER BY created_at DESC"
        )
        return [_row_to_company(row) for row in rows]

    async def get_by_id(self, company_id: str) -> Company | None:
        row = await self._db.fetchrow("SELECT * FROM companies WHERE id = $1", company_id)
        return _row_to_company(row) if row else None

    async def create(self, company: Company) -> Company:
        """Insert a company; the store assigns its identifier."""
        columns = (*_PROFILE_COLUMNS, "approved")
        placeholders = ", ".join(f"${i}" for i in range(1, len(columns) + 1))
        row = await self._db.fetchrow(
            f"INSERT INTO companies ({', '.join(columns)}) "
            f"VALUES ({placeholders}) RETURNING *",
            *_profile_values(company),
            company.approved,
        )
        logger.info("Company created: %s", row["id"])
        return _row_to_company(row)

    async def update(self, company_id: str, changes: dict[str, Any]) -> Company | None:
        """Apply a partial update. Returns None if no row matched."""
        sql, params = _build_update(
            "companies",
            company_id,
            changes,
            _COMPANY_WRITABLE_COLUMNS,
            extra_assignments=("updated_at = NOW()",) if changes else (),
        )
        row = await self._db.fetchrow(sql, *params)
        return _row_to_company(row) if row else None

    async def delete(self, company_id: str) -> bool:
        """Hard-delete a company. Returns True if a row was removed."""
        result = await self._db.execute("DELETE FROM companies WHERE id = $1", company_id)
        return affected_rows(result) == 1


class CompanySubmissionRepository:
    """CRUD operations for the ``company_submissions`` table."""

    def __init__(self, database: Database) -> None:
        self._db = database

    async def create(self, submission: CompanySubmission) -> CompanySubmission:
        """Insert a submission; the store assigns its identifier."""
        columns = (*_PROFILE_COLUMNS, "status", "submitted_at", "submitted_by")
        placeholders = ", ".join(f"${i}" for i in range(1, len(columns) + 1))
        row = await self._db.fetchrow(
            f"INSERT INTO company_submissions ({', '.join(columns)}) "
            f"VALUES ({placeholders}) RETURNING *",
            *_profile_values(submission),
            submission.status,
            submission.submitted_at,
            submission.submitted_by,
        )
        return _row_to_submission(row)

    async def get_by_id(self, submission_id: str) -> CompanySubmission | None:
        row = await self._db.fetchrow(
            "SELECT * FROM company_submissions WHERE id = $1", submission_id
        )
        return _row_to_submission(row) if row else None

    async def list_submissions(self, status: str | None = None) -> list[CompanySubmission]:
        """List submissions newest first, optionally filtered by status."""
        if status:
            rows = await self._db.fetch(
                "SELECT * FROM company_submissions WHERE status = $1 "
                "ORDER BY submitted_at DESC",
                status,
            )
        else:
            rows = await self._db.fetch(
                "SELECT * FROM company_submissions ORDER BY submitted_at DESC"
            )
        return [_row_to_submission(row) for row in rows]

    async def update_fields(self, submission_id: str, changes: dict[str, Any]) -> bool:
        """Write ``changes`` to one row. Returns False if no row matched."""
        sql, params = _build_update(
            "company_submissions", submission_id, changes, _SUBMISSION_WRITABLE_COLUMNS
        )
        row = await self._db.fetchrow(sql, *params)
        return row is not None

    async def delete(self, submission_id: str) -> bool:
        """Hard-delete a submission. Returns True if a row was removed."""
        result = await self._db.execute(
            "DELETE FROM company_submissions WHERE id = $1", submission_id
        )
        return affected_rows(result) == 1
