"""Database repository for reports."""

import logging
from datetime import datetime
from typing import Any

from butji.reports.schemas import Report
from butji.storage.database import Database

logger = logging.getLogger(__name__)


def _row_to_report(row: Any) -> Report:
    return Report(
        id=row["id"],
        type=row["type"],
        target_id=row["target_id"],
        reporter_email=row.get("reporter_email"),
        field=row.get("field"),
        new_value=row.get("new_value"),
        source=row.get("source"),
        message=row["message"],
        status=row["status"],
        created_at=row.get("created_at"),
        reviewed_at=row.get("reviewed_at"),
        reviewed_by=row.get("reviewed_by"),
        admin_notes=row.get("admin_notes"),
    )


class ReportRepository:
    """CRUD operations for the ``reports`` table."""

    def __init__(self, database: Database) -> None:
        self._db = database

    async def create(self, report: Report) -> Report:
        row = await self._db.fetchrow(
            """
            INSERT INTO reports (
                type, target_id, reporter_email, field, new_value,
                source, message, status
            ) VALUES ($1, $2, $3, $4, $5, $6, $7, $8)
            RETURNING *
            """,
            report.type,
            report.target_id,
            report.reporter_email,
            report.field,
            report.new_value,
            report.source,
            report.message,
            report.status,
        )
        return _row_to_report(row)

    async def get_by_id(self, report_id: str) -> Report | None:
        row = await self._db.fetchrow("SELECT * FROM reports WHERE id = $1", report_id)
        return _row_to_report(row) if row else None

    async def list_reports(
        self,
        status: str | None = None,
        report_type: str | None = None,
        target_id: str | None = None,
    ) -> list[Report]:
        """List reports newest first, optionally filtered."""
        conditions: list[str] = []
        params: list[Any] = []
        for column, value in (("status", status), ("type", report_type), ("target_id", target_id)):
            if value:
                params.append(value)
                conditions.append(f"{column} = ${len(params)}")

        where = f" WHERE {' AND '.join(conditions)}" if conditions else ""
        rows = await self._db.fetch(
            f"SELECT * FROM reports{where} ORDER BY created_at DESC", *params
        )
        return [_row_to_report(row) for row in rows]

    async def update_status(
        self,
        report_id: str,
        status: str,
        reviewed_by: str,
        reviewed_at: datetime,
        admin_notes: str | None,
    ) -> Report | None:
        """Record a review. Returns None if no row matched."""
        row = await self._db.fetchrow(
            """
            UPDATE reports
            SET status = $1, reviewed_by = $2, reviewed_at = $3, admin_notes = $4
            WHERE id = $5
            RETURNING *
            """,
            status,
            reviewed_by,
            reviewed_at,
            admin_notes,
            report_id,
        )
        return _row_to_report(row) if row else None
