"""Report intake and triage."""

import logging
from datetime import datetime, timezone

from butji.companies.repository import CompanyRepository
from butji.errors import NotFoundError, ValidationError
from butji.observability.metrics import MetricsCollector, get_metrics
from butji.reports.repository import ReportRepository
from butji.reports.sanitize import TextSanitizer
from butji.reports.schemas import REPORT_STATUSES, REPORT_TYPES, Report
from butji.resources.repository import ResourceRepository

logger = logging.getLogger(__name__)


class ReportService:
    """
    Validates, sanitizes and stores reports, and records admin reviews.

    When company/resource repositories are supplied, a new report must
    point at an existing entity of its type.
    """

    def __init__(
        self,
        repository: ReportRepository,
        sanitizer: TextSanitizer | None = None,
        companies: CompanyRepository | None = None,
        resources: ResourceRepository | None = None,
        metrics: MetricsCollector | None = None,
    ):
        self._repo = repository
        self._sanitizer = sanitizer or TextSanitizer()
        self._companies = companies
        self._resources = resources
        self._metrics = metrics or get_metrics()

    async def create(
        self,
        report_type: str | None,
        target_id: str | None,
        message: str | None,
        reporter_email: str | None = None,
        field: str | None = None,
        new_value: str | None = None,
        source: str | None = None,
    ) -> Report:
        """
        File a new pending report.

        Raises:
            ValidationError: Missing/invalid type, target or message, a
                sanitizer rejection, or an unknown target.
        """
        if not report_type or not target_id or not message:
            raise ValidationError(
                "Missing required fields: type, targetId, and message are required"
            )
        if report_type not in REPORT_TYPES:
            raise ValidationError('Invalid type. Must be "company" or "resource"')
        if not message.strip():
            raise ValidationError("Message is required and cannot be empty")

        caps = self._sanitizer.config
        report = Report(
            type=report_type,
            target_id=self._sanitizer.sanitize_text(target_id, caps.target_id_max_length),
            reporter_email=self._sanitizer.sanitize_email(reporter_email),
            field=self._sanitizer.sanitize_text(field, caps.field_max_length) or None,
            new_value=self._sanitizer.sanitize_text(new_value, caps.new_value_max_length) or None,
            source=self._sanitizer.sanitize_url(source),
            message=self._sanitizer.sanitize_text(message, caps.message_max_length),
        )
        if not report.message:
            raise ValidationError("Message is required and cannot be empty")

        await self._check_target(report.type, report.target_id)

        created = await self._repo.create(report)
        self._metrics.reports_received.labels(type=created.type).inc()
        logger.info("Report %s filed against %s %s", created.id, created.type, created.target_id)
        return created

    async def list_reports(
        self,
        status: str | None = None,
        report_type: str | None = None,
        target_id: str | None = None,
    ) -> list[Report]:
        return await self._repo.list_reports(status, report_type, target_id)

    async def get(self, report_id: str) -> Report:
        report = await self._repo.get_by_id(report_id)
        if report is None:
            raise NotFoundError("Report", report_id)
        return report

    async def update_status(
        self,
        report_id: str,
        status: str | None,
        reviewed_by: str | None,
        admin_notes: str | None = None,
    ) -> Report:
        """
        Record an admin review.

        Raises:
            ValidationError: Missing status/reviewer, unknown status, or
                admin notes over the cap.
            NotFoundError: If the report does not exist.
        """
        if not status or not reviewed_by:
            raise ValidationError("Missing required fields: status and reviewedBy are required")
        if status not in REPORT_STATUSES:
            raise ValidationError(
                f"Invalid status. Must be one of: {', '.join(REPORT_STATUSES)}"
            )

        notes = self._sanitizer.sanitize_text(
            admin_notes, self._sanitizer.config.admin_notes_max_length
        )
        updated = await self._repo.update_status(
            report_id,
            status,
            reviewed_by,
            datetime.now(timezone.utc),
            notes or None,
        )
        if updated is None:
            raise NotFoundError("Report", report_id)
        logger.info("Report %s marked %s by %s", report_id, status, reviewed_by)
        return updated

    async def _check_target(self, report_type: str, target_id: str) -> None:
        if report_type == "company" and self._companies is not None:
            if await self._companies.get_by_id(target_id) is None:
                raise ValidationError("Company not found")
        elif report_type == "resource" and self._resources is not None:
            if await self._resources.get_by_id(target_id) is None:
                raise ValidationError("Resource not found")
