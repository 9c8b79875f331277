"""Reports: user-filed corrections against published entities."""

from butji.reports.config import ReportsConfig
from butji.reports.repository import ReportRepository
from butji.reports.sanitize import TextSanitizer
from butji.reports.schemas import (
    COMPANY_FIELD_NAMES,
    REPORT_STATUSES,
    REPORT_TYPES,
    RESOURCE_FIELD_NAMES,
    Report,
    field_names_for,
)
from butji.reports.service import ReportService

__all__ = [
    "COMPANY_FIELD_NAMES",
    "REPORT_STATUSES",
    "REPORT_TYPES",
    "RESOURCE_FIELD_NAMES",
    "Report",
    "ReportRepository",
    "ReportService",
    "ReportsConfig",
    "TextSanitizer",
    "field_names_for",
]
