"""Report data model and the fixed vocabularies around it."""

from dataclasses import dataclass
from datetime import datetime

REPORT_TYPES: frozenset[str] = frozenset({"company", "resource"})

# Ordered for error messages
REPORT_STATUSES: tuple[str, ...] = ("pending", "reviewed", "resolved", "dismissed")

# Field names offered to reporters, per target type
COMPANY_FIELD_NAMES: tuple[str, ...] = (
    "Description",
    "CEO",
    "Founded Year",
    "Valuation",
    "Funding",
    "Founders",
    "Products",
    "Controversies",
    "Layoffs",
    "Tags",
    "Website",
    "Logo URL",
    "Other",
)

RESOURCE_FIELD_NAMES: tuple[str, ...] = (
    "Title",
    "Description",
    "URL",
    "Category",
    "Tags",
    "Other",
)


def field_names_for(report_type: str) -> list[str]:
    """Field names for a target type; unknown types get an empty list."""
    if report_type == "company":
        return list(COMPANY_FIELD_NAMES)
    if report_type == "resource":
        return list(RESOURCE_FIELD_NAMES)
    return []


@dataclass
class Report:
    """A user-filed correction or abuse report against a published entity."""

    type: str
    target_id: str
    message: str
    reporter_email: str | None = None
    field: str | None = None
    new_value: str | None = None
    source: str | None = None
    status: str = "pending"
    id: str | None = None
    created_at: datetime | None = None
    reviewed_at: datetime | None = None
    reviewed_by: str | None = None
    admin_notes: str | None = None

    def __post_init__(self) -> None:
        if self.type not in REPORT_TYPES:
            raise ValueError(f"Invalid report type: {self.type}")
        if self.status not in REPORT_STATUSES:
            raise ValueError(f"Invalid report status: {self.status}")
