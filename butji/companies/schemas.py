"""Schema definitions for companies and company submissions.

Controversies and citations are JSON-shaped (``TypedDict``) because they
travel through the API and the JSON text columns unchanged apart from
cleaning.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, TypedDict

COMPANY_TAGS: frozenset[str] = frozenset({
    "llm",
    "image-generation",
    "code-generation",
    "chatbot",
    "automation",
    "surveillance",
    "data-scraping",
    "layoffs",
    "controversy",
    "billionaire-owned",
    "major-player",
})

# Citations for controversies live inside each controversy, never in the
# field-keyed citation mapping.
RESERVED_CITATION_KEY = "controversies"


class Citation(TypedDict, total=False):
    url: str
    title: str
    date: str


class Controversy(TypedDict, total=False):
    text: str
    date: str
    citations: list[Citation]


@dataclass
class CompanyProfile:
    """Payload fields shared by published companies and submissions."""

    name: str
    description: str
    website: str | None = None
    logo_url: str | None = None
    founders: list[str] = field(default_factory=list)
    ceo: str | None = None
    founded_year: int | None = None
    funding: str | dict[str, Any] | None = None
    valuation: str | None = None
    products: list[str] = field(default_factory=list)
    controversies: list[Controversy] | None = None
    layoffs: list[dict[str, Any]] | None = None
    tags: list[str] = field(default_factory=list)
    citations: dict[str, list[Citation]] | None = None
    featured: bool = False


@dataclass
class Company(CompanyProfile):
    """A published company entry."""

    id: str | None = None
    approved: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class CompanySubmission(CompanyProfile):
    """A user-proposed company awaiting (or past) admin review."""

    id: str | None = None
    status: str = "pending"
    submitted_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
    submitted_by: str | None = None
    reviewed_at: datetime | None = None
    reviewed_by: str | None = None
    rejection_reason: str | None = None

    @property
    def approved(self) -> bool:
        return self.status == "approved"
