"""Schema definitions for resources and resource submissions.

``Resource`` maps to the ``resources`` table (curated, slugged entries);
``ResourceSubmission`` maps to ``resource_submissions`` (user proposals
awaiting review). Approved submissions are listed publicly alongside
curated resources.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone

RESOURCE_CATEGORIES: frozenset[str] = frozenset({
    "tool",
    "website",
    "article",
    "community",
    "service",
    "extension",
    "other",
})

RESOURCE_TAGS: frozenset[str] = frozenset({
    "detection",
    "protection",
    "privacy",
    "verification",
    "education",
    "advocacy",
    "research",
    "legal",
})

SUBMISSION_STATUSES: frozenset[str] = frozenset({
    "pending",
    "approved",
    "rejected",
})


@dataclass
class Resource:
    """A publicly listed resource."""

    id: str
    title: str
    description: str
    url: str
    category: str
    tags: list[str] = field(default_factory=list)
    slug: str | None = None
    featured: bool = False
    approved: bool = True
    submitted_at: datetime | None = None
    submitted_by: str | None = None


@dataclass
class ResourceSubmission:
    """A user-proposed resource awaiting (or past) admin review.

    Attributes:
        id: ``submission-<epoch ms>-<random>`` identifier.
        status: pending, approved or rejected.
        reviewed_at: Set only once status leaves pending.
        reviewed_by: Set only once status leaves pending.
        rejection_reason: Set only on rejection.
    """

    id: str
    title: str
    description: str
    url: str
    category: str
    tags: list[str] = field(default_factory=list)
    featured: bool = False
    status: str = "pending"
    submitted_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
    submitted_by: str | None = None
    reviewed_at: datetime | None = None
    reviewed_by: str | None = None
    rejection_reason: str | None = None

    def __post_init__(self) -> None:
        if self.status not in SUBMISSION_STATUSES:
            raise ValueError(
                f"Invalid status {self.status!r}. "
                f"Must be one of: {sorted(SUBMISSION_STATUSES)}"
            )

    @property
    def approved(self) -> bool:
        return self.status == "approved"

    def to_resource(self) -> Resource:
        """Project an approved submission onto the public resource shape."""
        return Resource(
            id=self.id,
            title=self.title,
            description=self.description,
            url=self.url,
            category=self.category,
            tags=list(self.tags),
            featured=self.featured,
            approved=True,
            submitted_at=self.submitted_at,
            submitted_by=self.submitted_by,
        )
