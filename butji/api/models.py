"""
Request and response models for the directory API.

Bodies and responses use camelCase field names on the wire; Python code
uses the snake_case attribute names.
"""

import datetime as dt
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from butji.errors import ValidationError
from butji.moderation.edits import SubmissionEdits
from butji.moderation.schemas import ModerationAction, ModerationCommand


class APIModel(BaseModel):
    """Base model with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ErrorResponse(BaseModel):
    """Error body returned for every non-2xx response."""

    detail: str = Field(..., description="Human-readable error message")


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str


class SuccessResponse(BaseModel):
    success: bool = True


# ── Resources ─────────────────────────────────────────


class ResourceItem(APIModel):
    """A publicly listed resource."""

    id: str
    title: str
    description: str
    url: str
    category: str
    tags: list[str] = Field(default_factory=list)
    slug: str | None = None
    featured: bool = False
    approved: bool = True
    submitted_at: dt.datetime | None = None
    submitted_by: str | None = None


class ResourceSubmissionItem(APIModel):
    """A resource submission as seen by admins."""

    id: str
    title: str
    description: str
    url: str
    category: str
    tags: list[str] = Field(default_factory=list)
    featured: bool = False
    status: str
    submitted_at: dt.datetime
    submitted_by: str | None = None
    reviewed_at: dt.datetime | None = None
    reviewed_by: str | None = None
    rejection_reason: str | None = None


class ResourceSubmitRequest(APIModel):
    """Public resource submission.

    Fields are optional at the schema level so missing values surface as
    a 400 with a domain message rather than a 422.
    """

    title: str | None = None
    description: str | None = None
    url: str | None = None
    category: str | None = None
    tags: list[str] | None = None
    submitted_by: str | None = None


class ResourceSubmitResponse(BaseModel):
    message: str
    submission: ResourceSubmissionItem


# ── Moderation ────────────────────────────────────────


class ModerationRequest(APIModel):
    """Admin action on a submission.

    ``edits`` is validated against the submission kind's edit model by
    the route handler.
    """

    action: str | None = Field(default=None, description="approve, reject or update")
    edits: dict[str, Any] | None = None
    reviewed_by: str | None = None
    rejection_reason: str | None = None

    def to_command(
        self, submission_id: str, edits_model: type[SubmissionEdits]
    ) -> ModerationCommand:
        """
        Validate the action and edits into a moderation command.

        Raises:
            ValidationError: Unknown action or an edit of the wrong type.
        """
        try:
            action = ModerationAction(self.action)
        except ValueError:
            raise ValidationError(
                'Invalid action. Must be "approve", "reject", or "update"'
            ) from None

        edits = None
        if self.edits is not None:
            try:
                edits = edits_model.model_validate(self.edits)
            except PydanticValidationError as e:
                first = e.errors()[0]
                field = ".".join(str(part) for part in first["loc"])
                raise ValidationError(f"Invalid edit for '{field}': {first['msg']}") from e

        return ModerationCommand(
            submission_id=submission_id,
            action=action,
            reviewer=self.reviewed_by,
            rejection_reason=self.rejection_reason,
            edits=edits,
        )


# ── Companies ─────────────────────────────────────────


class CompanyItem(APIModel):
    """A published company."""

    id: str
    name: str
    description: str
    website: str | None = None
    logo_url: str | None = None
    founders: list[str] = Field(default_factory=list)
    ceo: str | None = None
    founded_year: int | None = None
    funding: str | dict[str, Any] | None = None
    valuation: str | None = None
    products: list[str] = Field(default_factory=list)
    controversies: list[dict[str, Any]] | None = None
    layoffs: list[dict[str, Any]] | None = None
    tags: list[str] = Field(default_factory=list)
    citations: dict[str, list[dict[str, Any]]] | None = None
    featured: bool = False
    approved: bool = True
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None


class CompanySubmissionItem(CompanyItem):
    """A company submission as seen by admins."""

    approved: bool = False
    status: str
    submitted_at: dt.datetime
    submitted_by: str | None = None
    reviewed_at: dt.datetime | None = None
    reviewed_by: str | None = None
    rejection_reason: str | None = None


class CompanyPayload(APIModel):
    """Company fields accepted on admin create/update and public submit.

    On update only the fields present in the body are written.
    """

    name: str | None = None
    description: str | None = None
    website: str | None = None
    logo_url: str | None = None
    founders: list[str] | None = None
    ceo: str | None = None
    founded_year: int | None = None
    funding: str | dict[str, Any] | None = None
    valuation: str | None = None
    products: list[str] | None = None
    controversies: list[dict[str, Any]] | str | None = None
    layoffs: list[dict[str, Any]] | None = None
    tags: list[str] | None = None
    citations: dict[str, Any] | None = None
    featured: bool | None = None
    approved: bool | None = None


class CompanySubmitRequest(CompanyPayload):
    submitted_by: str | None = None


class CompanySubmitResponse(BaseModel):
    success: bool = True
    id: str


# ── News ──────────────────────────────────────────────


class NewsArticleItem(APIModel):
    id: str
    title: str
    description: str | None = None
    url: str
    source: str
    source_url: str | None = None
    image_url: str | None = None
    published_at: dt.datetime
    fetched_at: dt.datetime | None = None
    tags: list[str] = Field(default_factory=list)
    featured: bool = False
    approved: bool = True


class NewsSourceItem(APIModel):
    id: str
    name: str
    url: str
    type: str
    enabled: bool
    last_fetched: dt.datetime | None = None
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None


class NewsSourceCreateRequest(APIModel):
    name: str | None = None
    url: str | None = None
    type: str | None = None
    enabled: bool | None = None


class NewsSourceUpdateRequest(APIModel):
    enabled: bool


class NewsFetchResponse(BaseModel):
    """Ingestion outcome; ``errors`` is omitted when nothing failed."""

    success: bool = True
    fetched: int
    skipped: int
    errors: list[str] | None = None


# ── Reports ───────────────────────────────────────────


class ReportItem(APIModel):
    id: str
    type: str
    target_id: str
    reporter_email: str | None = None
    field: str | None = None
    new_value: str | None = None
    source: str | None = None
    message: str
    status: str
    created_at: dt.datetime | None = None
    reviewed_at: dt.datetime | None = None
    reviewed_by: str | None = None
    admin_notes: str | None = None


class ReportCreateRequest(APIModel):
    type: str | None = None
    target_id: str | None = None
    reporter_email: str | None = None
    field: str | None = None
    new_value: str | None = None
    source: str | None = None
    message: str | None = None


class ReportUpdateRequest(APIModel):
    status: str | None = None
    reviewed_by: str | None = None
    admin_notes: str | None = None


class ReportFieldsResponse(BaseModel):
    type: str
    fields: list[str]


# ── Revalidation / health ─────────────────────────────


class RevalidateResponse(BaseModel):
    revalidated: bool
    path: str
    now: int = Field(..., description="Epoch milliseconds")


class ComponentHealth(BaseModel):
    status: str = Field(..., description="healthy or unhealthy")
    latency_ms: float | None = None
    details: dict[str, Any] | None = None


class HealthResponse(BaseModel):
    status: str = Field(..., description="healthy or degraded")
    version: str
    components: dict[str, ComponentHealth] = Field(default_factory=dict)
