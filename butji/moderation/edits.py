"""Partial-update structures for admin edits.

An edit model distinguishes "field not supplied" (absent from
``model_fields_set``, left untouched) from "field explicitly cleared"
(supplied as ``null``). Clearing a required field is a validation error.
"""

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from butji.companies.cleaning import clean_company_payload
from butji.errors import ValidationError
from butji.resources.schemas import RESOURCE_CATEGORIES, RESOURCE_TAGS
from butji.validation import filter_allowed, validate_url


class SubmissionEdits(BaseModel):
    """Base class for field-level edits to a submission."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    required_fields: ClassVar[frozenset[str]] = frozenset()

    def is_empty(self) -> bool:
        return not self.model_fields_set

    def changes(self) -> dict[str, Any]:
        """Supplied fields keyed by column name.

        Raises:
            ValidationError: If a required field is explicitly cleared.
        """
        changes = {name: getattr(self, name) for name in self.model_fields_set}
        for name, value in changes.items():
            if value is None and name in self.required_fields:
                raise ValidationError(f"Field '{to_camel(name)}' cannot be cleared")
            if isinstance(value, str) and name in self.required_fields and not value.strip():
                raise ValidationError(f"Field '{to_camel(name)}' cannot be empty")
        return changes


class ResourceSubmissionEdits(SubmissionEdits):
    """Edits an admin may apply to a resource submission."""

    required_fields: ClassVar[frozenset[str]] = frozenset({
        "title", "description", "url", "category", "tags",
    })

    title: str | None = None
    description: str | None = None
    url: str | None = None
    category: str | None = None
    tags: list[str] | None = None

    def changes(self) -> dict[str, Any]:
        changes = super().changes()
        for name in ("title", "description"):
            if name in changes:
                changes[name] = changes[name].strip()
        if "url" in changes:
            changes["url"] = validate_url(changes["url"])
        if "category" in changes and changes["category"] not in RESOURCE_CATEGORIES:
            raise ValidationError("Invalid category")
        if "tags" in changes:
            changes["tags"] = filter_allowed(changes["tags"], RESOURCE_TAGS)
        return changes


class CompanySubmissionEdits(SubmissionEdits):
    """Edits an admin may apply to a company submission.

    Controversies and citations are cleaned before they reach the store.
    """

    required_fields: ClassVar[frozenset[str]] = frozenset({
        "name", "description", "founders", "products", "tags",
    })

    name: str | None = None
    description: str | None = None
    website: str | None = None
    founders: list[str] | None = None
    ceo: str | None = None
    founded_year: int | None = None
    funding: str | dict[str, Any] | None = None
    valuation: str | None = None
    products: list[str] | None = None
    controversies: list[dict[str, Any]] | str | None = None
    layoffs: list[dict[str, Any]] | None = None
    tags: list[str] | None = None
    citations: dict[str, list[dict[str, Any]]] | None = None

    def changes(self) -> dict[str, Any]:
        changes = super().changes()
        website = changes.get("website")
        if website is not None:
            changes["website"] = validate_url(website) if website.strip() else None
        return clean_company_payload(changes)
