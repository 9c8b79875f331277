"""Public company submission intake."""

from typing import Any

from butji.companies.cleaning import clean_citations, clean_controversies
from butji.companies.schemas import COMPANY_TAGS, CompanySubmission
from butji.errors import ValidationError
from butji.validation import filter_allowed, validate_url


def _clean_names(values: list[str] | None) -> list[str]:
    return [v.strip() for v in values or [] if isinstance(v, str) and v.strip()]


def build_company_submission(
    name: str | None,
    description: str | None,
    website: str | None = None,
    founders: list[str] | None = None,
    ceo: str | None = None,
    founded_year: int | None = None,
    funding: str | dict[str, Any] | None = None,
    valuation: str | None = None,
    products: list[str] | None = None,
    controversies: Any = None,
    layoffs: list[dict[str, Any]] | None = None,
    tags: list[str] | None = None,
    citations: Any = None,
    submitted_by: str | None = None,
) -> CompanySubmission:
    """Validate intake fields and build a pending company submission.

    The store assigns the identifier on insert.

    Raises:
        ValidationError: On a missing name/description or a malformed website.
    """
    if not (name and name.strip() and description and description.strip()):
        raise ValidationError("Missing required fields")

    clean_website = validate_url(website) if website and website.strip() else None

    return CompanySubmission(
        name=name.strip(),
        description=description.strip(),
        website=clean_website,
        founders=_clean_names(founders),
        ceo=(ceo or "").strip() or None,
        founded_year=founded_year or None,
        funding=funding or None,
        valuation=(valuation or "").strip() or None,
        products=_clean_names(products),
        controversies=clean_controversies(controversies),
        layoffs=layoffs or None,
        tags=filter_allowed(tags, COMPANY_TAGS),
        citations=clean_citations(citations) or None,
        status="pending",
        submitted_by=(submitted_by or "").strip() or None,
    )
