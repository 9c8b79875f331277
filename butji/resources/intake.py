"""Public resource submission intake.

Validates a raw submission, filters its tags to the closed set and
builds a pending ``ResourceSubmission`` ready for insertion.
"""

import random
import string
import time

from butji.errors import ValidationError
from butji.resources.schemas import RESOURCE_CATEGORIES, RESOURCE_TAGS, ResourceSubmission
from butji.validation import filter_allowed, validate_url

ANONYMOUS_SUBMITTER = "Anonymous"

_ID_ALPHABET = string.ascii_lowercase + string.digits


def generate_submission_id() -> str:
    """``submission-<epoch ms>-<9 random base36 chars>``."""
    suffix = "".join(random.choices(_ID_ALPHABET, k=9))
    return f"submission-{int(time.time() * 1000)}-{suffix}"


def build_resource_submission(
    title: str | None,
    description: str | None,
    url: str | None,
    category: str | None,
    tags: list[str] | None = None,
    submitted_by: str | None = None,
) -> ResourceSubmission:
    """Validate intake fields and build a pending submission.

    Unknown tags are dropped rather than rejected.

    Raises:
        ValidationError: On missing required fields, a malformed URL or
            an unknown category.
    """
    if not all(
        value and value.strip() for value in (title, description, url, category)
    ):
        raise ValidationError("Missing required fields")

    clean_url = validate_url(url)

    if category not in RESOURCE_CATEGORIES:
        raise ValidationError("Invalid category")

    return ResourceSubmission(
        id=generate_submission_id(),
        title=title.strip(),
        description=description.strip(),
        url=clean_url,
        category=category,
        tags=filter_allowed(tags, RESOURCE_TAGS),
        status="pending",
        submitted_by=(submitted_by or "").strip() or ANONYMOUS_SUBMITTER,
    )
