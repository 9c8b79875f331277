"""Resources: curated entries, user submissions and their intake.

Components:
- Resource / ResourceSubmission: Dataclasses mapping to their tables
- ResourceRepository: Public listing (curated + approved submissions)
- ResourceSubmissionRepository: Submission CRUD used by moderation
- build_resource_submission: Intake validation for public submissions
"""

from butji.resources.intake import build_resource_submission
from butji.resources.repository import ResourceRepository, ResourceSubmissionRepository
from butji.resources.schemas import (
    RESOURCE_CATEGORIES,
    RESOURCE_TAGS,
    SUBMISSION_STATUSES,
    Resource,
    ResourceSubmission,
)

__all__ = [
    "RESOURCE_CATEGORIES",
    "RESOURCE_TAGS",
    "SUBMISSION_STATUSES",
    "Resource",
    "ResourceRepository",
    "ResourceSubmission",
    "ResourceSubmissionRepository",
    "build_resource_submission",
]
