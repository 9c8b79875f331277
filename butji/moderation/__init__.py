"""Moderation: admin review of resource and company submissions."""

from butji.moderation.config import ModerationConfig
from butji.moderation.edits import (
    CompanySubmissionEdits,
    ResourceSubmissionEdits,
    SubmissionEdits,
)
from butji.moderation.schemas import ModerationAction, ModerationCommand
from butji.moderation.workflow import ModerationWorkflow

__all__ = [
    "CompanySubmissionEdits",
    "ModerationAction",
    "ModerationCommand",
    "ModerationConfig",
    "ModerationWorkflow",
    "ResourceSubmissionEdits",
    "SubmissionEdits",
]
