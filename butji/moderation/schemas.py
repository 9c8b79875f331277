"""Schema definitions for moderation commands."""

from dataclasses import dataclass
from enum import Enum

from butji.moderation.edits import SubmissionEdits


class ModerationAction(str, Enum):
    """Admin actions on a submission."""

    APPROVE = "approve"
    REJECT = "reject"
    UPDATE = "update"


@dataclass
class ModerationCommand:
    """A fully validated admin action against one submission.

    Attributes:
        submission_id: Target submission.
        action: approve, reject or update.
        reviewer: Admin recorded on approve/reject (defaulted if None).
        rejection_reason: Recorded on reject (defaulted if None).
        edits: Field edits; required for update, optional for approve.
    """

    submission_id: str
    action: ModerationAction
    reviewer: str | None = None
    rejection_reason: str | None = None
    edits: SubmissionEdits | None = None
