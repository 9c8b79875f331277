"""Submission moderation workflow.

A submission moves ``pending → approved`` or ``pending → rejected``; an
``update`` rewrites payload fields without touching status. Each
transition is a single-row write with last-write-wins semantics: there
is no optimistic-concurrency check and no guard against approving an
already-approved submission (the second approval refreshes
``reviewed_at``).
"""

import logging
from datetime import datetime, timezone
from typing import Any, Protocol

from butji.errors import NotFoundError, ValidationError
from butji.moderation.config import ModerationConfig
from butji.moderation.edits import SubmissionEdits
from butji.moderation.schemas import ModerationAction, ModerationCommand
from butji.observability.metrics import MetricsCollector, get_metrics

logger = logging.getLogger(__name__)


class SubmissionStore(Protocol):
    """Single-row write access to a submission table."""

    async def update_fields(self, submission_id: str, changes: dict[str, Any]) -> bool:
        ...


class ModerationWorkflow:
    """Applies approve/reject/update actions to one kind of submission.

    Args:
        store: Submission repository.
        kind: Label used in logs and metrics (``resource`` or ``company``).
        config: Default reviewer and rejection reason.
        metrics: Metrics collector (defaults to the process collector).
    """

    def __init__(
        self,
        store: SubmissionStore,
        kind: str,
        config: ModerationConfig | None = None,
        metrics: MetricsCollector | None = None,
    ) -> None:
        self._store = store
        self._kind = kind
        self._config = config or ModerationConfig()
        self._metrics = metrics or get_metrics()

    async def approve(
        self,
        submission_id: str,
        reviewer: str | None = None,
        edits: SubmissionEdits | None = None,
    ) -> None:
        """Merge optional edits, then mark the submission approved."""
        changes: dict[str, Any] = edits.changes() if edits is not None else {}
        changes.update(
            status="approved",
            reviewed_at=datetime.now(timezone.utc),
            reviewed_by=reviewer or self._config.default_reviewer,
        )
        await self._write(submission_id, changes, ModerationAction.APPROVE)

    async def reject(
        self,
        submission_id: str,
        reviewer: str | None = None,
        reason: str | None = None,
    ) -> None:
        """Mark the submission rejected with a reason."""
        changes = {
            "status": "rejected",
            "reviewed_at": datetime.now(timezone.utc),
            "reviewed_by": reviewer or self._config.default_reviewer,
            "rejection_reason": reason or self._config.default_rejection_reason,
        }
        await self._write(submission_id, changes, ModerationAction.REJECT)

    async def update(self, submission_id: str, edits: SubmissionEdits | None) -> None:
        """Overwrite only the edited fields; status is unchanged.

        Raises:
            ValidationError: If ``edits`` is absent or empty. Checked before
                the store is consulted, so it wins over NotFoundError.
        """
        if edits is None or edits.is_empty():
            raise ValidationError("Edits are required for update action")
        await self._write(submission_id, edits.changes(), ModerationAction.UPDATE)

    async def apply(self, command: ModerationCommand) -> str:
        """Dispatch a command and return the user-facing result message."""
        if command.action is ModerationAction.APPROVE:
            await self.approve(command.submission_id, command.reviewer, command.edits)
            return "Submission approved"
        if command.action is ModerationAction.REJECT:
            await self.reject(
                command.submission_id, command.reviewer, command.rejection_reason
            )
            return "Submission rejected"
        await self.update(command.submission_id, command.edits)
        return "Submission updated"

    async def _write(
        self,
        submission_id: str,
        changes: dict[str, Any],
        action: ModerationAction,
    ) -> None:
        updated = await self._store.update_fields(submission_id, changes)
        if not updated:
            raise NotFoundError("Submission", submission_id)

        self._metrics.moderation_actions.labels(kind=self._kind, action=action.value).inc()
        logger.info(
            "Moderation %s applied to %s submission %s",
            action.value,
            self._kind,
            submission_id,
        )
