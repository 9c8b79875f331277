"""Resource submission endpoints: public intake and admin moderation."""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from starlette.requests import Request
import structlog

from butji.api.auth import verify_api_key
from butji.api.dependencies import (
    get_metrics_collector,
    get_resource_submission_repository,
    get_resource_workflow,
)
from butji.api.models import (
    ErrorResponse,
    MessageResponse,
    ModerationRequest,
    ResourceSubmissionItem,
    ResourceSubmitRequest,
    ResourceSubmitResponse,
)
from butji.api.rate_limit import limiter, public_write_limit
from butji.errors import NotFoundError, ValidationError
from butji.moderation.edits import ResourceSubmissionEdits
from butji.moderation.workflow import ModerationWorkflow
from butji.observability.metrics import MetricsCollector
from butji.resources.intake import build_resource_submission
from butji.resources.repository import ResourceSubmissionRepository

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.post(
    "/submissions",
    response_model=ResourceSubmitResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Submit a resource for review",
)
@limiter.limit(public_write_limit)
async def submit_resource(
    request: Request,
    body: ResourceSubmitRequest,
    repo: ResourceSubmissionRepository = Depends(get_resource_submission_repository),
    metrics: MetricsCollector = Depends(get_metrics_collector),
) -> ResourceSubmitResponse:
    try:
        submission = build_resource_submission(
            title=body.title,
            description=body.description,
            url=body.url,
            category=body.category,
            tags=body.tags,
            submitted_by=body.submitted_by,
        )
        created = await repo.create(submission)
        metrics.submissions_received.labels(kind="resource").inc()
        logger.info("Resource submission received", submission_id=created.id)
        return ResourceSubmitResponse(
            message="Submission received! It will be reviewed by an admin.",
            submission=ResourceSubmissionItem.model_validate(created),
        )
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to create submission: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to create submission")


@router.get(
    "/submissions",
    response_model=list[ResourceSubmissionItem],
    responses={401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="List resource submissions",
)
async def list_submissions(
    status_filter: str | None = Query(default=None, alias="status"),
    api_key: str = Depends(verify_api_key),
    repo: ResourceSubmissionRepository = Depends(get_resource_submission_repository),
) -> list[ResourceSubmissionItem]:
    try:
        submissions = await repo.list_submissions(status_filter)
        return [ResourceSubmissionItem.model_validate(s) for s in submissions]
    except Exception as e:
        logger.error(f"Failed to list submissions: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch submissions")


@router.patch(
    "/submissions/{submission_id}",
    response_model=MessageResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Approve, reject or edit a resource submission",
)
async def moderate_submission(
    submission_id: str,
    body: ModerationRequest,
    api_key: str = Depends(verify_api_key),
    workflow: ModerationWorkflow = Depends(get_resource_workflow),
) -> MessageResponse:
    try:
        command = body.to_command(submission_id, ResourceSubmissionEdits)
        message = await workflow.apply(command)
        return MessageResponse(message=message)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Submission not found")
    except Exception as e:
        logger.error(f"Failed to update submission: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to update submission")


@router.delete(
    "/submissions/{submission_id}",
    response_model=MessageResponse,
    responses={
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Delete a resource submission",
)
async def delete_submission(
    submission_id: str,
    api_key: str = Depends(verify_api_key),
    repo: ResourceSubmissionRepository = Depends(get_resource_submission_repository),
) -> MessageResponse:
    try:
        if not await repo.delete(submission_id):
            raise HTTPException(status_code=404, detail="Submission not found")
        logger.info("Resource submission deleted", submission_id=submission_id)
        return MessageResponse(message="Submission deleted")
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to delete submission: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to delete submission")
