"""Company submission moderation endpoints (admin only)."""

from fastapi import APIRouter, Depends, HTTPException, Query
import structlog

from butji.api.auth import verify_api_key
from butji.api.dependencies import get_company_submission_repository, get_company_workflow
from butji.api.models import (
    CompanySubmissionItem,
    ErrorResponse,
    MessageResponse,
    ModerationRequest,
)
from butji.companies.repository import CompanySubmissionRepository
from butji.errors import NotFoundError, ValidationError
from butji.moderation.edits import CompanySubmissionEdits
from butji.moderation.workflow import ModerationWorkflow

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.get(
    "/company-submissions",
    response_model=list[CompanySubmissionItem],
    responses={401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="List company submissions",
)
async def list_company_submissions(
    status_filter: str | None = Query(default=None, alias="status"),
    api_key: str = Depends(verify_api_key),
    repo: CompanySubmissionRepository = Depends(get_company_submission_repository),
) -> list[CompanySubmissionItem]:
    try:
        submissions = await repo.list_submissions(status_filter)
        return [CompanySubmissionItem.model_validate(s) for s in submissions]
    except Exception as e:
        logger.error(f"Failed to list company submissions: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch company submissions")


@router.patch(
    "/company-submissions/{submission_id}",
    response_model=MessageResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Approve, reject or edit a company submission",
)
async def moderate_company_submission(
    submission_id: str,
    body: ModerationRequest,
    api_key: str = Depends(verify_api_key),
    workflow: ModerationWorkflow = Depends(get_company_workflow),
) -> MessageResponse:
    try:
        command = body.to_command(submission_id, CompanySubmissionEdits)
        message = await workflow.apply(command)
        return MessageResponse(message=message)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Submission not found")
    except Exception as e:
        logger.error(f"Failed to update company submission: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to update company submission")


@router.delete(
    "/company-submissions/{submission_id}",
    response_model=MessageResponse,
    responses={
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Delete a company submission",
)
async def delete_company_submission(
    submission_id: str,
    api_key: str = Depends(verify_api_key),
    repo: CompanySubmissionRepository = Depends(get_company_submission_repository),
) -> MessageResponse:
    try:
        if not await repo.delete(submission_id):
            raise HTTPException(status_code=404, detail="Submission not found")
        logger.info("Company submission deleted", submission_id=submission_id)
        return MessageResponse(message="Submission deleted")
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to delete company submission: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to delete company submission")
