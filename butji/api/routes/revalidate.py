"""Cache revalidation trigger."""

from fastapi import APIRouter, Depends, HTTPException, Query
import structlog

from butji.api.dependencies import get_revalidator
from butji.api.models import ErrorResponse, RevalidateResponse
from butji.revalidate import Revalidator

logger = structlog.get_logger(__name__)
router = APIRouter()


# TODO: require the admin key once the site's revalidation cron sends one
@router.post(
    "/revalidate",
    response_model=RevalidateResponse,
    responses={500: {"model": ErrorResponse}},
    summary="Invalidate cached pages for a path",
)
async def revalidate(
    path: str = Query(default="/"),
    revalidator: Revalidator = Depends(get_revalidator),
) -> RevalidateResponse:
    try:
        result = await revalidator.revalidate(path or "/")
        return RevalidateResponse(**result)
    except Exception as e:
        logger.error(f"Error revalidating: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Error revalidating")
