"""Public resource listing."""

from fastapi import APIRouter, Depends, HTTPException, Response
import structlog

from butji.api.dependencies import get_resource_repository
from butji.api.models import ErrorResponse, ResourceItem
from butji.resources.repository import ResourceRepository

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.get(
    "/resources",
    response_model=list[ResourceItem],
    responses={500: {"model": ErrorResponse}},
    summary="List approved resources",
)
async def list_resources(
    response: Response,
    repo: ResourceRepository = Depends(get_resource_repository),
) -> list[ResourceItem]:
    response.headers["Cache-Control"] = "no-store"
    try:
        resources = await repo.list_approved()
        return [ResourceItem.model_validate(r) for r in resources]
    except Exception as e:
        logger.error(f"Failed to list resources: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch resources")


@router.get(
    "/resources/{resource_ref}",
    response_model=ResourceItem,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Get a resource by id or slug",
)
async def get_resource(
    resource_ref: str,
    repo: ResourceRepository = Depends(get_resource_repository),
) -> ResourceItem:
    try:
        resource = await repo.get_by_id(resource_ref) or await repo.get_by_slug(resource_ref)
        if resource is None:
            raise HTTPException(status_code=404, detail="Resource not found")
        return ResourceItem.model_validate(resource)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch resource: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch resource")
