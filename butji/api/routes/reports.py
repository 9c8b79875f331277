"""Report endpoints: public filing, listing and admin triage."""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from starlette.requests import Request
import structlog

from butji.api.auth import verify_api_key
from butji.api.dependencies import get_report_service
from butji.api.models import (
    ErrorResponse,
    ReportCreateRequest,
    ReportFieldsResponse,
    ReportItem,
    ReportUpdateRequest,
)
from butji.api.rate_limit import limiter, public_write_limit
from butji.errors import NotFoundError, ValidationError
from butji.reports.schemas import field_names_for
from butji.reports.service import ReportService

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.post(
    "/reports",
    response_model=ReportItem,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="File a report against a company or resource",
)
@limiter.limit(public_write_limit)
async def create_report(
    request: Request,
    body: ReportCreateRequest,
    service: ReportService = Depends(get_report_service),
) -> ReportItem:
    try:
        report = await service.create(
            report_type=body.type,
            target_id=body.target_id,
            message=body.message,
            reporter_email=body.reporter_email,
            field=body.field,
            new_value=body.new_value,
            source=body.source,
        )
        return ReportItem.model_validate(report)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to create report: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to create report")


@router.get(
    "/reports",
    response_model=list[ReportItem],
    responses={500: {"model": ErrorResponse}},
    summary="List reports, newest first",
)
async def list_reports(
    status_filter: str | None = Query(default=None, alias="status"),
    report_type: str | None = Query(default=None, alias="type"),
    target_id: str | None = Query(default=None, alias="targetId"),
    service: ReportService = Depends(get_report_service),
) -> list[ReportItem]:
    try:
        reports = await service.list_reports(status_filter, report_type, target_id)
        return [ReportItem.model_validate(r) for r in reports]
    except Exception as e:
        logger.error(f"Failed to list reports: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch reports")


@router.get(
    "/reports/fields",
    response_model=ReportFieldsResponse,
    summary="Field names a reporter may pick for a target type",
)
async def report_fields(
    report_type: str = Query(default="company", alias="type"),
) -> ReportFieldsResponse:
    return ReportFieldsResponse(type=report_type, fields=field_names_for(report_type))


@router.get(
    "/reports/{report_id}",
    response_model=ReportItem,
    responses={
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Get a report",
)
async def get_report(
    report_id: str,
    api_key: str = Depends(verify_api_key),
    service: ReportService = Depends(get_report_service),
) -> ReportItem:
    try:
        return ReportItem.model_validate(await service.get(report_id))
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Report not found")
    except Exception as e:
        logger.error(f"Failed to fetch report: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch report")


@router.patch(
    "/reports/{report_id}",
    response_model=ReportItem,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Record an admin review of a report",
)
async def update_report(
    report_id: str,
    body: ReportUpdateRequest,
    api_key: str = Depends(verify_api_key),
    service: ReportService = Depends(get_report_service),
) -> ReportItem:
    try:
        report = await service.update_status(
            report_id,
            status=body.status,
            reviewed_by=body.reviewed_by,
            admin_notes=body.admin_notes,
        )
        return ReportItem.model_validate(report)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Report not found")
    except Exception as e:
        logger.error(f"Failed to update report: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to update report")
