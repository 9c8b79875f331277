"""Company endpoints: public listing, admin CRUD and public submission."""

from fastapi import APIRouter, Depends, HTTPException, status
from starlette.requests import Request
import structlog

from butji.api.auth import verify_api_key
from butji.api.dependencies import (
    get_company_service,
    get_company_submission_repository,
    get_metrics_collector,
)
from butji.api.models import (
    CompanyItem,
    CompanyPayload,
    CompanySubmitRequest,
    CompanySubmitResponse,
    ErrorResponse,
    SuccessResponse,
)
from butji.api.rate_limit import limiter, public_write_limit
from butji.companies.intake import build_company_submission
from butji.companies.repository import CompanySubmissionRepository
from butji.companies.service import CompanyService
from butji.errors import NotFoundError, ValidationError
from butji.observability.metrics import MetricsCollector

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.get(
    "/companies",
    response_model=list[CompanyItem],
    responses={500: {"model": ErrorResponse}},
    summary="List approved companies",
)
async def list_companies(
    service: CompanyService = Depends(get_company_service),
) -> list[CompanyItem]:
    try:
        companies = await service.repository.list_approved()
        return [CompanyItem.model_validate(c) for c in companies]
    except Exception as e:
        logger.error(f"Failed to list companies: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch companies")


@router.post(
    "/companies",
    response_model=CompanyItem,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Create a company",
)
async def create_company(
    body: CompanyPayload,
    api_key: str = Depends(verify_api_key),
    service: CompanyService = Depends(get_company_service),
) -> CompanyItem:
    try:
        company = await service.create(body.model_dump(exclude_unset=True))
        logger.info("Company created", company_id=company.id)
        return CompanyItem.model_validate(company)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to create company: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to create company")


@router.post(
    "/companies/submit",
    response_model=CompanySubmitResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Submit a company for review",
)
@limiter.limit(public_write_limit)
async def submit_company(
    request: Request,
    body: CompanySubmitRequest,
    repo: CompanySubmissionRepository = Depends(get_company_submission_repository),
    metrics: MetricsCollector = Depends(get_metrics_collector),
) -> CompanySubmitResponse:
    try:
        submission = build_company_submission(
            name=body.name,
            description=body.description,
            website=body.website,
            founders=body.founders,
            ceo=body.ceo,
            founded_year=body.founded_year,
            funding=body.funding,
            valuation=body.valuation,
            products=body.products,
            controversies=body.controversies,
            layoffs=body.layoffs,
            tags=body.tags,
            citations=body.citations,
            submitted_by=body.submitted_by,
        )
        created = await repo.create(submission)
        metrics.submissions_received.labels(kind="company").inc()
        logger.info("Company submission received", submission_id=created.id)
        return CompanySubmitResponse(id=created.id)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to create company submission: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to submit company")


@router.get(
    "/companies/{company_id}",
    response_model=CompanyItem,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Get a company",
)
async def get_company(
    company_id: str,
    service: CompanyService = Depends(get_company_service),
) -> CompanyItem:
    try:
        company = await service.repository.get_by_id(company_id)
        if company is None:
            raise HTTPException(status_code=404, detail="Company not found")
        return CompanyItem.model_validate(company)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch company: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch company")


@router.patch(
    "/companies/{company_id}",
    response_model=CompanyItem,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Update a company (partial)",
)
async def update_company(
    company_id: str,
    body: CompanyPayload,
    api_key: str = Depends(verify_api_key),
    service: CompanyService = Depends(get_company_service),
) -> CompanyItem:
    try:
        company = await service.update(company_id, body.model_dump(exclude_unset=True))
        return CompanyItem.model_validate(company)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Company not found")
    except Exception as e:
        logger.error(f"Failed to update company: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to update company")


@router.delete(
    "/companies/{company_id}",
    response_model=SuccessResponse,
    responses={
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Delete a company",
)
async def delete_company(
    company_id: str,
    api_key: str = Depends(verify_api_key),
    service: CompanyService = Depends(get_company_service),
) -> SuccessResponse:
    try:
        await service.delete(company_id)
        return SuccessResponse()
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Company not found")
    except Exception as e:
        logger.error(f"Failed to delete company: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to delete company")
