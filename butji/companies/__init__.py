"""Companies: published entries, submissions, intake and payload cleaning."""

from butji.companies.cleaning import (
    clean_citations,
    clean_company_payload,
    clean_controversies,
    parse_controversies,
)
from butji.companies.intake import build_company_submission
from butji.companies.repository import CompanyRepository, CompanySubmissionRepository
from butji.companies.schemas import COMPANY_TAGS, Company, CompanySubmission
from butji.companies.service import CompanyService

__all__ = [
    "COMPANY_TAGS",
    "Company",
    "CompanyRepository",
    "CompanyService",
    "CompanySubmission",
    "CompanySubmissionRepository",
    "build_company_submission",
    "clean_citations",
    "clean_company_payload",
    "clean_controversies",
    "parse_controversies",
]
