"""Company write paths with controversy/citation cleaning applied."""

import logging
from dataclasses import fields
from typing import Any

from butji.companies.cleaning import clean_company_payload
from butji.companies.repository import CompanyRepository
from butji.companies.schemas import Company
from butji.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

_COMPANY_FIELDS = frozenset(f.name for f in fields(Company))


class CompanyService:
    """Admin create/update/delete for published companies.

    Both create and update run the payload through the cleaner
    unconditionally; the cleaner is idempotent so re-cleaning stored
    data is harmless.
    """

    def __init__(self, repository: CompanyRepository) -> None:
        self._repo = repository

    @property
    def repository(self) -> CompanyRepository:
        return self._repo

    async def create(self, payload: dict[str, Any]) -> Company:
        """Create a company from a snake_case payload.

        Raises:
            ValidationError: If name or description is missing.
        """
        cleaned = clean_company_payload(payload)
        if not cleaned.get("name") or not cleaned.get("description"):
            raise ValidationError("Missing required fields: name and description")

        company = Company(
            **{k: v for k, v in cleaned.items() if k in _COMPANY_FIELDS and v is not None}
        )
        return await self._repo.create(company)

    async def update(self, company_id: str, changes: dict[str, Any]) -> Company:
        """Apply a partial update.

        Raises:
            NotFoundError: If no company has ``company_id``.
            ValidationError: If a required field is cleared.
        """
        cleaned = clean_company_payload(changes)
        try:
            updated = await self._repo.update(company_id, cleaned)
        except ValueError as e:
            raise ValidationError(str(e)) from e
        if updated is None:
            raise NotFoundError("Company", company_id)
        logger.info("Company updated: %s", company_id)
        return updated

    async def delete(self, company_id: str) -> None:
        """Delete a company immediately (no soft delete)."""
        if not await self._repo.delete(company_id):
            raise NotFoundError("Company", company_id)
        logger.info("Company deleted: %s", company_id)
