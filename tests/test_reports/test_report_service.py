"""Tests for report intake and triage."""

from unittest.mock import AsyncMock

import pytest

from butji.errors import NotFoundError, ValidationError
from butji.reports.schemas import Report, field_names_for
from butji.reports.service import ReportService


@pytest.fixture
def repo():
    repo = AsyncMock()

    async def create(report):
        report.id = "report-1"
        return report

    repo.create = AsyncMock(side_effect=create)
    repo.get_by_id = AsyncMock(return_value=None)
    repo.update_status = AsyncMock(return_value=None)
    repo.list_reports = AsyncMock(return_value=[])
    return repo


@pytest.fixture
def companies():
    companies = AsyncMock()
    companies.get_by_id = AsyncMock(return_value=object())
    return companies


@pytest.fixture
def resources():
    resources = AsyncMock()
    resources.get_by_id = AsyncMock(return_value=None)
    return resources


@pytest.fixture
def service(repo, companies, resources, metrics):
    return ReportService(repo, companies=companies, resources=resources, metrics=metrics)


class TestCreate:
    @pytest.mark.asyncio
    async def test_creates_pending_report(self, service, repo, metrics):
        report = await service.create(
            "company",
            "company-1",
            "<b>CEO</b> changed",
            reporter_email="Me@Example.org",
            field="CEO",
            new_value="New Person",
            source="https://news.example/ceo",
        )

        assert report.id == "report-1"
        assert report.status == "pending"
        assert report.message == "CEO changed"
        assert report.reporter_email == "me@example.org"
        assert metrics.reports_received.labels(type="company")._value.get() == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "args,message",
        [
            ((None, "c1", "msg"), "Missing required fields"),
            (("company", "", "msg"), "Missing required fields"),
            (("company", "c1", None), "Missing required fields"),
            (("person", "c1", "msg"), "Invalid type"),
            (("company", "c1", "   "), "Message is required"),
            (("company", "c1", "<script>x</script>"), "Message is required"),
        ],
    )
    async def test_rejects_bad_input(self, service, repo, args, message):
        with pytest.raises(ValidationError, match=message):
            await service.create(*args)
        repo.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_message_over_cap(self, service):
        with pytest.raises(ValidationError, match="maximum length of 10000"):
            await service.create("company", "c1", "x" * 10001)

    @pytest.mark.asyncio
    async def test_unknown_target(self, service, repo):
        with pytest.raises(ValidationError, match="Resource not found"):
            await service.create("resource", "missing", "Broken link")
        repo.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_target_check_skipped_without_repositories(self, repo, metrics):
        service = ReportService(repo, metrics=metrics)
        report = await service.create("resource", "anything", "Broken link")
        assert report.target_id == "anything"


class TestUpdateStatus:
    @pytest.mark.asyncio
    async def test_records_review(self, service, repo):
        repo.update_status.return_value = Report(
            type="company", target_id="c1", message="m", status="resolved", id="r1"
        )

        report = await service.update_status("r1", "resolved", "admin", "<i>Fixed</i>")

        args = repo.update_status.call_args.args
        assert args[0:3] == ("r1", "resolved", "admin")
        assert args[4] == "Fixed"
        assert report.status == "resolved"

    @pytest.mark.asyncio
    async def test_missing_fields(self, service):
        with pytest.raises(ValidationError, match="status and reviewedBy are required"):
            await service.update_status("r1", "resolved", None)

    @pytest.mark.asyncio
    async def test_invalid_status(self, service):
        with pytest.raises(
            ValidationError,
            match="Must be one of: pending, reviewed, resolved, dismissed",
        ):
            await service.update_status("r1", "closed", "admin")

    @pytest.mark.asyncio
    async def test_unknown_report(self, service):
        with pytest.raises(NotFoundError):
            await service.update_status("missing", "dismissed", "admin")


@pytest.mark.asyncio
async def test_get_unknown_report(service):
    with pytest.raises(NotFoundError):
        await service.get("missing")


def test_field_names_for():
    assert "CEO" in field_names_for("company")
    assert field_names_for("resource")[0] == "Title"
    assert field_names_for("other") == []
