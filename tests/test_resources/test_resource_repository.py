"""Tests for resource repositories against a mocked database."""

import pytest

from butji.resources.repository import (
    ResourceRepository,
    ResourceSubmissionRepository,
    slugify,
)
from butji.resources.schemas import Resource


@pytest.mark.parametrize(
    "text,expected",
    [
        ("Have I Been Trained?", "have-i-been-trained"),
        ("  Spaces   and_underscores ", "spaces-and-underscores"),
        ("Ünïcode & symbols!!", "ncode-symbols"),
    ],
)
def test_slugify(text, expected):
    assert slugify(text) == expected


class TestResourceRepository:
    @pytest.mark.asyncio
    async def test_list_approved_unions_submissions(self, mock_database):
        mock_database.fetch.return_value = [
            {
                "id": "r1", "title": "Curated", "description": "d", "url": "https://a.example",
                "category": "tool", "tags": '["privacy"]', "slug": "curated",
                "featured": True, "approved": True, "submitted_at": None, "submitted_by": None,
            },
        ]
        resources = await ResourceRepository(mock_database).list_approved()

        sql = mock_database.fetch.call_args.args[0]
        assert "UNION ALL" in sql
        assert "status = 'approved'" in sql
        assert resources[0].tags == ["privacy"]
        assert resources[0].slug == "curated"

    @pytest.mark.asyncio
    async def test_get_by_id_falls_back_to_approved_submission(
        self, mock_database, resource_submission_row
    ):
        resource_submission_row["status"] = "approved"
        mock_database.fetchrow.side_effect = [None, resource_submission_row]

        resource = await ResourceRepository(mock_database).get_by_id(resource_submission_row["id"])
        assert resource.id == resource_submission_row["id"]
        assert resource.approved is True
        assert resource.slug is None

    @pytest.mark.asyncio
    async def test_unique_slug_appends_counter(self, mock_database):
        mock_database.fetchval.side_effect = ["taken", "taken-too", None]
        slug = await ResourceRepository(mock_database).unique_slug("glaze")
        assert slug == "glaze-2"

    @pytest.mark.asyncio
    async def test_create_generates_slug(self, mock_database):
        mock_database.fetchrow.return_value = {
            "id": "r9", "title": "Glaze Project", "description": "d",
            "url": "https://glaze.example", "category": "tool", "tags": "[]",
            "slug": "glaze-project", "featured": False, "approved": True,
        }
        await ResourceRepository(mock_database).create(
            Resource(id="", title="Glaze Project", description="d",
                     url="https://glaze.example", category="tool")
        )
        params = mock_database.fetchrow.call_args.args[1:]
        assert params[5] == "glaze-project"


class TestResourceSubmissionRepository:
    @pytest.mark.asyncio
    async def test_update_fields_builds_single_row_update(self, mock_database):
        mock_database.fetchrow.return_value = {"id": "s1"}
        repo = ResourceSubmissionRepository(mock_database)

        assert await repo.update_fields("s1", {"status": "approved", "tags": ["legal"]}) is True
        sql, *params = mock_database.fetchrow.call_args.args
        assert sql.startswith("UPDATE resource_submissions SET status = $1, tags = $2")
        assert params == ["approved", '["legal"]', "s1"]

    @pytest.mark.asyncio
    async def test_update_fields_unknown_id(self, mock_database):
        repo = ResourceSubmissionRepository(mock_database)
        assert await repo.update_fields("missing", {"status": "rejected"}) is False

    @pytest.mark.asyncio
    async def test_update_fields_rejects_unknown_column(self, mock_database):
        repo = ResourceSubmissionRepository(mock_database)
        with pytest.raises(ValueError):
            await repo.update_fields("s1", {"id": "other"})

    @pytest.mark.asyncio
    async def test_create_round_trips_row(self, mock_database, resource_submission_row):
        from butji.resources.intake import build_resource_submission

        mock_database.fetchrow.return_value = resource_submission_row
        submission = build_resource_submission(
            "Glaze", "Protects artwork", "https://glaze.cs.uchicago.edu", "tool", ["protection"]
        )
        stored = await ResourceSubmissionRepository(mock_database).create(submission)

        params = mock_database.fetchrow.call_args.args[1:]
        assert params[0] == submission.id
        assert params[5] == '["protection"]'
        assert stored.tags == ["protection"]
