"""Tests for public company submission intake."""

import pytest

from butji.companies.intake import build_company_submission
from butji.errors import ValidationError


class TestBuildCompanySubmission:
    def test_builds_pending_submission(self):
        submission = build_company_submission(
            name="  Example AI ",
            description="Builds models",
            website="https://example.ai",
            founders=["Ada", " ", "Grace "],
            tags=["llm", "not-a-tag", "surveillance"],
            controversies=[{"text": "Scraping"}, {"text": ""}],
            citations={"ceo": [{"url": ""}]},
        )
        assert submission.status == "pending"
        assert submission.id is None
        assert submission.name == "Example AI"
        assert submission.founders == ["Ada", "Grace"]
        assert submission.tags == ["llm", "surveillance"]
        assert submission.controversies == [{"text": "Scraping"}]
        assert submission.citations is None

    @pytest.mark.parametrize("name,description", [(None, "d"), ("n", ""), ("  ", "d")])
    def test_missing_required_fields(self, name, description):
        with pytest.raises(ValidationError, match="Missing required fields"):
            build_company_submission(name=name, description=description)

    def test_invalid_website(self):
        with pytest.raises(ValidationError, match="Invalid URL format"):
            build_company_submission(name="n", description="d", website="not a url")

    def test_blank_website_ignored(self):
        submission = build_company_submission(name="n", description="d", website="  ")
        assert submission.website is None
