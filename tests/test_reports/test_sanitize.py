"""Tests for report text sanitization."""

import pytest

from butji.errors import ValidationError
from butji.reports.config import ReportsConfig
from butji.reports.sanitize import TextSanitizer


@pytest.fixture
def sanitizer():
    return TextSanitizer()


class TestSanitizeText:
    def test_strips_markup_and_script_bodies(self, sanitizer):
        raw = "  <p>Hello <b>world</b></p><script>alert('x')</script>  "
        assert sanitizer.sanitize_text(raw) == "Hello world"

    def test_empty(self, sanitizer):
        assert sanitizer.sanitize_text(None) == ""
        assert sanitizer.sanitize_text("") == ""

    def test_length_cap_checked_after_trim(self, sanitizer):
        assert sanitizer.sanitize_text("  abc  ", max_length=3) == "abc"
        with pytest.raises(ValidationError, match="maximum length of 3 characters"):
            sanitizer.sanitize_text("abcd", max_length=3)


class TestSanitizeEmail:
    def test_lowercased(self, sanitizer):
        assert sanitizer.sanitize_email(" Reporter@Example.ORG ") == "reporter@example.org"

    def test_optional(self, sanitizer):
        assert sanitizer.sanitize_email(None) is None

    @pytest.mark.parametrize("email", ["no-at-sign", "a@b", "a b@example.org"])
    def test_invalid(self, sanitizer, email):
        with pytest.raises(ValidationError, match="Invalid email format"):
            sanitizer.sanitize_email(email)

    def test_too_long(self):
        sanitizer = TextSanitizer(ReportsConfig(email_max_length=10))
        with pytest.raises(ValidationError, match="Email exceeds maximum length of 10"):
            sanitizer.sanitize_email("someone@example.org")


class TestSanitizeUrl:
    def test_valid(self, sanitizer):
        assert sanitizer.sanitize_url(" https://example.org/a ") == "https://example.org/a"

    def test_invalid(self, sanitizer):
        with pytest.raises(ValidationError, match="Invalid URL format"):
            sanitizer.sanitize_url("example.org")

    def test_too_long(self, sanitizer):
        with pytest.raises(ValidationError, match="URL exceeds maximum length of 2048"):
            sanitizer.sanitize_url("https://example.org/" + "a" * 2048)
