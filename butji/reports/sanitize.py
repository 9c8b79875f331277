"""
Free-text sanitization for user-filed reports.

Every sanitizer returns cleaned text or raises ``ValidationError`` with a
message that is safe to show the user.
"""

import re

from bs4 import BeautifulSoup

from butji.errors import ValidationError
from butji.reports.config import ReportsConfig
from butji.validation import is_valid_url

_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class TextSanitizer:
    """
    Length-capped, markup-free text cleaning.

    Usage:
        sanitizer = TextSanitizer()
        message = sanitizer.sanitize_text(raw, max_length=10000)
    """

    def __init__(self, config: ReportsConfig | None = None):
        self.config = config or ReportsConfig()

    def sanitize_text(self, value: str | None, max_length: int | None = None) -> str:
        """
        Trim, enforce the cap, then strip every HTML tag.

        Script and style bodies are dropped along with their tags.
        """
        if not value:
            return ""
        trimmed = value.strip()
        if max_length and len(trimmed) > max_length:
            raise ValidationError(f"Input exceeds maximum length of {max_length} characters")

        soup = BeautifulSoup(trimmed, "html.parser")
        for element in soup(["script", "style"]):
            element.decompose()
        return soup.get_text().strip()

    def sanitize_email(self, value: str | None) -> str | None:
        if not value:
            return None
        cap = self.config.email_max_length
        trimmed = value.strip().lower()
        if len(trimmed) > cap:
            raise ValidationError(f"Email exceeds maximum length of {cap} characters")
        if not _EMAIL_PATTERN.match(trimmed):
            raise ValidationError("Invalid email format")
        return trimmed

    def sanitize_url(self, value: str | None) -> str | None:
        if not value:
            return None
        cap = self.config.url_max_length
        trimmed = value.strip()
        if len(trimmed) > cap:
            raise ValidationError(f"URL exceeds maximum length of {cap} characters")
        if not is_valid_url(trimmed):
            raise ValidationError("Invalid URL format")
        return trimmed
