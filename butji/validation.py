"""Small input validators shared by intake paths."""

from urllib.parse import urlparse

from butji.errors import ValidationError


def is_valid_url(value: str | None) -> bool:
    """Return True for an absolute URL with a scheme and a host."""
    if not value or not value.strip():
        return False
    try:
        parsed = urlparse(value.strip())
    except ValueError:
        return False
    return bool(parsed.scheme) and bool(parsed.netloc)


def validate_url(value: str | None) -> str:
    """Return the trimmed URL or raise ``ValidationError``."""
    if not is_valid_url(value):
        raise ValidationError("Invalid URL format")
    return value.strip()


def filter_allowed(values: list[str] | None, allowed: frozenset[str]) -> list[str]:
    """Keep only members of ``allowed``, preserving order and dropping repeats."""
    kept: list[str] = []
    for value in values or []:
        if isinstance(value, str) and value in allowed and value not in kept:
            kept.append(value)
    return kept
