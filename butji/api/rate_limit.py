"""
Rate limiting for anonymous write endpoints using slowapi.

Submissions, reports and the news fetch trigger are open to anyone, so
they are throttled per caller. Admin callers are keyed by their API key;
everyone else by client address. Enforced only when
RATE_LIMIT_ENABLED=true.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from butji.config.settings import get_settings


def _client_address(request: Request) -> str:
    """Client IP, taken from the first X-Forwarded-For hop behind a trusted proxy."""
    if get_settings().rate_limit_trust_forwarded_for:
        forwarded = request.headers.get("X-Forwarded-For", "")
        first_hop = forwarded.split(",")[0].strip()
        if first_hop:
            return first_hop
    return get_remote_address(request)


def _get_rate_limit_key(request: Request) -> str:
    api_key = request.headers.get("X-API-KEY")
    if api_key:
        return api_key
    return _client_address(request)


def public_write_limit() -> str:
    """Limit for anonymous submissions and reports."""
    return get_settings().rate_limit_public_write


def news_fetch_limit() -> str:
    """Limit for the manual ingestion trigger."""
    return get_settings().rate_limit_news_fetch


def create_limiter() -> Limiter:
    settings = get_settings()
    return Limiter(
        key_func=_get_rate_limit_key,
        default_limits=[settings.rate_limit_default],
        storage_uri=settings.rate_limit_storage_uri,
        enabled=settings.rate_limit_enabled,
    )


limiter = create_limiter()
