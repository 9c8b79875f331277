"""
Admin authentication.

Moderation, company editing, news source management and report triage
require one of the keys in ``API_KEYS`` in the ``X-API-KEY`` header.
With no keys configured the service runs in dev mode and every caller
is treated as an admin.
"""

import secrets

from fastapi import HTTPException, Security, status
from fastapi.security import APIKeyHeader

from butji.config.settings import get_settings

api_key_header = APIKeyHeader(name="X-API-KEY", auto_error=False)


def _matches_any(candidate: str, keys: list[str]) -> bool:
    # Constant-time comparison against every key
    matched = False
    for key in keys:
        matched |= secrets.compare_digest(candidate.encode(), key.encode())
    return matched


async def verify_api_key(api_key: str | None = Security(api_key_header)) -> str:
    """
    Admit the request if it carries a configured admin key.

    Returns:
        The presented key, or ``"dev-mode"`` when no keys are configured.

    Raises:
        HTTPException: 401 ``Unauthorized`` without a key, 401
            ``Invalid API key`` with an unknown one.
    """
    admin_keys = get_settings().admin_keys
    if not admin_keys:
        return "dev-mode"

    if not api_key:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    if not _matches_any(api_key, admin_keys):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid API key"
        )
    return api_key
