"""
Request deadline middleware.

Every request gets a deadline; ``/news/fetch`` walks every feed in turn
and so gets its own, longer one. Health checks run without a deadline.
"""

import asyncio

import structlog
from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = structlog.get_logger(__name__)

_UNTIMED_PREFIXES = ("/health",)


class TimeoutMiddleware(BaseHTTPMiddleware):
    """
    Cancel requests that outlive their deadline and answer 504.

    Args:
        timeout_seconds: Deadline for any path without an override.
        path_timeouts: Path prefix to deadline; the longest matching
            prefix wins.
    """

    def __init__(
        self,
        app,
        timeout_seconds: float = 30.0,
        path_timeouts: dict[str, float] | None = None,
    ):
        super().__init__(app)
        self.timeout_seconds = timeout_seconds
        self.path_timeouts = dict(path_timeouts or {})

    def deadline_for(self, path: str) -> float | None:
        """Seconds allowed for ``path``, or None when it is untimed."""
        if path.startswith(_UNTIMED_PREFIXES):
            return None
        matches = [prefix for prefix in self.path_timeouts if path.startswith(prefix)]
        if matches:
            return self.path_timeouts[max(matches, key=len)]
        return self.timeout_seconds

    async def dispatch(self, request: Request, call_next):
        deadline = self.deadline_for(request.url.path)
        if deadline is None:
            return await call_next(request)

        try:
            async with asyncio.timeout(deadline):
                return await call_next(request)
        except TimeoutError:
            logger.warning(
                "Request deadline exceeded",
                method=request.method,
                path=request.url.path,
                timeout_seconds=deadline,
            )
            return JSONResponse(
                status_code=504,
                content={"detail": "Request timed out", "timeout_seconds": deadline},
            )
