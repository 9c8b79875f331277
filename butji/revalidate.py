"""
Cache revalidation for the public site.

When a webhook URL is configured the path is POSTed to it; otherwise the
request is only logged.
"""

import logging
import time
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class Revalidator:
    """Forward path invalidations to the site's revalidation hook."""

    def __init__(
        self,
        webhook_url: str | None = None,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ):
        self._webhook_url = webhook_url
        self._timeout = timeout
        self._client = client

    async def revalidate(self, path: str = "/") -> dict[str, Any]:
        """
        Invalidate ``path``.

        Returns:
            ``{"revalidated": True, "path": path, "now": <epoch ms>}``

        Raises:
            httpx.HTTPError: If the webhook call fails.
        """
        path = path or "/"
        if self._webhook_url:
            if self._client is not None:
                await self._post(self._client, path)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    await self._post(client, path)
            logger.info("Revalidated %s via webhook", path)
        else:
            logger.info("Revalidation requested for %s (no webhook configured)", path)

        return {"revalidated": True, "path": path, "now": int(time.time() * 1000)}

    async def _post(self, client: httpx.AsyncClient, path: str) -> None:
        response = await client.post(self._webhook_url, json={"path": path})
        response.raise_for_status()
