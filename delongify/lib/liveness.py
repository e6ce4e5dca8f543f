"""Reachability check for submitted URLs."""

import logging
from typing import Optional

import httpx


class URLLivenessChecker:
    """Check that a URL answers an HTTP GET."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        timeout_seconds: float = 5.0,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize liveness checker.

        Args:
            client: Shared HTTP client; the caller owns its lifecycle
            timeout_seconds: Timeout applied to each check
            logger: Optional logger
        """
        self.client = client
        self.timeout_seconds = timeout_seconds
        self.logger = logger or logging.getLogger(__name__)

    async def is_reachable(self, url: str) -> bool:
        """GET the URL and report whether any HTTP response came back.

        Redirects are followed. Transport errors and timeouts count as
        unreachable.

        Args:
            url: Absolute http(s) URL

        Returns:
            True if the final response status is 200 or above
        """
        try:
            response = await self.client.get(
                url,
                follow_redirects=True,
                timeout=self.timeout_seconds,
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            self.logger.info(f"Liveness check failed for {url}: {e}")
            return False

        return response.status_code >= 200
