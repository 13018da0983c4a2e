"""httpx-backed fetcher for real ticker endpoints."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from .errors import TransportError
from .interface import Fetcher

logger = logging.getLogger(__name__)


class HttpFetcher(Fetcher):
    """Fetcher that performs plain GET requests with a shared httpx client.

    The client is created lazily on the first fetch so the fetcher can be
    built outside of a running event loop.
    """

    def __init__(self, timeout: float = 10.0, client: httpx.AsyncClient | None = None) -> None:
        self._timeout = timeout
        self._client = client

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                headers={"Accept": "application/json", "Cache-Control": "no-cache"},
            )
        return self._client

    async def fetch(self, url: str) -> Any:
        client = self._get_client()
        try:
            response = await client.get(url)
        except httpx.HTTPError as e:
            raise TransportError(url, str(e) or type(e).__name__) from e

        if response.status_code != 200:
            raise TransportError(url, f"HTTP {response.status_code}", status=response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise TransportError(url, f"invalid JSON body: {e}", status=response.status_code) from e

        logger.debug("Fetched %s (%d bytes)", url, len(response.content))
        return data

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()
        self._client = None
