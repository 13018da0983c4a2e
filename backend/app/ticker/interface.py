"""Abstract interface for fetching ticker resources."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class Fetcher(ABC):
    """Contract for the transport used by data feeds.

    A single fetcher is shared by every DataFeed. Feeds never talk to the
    network directly; they hand a fully built URL (including the cache-busting
    parameter) to ``fetch()``.

    Lifecycle:
        fetcher = create_fetcher(config, settings)
        body = await fetcher.fetch("https://example.com/ticker?noCache=1a2b")
        # ... app shutting down ...
        await fetcher.close()
    """

    @abstractmethod
    async def fetch(self, url: str) -> Any:
        """Fetch ``url`` and return the decoded JSON body.

        Raises TransportError on network failure, a missing response or a
        non-OK status. Never returns a partial body.
        """

    async def close(self) -> None:
        """Release transport resources. Safe to call multiple times."""
