"""Fixtures for ticker tests.

Feeds are driven by a scripted in-memory fetcher and a manual clock, so
staleness can be tested without waiting for real intervals.
"""

from typing import Any

import pytest

from app.ticker.errors import TransportError
from app.ticker.feed import DataFeed
from app.ticker.interface import Fetcher

FEED_URL = "https://example.com/api/ticker"


class ScriptedFetcher(Fetcher):
    """Returns scripted bodies in order, then repeats the last one forever.

    An Exception instance in the script is raised instead of returned.
    """

    def __init__(self, *script: Any) -> None:
        self.script = list(script)
        self.urls: list[str] = []
        self.closed = False
        self._last: Any = TransportError(FEED_URL, "HTTP 503", status=503)

    def push(self, *items: Any) -> None:
        self.script.extend(items)

    async def fetch(self, url: str) -> Any:
        self.urls.append(url)
        if self.script:
            self._last = self.script.pop(0)
        item = self._last
        if isinstance(item, Exception):
            raise item
        return item

    async def close(self) -> None:
        self.closed = True


class ManualClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: float = 1_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def fetcher() -> ScriptedFetcher:
    return ScriptedFetcher()


@pytest.fixture
def make_feed(clock):
    """Factory: make_feed(fetcher, update_interval=10.0, url=FEED_URL)."""

    def _make(fetcher: Fetcher, update_interval: float = 10.0, url: str = FEED_URL) -> DataFeed:
        return DataFeed(url, update_interval, fetcher, clock=clock)

    return _make
