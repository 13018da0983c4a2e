"""Polling data feed for a single network resource."""

from __future__ import annotations

import asyncio
import logging
import random
import time
from collections.abc import Callable
from typing import Any

from .errors import AlreadyRunningError, NotRunningError, TransportError
from .events import Listeners
from .interface import Fetcher

logger = logging.getLogger(__name__)

CACHE_BUST_PARAM = "noCache"

DataListener = Callable[["DataFeed"], None]


class DataFeed:
    """Polls one URL every ``update_interval`` seconds and informs listeners.

    Data listeners are invoked after every successful fetch, error listeners
    after every failed one. A failed fetch is followed by the next regular
    poll; there is no backoff.

    While running, exactly one poll is either in flight or sleeping in the
    background task. ``stop()`` cancels that task, so a fetch that completes
    after ``stop()`` never reaches listeners and never schedules another poll.
    """

    def __init__(
        self,
        url: str,
        update_interval: float,
        fetcher: Fetcher,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if update_interval <= 0:
            raise ValueError(f"update_interval must be positive, got {update_interval}")
        self.url = url
        self.update_interval = update_interval
        self._fetcher = fetcher
        self._clock = clock
        self._data_listeners = Listeners()
        self._error_listeners = Listeners()
        self._task: asyncio.Task | None = None
        self._running = False
        self._data: Any = None
        self._data_time: float | None = None

    # --- Public properties ---

    @property
    def running(self) -> bool:
        """True between start() and stop()."""
        return self._running

    @property
    def data(self) -> Any:
        """Last body fetched successfully, or None before the first success."""
        return self._data

    @property
    def data_time(self) -> float | None:
        """Clock time of the last successful fetch, or None."""
        return self._data_time

    def now(self) -> float:
        return self._clock()

    # --- Lifecycle ---

    def start(self) -> None:
        """Begin polling. The first poll is issued immediately.

        Must be called from within a running event loop.
        """
        if self._running:
            raise AlreadyRunningError(self.url)
        loop = asyncio.get_running_loop()  # RuntimeError outside a loop, before any state changes
        self._task = loop.create_task(self._poll_loop(), name=f"feed:{self.url}")
        self._running = True
        logger.info("Data feed started: %s (every %.1fs)", self.url, self.update_interval)

    def stop(self) -> None:
        """Stop polling and cancel any pending or in-flight poll."""
        if not self._running:
            raise NotRunningError(self.url)
        self._running = False
        if self._task and not self._task.done():
            self._task.cancel()
        self._task = None
        logger.info("Data feed stopped: %s", self.url)

    # --- Listeners ---

    def add_data_listener(self, listener: DataListener) -> None:
        self._data_listeners.subscribe(listener)

    def add_error_listener(self, listener: DataListener) -> None:
        self._error_listeners.subscribe(listener)

    # --- Internal ---

    async def _poll_loop(self) -> None:
        """Poll, then sleep, while running."""
        while self._is_current():
            try:
                await self._poll_once()
            except Exception:
                logger.exception("Data feed %s: poll failed", self.url)
            if not self._is_current():
                break
            await asyncio.sleep(self.update_interval)

    async def _poll_once(self) -> None:
        """Execute one poll: fetch, record, notify."""
        try:
            body = await self._fetcher.fetch(self._request_url())
        except TransportError as e:
            logger.error("Data feed %s has error: %s", self.url, e.reason)
            self._error_listeners.notify(self)
            return

        self._data = body
        self._data_time = self._clock()
        logger.debug("Data feed %s updated", self.url)
        self._data_listeners.notify(self)

    def _is_current(self) -> bool:
        # A stop/start pair issued from a listener replaces the task
        return self._running and self._task is asyncio.current_task()

    def _request_url(self) -> str:
        """Feed URL with a random cache-busting parameter appended."""
        separator = "&" if "?" in self.url else "?"
        token = format(random.randrange(0x1000000), "x")
        return f"{self.url}{separator}{CACHE_BUST_PARAM}={token}"

    def __repr__(self) -> str:
        return f"DataFeed({self.url!r}, update_interval={self.update_interval})"
