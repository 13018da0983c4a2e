"""Value provider: turns a feed's raw body into one numeric quantity."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from typing import Any

from .errors import ParseError
from .events import Listeners
from .feed import DataFeed
from .models import Quantity

logger = logging.getLogger(__name__)

# Staleness threshold, in update intervals of the owning feed
OUTDATED_INTERVALS = 3

Extractor = Callable[[Any], Any]
UpdateListener = Callable[["ValueProvider"], None]


class ValueProvider:
    """Tracks the last known value of one Quantity taken from a DataFeed.

    Feeds may be shared: several providers can extract different quantities
    (or the same quantity) from one feed. Update listeners are notified when
    the value changes, and when a feed error leaves the value outdated.
    """

    def __init__(self, quantity: Quantity, data_feed: DataFeed, extract: Extractor) -> None:
        self.quantity = quantity
        self.data_feed = data_feed
        self._extract = extract
        self._update_listeners = Listeners()
        self._value: float | None = None

        data_feed.add_data_listener(self._on_data)
        data_feed.add_error_listener(self._on_error)

    @property
    def value(self) -> float | None:
        """Last known valid value, or None if nothing was parsed yet."""
        return self._value

    @property
    def is_outdated(self) -> bool:
        """True once the feed went OUTDATED_INTERVALS intervals without a success.

        An unknown value is never outdated.
        """
        if self._value is None or self.data_feed.data_time is None:
            return False
        deadline = self.data_feed.data_time + self.data_feed.update_interval * OUTDATED_INTERVALS
        return deadline < self.data_feed.now()

    def add_update_listener(self, listener: UpdateListener) -> None:
        self._update_listeners.subscribe(listener)

    # --- Internal ---

    def _on_data(self, feed: DataFeed) -> None:
        try:
            new_value = self._parse(feed.data)
        except ParseError as e:
            logger.warning(
                "%s from %s: data cannot be parsed into a meaningful value (%s)",
                self.quantity.name,
                feed.url,
                e,
            )
            return

        changed = new_value != self._value
        self._value = new_value
        if changed:
            logger.debug("%s from %s: %s", self.quantity.name, feed.url, new_value)
            self._update_listeners.notify(self)

    def _on_error(self, feed: DataFeed) -> None:
        # Display may need a refresh even without a new value
        if self.is_outdated:
            self._update_listeners.notify(self)

    def _parse(self, data: Any) -> float:
        try:
            raw = self._extract(data)
        except Exception as e:
            raise ParseError(f"extraction failed: {e!r}") from e
        if raw is None or isinstance(raw, bool):
            raise ParseError(f"no value in {data!r}")
        try:
            value = float(raw)
        except (TypeError, ValueError) as e:
            raise ParseError(f"not a number: {raw!r}") from e
        if not math.isfinite(value):
            raise ParseError(f"not a finite number: {raw!r}")
        return value

    def __repr__(self) -> str:
        return f"ValueProvider({self.quantity.name}, {self.data_feed.url!r}, value={self._value})"
