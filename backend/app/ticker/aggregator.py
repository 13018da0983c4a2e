"""Debounced aggregation of value providers into one output line."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterable

from .feed import DataFeed
from .models import AggregateEntry, Quantity, format_value, quantity_label
from .provider import ValueProvider

logger = logging.getLogger(__name__)

DEBOUNCE_SECONDS = 0.1

OutputSink = Callable[[str], None]


def console_sink(line: str) -> None:
    print(line, flush=True)


def format_line(entries: Iterable[AggregateEntry]) -> str:
    """Render entries as '<values> Active sources: <diagnostics>'.

    Example:
        BTC/USD: 4300.5\tBTC/EUR: 3650 Active sources: BTC/USD (2 of 3)\tBTC/EUR (1 of 1)
    """
    values: list[str] = []
    sources: list[str] = []
    for entry in entries:
        label = quantity_label(entry.quantity)
        values.append(f"{label}: {format_value(entry.output_value)}")
        sources.append(f"{label} ({entry.valid} of {entry.total})")
    return "\t".join(values) + " Active sources: " + "\t".join(sources)


class Aggregator:
    """Aggregates a fixed list of value providers.

    Provider updates are debounced: the first update arms a one-shot timer,
    updates arriving before it fires are coalesced, and the timer runs a
    single recompute-and-emit. Several providers sharing one feed therefore
    produce one output line per poll, not one per provider.
    """

    def __init__(
        self,
        providers: Iterable[ValueProvider],
        sink: OutputSink = console_sink,
        debounce: float = DEBOUNCE_SECONDS,
    ) -> None:
        self._providers: tuple[ValueProvider, ...] = tuple(providers)
        self._sink = sink
        self._debounce = debounce
        self._pending: asyncio.TimerHandle | None = None

        # Unlabelled quantities are a configuration defect; fail before polling
        for provider in self._providers:
            quantity_label(provider.quantity)

        # The provider list is immutable, so subscribe once up front
        for provider in self._providers:
            provider.add_update_listener(self._on_value_update)

    @property
    def providers(self) -> tuple[ValueProvider, ...]:
        return self._providers

    @property
    def feeds(self) -> list[DataFeed]:
        """Distinct feeds referenced by the providers, in provider order."""
        feeds: list[DataFeed] = []
        for provider in self._providers:
            if not any(feed is provider.data_feed for feed in feeds):
                feeds.append(provider.data_feed)
        return feeds

    @property
    def pending(self) -> bool:
        """True while a recompute is scheduled."""
        return self._pending is not None

    # --- Lifecycle ---

    def start(self) -> None:
        """Start every feed that is not already running."""
        feeds = self.feeds
        for feed in feeds:
            if not feed.running:
                feed.start()
        logger.info("Aggregator started: %d providers, %d feeds", len(self._providers), len(feeds))

    def stop(self) -> None:
        """Stop every running feed and drop a pending recompute."""
        for feed in self.feeds:
            if feed.running:
                feed.stop()
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
        logger.info("Aggregator stopped")

    # --- Aggregation ---

    def aggregate(self) -> list[AggregateEntry]:
        """Group providers by quantity and compute one entry per group."""
        totals: dict[Quantity, int] = {}
        valid: dict[Quantity, int] = {}
        best: dict[Quantity, float | None] = {}

        for provider in self._providers:
            q = provider.quantity
            totals[q] = totals.get(q, 0) + 1
            valid.setdefault(q, 0)
            best.setdefault(q, None)

            value = provider.value
            if value is None:
                continue
            if not provider.is_outdated:
                valid[q] += 1
            if best[q] is None or value > best[q]:
                best[q] = value

        return [
            AggregateEntry(
                quantity=q,
                total=totals[q],
                valid=valid[q],
                output_value=best[q] if best[q] is not None else 0.0,
            )
            for q in Quantity
            if q in totals
        ]

    def _on_value_update(self, provider: ValueProvider) -> None:
        if self._pending is not None:
            return  # Already scheduled
        loop = asyncio.get_running_loop()
        self._pending = loop.call_later(self._debounce, self._flush)

    def _flush(self) -> None:
        self._pending = None
        self._emit()

    def _emit(self) -> None:
        self._sink(format_line(self.aggregate()))
