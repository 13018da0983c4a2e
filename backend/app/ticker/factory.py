"""Factories for the fetcher and the aggregator graph."""

from __future__ import annotations

import logging

from .aggregator import Aggregator, OutputSink, console_sink
from .config import Settings, TickerConfig
from .feed import DataFeed
from .interface import Fetcher
from .provider import ValueProvider

logger = logging.getLogger(__name__)


def create_fetcher(config: TickerConfig, settings: Settings | None = None) -> Fetcher:
    """Create the fetcher selected by settings.

    - SIMULATE enabled -> SimulatedFetcher (random walk, no network)
    - Otherwise        -> HttpFetcher (real endpoints)
    """
    settings = settings or Settings.from_env()

    if settings.SIMULATE:
        from .simulator import SimulatedFetcher

        logger.info("Ticker fetcher: simulator (%d feeds)", len(config.feeds))
        return SimulatedFetcher(samples=config.samples())
    else:
        from .http_client import HttpFetcher

        logger.info("Ticker fetcher: HTTP (timeout %.1fs)", settings.HTTP_TIMEOUT)
        return HttpFetcher(timeout=settings.HTTP_TIMEOUT)


def create_aggregator(
    config: TickerConfig,
    fetcher: Fetcher,
    sink: OutputSink = console_sink,
) -> Aggregator:
    """Build feeds, providers and the aggregator. Nothing is started.

    Providers naming the same feed key share a single DataFeed instance.
    """
    feeds = {
        name: DataFeed(feed.url, feed.update_interval, fetcher)
        for name, feed in config.feeds.items()
    }

    providers: list[ValueProvider] = []
    for provider in config.providers:
        if provider.feed not in feeds:
            raise ValueError(f"Provider for {provider.quantity.name} names unknown feed {provider.feed!r}")
        providers.append(ValueProvider(provider.quantity, feeds[provider.feed], provider.extract))

    return Aggregator(providers, sink=sink)
