"""Ticker configuration: feeds, providers and environment settings.

Feeds and providers are fixed at startup. A ``FeedConfig`` carries both the
endpoint URL and a ``sample`` renderer describing the endpoint's body layout,
so the simulator can serve bodies the extractors understand.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from .models import Quantity

Prices = Mapping[Quantity, float]


def _get_bool_env(name: str, default: bool = False) -> bool:
    value = os.getenv(name, "").strip().lower()
    if value in ("true", "1", "yes", "on"):
        return True
    if value in ("false", "0", "no", "off"):
        return False
    return default


def _get_float_env(name: str, default: float) -> float:
    value = os.getenv(name, "").strip()
    if not value:
        return default
    return float(value)


@dataclass
class Settings:
    """Process settings loaded from environment variables.

    Attributes:
        SIMULATE: Serve synthetic bodies instead of calling real endpoints.
        HTTP_TIMEOUT: Per-request timeout in seconds for the HTTP fetcher.
        LOG_LEVEL: Logging level name.
    """

    SIMULATE: bool = False
    HTTP_TIMEOUT: float = 10.0
    LOG_LEVEL: str = "INFO"

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            SIMULATE=_get_bool_env("TICKER_SIMULATE", False),
            HTTP_TIMEOUT=_get_float_env("TICKER_HTTP_TIMEOUT", 10.0),
            LOG_LEVEL=os.getenv("TICKER_LOG_LEVEL", "INFO").upper(),
        )


def path(*keys: str | int) -> Callable[[Any], Any]:
    """Build an extractor that walks nested dicts/lists, e.g. path("result", "c", 0)."""

    def extract(data: Any) -> Any:
        for key in keys:
            data = data[key]
        return data

    return extract


@dataclass(frozen=True)
class FeedConfig:
    url: str
    update_interval: float  # seconds
    sample: Callable[[Prices], Any]


@dataclass(frozen=True)
class ProviderConfig:
    quantity: Quantity
    feed: str  # key into TickerConfig.feeds
    extract: Callable[[Any], Any]


@dataclass(frozen=True)
class TickerConfig:
    feeds: dict[str, FeedConfig] = field(default_factory=dict)
    providers: list[ProviderConfig] = field(default_factory=list)

    def samples(self) -> dict[str, Callable[[Prices], Any]]:
        """{url: renderer} for every feed, as consumed by SimulatedFetcher."""
        return {feed.url: feed.sample for feed in self.feeds.values()}


# --- Exchange body layouts ---


def _kraken_sample(prices: Prices) -> dict:
    # Kraken quotes the last trade as [price, lot volume] under "c"
    return {
        "error": [],
        "result": {
            "XXBTZUSD": {"c": [f"{prices[Quantity.BTC_USD]:.2f}", "0.01"]},
            "XXBTZEUR": {"c": [f"{prices[Quantity.BTC_EUR]:.2f}", "0.01"]},
        },
    }


def _bitstamp_sample(quantity: Quantity) -> Callable[[Prices], dict]:
    decimals = 5 if quantity is Quantity.EUR_USD else 2
    return lambda prices: {"last": f"{prices[quantity]:.{decimals}f}", "volume": "1.0"}


def _coinbase_sample(prices: Prices) -> dict:
    return {"data": {"base": "BTC", "currency": "USD", "amount": f"{prices[Quantity.BTC_USD]:.2f}"}}


DEFAULT_CONFIG = TickerConfig(
    feeds={
        # One Kraken request yields two quantities
        "kraken": FeedConfig(
            "https://api.kraken.com/0/public/Ticker?pair=XBTUSD,XBTEUR", 10.0, _kraken_sample
        ),
        "bitstamp_btcusd": FeedConfig(
            "https://www.bitstamp.net/api/v2/ticker/btcusd/", 20.0, _bitstamp_sample(Quantity.BTC_USD)
        ),
        "bitstamp_btceur": FeedConfig(
            "https://www.bitstamp.net/api/v2/ticker/btceur/", 30.0, _bitstamp_sample(Quantity.BTC_EUR)
        ),
        "bitstamp_eurusd": FeedConfig(
            "https://www.bitstamp.net/api/v2/ticker/eurusd/", 40.0, _bitstamp_sample(Quantity.EUR_USD)
        ),
        "coinbase_btcusd": FeedConfig(
            "https://api.coinbase.com/v2/prices/BTC-USD/spot", 60.0, _coinbase_sample
        ),
    },
    providers=[
        ProviderConfig(Quantity.BTC_USD, "kraken", path("result", "XXBTZUSD", "c", 0)),
        ProviderConfig(Quantity.BTC_EUR, "kraken", path("result", "XXBTZEUR", "c", 0)),
        ProviderConfig(Quantity.BTC_USD, "bitstamp_btcusd", path("last")),
        ProviderConfig(Quantity.BTC_EUR, "bitstamp_btceur", path("last")),
        ProviderConfig(Quantity.EUR_USD, "bitstamp_eurusd", path("last")),
        ProviderConfig(Quantity.BTC_USD, "coinbase_btcusd", path("data", "amount")),
    ],
)
