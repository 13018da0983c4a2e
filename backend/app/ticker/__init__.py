"""Ticker aggregation subsystem.

Public API:
    Quantity            - Enumeration of aggregated quantities
    DataFeed            - Polls one URL on a fixed interval
    ValueProvider       - Extracts one quantity from a feed, tracks staleness
    Aggregator          - Debounced best-value-per-quantity output
    Fetcher             - Abstract transport used by feeds
    create_fetcher      - Factory that selects simulator or HTTP transport
    create_aggregator   - Builds feeds/providers/aggregator from a TickerConfig
"""

from .aggregator import Aggregator
from .factory import create_aggregator, create_fetcher
from .feed import DataFeed
from .interface import Fetcher
from .models import AggregateEntry, Quantity
from .provider import ValueProvider

__all__ = [
    "AggregateEntry",
    "Aggregator",
    "DataFeed",
    "Fetcher",
    "Quantity",
    "ValueProvider",
    "create_aggregator",
    "create_fetcher",
]
