"""Tests for PriceWalk and SimulatedFetcher."""

import pytest

from app.ticker.errors import TransportError
from app.ticker.models import Quantity
from app.ticker.seed_prices import SEED_PRICES
from app.ticker.simulator import PriceWalk, SimulatedFetcher

KRAKEN = "https://api.kraken.com/0/public/Ticker?pair=XBTUSD,XBTEUR"
BITSTAMP = "https://www.bitstamp.net/api/v2/ticker/btcusd/"


class TestPriceWalk:
    """Unit tests for the random walk."""

    def test_starts_at_seed_prices(self, clock):
        """Before any time passes, prices equal the seeds."""
        walk = PriceWalk(seed=1, clock=clock)
        assert walk.step() == SEED_PRICES

    def test_covers_every_quantity(self, clock):
        """Test step() returns a price for each Quantity."""
        walk = PriceWalk(seed=1, clock=clock)
        clock.advance(1)
        assert set(walk.step()) == set(Quantity)

    def test_prices_move_over_time(self, clock):
        """After simulated time passes, prices drift away from the seeds."""
        walk = PriceWalk(seed=1, clock=clock)
        clock.advance(3600)
        prices = walk.step()
        assert prices[Quantity.BTC_USD] != SEED_PRICES[Quantity.BTC_USD]

    def test_prices_stay_positive(self, clock):
        """GBM prices can never go negative."""
        walk = PriceWalk(seed=7, clock=clock)
        for _ in range(1_000):
            clock.advance(60)
            assert all(p > 0 for p in walk.step().values())

    def test_same_seed_same_path(self, clock):
        """Test a seeded walk is reproducible."""
        first = PriceWalk(seed=42, clock=clock)
        second = PriceWalk(seed=42, clock=clock)
        clock.advance(10)
        assert first.step() == second.step()

    def test_rounding(self, clock):
        """Fiat pairs keep 5 decimals, BTC pairs 2."""
        walk = PriceWalk(seed=3, clock=clock)
        clock.advance(100)
        prices = walk.step()
        assert prices[Quantity.BTC_USD] == round(prices[Quantity.BTC_USD], 2)
        assert prices[Quantity.EUR_USD] == round(prices[Quantity.EUR_USD], 5)


@pytest.mark.asyncio
class TestSimulatedFetcher:
    """Unit tests for the simulated transport."""

    async def test_renders_body_for_known_url(self, clock):
        """Test the renderer for the feed URL is used, ignoring noCache."""
        fetcher = SimulatedFetcher(
            {BITSTAMP: lambda prices: {"last": prices[Quantity.BTC_USD]}},
            walk=PriceWalk(seed=1, clock=clock),
        )
        body = await fetcher.fetch(BITSTAMP + "?noCache=abc123")
        assert body == {"last": SEED_PRICES[Quantity.BTC_USD]}

    async def test_keeps_feed_query_string(self, clock):
        """Test a URL with its own query matches after stripping noCache only."""
        fetcher = SimulatedFetcher(
            {KRAKEN: lambda prices: {"ok": True}},
            walk=PriceWalk(seed=1, clock=clock),
        )
        assert await fetcher.fetch(KRAKEN + "&noCache=ff") == {"ok": True}

    async def test_unknown_url_is_404(self):
        """Test an unconfigured URL raises a TransportError."""
        fetcher = SimulatedFetcher({})
        with pytest.raises(TransportError) as exc_info:
            await fetcher.fetch("https://nowhere.example/?noCache=1")
        assert exc_info.value.status == 404

    async def test_simulated_outage(self):
        """Test failure_probability=1.0 makes every fetch fail."""
        fetcher = SimulatedFetcher({BITSTAMP: lambda prices: {}}, failure_probability=1.0)
        with pytest.raises(TransportError) as exc_info:
            await fetcher.fetch(BITSTAMP)
        assert exc_info.value.status == 503
