"""Tests for the console entry point."""

import asyncio
from unittest.mock import patch

import pytest

from app.ticker import __main__ as entry
from app.ticker.config import DEFAULT_CONFIG, Settings


@pytest.mark.asyncio
class TestRun:
    """Tests for run()."""

    async def test_run_starts_and_cleans_up(self, fetcher):
        """Test run() starts feeds and on cancellation stops them and closes the fetcher."""
        fetcher.push({})
        with patch.object(entry, "create_fetcher", return_value=fetcher):
            task = asyncio.create_task(entry.run(Settings()))
            await asyncio.sleep(0.05)

            assert len(fetcher.urls) == len(DEFAULT_CONFIG.feeds)  # Every feed polled once
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

        assert fetcher.closed is True
