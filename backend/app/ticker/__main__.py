"""Run the ticker aggregator on the console: ``python -m app.ticker``."""

from __future__ import annotations

import asyncio
import logging

from .config import DEFAULT_CONFIG, Settings
from .factory import create_aggregator, create_fetcher

logger = logging.getLogger(__name__)


async def run(settings: Settings) -> None:
    fetcher = create_fetcher(DEFAULT_CONFIG, settings)
    aggregator = create_aggregator(DEFAULT_CONFIG, fetcher)
    aggregator.start()
    try:
        await asyncio.Event().wait()  # Until cancelled (Ctrl+C)
    finally:
        aggregator.stop()
        await fetcher.close()


def main() -> None:
    settings = Settings.from_env()
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        asyncio.run(run(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")


if __name__ == "__main__":
    main()
