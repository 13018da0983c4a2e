"""Random-walk simulator that stands in for real ticker endpoints."""

from __future__ import annotations

import logging
import math
import random
import re
import time
from collections.abc import Callable, Mapping
from typing import Any

import numpy as np

from .errors import TransportError
from .feed import CACHE_BUST_PARAM
from .interface import Fetcher
from .models import Quantity
from .seed_prices import DEFAULT_PARAMS, PRICE_DECIMALS, QUANTITY_PARAMS, SEED_PRICES

logger = logging.getLogger(__name__)

_CACHE_BUSTER = re.compile(rf"[?&]{CACHE_BUST_PARAM}=[0-9a-f]+$")

SampleRenderer = Callable[[Mapping[Quantity, float]], Any]


class PriceWalk:
    """Geometric Brownian motion over every Quantity, driftless.

    Math:
        S(t+dt) = S(t) * exp(-sigma^2/2 * dt + sigma * sqrt(dt) * Z)

    ``dt`` is the wall-clock time since the previous step in seconds, so
    feeds polled at different intervals all observe the same underlying path.
    """

    def __init__(
        self,
        seed: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._rng = np.random.default_rng(seed)
        self._clock = clock
        self._last_step = clock()
        self._quantities: list[Quantity] = list(Quantity)
        self._prices = np.array([SEED_PRICES.get(q, 1.0) for q in self._quantities], dtype=float)
        self._sigma = np.array(
            [QUANTITY_PARAMS.get(q, DEFAULT_PARAMS)["sigma"] for q in self._quantities],
            dtype=float,
        )

    def step(self) -> dict[Quantity, float]:
        """Advance to the current clock time. Returns {quantity: price}."""
        now = self._clock()
        dt = max(now - self._last_step, 0.0)
        self._last_step = now

        if dt > 0:
            z = self._rng.standard_normal(len(self._quantities))
            drift = -0.5 * self._sigma**2 * dt
            diffusion = self._sigma * math.sqrt(dt) * z
            self._prices *= np.exp(drift + diffusion)

        return self.prices()

    def prices(self) -> dict[Quantity, float]:
        return {
            q: round(float(p), PRICE_DECIMALS.get(q, 2))
            for q, p in zip(self._quantities, self._prices)
        }


class SimulatedFetcher(Fetcher):
    """Fetcher that renders synthetic exchange bodies from a PriceWalk.

    ``samples`` maps a feed URL (without the noCache parameter) to a renderer that
    lays out current prices the way that exchange's endpoint does.
    """

    def __init__(
        self,
        samples: Mapping[str, SampleRenderer],
        failure_probability: float = 0.0,
        walk: PriceWalk | None = None,
    ) -> None:
        self._samples = dict(samples)
        self._failure_prob = failure_probability
        self._walk = walk or PriceWalk()

    async def fetch(self, url: str) -> Any:
        base = _CACHE_BUSTER.sub("", url)
        renderer = self._samples.get(base)
        if renderer is None:
            raise TransportError(url, "HTTP 404", status=404)

        if random.random() < self._failure_prob:
            logger.debug("Simulated outage for %s", base)
            raise TransportError(url, "HTTP 503", status=503)

        return renderer(self._walk.step())
