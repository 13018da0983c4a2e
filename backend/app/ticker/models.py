"""Data models for ticker aggregation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .errors import UnknownQuantityError


class Quantity(Enum):
    """Logical quantities that providers report. Declaration order is display order."""

    BTC_USD = "btc_usd"  # Bitcoin to USD exchange rate
    BTC_EUR = "btc_eur"  # Bitcoin to EUR exchange rate
    EUR_USD = "eur_usd"  # EUR to USD exchange rate


QUANTITY_LABELS: dict[Quantity, str] = {
    Quantity.BTC_USD: "BTC/USD",
    Quantity.BTC_EUR: "BTC/EUR",
    Quantity.EUR_USD: "EUR/USD",
}


def quantity_label(quantity: Quantity) -> str:
    """Display label for a quantity. Raises UnknownQuantityError if there is none."""
    try:
        return QUANTITY_LABELS[quantity]
    except KeyError:
        raise UnknownQuantityError(f"Unknown quantity: {quantity!r}") from None


def format_value(value: float) -> str:
    """Render a number without a trailing '.0' for integral values."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


@dataclass(frozen=True, slots=True)
class AggregateEntry:
    """Aggregated view of one quantity for a single output cycle."""

    quantity: Quantity
    total: int  # Providers reporting this quantity
    valid: int  # Providers with a present, fresh value
    output_value: float  # Highest present value, 0 if none

    @property
    def label(self) -> str:
        return quantity_label(self.quantity)
