"""Seed values and per-quantity parameters for the ticker simulator."""

from .models import Quantity

# Rough starting levels for each quantity
SEED_PRICES: dict[Quantity, float] = {
    Quantity.BTC_USD: 4300.00,
    Quantity.BTC_EUR: 3650.00,
    Quantity.EUR_USD: 1.18,
}

# sigma: volatility per sqrt(second) of simulated time
QUANTITY_PARAMS: dict[Quantity, dict[str, float]] = {
    Quantity.BTC_USD: {"sigma": 0.0008},
    Quantity.BTC_EUR: {"sigma": 0.0008},
    Quantity.EUR_USD: {"sigma": 0.0001},  # Fiat pair moves far less
}

DEFAULT_PARAMS: dict[str, float] = {"sigma": 0.0005}

# Decimal places each quantity is quoted with
PRICE_DECIMALS: dict[Quantity, int] = {
    Quantity.BTC_USD: 2,
    Quantity.BTC_EUR: 2,
    Quantity.EUR_USD: 5,
}
