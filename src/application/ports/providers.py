"""Ports for external FX and market price providers."""

from datetime import date
from decimal import Decimal
from typing import Protocol


class FxRateProviderPort(Protocol):
    """Port fetching conversion rates from an external source.

    Implementations raise ``UpstreamUnavailableError`` when they cannot
    answer.
    """

    source: str

    def fetch_rate(self, base_code: str, quote_code: str, on_date: date) -> Decimal:
        """Return the rate converting one unit of base into quote."""


class PriceProviderPort(Protocol):
    """Port fetching current market prices from an external source.

    Implementations raise ``UpstreamUnavailableError`` when they cannot
    answer.
    """

    def fetch_price(self, symbol: str, exchange: str) -> tuple[Decimal, str]:
        """Return the current (price, currency code) for an instrument."""


__all__ = ["FxRateProviderPort", "PriceProviderPort"]
