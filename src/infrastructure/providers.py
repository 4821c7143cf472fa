"""FX rate and market price provider adapters."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
import json
from typing import Mapping
from urllib.error import HTTPError, URLError
from urllib.request import urlopen

from src.domain.errors import UpstreamUnavailableError
from src.domain.services.normalization import normalize_currency_code

DEFAULT_FX_RATES: dict[tuple[str, str], Decimal] = {
    ("KRW", "JPY"): Decimal("0.1"),
    ("JPY", "KRW"): Decimal("10"),
    ("USD", "KRW"): Decimal("1300"),
    ("KRW", "USD"): Decimal("1") / Decimal("1300"),
}

DEFAULT_PRICES: dict[tuple[str, str], tuple[Decimal, str]] = {
    ("AAPL", "NASDAQ"): (Decimal("190.00"), "USD"),
    ("GOOG", "NASDAQ"): (Decimal("170.00"), "USD"),
}


@dataclass(frozen=True)
class StaticFxRateProvider:
    """Deterministic, in-memory FX rates keyed by (base, quote).

    Unknown pairs raise ``UpstreamUnavailableError`` so callers apply their
    fallback policy.
    """

    rates: Mapping[tuple[str, str], Decimal] | None = None
    source: str = "static"

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "rates",
            dict(DEFAULT_FX_RATES if self.rates is None else self.rates),
        )

    def fetch_rate(self, base_code: str, quote_code: str, on_date: date) -> Decimal:
        base = normalize_currency_code(base_code)
        quote = normalize_currency_code(quote_code)
        if base == quote:
            return Decimal("1")
        try:
            return self.rates[(base, quote)]
        except KeyError as exc:
            raise UpstreamUnavailableError(
                f"No static rate for {base}->{quote}"
            ) from exc


@dataclass(frozen=True)
class StaticPriceProvider:
    """Deterministic, in-memory market prices.

    Unknown instruments raise ``UpstreamUnavailableError`` unless a default
    quote is configured.
    """

    prices: Mapping[tuple[str, str], tuple[Decimal, str]] | None = None
    default: tuple[Decimal, str] | None = None

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "prices",
            dict(DEFAULT_PRICES if self.prices is None else self.prices),
        )

    def fetch_price(self, symbol: str, exchange: str) -> tuple[Decimal, str]:
        quote = self.prices.get((symbol, exchange), self.default)
        if quote is None:
            raise UpstreamUnavailableError(f"No static price for {symbol}@{exchange}")
        return quote


@dataclass
class FrankfurterRateProvider:
    """FX rates from the Frankfurter API, cached per (base, date)."""

    base_url: str = "https://api.frankfurter.app"
    timeout_seconds: float = 8
    source: str = "frankfurter"
    _cache: dict[tuple[str, str], Mapping[str, Decimal]] = field(
        default_factory=dict
    )

    def fetch_rate(self, base_code: str, quote_code: str, on_date: date) -> Decimal:
        base = normalize_currency_code(base_code)
        quote = normalize_currency_code(quote_code)
        if base == quote:
            return Decimal("1")
        rates = self._get_rates(base, on_date.isoformat())
        try:
            return rates[quote]
        except KeyError as exc:
            raise UpstreamUnavailableError(
                f"Frankfurter has no rate for {base}->{quote}"
            ) from exc

    def _get_rates(self, base: str, date_key: str) -> Mapping[str, Decimal]:
        cache_key = (base, date_key)
        if cache_key not in self._cache:
            self._cache[cache_key] = self._fetch_rates(base, date_key)
        return self._cache[cache_key]

    def _fetch_rates(self, base: str, date_key: str) -> Mapping[str, Decimal]:
        url = f"{self.base_url}/{date_key}?from={base}"
        try:
            with urlopen(url, timeout=self.timeout_seconds) as response:
                payload = json.load(response)
        except (HTTPError, URLError, TimeoutError, json.JSONDecodeError) as exc:
            raise UpstreamUnavailableError("Frankfurter API unavailable") from exc

        rates = payload.get("rates")
        if not isinstance(rates, dict):
            raise UpstreamUnavailableError("Frankfurter response missing rates")
        parsed = {
            normalize_currency_code(code): Decimal(str(value))
            for code, value in rates.items()
        }
        parsed[base] = Decimal("1")
        return parsed


__all__ = [
    "DEFAULT_FX_RATES",
    "DEFAULT_PRICES",
    "StaticFxRateProvider",
    "StaticPriceProvider",
    "FrankfurterRateProvider",
]
