"""Tests for FX rate and price providers."""

from datetime import date
from decimal import Decimal
import io
import json
from urllib.error import URLError

import pytest

from src.domain.errors import UpstreamUnavailableError
from src.infrastructure import providers
from src.infrastructure.providers import (
    FrankfurterRateProvider,
    StaticFxRateProvider,
    StaticPriceProvider,
)

DAY = date(2024, 3, 15)


def test_static_fx_provider_returns_known_rates() -> None:
    provider = StaticFxRateProvider()

    assert provider.fetch_rate("usd", "krw", DAY) == Decimal("1300")
    assert provider.fetch_rate("JPY", "JPY", DAY) == Decimal("1")
    assert provider.source == "static"


def test_static_fx_provider_raises_for_unknown_pair() -> None:
    with pytest.raises(UpstreamUnavailableError):
        StaticFxRateProvider(rates={}).fetch_rate("EUR", "KRW", DAY)


def test_static_price_provider_returns_known_quotes() -> None:
    provider = StaticPriceProvider()

    assert provider.fetch_price("AAPL", "NASDAQ") == (Decimal("190.00"), "USD")


def test_static_price_provider_raises_for_unknown_instrument() -> None:
    with pytest.raises(UpstreamUnavailableError):
        StaticPriceProvider().fetch_price("005930", "KRX")


def test_static_price_provider_uses_configured_default() -> None:
    provider = StaticPriceProvider(prices={}, default=(Decimal("5"), "EUR"))

    assert provider.fetch_price("MSFT", "NASDAQ") == (Decimal("5"), "EUR")


class _FakeResponse(io.BytesIO):
    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False


def test_frankfurter_provider_parses_and_caches_rates(monkeypatch) -> None:
    calls = []

    def _fake_urlopen(url, timeout):
        calls.append(url)
        body = {"base": "USD", "date": "2024-03-15", "rates": {"KRW": 1331.5, "EUR": 0.92}}
        return _FakeResponse(json.dumps(body).encode("utf-8"))

    monkeypatch.setattr(providers, "urlopen", _fake_urlopen)
    provider = FrankfurterRateProvider(base_url="https://fx.example")

    assert provider.fetch_rate("USD", "KRW", DAY) == Decimal("1331.5")
    assert provider.fetch_rate("USD", "EUR", DAY) == Decimal("0.92")
    assert calls == ["https://fx.example/2024-03-15?from=USD"]


def test_frankfurter_provider_wraps_network_errors(monkeypatch) -> None:
    def _fail(url, timeout):
        raise URLError("offline")

    monkeypatch.setattr(providers, "urlopen", _fail)

    with pytest.raises(UpstreamUnavailableError):
        FrankfurterRateProvider().fetch_rate("USD", "KRW", DAY)


def test_frankfurter_provider_raises_for_missing_quote(monkeypatch) -> None:
    monkeypatch.setattr(
        providers,
        "urlopen",
        lambda url, timeout: _FakeResponse(b'{"rates": {"EUR": 0.9}}'),
    )

    with pytest.raises(UpstreamUnavailableError):
        FrankfurterRateProvider().fetch_rate("USD", "KRW", DAY)
