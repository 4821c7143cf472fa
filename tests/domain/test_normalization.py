"""Tests for domain normalization helpers."""

from datetime import date, datetime

import pytest

from src.domain.errors import ValidationError
from src.domain.services.normalization import (
    month_start,
    normalize_as_of,
    normalize_currency_code,
    trailing_dates,
)


def test_normalize_currency_code_uppercases_and_strips() -> None:
    assert normalize_currency_code(" usd ") == "USD"


@pytest.mark.parametrize("code", [None, "", "US", "USDT", "U1D"])
def test_normalize_currency_code_rejects_malformed_codes(code) -> None:
    with pytest.raises(ValidationError):
        normalize_currency_code(code)


def test_normalize_as_of_defaults_to_today() -> None:
    today = date(2024, 3, 15)

    assert normalize_as_of(None, today) == today
    assert normalize_as_of("", today) == today


def test_normalize_as_of_drops_time_of_day() -> None:
    value = datetime(2024, 3, 15, 23, 59, 59)

    assert normalize_as_of(value, date(2000, 1, 1)) == date(2024, 3, 15)


def test_normalize_as_of_parses_iso_strings() -> None:
    assert normalize_as_of("2024-02-29", date(2000, 1, 1)) == date(2024, 2, 29)


def test_normalize_as_of_rejects_bad_strings() -> None:
    with pytest.raises(ValidationError):
        normalize_as_of("15/03/2024", date(2024, 3, 15))


def test_month_start_returns_first_day() -> None:
    assert month_start(date(2024, 3, 15)) == date(2024, 3, 1)


def test_trailing_dates_ends_at_as_of_oldest_first() -> None:
    days = trailing_dates(date(2024, 3, 2), 30)

    assert len(days) == 30
    assert days[0] == date(2024, 2, 2)
    assert days[-1] == date(2024, 3, 2)
    assert days == sorted(days)
