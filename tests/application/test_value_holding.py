"""Tests for the HoldingValuator use case."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

from src.application.use_cases.value_holding import HoldingValuator
from src.domain.models import Holding, Price

HOLDING = Holding(
    id="hold-1",
    user_id="user-1",
    symbol="AAPL",
    exchange="NASDAQ",
    quantity=Decimal("10"),
    avg_cost=Decimal("170.50"),
    currency_code="KRW",
)


def test_value_multiplies_quantity_by_price(fake_logger) -> None:
    lookup = MagicMock()
    lookup.latest_price.return_value = Price(
        symbol="AAPL",
        exchange="NASDAQ",
        as_of=date(2024, 3, 13),
        price=Decimal("190.25"),
        currency_code="USD",
    )
    valuator = HoldingValuator(lookup, logger=fake_logger)

    valuation = valuator.value(HOLDING, date(2024, 3, 15))

    assert valuation.amount == Decimal("1902.50")
    assert valuation.currency_code == "USD"
    lookup.latest_price.assert_called_once_with("AAPL", "NASDAQ", date(2024, 3, 15))


def test_value_without_price_contributes_nothing(fake_logger) -> None:
    lookup = MagicMock()
    lookup.latest_price.return_value = None
    valuator = HoldingValuator(lookup, logger=fake_logger)

    assert valuator.value(HOLDING, date(2024, 3, 15)) is None
    fake_logger.warning.assert_called_once()
