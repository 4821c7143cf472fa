"""Holding valuation helpers."""

from src.domain.models import Holding, HoldingValuation, Price
from src.utils.decimal_utils import coerce_decimal


def value_holding(holding: Holding, price: Price) -> HoldingValuation:
    """Value a holding at a market price.

    The valuation is tagged with the price currency; the holding currency
    only describes its cost basis.

    Args:
        holding: Holding to value.
        price: Latest known price for the holding's instrument.

    Returns:
        HoldingValuation: quantity x price in the price currency.
    """
    amount = coerce_decimal(holding.quantity) * coerce_decimal(price.price)
    return HoldingValuation(
        holding_id=holding.id,
        amount=amount,
        currency_code=price.currency_code,
        price_date=price.as_of,
    )


__all__ = ["value_holding"]
