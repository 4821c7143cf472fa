"""Currency aggregation helpers."""

from collections.abc import Callable, Iterable
from decimal import Decimal

from src.domain.models import CurrencyAmount


def aggregate_by_currency(
    items: Iterable[CurrencyAmount],
) -> dict[str, Decimal]:
    """Sum currency-tagged amounts per currency code.

    Args:
        items: Amounts tagged with their currency.

    Returns:
        dict[str, Decimal]: Totals keyed by currency, in first-seen order.
    """
    totals: dict[str, Decimal] = {}
    for item in items:
        totals[item.currency] = totals.get(item.currency, Decimal("0")) + item.amount
    return totals


def to_display_totals(
    totals: dict[str, Decimal],
    display_currencies: Iterable[str],
    rate_for: Callable[[str, str], Decimal],
) -> list[CurrencyAmount]:
    """Re-express per-currency totals in each display currency.

    Args:
        totals: Per-currency totals from aggregate_by_currency.
        display_currencies: Ordered display currency codes.
        rate_for: Callable returning the rate from a source to a display code.

    Returns:
        list[CurrencyAmount]: One total per display currency, in order.
    """
    results = []
    for display_code in display_currencies:
        total = Decimal("0")
        for source_code, amount in totals.items():
            total += amount * rate_for(source_code, display_code)
        results.append(CurrencyAmount(currency=display_code, amount=total))
    return results


__all__ = ["aggregate_by_currency", "to_display_totals"]
