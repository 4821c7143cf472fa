"""Domain models for valuation results."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class FxQuote:
    """Resolved conversion rate.

    Attributes:
        rate: Conversion rate from base to quote.
        is_fallback: True when no real rate was available and 1 was used.
        source: Origin of the rate (internal, store, provider name, fallback).
    """

    rate: Decimal
    is_fallback: bool = False
    source: str = "store"


@dataclass(frozen=True)
class CurrencyAmount:
    """Amount tagged with its currency code."""

    currency: str
    amount: Decimal


@dataclass(frozen=True)
class HoldingValuation:
    """Market value of a holding in the price currency."""

    holding_id: str
    amount: Decimal
    currency_code: str
    price_date: date


@dataclass(frozen=True)
class SeriesPoint:
    """Net worth in the base currency on a given day."""

    date: date
    value: Decimal


@dataclass(frozen=True)
class CategoryTotal:
    """Expense total for a category in the base currency."""

    category: str
    total: Decimal


@dataclass(frozen=True)
class DashboardSummary:
    """Dashboard valuation snapshot before response encoding."""

    user_id: str
    as_of: date
    base_currency: str
    total_net_worth_base: Decimal
    by_currency: list[CurrencyAmount]
    last_30_days_series: list[SeriesPoint]
    category_breakdown: list[CategoryTotal]
    currency_buckets: dict[str, Decimal] = field(default_factory=dict)
    fallback_rate_used: bool = False
    rounding_rule: str | None = None


__all__ = [
    "FxQuote",
    "CurrencyAmount",
    "HoldingValuation",
    "SeriesPoint",
    "CategoryTotal",
    "DashboardSummary",
]
