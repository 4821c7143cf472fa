"""Domain services package."""

from .aggregation import aggregate_by_currency, to_display_totals
from .balance import compute_balance
from .normalization import (
    month_start,
    normalize_as_of,
    normalize_currency_code,
    trailing_dates,
)
from .rounding import quantize_amount, resolve_rounding
from .valuation import value_holding

__all__ = [
    "aggregate_by_currency",
    "to_display_totals",
    "compute_balance",
    "month_start",
    "normalize_as_of",
    "normalize_currency_code",
    "trailing_dates",
    "quantize_amount",
    "resolve_rounding",
    "value_holding",
]
