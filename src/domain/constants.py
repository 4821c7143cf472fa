"""Domain constants for multi-currency valuation."""

from decimal import Decimal

INCOME = "income"
EXPENSE = "expense"
TRANSFER = "transfer"

TRANSACTION_TYPES = (INCOME, EXPENSE, TRANSFER)
CATEGORY_TYPES = (INCOME, EXPENSE)

FALLBACK_RATE = Decimal("1")
TREND_WINDOW_DAYS = 30
DEFAULT_MINOR_UNITS = 2

SELF_PAIR_SOURCE = "internal"


__all__ = [
    "INCOME",
    "EXPENSE",
    "TRANSFER",
    "TRANSACTION_TYPES",
    "CATEGORY_TYPES",
    "FALLBACK_RATE",
    "TREND_WINDOW_DAYS",
    "DEFAULT_MINOR_UNITS",
    "SELF_PAIR_SOURCE",
]
