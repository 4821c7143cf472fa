"""Domain models package."""

from .entities import (
    Account,
    Category,
    Currency,
    ExpenseRow,
    FxRate,
    Holding,
    NewTransaction,
    Price,
    Setting,
    Transaction,
)
from .finance import (
    CategoryTotal,
    CurrencyAmount,
    DashboardSummary,
    FxQuote,
    HoldingValuation,
    SeriesPoint,
)

__all__ = [
    "Account",
    "Category",
    "Currency",
    "ExpenseRow",
    "FxRate",
    "Holding",
    "NewTransaction",
    "Price",
    "Setting",
    "Transaction",
    "CategoryTotal",
    "CurrencyAmount",
    "DashboardSummary",
    "FxQuote",
    "HoldingValuation",
    "SeriesPoint",
]
