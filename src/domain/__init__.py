"""Domain package for valuation rules and core models."""

from .constants import (
    EXPENSE,
    FALLBACK_RATE,
    INCOME,
    TRANSACTION_TYPES,
    TRANSFER,
    TREND_WINDOW_DAYS,
)
from .errors import (
    FinanceError,
    NotFoundError,
    StoreError,
    UpstreamUnavailableError,
    ValidationError,
)

__all__ = [
    "EXPENSE",
    "FALLBACK_RATE",
    "INCOME",
    "TRANSACTION_TYPES",
    "TRANSFER",
    "TREND_WINDOW_DAYS",
    "FinanceError",
    "NotFoundError",
    "StoreError",
    "UpstreamUnavailableError",
    "ValidationError",
]
