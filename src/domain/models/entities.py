"""Domain models for stored finance entities."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class Currency:
    """Currency with its minor-unit convention."""

    code: str
    name: str
    decimals: int = 2


@dataclass(frozen=True)
class Account:
    """Account owned by a user. Balances are derived, never stored."""

    id: str
    user_id: str
    name: str
    currency_code: str
    account_type: str
    note: str | None = None


@dataclass(frozen=True)
class Category:
    """Income or expense category, unique per (user, name)."""

    id: str
    user_id: str
    name: str
    category_type: str
    icon: str | None = None


@dataclass(frozen=True)
class Transaction:
    """Transaction with its amount restated in the base currency.

    Attributes:
        amount_original: Amount in the currency it was recorded in.
        currency_original: Currency code of amount_original.
        amount_base: amount_original converted at tx_date when written.
        currency_base: User base currency at write time.
    """

    id: str
    user_id: str
    account_id: str
    tx_type: str
    amount_original: Decimal
    currency_original: str
    amount_base: Decimal
    currency_base: str
    tx_date: date
    category_id: str | None = None
    memo: str | None = None
    tags: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class NewTransaction:
    """Caller input for recording a transaction."""

    account_id: str
    tx_type: str
    amount_original: Decimal
    currency_original: str
    tx_date: date
    category_id: str | None = None
    memo: str | None = None
    tags: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ExpenseRow:
    """Expense transaction joined with its category name."""

    tx_date: date
    amount_original: Decimal
    currency_original: str
    category_name: str | None


@dataclass(frozen=True)
class Holding:
    """Position in an instrument keyed by (symbol, exchange).

    ``currency_code`` is the cost-basis currency; market value uses the
    price currency.
    """

    id: str
    user_id: str
    symbol: str
    exchange: str
    quantity: Decimal
    avg_cost: Decimal
    currency_code: str
    note: str | None = None


@dataclass(frozen=True)
class Price:
    """Market price snapshot, one per (symbol, exchange, as_of)."""

    symbol: str
    exchange: str
    as_of: date
    price: Decimal
    currency_code: str


@dataclass(frozen=True)
class FxRate:
    """Stored conversion rate for (date, base, quote)."""

    date: date
    base_code: str
    quote_code: str
    rate: Decimal
    source: str


@dataclass(frozen=True)
class Setting:
    """Per-user valuation preferences."""

    user_id: str
    base_currency: str
    display_currencies: tuple[str, ...] = field(default_factory=tuple)
    locale: str = "en-US"
    rounding_rule: str | None = None


__all__ = [
    "Currency",
    "Account",
    "Category",
    "Transaction",
    "NewTransaction",
    "ExpenseRow",
    "Holding",
    "Price",
    "FxRate",
    "Setting",
]
