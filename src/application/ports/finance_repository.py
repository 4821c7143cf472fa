"""Port for finance entity storage."""

from datetime import date
from typing import Protocol

from src.domain.models import (
    Account,
    Category,
    Currency,
    ExpenseRow,
    FxRate,
    Holding,
    Price,
    Setting,
    Transaction,
)


class FinanceRepositoryPort(Protocol):
    """Port exposing the entity store used by valuation use cases.

    Implementations raise ``StoreError`` when the underlying store fails.
    """

    def fetch_settings(self, user_id: str) -> Setting | None:
        """Return the user's settings or None when absent."""

    def fetch_currencies(self) -> list[Currency]:
        """Return all known currencies."""

    def fetch_accounts(self, user_id: str) -> list[Account]:
        """Return the user's accounts."""

    def fetch_account_transactions(self, account_id: str) -> list[Transaction]:
        """Return every transaction recorded on an account."""

    def fetch_holdings(self, user_id: str) -> list[Holding]:
        """Return the user's holdings."""

    def fetch_expense_transactions(
        self,
        user_id: str,
        start_date: date,
        end_date: date,
    ) -> list[ExpenseRow]:
        """Return expense rows dated within [start_date, end_date]."""

    def fetch_latest_price(
        self,
        symbol: str,
        exchange: str,
        as_of: date,
    ) -> Price | None:
        """Return the most recent price dated on or before as_of."""

    def fetch_price(
        self,
        symbol: str,
        exchange: str,
        as_of: date,
    ) -> Price | None:
        """Return the price recorded exactly on as_of."""

    def upsert_price(self, price: Price) -> None:
        """Insert or replace the price for (symbol, exchange, as_of)."""

    def fetch_fx_rate(
        self,
        base_code: str,
        quote_code: str,
        on_date: date,
    ) -> FxRate | None:
        """Return the stored rate for the exact date."""

    def upsert_fx_rate(self, rate: FxRate) -> None:
        """Insert or replace the rate for (date, base, quote)."""

    def save_transaction(self, transaction: Transaction) -> None:
        """Persist a transaction."""


class FinanceSeedPort(Protocol):
    """Port exposing writes used to bootstrap a finance store."""

    def prepare_schema(self) -> None:
        """Ensure the finance tables exist."""

    def save_currency(self, currency: Currency) -> None:
        """Insert or replace a currency."""

    def save_settings(self, setting: Setting) -> None:
        """Insert or replace a user's settings."""

    def save_account(self, account: Account) -> None:
        """Insert or replace an account."""

    def save_category(self, category: Category) -> None:
        """Insert or replace a category."""

    def save_holding(self, holding: Holding) -> None:
        """Insert or replace a holding."""


__all__ = ["FinanceRepositoryPort", "FinanceSeedPort"]
