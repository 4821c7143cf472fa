"""Shared fixtures for the test suite."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from src.domain.constants import EXPENSE
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


class InMemoryFinanceRepository:
    """Dictionary-backed repository honoring the finance repository port."""

    def __init__(self) -> None:
        self.currencies: dict[str, Currency] = {}
        self.settings: dict[str, Setting] = {}
        self.accounts: dict[str, Account] = {}
        self.categories: dict[str, Category] = {}
        self.transactions: list[Transaction] = []
        self.holdings: dict[str, Holding] = {}
        self.prices: dict[tuple[str, str, date], Price] = {}
        self.fx_rates: dict[tuple[date, str, str], FxRate] = {}
        self.fx_upserts: list[FxRate] = []
        self.price_upserts: list[Price] = []

    def prepare_schema(self) -> None:
        return None

    def fetch_settings(self, user_id: str) -> Setting | None:
        return self.settings.get(user_id)

    def fetch_currencies(self) -> list[Currency]:
        return sorted(self.currencies.values(), key=lambda item: item.code)

    def fetch_accounts(self, user_id: str) -> list[Account]:
        return [item for item in self.accounts.values() if item.user_id == user_id]

    def fetch_account_transactions(self, account_id: str) -> list[Transaction]:
        return [tx for tx in self.transactions if tx.account_id == account_id]

    def fetch_holdings(self, user_id: str) -> list[Holding]:
        return [item for item in self.holdings.values() if item.user_id == user_id]

    def fetch_expense_transactions(
        self,
        user_id: str,
        start_date: date,
        end_date: date,
    ) -> list[ExpenseRow]:
        rows = []
        for tx in self.transactions:
            if tx.user_id != user_id or tx.tx_type != EXPENSE:
                continue
            if not start_date <= tx.tx_date <= end_date:
                continue
            category = self.categories.get(tx.category_id)
            rows.append(
                ExpenseRow(
                    tx_date=tx.tx_date,
                    amount_original=tx.amount_original,
                    currency_original=tx.currency_original,
                    category_name=category.name if category else None,
                )
            )
        return rows

    def fetch_latest_price(self, symbol: str, exchange: str, as_of: date):
        candidates = [
            price
            for (sym, exch, day), price in self.prices.items()
            if sym == symbol and exch == exchange and day <= as_of
        ]
        if not candidates:
            return None
        return max(candidates, key=lambda price: price.as_of)

    def fetch_price(self, symbol: str, exchange: str, as_of: date):
        return self.prices.get((symbol, exchange, as_of))

    def upsert_price(self, price: Price) -> None:
        self.price_upserts.append(price)
        self.prices[(price.symbol, price.exchange, price.as_of)] = price

    def fetch_fx_rate(self, base_code: str, quote_code: str, on_date: date):
        return self.fx_rates.get((on_date, base_code, quote_code))

    def upsert_fx_rate(self, rate: FxRate) -> None:
        self.fx_upserts.append(rate)
        self.fx_rates[(rate.date, rate.base_code, rate.quote_code)] = rate

    def save_transaction(self, transaction: Transaction) -> None:
        self.transactions.append(transaction)

    def save_currency(self, currency: Currency) -> None:
        self.currencies[currency.code] = currency

    def save_settings(self, setting: Setting) -> None:
        self.settings[setting.user_id] = setting

    def save_account(self, account: Account) -> None:
        self.accounts[account.id] = account

    def save_category(self, category: Category) -> None:
        self.categories[category.id] = category

    def save_holding(self, holding: Holding) -> None:
        self.holdings[holding.id] = holding

    def add_rate(
        self,
        on_date: date,
        base_code: str,
        quote_code: str,
        rate: str,
        source: str = "test",
    ) -> None:
        self.upsert_fx_rate(
            FxRate(
                date=on_date,
                base_code=base_code,
                quote_code=quote_code,
                rate=Decimal(rate),
                source=source,
            )
        )
        self.fx_upserts.clear()


@pytest.fixture
def memory_repository() -> InMemoryFinanceRepository:
    """Return an empty in-memory finance repository."""
    return InMemoryFinanceRepository()


@pytest.fixture
def fake_logger() -> MagicMock:
    """Return a logger double recording calls."""
    return MagicMock()
