"""SQLAlchemy-backed repository for finance entities."""

from contextlib import contextmanager
from dataclasses import asdict
from datetime import date

from sqlalchemy import Date, Integer, bindparam, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.types import TypeEngine

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.finance_repository import (
    FinanceRepositoryPort,
    FinanceSeedPort,
)
from src.domain.constants import EXPENSE
from src.domain.errors import StoreError
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
from src.infrastructure.schema import build_schema_statements
from src.infrastructure.sql_types import ExactDecimal
from src.utils.decimal_utils import coerce_decimal


def _typed(
    sql: str,
    binds: dict[str, TypeEngine] | None = None,
    columns: dict[str, TypeEngine] | None = None,
):
    """Build a text() statement with typed parameters and result columns."""
    statement = text(sql)
    if binds:
        statement = statement.bindparams(
            *(bindparam(name, type_=type_) for name, type_ in binds.items())
        )
    if columns:
        statement = statement.columns(**columns)
    return statement


SELECT_SETTINGS_SQL = text(
    """
    SELECT user_id, base_currency, display_currencies, locale, rounding_rule
    FROM settings
    WHERE user_id = :user_id
    """
)

SELECT_CURRENCIES_SQL = _typed(
    """
    SELECT code, name, decimals
    FROM currencies
    ORDER BY code
    """,
    columns={"decimals": Integer()},
)

SELECT_ACCOUNTS_SQL = text(
    """
    SELECT id, user_id, name, currency_code, account_type, note
    FROM accounts
    WHERE user_id = :user_id
    ORDER BY id
    """
)

SELECT_ACCOUNT_TRANSACTIONS_SQL = _typed(
    """
    SELECT id, user_id, account_id, category_id, tx_type,
           amount_original, currency_original, amount_base, currency_base,
           tx_date, memo, tags
    FROM transactions
    WHERE account_id = :account_id
    ORDER BY tx_date, id
    """,
    columns={
        "amount_original": ExactDecimal(),
        "amount_base": ExactDecimal(),
        "tx_date": Date(),
    },
)

SELECT_HOLDINGS_SQL = _typed(
    """
    SELECT id, user_id, symbol, exchange, quantity, avg_cost,
           currency_code, note
    FROM holdings
    WHERE user_id = :user_id
    ORDER BY id
    """,
    columns={"quantity": ExactDecimal(), "avg_cost": ExactDecimal()},
)

SELECT_EXPENSES_SQL = _typed(
    """
    SELECT t.tx_date AS tx_date,
           t.amount_original AS amount_original,
           t.currency_original AS currency_original,
           c.name AS category_name
    FROM transactions t
    LEFT JOIN categories c ON c.id = t.category_id
    WHERE t.user_id = :user_id
      AND t.tx_type = :tx_type
      AND t.tx_date >= :start_date
      AND t.tx_date <= :end_date
    ORDER BY t.tx_date, t.id
    """,
    binds={"start_date": Date(), "end_date": Date()},
    columns={"tx_date": Date(), "amount_original": ExactDecimal()},
)

SELECT_LATEST_PRICE_SQL = _typed(
    """
    SELECT symbol, exchange, as_of, price, currency_code
    FROM prices
    WHERE symbol = :symbol AND exchange = :exchange AND as_of <= :as_of
    ORDER BY as_of DESC
    LIMIT 1
    """,
    binds={"as_of": Date()},
    columns={"as_of": Date(), "price": ExactDecimal()},
)

SELECT_PRICE_SQL = _typed(
    """
    SELECT symbol, exchange, as_of, price, currency_code
    FROM prices
    WHERE symbol = :symbol AND exchange = :exchange AND as_of = :as_of
    """,
    binds={"as_of": Date()},
    columns={"as_of": Date(), "price": ExactDecimal()},
)

UPSERT_PRICE_SQL = _typed(
    """
    INSERT INTO prices (symbol, exchange, as_of, price, currency_code)
    VALUES (:symbol, :exchange, :as_of, :price, :currency_code)
    ON CONFLICT (symbol, exchange, as_of)
    DO UPDATE SET price = excluded.price,
                  currency_code = excluded.currency_code
    """,
    binds={"as_of": Date(), "price": ExactDecimal()},
)

SELECT_FX_RATE_SQL = _typed(
    """
    SELECT rate_date, base_code, quote_code, rate, source
    FROM fx_rates
    WHERE rate_date = :rate_date
      AND base_code = :base_code
      AND quote_code = :quote_code
    """,
    binds={"rate_date": Date()},
    columns={"rate_date": Date(), "rate": ExactDecimal()},
)

UPSERT_FX_RATE_SQL = _typed(
    """
    INSERT INTO fx_rates (rate_date, base_code, quote_code, rate, source)
    VALUES (:rate_date, :base_code, :quote_code, :rate, :source)
    ON CONFLICT (rate_date, base_code, quote_code)
    DO UPDATE SET rate = excluded.rate, source = excluded.source
    """,
    binds={"rate_date": Date(), "rate": ExactDecimal()},
)

INSERT_TRANSACTION_SQL = _typed(
    """
    INSERT INTO transactions (
        id, user_id, account_id, category_id, tx_type,
        amount_original, currency_original, amount_base, currency_base,
        tx_date, memo, tags
    )
    VALUES (
        :id, :user_id, :account_id, :category_id, :tx_type,
        :amount_original, :currency_original, :amount_base, :currency_base,
        :tx_date, :memo, :tags
    )
    """,
    binds={
        "amount_original": ExactDecimal(),
        "amount_base": ExactDecimal(),
        "tx_date": Date(),
    },
)

UPSERT_CURRENCY_SQL = text(
    """
    INSERT INTO currencies (code, name, decimals)
    VALUES (:code, :name, :decimals)
    ON CONFLICT (code)
    DO UPDATE SET name = excluded.name, decimals = excluded.decimals
    """
)

UPSERT_SETTINGS_SQL = text(
    """
    INSERT INTO settings (
        user_id, base_currency, display_currencies, locale, rounding_rule
    )
    VALUES (
        :user_id, :base_currency, :display_currencies, :locale, :rounding_rule
    )
    ON CONFLICT (user_id)
    DO UPDATE SET base_currency = excluded.base_currency,
                  display_currencies = excluded.display_currencies,
                  locale = excluded.locale,
                  rounding_rule = excluded.rounding_rule
    """
)

UPSERT_ACCOUNT_SQL = text(
    """
    INSERT INTO accounts (id, user_id, name, currency_code, account_type, note)
    VALUES (:id, :user_id, :name, :currency_code, :account_type, :note)
    ON CONFLICT (id)
    DO UPDATE SET name = excluded.name,
                  currency_code = excluded.currency_code,
                  account_type = excluded.account_type,
                  note = excluded.note
    """
)

UPSERT_CATEGORY_SQL = text(
    """
    INSERT INTO categories (id, user_id, name, category_type, icon)
    VALUES (:id, :user_id, :name, :category_type, :icon)
    ON CONFLICT (id)
    DO UPDATE SET name = excluded.name,
                  category_type = excluded.category_type,
                  icon = excluded.icon
    """
)

UPSERT_HOLDING_SQL = _typed(
    """
    INSERT INTO holdings (
        id, user_id, symbol, exchange, quantity, avg_cost, currency_code, note
    )
    VALUES (
        :id, :user_id, :symbol, :exchange, :quantity, :avg_cost,
        :currency_code, :note
    )
    ON CONFLICT (id)
    DO UPDATE SET quantity = excluded.quantity,
                  avg_cost = excluded.avg_cost,
                  currency_code = excluded.currency_code,
                  note = excluded.note
    """,
    binds={"quantity": ExactDecimal(), "avg_cost": ExactDecimal()},
)


def _split_codes(raw: str | None) -> tuple[str, ...]:
    if not raw:
        return ()
    return tuple(part.strip() for part in raw.split(",") if part.strip())


class SqlAlchemyFinanceRepository(FinanceRepositoryPort, FinanceSeedPort):
    """Repository backed by SQLAlchemy for finance entities.

    Driver errors are raised as ``StoreError``.
    """

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the finance engine.
        """
        self._db_port = db_port

    @contextmanager
    def _connect(self, action: str, write: bool = False):
        engine = self._db_port.get_finance_engine()
        try:
            context = engine.begin() if write else engine.connect()
            with context as conn:
                yield conn
        except SQLAlchemyError as exc:
            raise StoreError(f"Failed to {action}: {exc}") from exc

    def prepare_schema(self) -> None:
        with self._connect("prepare schema", write=True) as conn:
            for statement in build_schema_statements(conn.dialect.name):
                conn.exec_driver_sql(statement)

    def fetch_settings(self, user_id: str) -> Setting | None:
        with self._connect("fetch settings") as conn:
            row = conn.execute(SELECT_SETTINGS_SQL, {"user_id": user_id}).first()
        if row is None:
            return None
        return Setting(
            user_id=row.user_id,
            base_currency=row.base_currency,
            display_currencies=_split_codes(row.display_currencies),
            locale=row.locale,
            rounding_rule=row.rounding_rule,
        )

    def fetch_currencies(self) -> list[Currency]:
        with self._connect("fetch currencies") as conn:
            rows = conn.execute(SELECT_CURRENCIES_SQL).all()
        return [
            Currency(code=row.code, name=row.name, decimals=row.decimals)
            for row in rows
        ]

    def fetch_accounts(self, user_id: str) -> list[Account]:
        with self._connect("fetch accounts") as conn:
            rows = conn.execute(SELECT_ACCOUNTS_SQL, {"user_id": user_id}).all()
        return [
            Account(
                id=row.id,
                user_id=row.user_id,
                name=row.name,
                currency_code=row.currency_code,
                account_type=row.account_type,
                note=row.note,
            )
            for row in rows
        ]

    def fetch_account_transactions(self, account_id: str) -> list[Transaction]:
        with self._connect("fetch transactions") as conn:
            rows = conn.execute(
                SELECT_ACCOUNT_TRANSACTIONS_SQL,
                {"account_id": account_id},
            ).all()
        return [
            Transaction(
                id=row.id,
                user_id=row.user_id,
                account_id=row.account_id,
                category_id=row.category_id,
                tx_type=row.tx_type,
                amount_original=coerce_decimal(row.amount_original),
                currency_original=row.currency_original,
                amount_base=coerce_decimal(row.amount_base),
                currency_base=row.currency_base,
                tx_date=row.tx_date,
                memo=row.memo,
                tags=_split_codes(row.tags),
            )
            for row in rows
        ]

    def fetch_holdings(self, user_id: str) -> list[Holding]:
        with self._connect("fetch holdings") as conn:
            rows = conn.execute(SELECT_HOLDINGS_SQL, {"user_id": user_id}).all()
        return [
            Holding(
                id=row.id,
                user_id=row.user_id,
                symbol=row.symbol,
                exchange=row.exchange,
                quantity=coerce_decimal(row.quantity),
                avg_cost=coerce_decimal(row.avg_cost),
                currency_code=row.currency_code,
                note=row.note,
            )
            for row in rows
        ]

    def fetch_expense_transactions(
        self,
        user_id: str,
        start_date: date,
        end_date: date,
    ) -> list[ExpenseRow]:
        params = {
            "user_id": user_id,
            "tx_type": EXPENSE,
            "start_date": start_date,
            "end_date": end_date,
        }
        with self._connect("fetch expenses") as conn:
            rows = conn.execute(SELECT_EXPENSES_SQL, params).all()
        return [
            ExpenseRow(
                tx_date=row.tx_date,
                amount_original=coerce_decimal(row.amount_original),
                currency_original=row.currency_original,
                category_name=row.category_name,
            )
            for row in rows
        ]

    def fetch_latest_price(
        self,
        symbol: str,
        exchange: str,
        as_of: date,
    ) -> Price | None:
        params = {"symbol": symbol, "exchange": exchange, "as_of": as_of}
        with self._connect("fetch latest price") as conn:
            row = conn.execute(SELECT_LATEST_PRICE_SQL, params).first()
        return self._to_price(row)

    def fetch_price(
        self,
        symbol: str,
        exchange: str,
        as_of: date,
    ) -> Price | None:
        params = {"symbol": symbol, "exchange": exchange, "as_of": as_of}
        with self._connect("fetch price") as conn:
            row = conn.execute(SELECT_PRICE_SQL, params).first()
        return self._to_price(row)

    def upsert_price(self, price: Price) -> None:
        with self._connect("upsert price", write=True) as conn:
            conn.execute(UPSERT_PRICE_SQL, asdict(price))

    def fetch_fx_rate(
        self,
        base_code: str,
        quote_code: str,
        on_date: date,
    ) -> FxRate | None:
        params = {
            "rate_date": on_date,
            "base_code": base_code,
            "quote_code": quote_code,
        }
        with self._connect("fetch fx rate") as conn:
            row = conn.execute(SELECT_FX_RATE_SQL, params).first()
        if row is None:
            return None
        return FxRate(
            date=row.rate_date,
            base_code=row.base_code,
            quote_code=row.quote_code,
            rate=coerce_decimal(row.rate),
            source=row.source,
        )

    def upsert_fx_rate(self, rate: FxRate) -> None:
        params = {
            "rate_date": rate.date,
            "base_code": rate.base_code,
            "quote_code": rate.quote_code,
            "rate": rate.rate,
            "source": rate.source,
        }
        with self._connect("upsert fx rate", write=True) as conn:
            conn.execute(UPSERT_FX_RATE_SQL, params)

    def save_transaction(self, transaction: Transaction) -> None:
        params = asdict(transaction)
        params["tags"] = ",".join(transaction.tags)
        with self._connect("save transaction", write=True) as conn:
            conn.execute(INSERT_TRANSACTION_SQL, params)

    def save_currency(self, currency: Currency) -> None:
        with self._connect("save currency", write=True) as conn:
            conn.execute(UPSERT_CURRENCY_SQL, asdict(currency))

    def save_settings(self, setting: Setting) -> None:
        params = asdict(setting)
        params["display_currencies"] = ",".join(setting.display_currencies)
        with self._connect("save settings", write=True) as conn:
            conn.execute(UPSERT_SETTINGS_SQL, params)

    def save_account(self, account: Account) -> None:
        with self._connect("save account", write=True) as conn:
            conn.execute(UPSERT_ACCOUNT_SQL, asdict(account))

    def save_category(self, category: Category) -> None:
        with self._connect("save category", write=True) as conn:
            conn.execute(UPSERT_CATEGORY_SQL, asdict(category))

    def save_holding(self, holding: Holding) -> None:
        with self._connect("save holding", write=True) as conn:
            conn.execute(UPSERT_HOLDING_SQL, asdict(holding))

    @staticmethod
    def _to_price(row) -> Price | None:
        if row is None:
            return None
        return Price(
            symbol=row.symbol,
            exchange=row.exchange,
            as_of=row.as_of,
            price=coerce_decimal(row.price),
            currency_code=row.currency_code,
        )


__all__ = ["SqlAlchemyFinanceRepository"]
