"""DDL for the finance store.

Statements use portable SQL accepted by PostgreSQL and SQLite.
Transactions reference categories without a foreign key so deleting a
category never fails on referencing transactions.
"""

CREATE_CURRENCIES_SQL = """
CREATE TABLE IF NOT EXISTS currencies (
    code TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    decimals INTEGER NOT NULL DEFAULT 2
)
"""

CREATE_SETTINGS_SQL = """
CREATE TABLE IF NOT EXISTS settings (
    user_id TEXT PRIMARY KEY,
    base_currency TEXT NOT NULL,
    display_currencies TEXT NOT NULL DEFAULT '',
    locale TEXT NOT NULL DEFAULT 'en-US',
    rounding_rule TEXT
)
"""

CREATE_ACCOUNTS_SQL = """
CREATE TABLE IF NOT EXISTS accounts (
    id TEXT PRIMARY KEY,
    user_id TEXT NOT NULL,
    name TEXT NOT NULL,
    currency_code TEXT NOT NULL,
    account_type TEXT NOT NULL,
    note TEXT
)
"""

CREATE_CATEGORIES_SQL = """
CREATE TABLE IF NOT EXISTS categories (
    id TEXT PRIMARY KEY,
    user_id TEXT NOT NULL,
    name TEXT NOT NULL,
    category_type TEXT NOT NULL,
    icon TEXT,
    UNIQUE (user_id, name)
)
"""

CREATE_TRANSACTIONS_SQL = """
CREATE TABLE IF NOT EXISTS transactions (
    id TEXT PRIMARY KEY,
    user_id TEXT NOT NULL,
    account_id TEXT NOT NULL,
    category_id TEXT,
    tx_type TEXT NOT NULL,
    amount_original NUMERIC NOT NULL,
    currency_original TEXT NOT NULL,
    amount_base NUMERIC NOT NULL,
    currency_base TEXT NOT NULL,
    tx_date DATE NOT NULL,
    memo TEXT,
    tags TEXT NOT NULL DEFAULT ''
)
"""

CREATE_HOLDINGS_SQL = """
CREATE TABLE IF NOT EXISTS holdings (
    id TEXT PRIMARY KEY,
    user_id TEXT NOT NULL,
    symbol TEXT NOT NULL,
    exchange TEXT NOT NULL,
    quantity NUMERIC NOT NULL,
    avg_cost NUMERIC NOT NULL,
    currency_code TEXT NOT NULL,
    note TEXT,
    UNIQUE (user_id, symbol, exchange)
)
"""

CREATE_PRICES_SQL = """
CREATE TABLE IF NOT EXISTS prices (
    symbol TEXT NOT NULL,
    exchange TEXT NOT NULL,
    as_of DATE NOT NULL,
    price NUMERIC NOT NULL,
    currency_code TEXT NOT NULL,
    PRIMARY KEY (symbol, exchange, as_of)
)
"""

CREATE_FX_RATES_SQL = """
CREATE TABLE IF NOT EXISTS fx_rates (
    rate_date DATE NOT NULL,
    base_code TEXT NOT NULL,
    quote_code TEXT NOT NULL,
    rate NUMERIC NOT NULL,
    source TEXT NOT NULL,
    PRIMARY KEY (rate_date, base_code, quote_code)
)
"""

SCHEMA_STATEMENTS = (
    CREATE_CURRENCIES_SQL,
    CREATE_SETTINGS_SQL,
    CREATE_ACCOUNTS_SQL,
    CREATE_CATEGORIES_SQL,
    CREATE_TRANSACTIONS_SQL,
    CREATE_HOLDINGS_SQL,
    CREATE_PRICES_SQL,
    CREATE_FX_RATES_SQL,
)

# SQLite applies REAL affinity to NUMERIC columns, so decimals live in TEXT.
DECIMAL_COLUMN_TYPES = {"sqlite": "TEXT"}


def build_schema_statements(dialect_name: str) -> tuple[str, ...]:
    """Return the DDL with decimal columns typed for a SQL dialect.

    Args:
        dialect_name: SQLAlchemy dialect name, e.g. ``"sqlite"``.

    Returns:
        tuple[str, ...]: CREATE TABLE statements in dependency order.
    """
    decimal_type = DECIMAL_COLUMN_TYPES.get(dialect_name)
    if decimal_type is None:
        return SCHEMA_STATEMENTS
    return tuple(
        statement.replace(" NUMERIC ", f" {decimal_type} ")
        for statement in SCHEMA_STATEMENTS
    )


__all__ = [
    "CREATE_CURRENCIES_SQL",
    "CREATE_SETTINGS_SQL",
    "CREATE_ACCOUNTS_SQL",
    "CREATE_CATEGORIES_SQL",
    "CREATE_TRANSACTIONS_SQL",
    "CREATE_HOLDINGS_SQL",
    "CREATE_PRICES_SQL",
    "CREATE_FX_RATES_SQL",
    "DECIMAL_COLUMN_TYPES",
    "SCHEMA_STATEMENTS",
    "build_schema_statements",
]
