"""CLI adapter seeding a demo user into the finance database.

Creates the schema, the supported currencies, settings, categories,
accounts, a holding and a couple of transactions recorded through the
RecordTransactionUseCase so their base amounts are computed at write time.
Run it once against a fresh database; transactions are appended.
"""

from datetime import date, timedelta
from decimal import Decimal

from src.application.use_cases.record_transaction import (
    RecordTransactionUseCase,
)
from src.domain.constants import EXPENSE, INCOME
from src.domain.models import (
    Account,
    Category,
    Currency,
    Holding,
    NewTransaction,
    Setting,
)
from src.infrastructure.container import (
    build_database_adapter,
    build_finance_repository,
    build_rate_resolver,
    build_refresh_fx_rates_use_case,
)
from src.infrastructure.logging.logger import get_app_logger

DEMO_USER_ID = "demo-user"

DEMO_CURRENCIES = (
    Currency(code="KRW", name="South Korean Won", decimals=0),
    Currency(code="JPY", name="Japanese Yen", decimals=0),
    Currency(code="USD", name="United States Dollar", decimals=2),
    Currency(code="EUR", name="Euro", decimals=2),
    Currency(code="CNY", name="Chinese Yuan", decimals=2),
)

DEMO_CATEGORIES = (
    ("cat-food", "Food", EXPENSE, "🍽️"),
    ("cat-transport", "Transport", EXPENSE, "🚗"),
    ("cat-rent", "Rent", EXPENSE, "🏠"),
    ("cat-salary", "Salary", INCOME, "💰"),
    ("cat-utilities", "Utilities", EXPENSE, "💡"),
    ("cat-entertainment", "Entertainment", EXPENSE, "🎉"),
)

DEMO_ACCOUNTS = (
    ("acc-cash-krw", "Cash (KRW)", "KRW", "cash", "My physical cash"),
    ("acc-bank-jpy", "Bank (JPY)", "JPY", "bank", "My Japanese bank account"),
    ("acc-card-usd", "Credit Card (USD)", "USD", "credit_card", "My US credit card"),
)


def main() -> None:
    """Seed the demo dataset."""
    logger = get_app_logger()
    db_adapter = build_database_adapter()
    repository = build_finance_repository(db_adapter)
    repository.prepare_schema()

    for currency in DEMO_CURRENCIES:
        repository.save_currency(currency)
    repository.save_settings(
        Setting(
            user_id=DEMO_USER_ID,
            base_currency="KRW",
            display_currencies=("JPY", "USD"),
            locale="ko-KR",
            rounding_rule="bankers_rounding",
        )
    )
    for category_id, name, category_type, icon in DEMO_CATEGORIES:
        repository.save_category(
            Category(
                id=category_id,
                user_id=DEMO_USER_ID,
                name=name,
                category_type=category_type,
                icon=icon,
            )
        )
    for account_id, name, currency_code, account_type, note in DEMO_ACCOUNTS:
        repository.save_account(
            Account(
                id=account_id,
                user_id=DEMO_USER_ID,
                name=name,
                currency_code=currency_code,
                account_type=account_type,
                note=note,
            )
        )
    repository.save_holding(
        Holding(
            id="hold-aapl",
            user_id=DEMO_USER_ID,
            symbol="AAPL",
            exchange="NASDAQ",
            quantity=Decimal("10"),
            avg_cost=Decimal("170.50"),
            currency_code="USD",
            note="Apple Inc. shares",
        )
    )

    today = date.today()
    build_refresh_fx_rates_use_case(db_adapter).execute(today)
    recorder = RecordTransactionUseCase(
        repository,
        rate_resolver=build_rate_resolver(db_adapter),
        logger=logger,
    )
    recorder.execute(
        DEMO_USER_ID,
        NewTransaction(
            account_id="acc-cash-krw",
            tx_type=INCOME,
            amount_original=Decimal("3000000"),
            currency_original="KRW",
            tx_date=today - timedelta(days=5),
            category_id="cat-salary",
            memo="Monthly salary",
        ),
    )
    recorder.execute(
        DEMO_USER_ID,
        NewTransaction(
            account_id="acc-cash-krw",
            tx_type=EXPENSE,
            amount_original=Decimal("15000"),
            currency_original="KRW",
            tx_date=today,
            category_id="cat-food",
            memo="Lunch with friends",
        ),
    )

    print(f"Seeded demo data for user {DEMO_USER_ID}.")


if __name__ == "__main__":  # pragma: no cover
    main()
