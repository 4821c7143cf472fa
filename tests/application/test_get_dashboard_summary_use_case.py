"""Tests for the GetDashboardSummaryUseCase."""

from datetime import date, timedelta
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from src.application.use_cases.get_dashboard_summary import (
    GetDashboardSummaryUseCase,
)
from src.application.use_cases.get_latest_price import PriceLookup
from src.application.use_cases.resolve_fx_rate import FxRateResolver
from src.application.use_cases.value_holding import HoldingValuator
from src.domain.constants import EXPENSE, INCOME, TRANSFER
from src.domain.errors import NotFoundError, StoreError, ValidationError
from src.domain.models import (
    Account,
    Category,
    Currency,
    Holding,
    Price,
    Setting,
    Transaction,
)

AS_OF = date(2024, 3, 15)


def _use_case(repository, logger, max_workers: int = 2):
    return GetDashboardSummaryUseCase(
        repository,
        rate_resolver=FxRateResolver(repository, logger=logger),
        holding_valuator=HoldingValuator(
            PriceLookup(repository, logger=logger, today=lambda: AS_OF),
            logger=logger,
        ),
        logger=logger,
        max_workers=max_workers,
        today=lambda: AS_OF,
    )


def _account(repository, account_id: str, currency_code: str) -> None:
    repository.save_account(
        Account(
            id=account_id,
            user_id="user-1",
            name=account_id,
            currency_code=currency_code,
            account_type="bank",
        )
    )


def _transaction(
    repository,
    tx_id: str,
    account_id: str,
    tx_type: str,
    amount: str,
    currency: str,
    tx_date: date,
    category_id: str | None = None,
) -> None:
    repository.save_transaction(
        Transaction(
            id=tx_id,
            user_id="user-1",
            account_id=account_id,
            tx_type=tx_type,
            amount_original=Decimal(amount),
            currency_original=currency,
            amount_base=Decimal(amount),
            currency_base="KRW",
            tx_date=tx_date,
            category_id=category_id,
        )
    )


def _krw_user(repository, display=("USD",), rounding_rule=None) -> None:
    repository.save_currency(Currency(code="KRW", name="Won", decimals=0))
    repository.save_currency(Currency(code="USD", name="Dollar", decimals=2))
    repository.save_settings(
        Setting(
            user_id="user-1",
            base_currency="KRW",
            display_currencies=display,
            rounding_rule=rounding_rule,
        )
    )


def test_single_krw_account_converts_to_usd_display(
    memory_repository,
    fake_logger,
) -> None:
    _krw_user(memory_repository)
    _account(memory_repository, "acc-krw", "KRW")
    _transaction(
        memory_repository,
        "t1",
        "acc-krw",
        INCOME,
        "1000000",
        "KRW",
        AS_OF - timedelta(days=40),
    )
    memory_repository.add_rate(AS_OF, "KRW", "USD", str(Decimal(1) / Decimal(1300)))

    payload = _use_case(memory_repository, fake_logger).execute_payload(
        "user-1",
        "2024-03-15",
    )

    assert payload["asOf"] == "2024-03-15"
    assert payload["baseCurrency"] == "KRW"
    assert payload["totalNetWorthBase"] == Decimal("1000000")
    assert payload["byCurrency"] == [
        {"currency": "USD", "total": Decimal("769.23")},
    ]
    assert payload["fallbackRateUsed"] is False
    series = payload["last30DaysSeries"]
    assert len(series) == 30
    assert series[0]["date"] == "2024-02-15"
    assert series[-1] == {"date": "2024-03-15", "value": Decimal("1000000")}


def test_missing_pair_falls_back_to_one_and_is_flagged(
    memory_repository,
    fake_logger,
) -> None:
    _krw_user(memory_repository, display=())
    _account(memory_repository, "acc-eur", "EUR")
    _transaction(
        memory_repository,
        "t1",
        "acc-eur",
        INCOME,
        "100",
        "EUR",
        AS_OF - timedelta(days=1),
    )

    summary = _use_case(memory_repository, fake_logger).execute("user-1", AS_OF)

    assert summary.total_net_worth_base == Decimal("100")
    assert summary.fallback_rate_used is True
    assert summary.by_currency == []
    assert summary.currency_buckets == {"EUR": Decimal("100")}


def test_series_applies_transaction_cutoffs(memory_repository, fake_logger) -> None:
    _krw_user(memory_repository, display=())
    _account(memory_repository, "acc-krw", "KRW")
    _transaction(
        memory_repository,
        "t1",
        "acc-krw",
        INCOME,
        "5000",
        "KRW",
        AS_OF - timedelta(days=10),
    )
    _transaction(
        memory_repository,
        "t2",
        "acc-krw",
        EXPENSE,
        "2000",
        "KRW",
        AS_OF - timedelta(days=2),
    )

    summary = _use_case(memory_repository, fake_logger).execute("user-1", AS_OF)

    values = {point.date: point.value for point in summary.last_30_days_series}
    assert values[AS_OF - timedelta(days=11)] == Decimal("0")
    assert values[AS_OF - timedelta(days=10)] == Decimal("5000")
    assert values[AS_OF - timedelta(days=2)] == Decimal("3000")
    assert values[AS_OF] == summary.total_net_worth_base == Decimal("3000")


def test_ignored_transfers_are_warned_once_per_request(
    memory_repository,
    fake_logger,
) -> None:
    _krw_user(memory_repository, display=())
    _account(memory_repository, "acc-krw", "KRW")
    _transaction(
        memory_repository,
        "t1",
        "acc-krw",
        INCOME,
        "5000",
        "KRW",
        AS_OF - timedelta(days=20),
    )
    _transaction(
        memory_repository,
        "t2",
        "acc-krw",
        TRANSFER,
        "1000",
        "KRW",
        AS_OF - timedelta(days=10),
    )

    summary = _use_case(memory_repository, fake_logger).execute("user-1", AS_OF)

    assert summary.total_net_worth_base == Decimal("5000")
    fake_logger.warning.assert_called_once()
    assert "1 transfer" in fake_logger.warning.call_args.args[0]


def test_headline_counts_future_dated_transactions(
    memory_repository,
    fake_logger,
) -> None:
    _krw_user(memory_repository, display=())
    _account(memory_repository, "acc-krw", "KRW")
    _transaction(
        memory_repository,
        "t1",
        "acc-krw",
        INCOME,
        "700",
        "KRW",
        AS_OF + timedelta(days=3),
    )

    summary = _use_case(memory_repository, fake_logger).execute("user-1", AS_OF)

    assert summary.total_net_worth_base == Decimal("700")
    assert summary.last_30_days_series[-1].value == Decimal("0")


def test_holdings_use_latest_price_and_price_currency(
    memory_repository,
    fake_logger,
) -> None:
    memory_repository.save_settings(Setting(user_id="user-1", base_currency="USD"))
    memory_repository.save_holding(
        Holding(
            id="hold-aapl",
            user_id="user-1",
            symbol="AAPL",
            exchange="NASDAQ",
            quantity=Decimal("10"),
            avg_cost=Decimal("150"),
            currency_code="KRW",
        )
    )
    memory_repository.upsert_price(
        Price(
            symbol="AAPL",
            exchange="NASDAQ",
            as_of=AS_OF - timedelta(days=2),
            price=Decimal("190.5"),
            currency_code="USD",
        )
    )

    summary = _use_case(memory_repository, fake_logger).execute("user-1", AS_OF)

    assert summary.total_net_worth_base == Decimal("1905.0")
    assert summary.currency_buckets == {"USD": Decimal("1905.0")}
    assert summary.fallback_rate_used is False
    values = {point.date: point.value for point in summary.last_30_days_series}
    assert values[AS_OF - timedelta(days=3)] == Decimal("0")
    assert values[AS_OF - timedelta(days=2)] == Decimal("1905.0")


def test_category_breakdown_covers_current_month_only(
    memory_repository,
    fake_logger,
) -> None:
    _krw_user(memory_repository, display=())
    _account(memory_repository, "acc-krw", "KRW")
    _account(memory_repository, "acc-usd", "USD")
    for category_id, name in (("cat-food", "Food"), ("cat-travel", "Travel")):
        memory_repository.save_category(
            Category(
                id=category_id,
                user_id="user-1",
                name=name,
                category_type=EXPENSE,
            )
        )
    memory_repository.add_rate(date(2024, 3, 5), "USD", "KRW", "1300")
    _transaction(
        memory_repository,
        "feb",
        "acc-krw",
        EXPENSE,
        "9999",
        "KRW",
        date(2024, 2, 29),
        "cat-food",
    )
    _transaction(
        memory_repository,
        "food",
        "acc-krw",
        EXPENSE,
        "15000",
        "KRW",
        date(2024, 3, 1),
        "cat-food",
    )
    _transaction(
        memory_repository,
        "travel",
        "acc-usd",
        EXPENSE,
        "10",
        "USD",
        date(2024, 3, 5),
        "cat-travel",
    )
    _transaction(
        memory_repository,
        "untagged",
        "acc-krw",
        EXPENSE,
        "500",
        "KRW",
        date(2024, 3, 6),
    )
    _transaction(
        memory_repository,
        "later",
        "acc-krw",
        EXPENSE,
        "700",
        "KRW",
        date(2024, 3, 20),
        "cat-food",
    )

    summary = _use_case(memory_repository, fake_logger).execute("user-1", AS_OF)

    assert [(item.category, item.total) for item in summary.category_breakdown] == [
        ("Food", Decimal("15000")),
        ("Travel", Decimal("13000")),
    ]


def test_missing_settings_raise_not_found(memory_repository, fake_logger) -> None:
    with pytest.raises(NotFoundError):
        _use_case(memory_repository, fake_logger).execute("ghost", AS_OF)


def test_malformed_as_of_raises_validation_error(
    memory_repository,
    fake_logger,
) -> None:
    _krw_user(memory_repository)

    with pytest.raises(ValidationError):
        _use_case(memory_repository, fake_logger).execute("user-1", "03/15/2024")


def test_store_failure_aborts_the_request(fake_logger) -> None:
    repository = MagicMock()
    repository.fetch_settings.return_value = Setting(
        user_id="user-1",
        base_currency="KRW",
    )
    repository.fetch_accounts.return_value = [
        Account(
            id="acc-1",
            user_id="user-1",
            name="Cash",
            currency_code="KRW",
            account_type="cash",
        )
    ]
    repository.fetch_holdings.return_value = []
    repository.fetch_account_transactions.side_effect = StoreError("boom")

    with pytest.raises(StoreError):
        _use_case(repository, fake_logger).execute("user-1", AS_OF)


def test_execute_defaults_as_of_to_today(memory_repository, fake_logger) -> None:
    _krw_user(memory_repository, display=())

    summary = _use_case(memory_repository, fake_logger).execute("user-1")

    assert summary.as_of == AS_OF
    assert summary.total_net_worth_base == Decimal("0")
    fake_logger.info.assert_called()
