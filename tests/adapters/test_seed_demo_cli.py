"""Tests for the seed_demo_cli adapter."""

from decimal import Decimal
from unittest.mock import MagicMock

from src.adapters import seed_demo_cli
from src.domain.constants import EXPENSE, INCOME


def test_main_seeds_reference_data_and_transactions(
    monkeypatch,
    capsys,
    memory_repository,
):
    """The CLI should seed the demo user and record transactions."""
    refresh_use_case = MagicMock()
    monkeypatch.setattr(seed_demo_cli, "get_app_logger", lambda: MagicMock())
    monkeypatch.setattr(seed_demo_cli, "build_database_adapter", lambda: "adapter")
    monkeypatch.setattr(
        seed_demo_cli,
        "build_finance_repository",
        lambda db_port: memory_repository,
    )
    monkeypatch.setattr(
        seed_demo_cli,
        "build_refresh_fx_rates_use_case",
        lambda db_port: refresh_use_case,
    )
    resolver = MagicMock()
    resolver.rate.return_value = MagicMock(rate=Decimal("1"))
    monkeypatch.setattr(
        seed_demo_cli,
        "build_rate_resolver",
        lambda db_port: resolver,
    )

    seed_demo_cli.main()

    assert set(memory_repository.currencies) == {"KRW", "JPY", "USD", "EUR", "CNY"}
    assert memory_repository.currencies["KRW"].decimals == 0
    setting = memory_repository.settings[seed_demo_cli.DEMO_USER_ID]
    assert setting.base_currency == "KRW"
    assert setting.display_currencies == ("JPY", "USD")
    assert len(memory_repository.accounts) == 3
    assert len(memory_repository.categories) == 6
    assert "hold-aapl" in memory_repository.holdings
    refresh_use_case.execute.assert_called_once()
    assert [tx.tx_type for tx in memory_repository.transactions] == [INCOME, EXPENSE]
    assert memory_repository.transactions[0].amount_base == Decimal("3000000")
    assert seed_demo_cli.DEMO_USER_ID in capsys.readouterr().out
