"""Tests for infrastructure settings."""

from unittest.mock import MagicMock

from src.infrastructure import settings as settings_module
from src.infrastructure.settings import FinanceSettings


def _isolate_env(monkeypatch) -> None:
    monkeypatch.setattr(settings_module.dotenv, "load_dotenv", lambda: None)
    monkeypatch.setattr(settings_module, "get_app_logger", lambda: MagicMock())
    for name in (
        "FX_PROVIDER",
        "PRICE_PROVIDER",
        "SUMMARY_MAX_WORKERS",
        "PROVIDER_MAX_ATTEMPTS",
        "PROVIDER_BACKOFF_SECONDS",
    ):
        monkeypatch.delenv(name, raising=False)


def test_from_env_uses_defaults(monkeypatch) -> None:
    """Missing variables should fall back to defaults."""
    _isolate_env(monkeypatch)

    assert FinanceSettings.from_env() == FinanceSettings()


def test_from_env_reads_values(monkeypatch) -> None:
    """Configured values should be parsed and normalized."""
    _isolate_env(monkeypatch)
    monkeypatch.setenv("FX_PROVIDER", " Frankfurter ")
    monkeypatch.setenv("SUMMARY_MAX_WORKERS", "8")
    monkeypatch.setenv("PROVIDER_MAX_ATTEMPTS", "5")
    monkeypatch.setenv("PROVIDER_BACKOFF_SECONDS", "0.25")

    settings = FinanceSettings.from_env()

    assert settings.fx_provider == "frankfurter"
    assert settings.max_workers == 8
    assert settings.provider_max_attempts == 5
    assert settings.provider_backoff_seconds == 0.25


def test_from_env_ignores_invalid_numbers(monkeypatch) -> None:
    """Malformed numbers should keep the default."""
    _isolate_env(monkeypatch)
    monkeypatch.setenv("SUMMARY_MAX_WORKERS", "many")

    assert FinanceSettings.from_env().max_workers == 4
