"""Composition root for wiring infrastructure adapters."""

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.providers import FxRateProviderPort, PriceProviderPort
from src.application.use_cases.get_dashboard_summary import (
    GetDashboardSummaryUseCase,
)
from src.application.use_cases.get_latest_price import PriceLookup
from src.application.use_cases.record_transaction import (
    RecordTransactionUseCase,
)
from src.application.use_cases.refresh_fx_rates import RefreshFxRatesUseCase
from src.application.use_cases.resolve_fx_rate import FxRateResolver
from src.application.use_cases.value_holding import HoldingValuator
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.finance_repository import SqlAlchemyFinanceRepository
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.providers import (
    FrankfurterRateProvider,
    StaticFxRateProvider,
    StaticPriceProvider,
)
from src.infrastructure.settings import FinanceSettings


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_finance_repository(
    db_port: DatabaseEnginePort | None = None,
) -> SqlAlchemyFinanceRepository:
    """Return the finance repository."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyFinanceRepository(resolved_db)


def build_fx_provider(settings: FinanceSettings | None = None) -> FxRateProviderPort:
    """Return the configured FX rate provider."""
    resolved = settings or FinanceSettings.from_env()
    if resolved.fx_provider == "static":
        return StaticFxRateProvider()
    if resolved.fx_provider == "frankfurter":
        return FrankfurterRateProvider()
    raise ValueError(
        "Unsupported FX provider: "
        f"{resolved.fx_provider}. Expected static or frankfurter."
    )


def build_price_provider(
    settings: FinanceSettings | None = None,
) -> PriceProviderPort:
    """Return the configured market price provider."""
    resolved = settings or FinanceSettings.from_env()
    if resolved.price_provider == "static":
        return StaticPriceProvider()
    raise ValueError(
        f"Unsupported price provider: {resolved.price_provider}. Expected static."
    )


def build_rate_resolver(
    db_port: DatabaseEnginePort | None = None,
    settings: FinanceSettings | None = None,
) -> FxRateResolver:
    """Return the FX rate resolver backed by the store and provider."""
    resolved = settings or FinanceSettings.from_env()
    return FxRateResolver(
        build_finance_repository(db_port),
        provider=build_fx_provider(resolved),
        logger=get_app_logger(),
        max_attempts=resolved.provider_max_attempts,
        backoff_seconds=resolved.provider_backoff_seconds,
    )


def build_dashboard_summary_use_case(
    db_port: DatabaseEnginePort | None = None,
    settings: FinanceSettings | None = None,
) -> GetDashboardSummaryUseCase:
    """Return the dashboard summary use case."""
    resolved = settings or FinanceSettings.from_env()
    repository = build_finance_repository(db_port)
    logger = get_app_logger()
    price_lookup = PriceLookup(
        repository,
        provider=build_price_provider(resolved),
        logger=logger,
        max_attempts=resolved.provider_max_attempts,
        backoff_seconds=resolved.provider_backoff_seconds,
    )
    return GetDashboardSummaryUseCase(
        repository,
        rate_resolver=build_rate_resolver(db_port, resolved),
        holding_valuator=HoldingValuator(price_lookup, logger=logger),
        logger=logger,
        max_workers=resolved.max_workers,
    )


def build_refresh_fx_rates_use_case(
    db_port: DatabaseEnginePort | None = None,
    settings: FinanceSettings | None = None,
) -> RefreshFxRatesUseCase:
    """Return the FX refresh use case."""
    resolved = settings or FinanceSettings.from_env()
    return RefreshFxRatesUseCase(
        build_finance_repository(db_port),
        provider=build_fx_provider(resolved),
        logger=get_app_logger(),
        max_attempts=resolved.provider_max_attempts,
        backoff_seconds=resolved.provider_backoff_seconds,
    )


def build_record_transaction_use_case(
    db_port: DatabaseEnginePort | None = None,
    settings: FinanceSettings | None = None,
) -> RecordTransactionUseCase:
    """Return the record transaction use case."""
    return RecordTransactionUseCase(
        build_finance_repository(db_port),
        rate_resolver=build_rate_resolver(db_port, settings),
        logger=get_app_logger(),
    )


__all__ = [
    "build_database_adapter",
    "build_finance_repository",
    "build_fx_provider",
    "build_price_provider",
    "build_rate_resolver",
    "build_dashboard_summary_use_case",
    "build_refresh_fx_rates_use_case",
    "build_record_transaction_use_case",
]
