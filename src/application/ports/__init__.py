"""Application ports package."""

from .database import DatabaseEnginePort
from .finance_repository import FinanceRepositoryPort, FinanceSeedPort
from .providers import FxRateProviderPort, PriceProviderPort

__all__ = [
    "DatabaseEnginePort",
    "FinanceRepositoryPort",
    "FinanceSeedPort",
    "FxRateProviderPort",
    "PriceProviderPort",
]
