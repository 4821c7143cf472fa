"""Application use cases package."""

from .encode_summary import dumps_payload, encode_summary
from .get_dashboard_summary import GetDashboardSummaryUseCase
from .get_latest_price import PriceLookup
from .record_transaction import RecordTransactionUseCase
from .refresh_fx_rates import FxRefreshResult, RefreshFxRatesUseCase
from .resolve_fx_rate import FxRateResolver, RequestRateCache
from .value_holding import HoldingValuator

__all__ = [
    "dumps_payload",
    "encode_summary",
    "GetDashboardSummaryUseCase",
    "PriceLookup",
    "RecordTransactionUseCase",
    "FxRefreshResult",
    "RefreshFxRatesUseCase",
    "FxRateResolver",
    "RequestRateCache",
    "HoldingValuator",
]
