"""Use case refreshing stored FX rates for a date."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
import time

from src.application.ports.finance_repository import FinanceRepositoryPort
from src.application.ports.providers import FxRateProviderPort
from src.domain.constants import SELF_PAIR_SOURCE
from src.domain.errors import UpstreamUnavailableError
from src.domain.models import FxRate
from src.domain.services.normalization import normalize_currency_code
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import coerce_decimal
from src.utils.retry import retry_call


@dataclass(frozen=True)
class FxRefreshResult:
    """Result of an FX refresh run.

    Attributes:
        date: Day the rates were refreshed for.
        pair_count: Number of ordered pairs written.
        fallback_pairs: Pairs skipped because the provider failed.
    """

    date: date
    pair_count: int
    fallback_pairs: tuple[tuple[str, str], ...] = ()


class RefreshFxRatesUseCase:
    """Upsert rates for every ordered pair of known currencies.

    Re-running for the same date overwrites each pair with the latest
    provider value.
    """

    def __init__(
        self,
        repository: FinanceRepositoryPort,
        provider: FxRateProviderPort,
        logger=None,
        max_attempts: int = 3,
        backoff_seconds: float = 0.5,
        sleep=time.sleep,
    ) -> None:
        """Initialize the use case.

        Args:
            repository: Port providing currencies and FX rate storage.
            provider: Source of non-trivial rates.
            logger: Optional logger compatible with logging.Logger-like API.
            max_attempts: Provider attempts per pair.
            backoff_seconds: Initial delay between provider attempts.
            sleep: Sleep function used between attempts.
        """
        self._repository = repository
        self._provider = provider
        self._logger = logger or get_app_logger()
        self._max_attempts = max_attempts
        self._backoff_seconds = backoff_seconds
        self._sleep = sleep

    def execute(self, on_date: date) -> FxRefreshResult:
        """Refresh FX rates for a date.

        Args:
            on_date: Day to refresh.

        Returns:
            FxRefreshResult: Written and skipped pair counts.
        """
        codes = sorted(
            {
                normalize_currency_code(currency.code)
                for currency in self._repository.fetch_currencies()
            }
        )
        written = 0
        skipped: list[tuple[str, str]] = []
        for base_code in codes:
            for quote_code in codes:
                rate = self._resolve_pair(base_code, quote_code, on_date)
                if rate is None:
                    skipped.append((base_code, quote_code))
                    continue
                self._repository.upsert_fx_rate(rate)
                written += 1

        self._logger.info(
            f"FX rates refreshed for {on_date.isoformat()}: "
            f"written={written}, skipped={len(skipped)}"
        )
        return FxRefreshResult(
            date=on_date,
            pair_count=written,
            fallback_pairs=tuple(skipped),
        )

    def _resolve_pair(
        self,
        base_code: str,
        quote_code: str,
        on_date: date,
    ) -> FxRate | None:
        if base_code == quote_code:
            return FxRate(
                date=on_date,
                base_code=base_code,
                quote_code=quote_code,
                rate=Decimal("1"),
                source=SELF_PAIR_SOURCE,
            )
        try:
            rate = retry_call(
                lambda: self._provider.fetch_rate(base_code, quote_code, on_date),
                retry_on=UpstreamUnavailableError,
                attempts=self._max_attempts,
                backoff_seconds=self._backoff_seconds,
                sleep=self._sleep,
                logger=self._logger,
            )
        except UpstreamUnavailableError as exc:
            self._logger.warning(
                f"Skipping {base_code}->{quote_code}: provider unavailable ({exc})"
            )
            return None
        return FxRate(
            date=on_date,
            base_code=base_code,
            quote_code=quote_code,
            rate=coerce_decimal(rate),
            source=self._provider.source,
        )


__all__ = ["RefreshFxRatesUseCase", "FxRefreshResult"]
