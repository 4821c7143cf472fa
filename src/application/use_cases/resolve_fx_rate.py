"""FX rate resolution with an explicit fallback policy."""

from datetime import date
from decimal import Decimal
import time

from src.application.ports.finance_repository import FinanceRepositoryPort
from src.application.ports.providers import FxRateProviderPort
from src.domain.constants import FALLBACK_RATE
from src.domain.errors import UpstreamUnavailableError
from src.domain.models import FxQuote, FxRate
from src.domain.services.normalization import normalize_currency_code
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import coerce_decimal
from src.utils.retry import retry_call


class FxRateResolver:
    """Resolve conversion rates from the store, then an optional provider.

    A missing rate resolves to 1 with ``is_fallback`` set instead of raising.
    Store failures propagate.
    """

    def __init__(
        self,
        repository: FinanceRepositoryPort,
        provider: FxRateProviderPort | None = None,
        logger=None,
        max_attempts: int = 3,
        backoff_seconds: float = 0.5,
        sleep=time.sleep,
    ) -> None:
        """Initialize the resolver.

        Args:
            repository: Port providing stored FX rates.
            provider: Optional provider queried on a store miss.
            logger: Optional logger compatible with logging.Logger-like API.
            max_attempts: Provider attempts before falling back.
            backoff_seconds: Initial delay between provider attempts.
            sleep: Sleep function used between attempts.
        """
        self._repository = repository
        self._provider = provider
        self._logger = logger or get_app_logger()
        self._max_attempts = max_attempts
        self._backoff_seconds = backoff_seconds
        self._sleep = sleep

    def rate(self, base: str, quote: str, on_date: date) -> FxQuote:
        """Return the rate converting one unit of base into quote on a date.

        Args:
            base: Source currency code.
            quote: Target currency code.
            on_date: Day the rate applies to.

        Returns:
            FxQuote: Resolved rate, flagged when the fallback was used.
        """
        base_code = normalize_currency_code(base)
        quote_code = normalize_currency_code(quote)
        if base_code == quote_code:
            return FxQuote(rate=Decimal("1"), source="internal")

        stored = self._repository.fetch_fx_rate(base_code, quote_code, on_date)
        if stored is not None:
            return FxQuote(rate=coerce_decimal(stored.rate), source=stored.source)

        if self._provider is not None:
            fetched = self._fetch_from_provider(base_code, quote_code, on_date)
            if fetched is not None:
                return fetched

        self._logger.warning(
            f"Missing FX rate for {base_code}->{quote_code} on "
            f"{on_date.isoformat()}; using fallback rate {FALLBACK_RATE}"
        )
        return FxQuote(rate=FALLBACK_RATE, is_fallback=True, source="fallback")

    def _fetch_from_provider(
        self,
        base_code: str,
        quote_code: str,
        on_date: date,
    ) -> FxQuote | None:
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
                f"FX provider unavailable for {base_code}->{quote_code}: {exc}"
            )
            return None
        rate = coerce_decimal(rate)
        self._repository.upsert_fx_rate(
            FxRate(
                date=on_date,
                base_code=base_code,
                quote_code=quote_code,
                rate=rate,
                source=self._provider.source,
            )
        )
        return FxQuote(rate=rate, source=self._provider.source)


class RequestRateCache:
    """Per-request memo over an FxRateResolver.

    Each (base, quote, date) is resolved once so rates stay consistent
    within one computation. Instances must not outlive the request.
    """

    def __init__(self, resolver: FxRateResolver) -> None:
        self._resolver = resolver
        self._quotes: dict[tuple[str, str, date], FxQuote] = {}

    def quote(self, base: str, quote: str, on_date: date) -> FxQuote:
        key = (base, quote, on_date)
        if key not in self._quotes:
            self._quotes[key] = self._resolver.rate(base, quote, on_date)
        return self._quotes[key]

    def rate(self, base: str, quote: str, on_date: date) -> Decimal:
        return self.quote(base, quote, on_date).rate

    @property
    def fallback_used(self) -> bool:
        """Return True when any resolved rate was a fallback."""
        return any(item.is_fallback for item in self._quotes.values())


__all__ = ["FxRateResolver", "RequestRateCache"]
