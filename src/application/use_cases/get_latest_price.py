"""Market price lookup with a per-day cache in the store."""

from datetime import date
import time
from typing import Callable

from src.application.ports.finance_repository import FinanceRepositoryPort
from src.application.ports.providers import PriceProviderPort
from src.domain.errors import UpstreamUnavailableError
from src.domain.models import Price
from src.domain.services.normalization import normalize_currency_code
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import coerce_decimal
from src.utils.retry import retry_call


class PriceLookup:
    """Return the latest known price for an instrument as of a date."""

    def __init__(
        self,
        repository: FinanceRepositoryPort,
        provider: PriceProviderPort | None = None,
        logger=None,
        today: Callable[[], date] = date.today,
        max_attempts: int = 3,
        backoff_seconds: float = 0.5,
        sleep=time.sleep,
    ) -> None:
        """Initialize the lookup.

        Args:
            repository: Port providing stored prices.
            provider: Optional provider queried when today's price is missing.
            logger: Optional logger compatible with logging.Logger-like API.
            today: Clock returning the current day.
            max_attempts: Provider attempts before degrading to stored data.
            backoff_seconds: Initial delay between provider attempts.
            sleep: Sleep function used between attempts.
        """
        self._repository = repository
        self._provider = provider
        self._logger = logger or get_app_logger()
        self._today = today
        self._max_attempts = max_attempts
        self._backoff_seconds = backoff_seconds
        self._sleep = sleep

    def latest_price(
        self,
        symbol: str,
        exchange: str,
        as_of: date,
    ) -> Price | None:
        """Return the most recent price dated on or before as_of.

        When as_of reaches today and no price is stored for today, the
        provider is queried and its answer stored under today's date.
        Concurrent misses may both fetch; the last write wins.

        Args:
            symbol: Instrument symbol.
            exchange: Exchange code.
            as_of: Valuation day.

        Returns:
            Price | None: Latest price, or None when nothing is known.
        """
        today = self._today()
        if self._provider is not None and as_of >= today:
            cached = self._repository.fetch_price(symbol, exchange, today)
            if cached is not None:
                return cached
            fetched = self._fetch_today(symbol, exchange, today)
            if fetched is not None:
                return fetched
        return self._repository.fetch_latest_price(symbol, exchange, as_of)

    def _fetch_today(
        self,
        symbol: str,
        exchange: str,
        today: date,
    ) -> Price | None:
        try:
            amount, currency_code = retry_call(
                lambda: self._provider.fetch_price(symbol, exchange),
                retry_on=UpstreamUnavailableError,
                attempts=self._max_attempts,
                backoff_seconds=self._backoff_seconds,
                sleep=self._sleep,
                logger=self._logger,
            )
        except UpstreamUnavailableError as exc:
            self._logger.warning(
                f"Price provider unavailable for {symbol}@{exchange}: {exc}"
            )
            return None
        price = Price(
            symbol=symbol,
            exchange=exchange,
            as_of=today,
            price=coerce_decimal(amount),
            currency_code=normalize_currency_code(currency_code),
        )
        self._repository.upsert_price(price)
        self._logger.info(
            f"Cached price for {symbol}@{exchange} on {today.isoformat()}"
        )
        return price


__all__ = ["PriceLookup"]
