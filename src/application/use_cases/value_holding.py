"""Use case valuing holdings at their latest market price."""

from datetime import date

from src.application.use_cases.get_latest_price import PriceLookup
from src.domain.models import Holding, HoldingValuation
from src.domain.services.valuation import value_holding
from src.infrastructure.logging.logger import get_app_logger


class HoldingValuator:
    """Value holdings as quantity x latest price in the price currency."""

    def __init__(self, price_lookup: PriceLookup, logger=None) -> None:
        self._price_lookup = price_lookup
        self._logger = logger or get_app_logger()

    def value(self, holding: Holding, as_of: date) -> HoldingValuation | None:
        """Return the holding value, or None when no price is known.

        A holding without a price contributes nothing to totals.
        """
        price = self._price_lookup.latest_price(
            holding.symbol,
            holding.exchange,
            as_of,
        )
        if price is None:
            self._logger.warning(
                f"No price for {holding.symbol}@{holding.exchange} on or "
                f"before {as_of.isoformat()}; holding {holding.id} skipped"
            )
            return None
        valuation = value_holding(holding, price)
        if price.currency_code != holding.currency_code:
            self._logger.debug(
                f"Holding {holding.id} cost currency {holding.currency_code} "
                f"differs from price currency {price.currency_code}"
            )
        return valuation


__all__ = ["HoldingValuator"]
