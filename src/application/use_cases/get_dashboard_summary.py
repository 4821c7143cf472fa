"""Use case composing the dashboard valuation summary."""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Callable

from src.application.ports.finance_repository import FinanceRepositoryPort
from src.application.use_cases.encode_summary import encode_summary
from src.application.use_cases.resolve_fx_rate import (
    FxRateResolver,
    RequestRateCache,
)
from src.application.use_cases.value_holding import HoldingValuator
from src.domain.constants import EXPENSE, INCOME, TRANSFER, TREND_WINDOW_DAYS
from src.domain.errors import NotFoundError
from src.domain.models import (
    Account,
    CategoryTotal,
    CurrencyAmount,
    DashboardSummary,
    Holding,
    HoldingValuation,
    SeriesPoint,
    Transaction,
)
from src.domain.services.aggregation import (
    aggregate_by_currency,
    to_display_totals,
)
from src.domain.services.balance import compute_balance
from src.domain.services.normalization import (
    month_start,
    normalize_as_of,
    normalize_currency_code,
    trailing_dates,
)
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import coerce_decimal


@dataclass(frozen=True)
class AccountLedger:
    """Account with its full transaction history."""

    account: Account
    transactions: list[Transaction]


class GetDashboardSummaryUseCase:
    """Compute net worth, currency, trend and category figures for a user."""

    def __init__(
        self,
        repository: FinanceRepositoryPort,
        rate_resolver: FxRateResolver,
        holding_valuator: HoldingValuator,
        logger=None,
        max_workers: int = 4,
        today: Callable[[], date] = date.today,
    ) -> None:
        """Initialize the use case.

        Args:
            repository: Port providing settings, accounts and holdings.
            rate_resolver: Resolver used through a per-request cache.
            holding_valuator: Values holdings at a date.
            logger: Optional logger compatible with logging.Logger-like API.
            max_workers: Threads used to fetch accounts and value holdings.
            today: Clock used when no as-of date is given.
        """
        self._repository = repository
        self._rate_resolver = rate_resolver
        self._holding_valuator = holding_valuator
        self._logger = logger or get_app_logger()
        self._max_workers = max(1, max_workers)
        self._today = today

    def execute(
        self,
        user_id: str,
        as_of: date | datetime | str | None = None,
    ) -> DashboardSummary:
        """Return the dashboard summary for a user.

        Args:
            user_id: Owner of the valued entities.
            as_of: Valuation day; time of day is dropped. Defaults to today.

        Returns:
            DashboardSummary: Unrounded summary in the base currency.

        Raises:
            ValidationError: If as_of is malformed.
            NotFoundError: If the user has no settings.
            StoreError: If the store fails; no partial result is returned.
        """
        as_of_date = normalize_as_of(as_of, self._today())
        setting = self._repository.fetch_settings(user_id)
        if setting is None:
            raise NotFoundError(f"Settings not found for user {user_id}")
        base_currency = normalize_currency_code(setting.base_currency)
        display_currencies = [
            normalize_currency_code(code) for code in setting.display_currencies
        ]
        rates = RequestRateCache(self._rate_resolver)
        series_days = trailing_dates(as_of_date, TREND_WINDOW_DAYS)

        accounts = self._repository.fetch_accounts(user_id)
        holdings = self._repository.fetch_holdings(user_id)
        with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
            ledgers = list(pool.map(self._load_ledger, accounts))
            valuations_by_day = {
                day: self._value_holdings(pool, holdings, day)
                for day in series_days
            }
        self._warn_ignored_transactions(ledgers)

        snapshot = valuations_by_day[as_of_date]
        items = self._currency_items(ledgers, snapshot, cutoff=None)
        total_net_worth_base = self._to_base(items, base_currency, as_of_date, rates)
        buckets = aggregate_by_currency(items)
        by_currency = to_display_totals(
            buckets,
            display_currencies,
            lambda source, display: rates.rate(source, display, as_of_date),
        )

        series = [
            SeriesPoint(
                date=day,
                value=self._to_base(
                    self._currency_items(ledgers, valuations_by_day[day], cutoff=day),
                    base_currency,
                    day,
                    rates,
                ),
            )
            for day in series_days
        ]
        categories = self._category_breakdown(
            user_id,
            as_of_date,
            base_currency,
            rates,
        )

        self._logger.info(
            f"Dashboard summary for {user_id} on {as_of_date.isoformat()}: "
            f"net_worth={total_net_worth_base} {base_currency}, "
            f"accounts={len(accounts)}, holdings={len(holdings)}, "
            f"fallback_rates={rates.fallback_used}"
        )
        return DashboardSummary(
            user_id=user_id,
            as_of=as_of_date,
            base_currency=base_currency,
            total_net_worth_base=total_net_worth_base,
            by_currency=by_currency,
            last_30_days_series=series,
            category_breakdown=categories,
            currency_buckets=buckets,
            fallback_rate_used=rates.fallback_used,
            rounding_rule=setting.rounding_rule,
        )

    def execute_payload(
        self,
        user_id: str,
        as_of: date | datetime | str | None = None,
    ) -> dict:
        """Return the summary encoded as the response payload."""
        summary = self.execute(user_id, as_of)
        minor_units = {
            normalize_currency_code(currency.code): currency.decimals
            for currency in self._repository.fetch_currencies()
        }
        return encode_summary(summary, minor_units)

    def _load_ledger(self, account: Account) -> AccountLedger:
        return AccountLedger(
            account=account,
            transactions=self._repository.fetch_account_transactions(account.id),
        )

    def _warn_ignored_transactions(self, ledgers: list[AccountLedger]) -> None:
        """Warn once per request about transactions left out of balances."""
        transfers = 0
        unknown = 0
        for ledger in ledgers:
            for tx in ledger.transactions:
                if tx.tx_type in (INCOME, EXPENSE):
                    continue
                if tx.tx_type == TRANSFER:
                    transfers += 1
                else:
                    unknown += 1
        if transfers:
            self._logger.warning(
                f"Ignored {transfers} transfer transactions in balances"
            )
        if unknown:
            self._logger.warning(
                f"Ignored {unknown} transactions with unknown types in balances"
            )

    def _value_holdings(
        self,
        pool: ThreadPoolExecutor,
        holdings: list[Holding],
        day: date,
    ) -> list[HoldingValuation]:
        results = pool.map(
            lambda holding: self._holding_valuator.value(holding, day),
            holdings,
        )
        return [valuation for valuation in results if valuation is not None]

    def _currency_items(
        self,
        ledgers: list[AccountLedger],
        valuations: list[HoldingValuation],
        cutoff: date | None,
    ) -> list[CurrencyAmount]:
        items = [
            CurrencyAmount(
                currency=normalize_currency_code(ledger.account.currency_code),
                amount=compute_balance(
                    ledger.transactions,
                    self._logger,
                    as_of=cutoff,
                ),
            )
            for ledger in ledgers
        ]
        items.extend(
            CurrencyAmount(
                currency=normalize_currency_code(valuation.currency_code),
                amount=valuation.amount,
            )
            for valuation in valuations
        )
        return items

    @staticmethod
    def _to_base(
        items: list[CurrencyAmount],
        base_currency: str,
        on_date: date,
        rates: RequestRateCache,
    ) -> Decimal:
        return sum(
            (
                item.amount * rates.rate(item.currency, base_currency, on_date)
                for item in items
            ),
            Decimal("0"),
        )

    def _category_breakdown(
        self,
        user_id: str,
        as_of: date,
        base_currency: str,
        rates: RequestRateCache,
    ) -> list[CategoryTotal]:
        start = month_start(as_of)
        rows = self._repository.fetch_expense_transactions(user_id, start, as_of)
        totals: dict[str, Decimal] = {}
        uncategorized = 0
        for row in rows:
            if not start <= row.tx_date <= as_of:
                continue
            if not row.category_name:
                uncategorized += 1
                continue
            amount = coerce_decimal(row.amount_original) * rates.rate(
                normalize_currency_code(row.currency_original),
                base_currency,
                row.tx_date,
            )
            totals[row.category_name] = (
                totals.get(row.category_name, Decimal("0")) + amount
            )
        if uncategorized:
            self._logger.info(
                f"Excluded {uncategorized} uncategorized expenses from breakdown"
            )
        return [
            CategoryTotal(category=name, total=total)
            for name, total in sorted(totals.items())
        ]


__all__ = ["GetDashboardSummaryUseCase", "AccountLedger"]
