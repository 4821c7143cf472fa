"""Use case recording a transaction with its base-currency amount."""

from typing import Callable
from uuid import uuid4

from src.application.ports.finance_repository import FinanceRepositoryPort
from src.application.use_cases.resolve_fx_rate import FxRateResolver
from src.domain.constants import TRANSACTION_TYPES
from src.domain.errors import NotFoundError, ValidationError
from src.domain.models import NewTransaction, Transaction
from src.domain.services.normalization import normalize_currency_code
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import coerce_decimal


class RecordTransactionUseCase:
    """Persist a transaction, restating its amount in the base currency."""

    def __init__(
        self,
        repository: FinanceRepositoryPort,
        rate_resolver: FxRateResolver,
        logger=None,
        id_factory: Callable[[], str] = lambda: str(uuid4()),
    ) -> None:
        """Initialize the use case.

        Args:
            repository: Port providing settings and transaction storage.
            rate_resolver: Resolver for the write-time conversion rate.
            logger: Optional logger compatible with logging.Logger-like API.
            id_factory: Generator for new transaction identifiers.
        """
        self._repository = repository
        self._rate_resolver = rate_resolver
        self._logger = logger or get_app_logger()
        self._id_factory = id_factory

    def execute(self, user_id: str, new_tx: NewTransaction) -> Transaction:
        """Record a transaction for a user.

        Args:
            user_id: Owner of the transaction.
            new_tx: Caller input.

        Returns:
            Transaction: Stored transaction with amount_base populated.

        Raises:
            NotFoundError: If the user has no settings.
            ValidationError: If the type, amount or currency is invalid.
        """
        if new_tx.tx_type not in TRANSACTION_TYPES:
            raise ValidationError(f"Unsupported transaction type: {new_tx.tx_type}")
        amount = coerce_decimal(new_tx.amount_original)
        if amount <= 0:
            raise ValidationError("Transaction amount must be positive.")
        currency_original = normalize_currency_code(new_tx.currency_original)

        setting = self._repository.fetch_settings(user_id)
        if setting is None:
            raise NotFoundError(f"Settings not found for user {user_id}")
        base_currency = normalize_currency_code(setting.base_currency)

        quote = self._rate_resolver.rate(
            currency_original,
            base_currency,
            new_tx.tx_date,
        )
        transaction = Transaction(
            id=self._id_factory(),
            user_id=user_id,
            account_id=new_tx.account_id,
            tx_type=new_tx.tx_type,
            amount_original=amount,
            currency_original=currency_original,
            amount_base=amount * quote.rate,
            currency_base=base_currency,
            tx_date=new_tx.tx_date,
            category_id=new_tx.category_id,
            memo=new_tx.memo,
            tags=tuple(new_tx.tags),
        )
        self._repository.save_transaction(transaction)
        self._logger.info(
            f"Recorded {transaction.tx_type} {transaction.id} "
            f"({amount} {currency_original} -> "
            f"{transaction.amount_base} {base_currency})"
        )
        return transaction


__all__ = ["RecordTransactionUseCase"]
