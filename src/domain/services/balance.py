"""Account balance folding."""

from collections.abc import Iterable
from datetime import date
from decimal import Decimal
from logging import Logger

from src.domain.constants import EXPENSE, INCOME, TRANSFER
from src.domain.models import Transaction
from src.utils.decimal_utils import coerce_decimal


def compute_balance(
    transactions: Iterable[Transaction],
    logger: Logger,
    as_of: date | None = None,
) -> Decimal:
    """Fold transactions into a balance in the account's native currency.

    Income adds and expense subtracts ``amount_original``. Transfers have no
    effect until they are modelled as paired postings.

    Args:
        transactions: Transactions recorded on a single account.
        logger: Logger receiving skipped transaction details.
        as_of: Optional cutoff; only transactions dated on or before it count.

    Returns:
        Decimal: Account balance.
    """
    balance = Decimal("0")
    skipped_transfers = 0
    for tx in transactions:
        if as_of is not None and tx.tx_date > as_of:
            continue
        amount = coerce_decimal(tx.amount_original)
        if tx.tx_type == INCOME:
            balance += amount
        elif tx.tx_type == EXPENSE:
            balance -= amount
        elif tx.tx_type == TRANSFER:
            skipped_transfers += 1
        else:
            logger.debug(
                f"Ignoring transaction {tx.id} with unknown type {tx.tx_type}"
            )
    if skipped_transfers:
        logger.debug(
            f"Ignored {skipped_transfers} transfer transactions in balance"
        )
    return balance


__all__ = ["compute_balance"]
