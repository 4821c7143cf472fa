"""Rounding rules for monetary output."""

from decimal import (
    ROUND_CEILING,
    ROUND_DOWN,
    ROUND_FLOOR,
    ROUND_HALF_EVEN,
    ROUND_HALF_UP,
    ROUND_UP,
    Decimal,
)

from src.domain.constants import DEFAULT_MINOR_UNITS
from src.domain.errors import ValidationError

ROUNDING_RULES = {
    "half_up": ROUND_HALF_UP,
    "half_even": ROUND_HALF_EVEN,
    "bankers_rounding": ROUND_HALF_EVEN,
    "floor": ROUND_FLOOR,
    "ceiling": ROUND_CEILING,
    "down": ROUND_DOWN,
    "up": ROUND_UP,
}


def resolve_rounding(rule: str | None) -> str:
    """Map a settings rounding tag to a ``decimal`` rounding mode.

    Args:
        rule: Rounding rule tag; None or empty selects half_up.

    Returns:
        str: Rounding constant from the ``decimal`` module.

    Raises:
        ValidationError: If the tag is unknown.
    """
    if not rule:
        return ROUND_HALF_UP
    try:
        return ROUNDING_RULES[rule.strip().lower()]
    except KeyError as exc:
        raise ValidationError(f"Unsupported rounding rule: {rule}") from exc


def quantize_amount(
    amount: Decimal,
    decimals: int | None,
    rounding: str = ROUND_HALF_UP,
) -> Decimal:
    """Round an amount to a currency's minor units."""
    places = DEFAULT_MINOR_UNITS if decimals is None else decimals
    exponent = Decimal(1).scaleb(-places)
    return amount.quantize(exponent, rounding=rounding)


__all__ = ["ROUNDING_RULES", "resolve_rounding", "quantize_amount"]
