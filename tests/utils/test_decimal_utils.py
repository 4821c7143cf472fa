"""Tests for Decimal helpers."""

from decimal import Decimal

from src.utils.decimal_utils import coerce_decimal


def test_coerce_decimal_handles_none_and_floats() -> None:
    assert coerce_decimal(None) == Decimal("0")
    assert coerce_decimal(0.1) == Decimal("0.1")
    assert coerce_decimal(Decimal("2.50")) == Decimal("2.50")
