"""Custom SQLAlchemy column types for the finance store."""

from decimal import Decimal

from sqlalchemy import Numeric, String
from sqlalchemy.types import TypeDecorator

from src.utils.decimal_utils import coerce_decimal


class ExactDecimal(TypeDecorator):
    """Decimal type that survives a round trip without losing digits.

    SQLite has no decimal storage and coerces NUMERIC values to 64-bit
    floats, so on that dialect values are written and read as text.
    Other dialects use their native NUMERIC type.
    """

    impl = Numeric
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "sqlite":
            return dialect.type_descriptor(String())
        return dialect.type_descriptor(Numeric(asdecimal=True))

    def process_bind_param(self, value, dialect) -> Decimal | str | None:
        if value is None:
            return None
        value = coerce_decimal(value)
        if dialect.name == "sqlite":
            return str(value)
        return value

    def process_result_value(self, value, dialect) -> Decimal | None:
        if value is None:
            return None
        return coerce_decimal(value)


__all__ = ["ExactDecimal"]
