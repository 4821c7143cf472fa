"""Domain normalization helpers."""

from datetime import date, datetime, timedelta

from src.domain.errors import ValidationError


def normalize_currency_code(code: str | None) -> str:
    """Normalize a currency code to its upper-case ISO 4217 form.

    Args:
        code: Raw currency code from a repository or caller.

    Returns:
        str: Upper-case three-letter code.

    Raises:
        ValidationError: If the code is not three letters.
    """
    cleaned = (code or "").strip().upper()
    if len(cleaned) != 3 or not cleaned.isalpha():
        raise ValidationError(f"Invalid currency code: {code!r}")
    return cleaned


def normalize_as_of(value: date | datetime | str | None, today: date) -> date:
    """Normalize an as-of value to a calendar day.

    Time of day is dropped so lookups key on the day only.

    Args:
        value: Date, datetime, ``YYYY-MM-DD`` string or None for today.
        today: Date used when no value is provided.

    Returns:
        date: Start-of-day as-of date.

    Raises:
        ValidationError: If a string value is not ``YYYY-MM-DD``.
    """
    if value is None or value == "":
        return today
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except ValueError as exc:
        raise ValidationError(
            f"Invalid date '{value}'. Expected format YYYY-MM-DD."
        ) from exc


def month_start(value: date) -> date:
    """Return the first day of the month containing ``value``."""
    return value.replace(day=1)


def trailing_dates(as_of: date, days: int) -> list[date]:
    """Return ``days`` consecutive dates ending at ``as_of``, oldest first."""
    return [as_of - timedelta(days=offset) for offset in range(days - 1, -1, -1)]


__all__ = [
    "normalize_currency_code",
    "normalize_as_of",
    "month_start",
    "trailing_dates",
]
