"""Response encoding for dashboard summaries.

This is the only place where summary decimals are rounded and dates are
formatted for callers.
"""

from collections.abc import Mapping
from decimal import Decimal
import json

from src.domain.models import DashboardSummary
from src.domain.services.rounding import quantize_amount, resolve_rounding


def encode_summary(
    summary: DashboardSummary,
    minor_units: Mapping[str, int],
) -> dict:
    """Encode a summary as the response payload.

    Amounts are quantized to the minor units of their currency with the
    summary's rounding rule. Unknown currencies round to two decimals.

    Args:
        summary: Unrounded dashboard summary.
        minor_units: Decimal places per currency code.

    Returns:
        dict: Payload with ``YYYY-MM-DD`` dates and Decimal amounts.
    """
    rounding = resolve_rounding(summary.rounding_rule)
    base_units = minor_units.get(summary.base_currency)

    def _base(amount: Decimal) -> Decimal:
        return quantize_amount(amount, base_units, rounding)

    return {
        "asOf": summary.as_of.isoformat(),
        "baseCurrency": summary.base_currency,
        "totalNetWorthBase": _base(summary.total_net_worth_base),
        "byCurrency": [
            {
                "currency": item.currency,
                "total": quantize_amount(
                    item.amount,
                    minor_units.get(item.currency),
                    rounding,
                ),
            }
            for item in summary.by_currency
        ],
        "last30DaysSeries": [
            {"date": point.date.isoformat(), "value": _base(point.value)}
            for point in summary.last_30_days_series
        ],
        "categoryBreakdown": [
            {"category": item.category, "total": _base(item.total)}
            for item in summary.category_breakdown
        ],
        "fallbackRateUsed": summary.fallback_rate_used,
    }


def _json_default(value):
    if isinstance(value, Decimal):
        if value == value.to_integral_value():
            return int(value)
        return float(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def dumps_payload(payload: dict, indent: int | None = 2) -> str:
    """Render an encoded payload as JSON with numeric amounts."""
    return json.dumps(payload, default=_json_default, indent=indent, ensure_ascii=False)


__all__ = ["encode_summary", "dumps_payload"]
