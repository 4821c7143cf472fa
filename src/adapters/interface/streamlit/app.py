"""Streamlit dashboard entry point."""

from collections.abc import Sequence
from datetime import date
from decimal import Decimal

import altair as alt
import streamlit as st

from src.domain.errors import FinanceError
from src.infrastructure.container import build_dashboard_summary_use_case
from src.infrastructure.logging.logger import get_usage_logger


def _fetch_summary_payload(user_id: str, as_of: date) -> dict:
    """Fetch the encoded dashboard summary for a user."""
    use_case = build_dashboard_summary_use_case()
    return use_case.execute_payload(user_id, as_of)


@st.cache_data(show_spinner=False, ttl=300)
def _load_summary_payload(user_id: str, as_of: date) -> dict:
    """Cached wrapper around _fetch_summary_payload."""
    return _fetch_summary_payload(user_id, as_of)


def _format_currency(value: Decimal, currency_code: str) -> str:
    """Format currency values for display."""
    places = 0 if value == value.to_integral_value() else 2
    return f"{value:,.{places}f} {currency_code}"


def _series_delta(series: Sequence[dict]) -> Decimal | None:
    """Return the change between the first and last series points."""
    if len(series) < 2:
        return None
    return series[-1]["value"] - series[0]["value"]


def _prepare_series_chart_data(series: Sequence[dict]) -> list[dict]:
    """Convert series points into Altair-ready rows."""
    return [{"date": point["date"], "value": float(point["value"])} for point in series]


def _prepare_donut_chart_data(
    categories: Sequence[dict],
    currency_code: str,
    max_categories: int = 6,
) -> tuple[list[dict[str, str | float]], Decimal]:
    """Prepare donut chart data with a Top-N + Other grouping.

    Args:
        categories: Encoded category totals.
        currency_code: Currency used for labels.
        max_categories: Maximum categories to keep before grouping into Other.

    Returns:
        Tuple with Altair-ready chart data and the total amount.
    """
    sorted_items = sorted(categories, key=lambda item: item["total"], reverse=True)
    top_items = list(sorted_items[:max_categories])
    other_items = sorted_items[max_categories:]
    other_amount = sum((item["total"] for item in other_items), start=Decimal("0"))
    if other_items and other_amount != 0:
        top_items.append({"category": "Other", "total": other_amount})
    total_amount = sum((item["total"] for item in sorted_items), start=Decimal("0"))
    data: list[dict[str, str | float]] = []
    for item in top_items:
        share = (
            (item["total"] / total_amount) * Decimal("100")
            if total_amount
            else Decimal("0")
        )
        data.append(
            {
                "category": item["category"],
                "amount": float(item["total"]),
                "amount_label": _format_currency(item["total"], currency_code),
                "share_label": f"{share:.1f}%",
            }
        )
    return data, total_amount


def _render_series_chart(series: Sequence[dict], currency_code: str) -> None:
    """Render the trailing net worth line chart."""
    st.subheader(f"Net worth, last 30 days ({currency_code})")
    chart = alt.Chart(alt.Data(values=_prepare_series_chart_data(series))).mark_line(
        point=True
    ).encode(
        x=alt.X("date:T", title=None),
        y=alt.Y("value:Q", title=None),
        tooltip=[alt.Tooltip("date:T"), alt.Tooltip("value:Q", format=",.2f")],
    )
    st.altair_chart(chart, width="stretch")


def _render_category_chart(
    categories: Sequence[dict],
    currency_code: str,
    chart_size: int = 320,
) -> None:
    """Render a donut chart of this month's expenses by category."""
    st.subheader("Spending by category (this month)")
    if not categories:
        st.info("No categorized expenses this month.")
        return
    data, _ = _prepare_donut_chart_data(categories, currency_code)
    hover = alt.selection_point(
        name="hover",
        fields=["category"],
        on="view:mouseover",
        clear="view:mouseout",
        empty=False,
    )
    chart = alt.Chart(alt.Data(values=data)).mark_arc(
        innerRadius=chart_size * 0.4,
        cornerRadius=8,
        padAngle=0.02,
    ).encode(
        theta=alt.Theta("amount:Q"),
        color=alt.Color("category:N", legend=alt.Legend(orient="bottom", title=None)),
        opacity=alt.condition(hover, alt.value(1.0), alt.value(0.35)),
        order=alt.Order("amount:Q", sort="descending"),
        tooltip=[
            alt.Tooltip("category:N"),
            alt.Tooltip("amount_label:N"),
            alt.Tooltip("share_label:N"),
        ],
    ).add_params(hover).properties(width=chart_size, height=chart_size)
    st.altair_chart(chart, width="stretch")


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="Net Worth Dashboard", layout="wide")
    st.title("Net Worth Dashboard")

    user_id = st.sidebar.text_input("User", value="demo-user")
    as_of = st.sidebar.date_input("As of", value=date.today())
    if not user_id:
        st.warning("Enter a user to load the dashboard.")
        return

    try:
        payload = _load_summary_payload(user_id, as_of)
    except FinanceError as exc:
        st.error(f"Could not load the dashboard: {exc}")
        return
    get_usage_logger().info(f"Dashboard viewed for {user_id} as of {as_of}")

    base_currency = payload["baseCurrency"]
    delta = _series_delta(payload["last30DaysSeries"])
    st.metric(
        "Net Worth",
        _format_currency(payload["totalNetWorthBase"], base_currency),
        None if delta is None else f"{delta:+,.2f} (30d)",
    )
    if payload["fallbackRateUsed"]:
        st.caption("Some FX rates were unavailable; a rate of 1 was used.")

    if payload["byCurrency"]:
        st.dataframe(
            [
                {
                    "Currency": item["currency"],
                    "Total": _format_currency(item["total"], item["currency"]),
                }
                for item in payload["byCurrency"]
            ],
            width="stretch",
            hide_index=True,
        )

    chart_left, chart_right = st.columns(2)
    with chart_left:
        _render_series_chart(payload["last30DaysSeries"], base_currency)
    with chart_right:
        _render_category_chart(payload["categoryBreakdown"], base_currency)


if __name__ == "__main__":  # pragma: no cover
    main()
