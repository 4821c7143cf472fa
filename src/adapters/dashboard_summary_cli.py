"""CLI adapter printing the dashboard summary payload as JSON.

The user and as-of date come from ``SUMMARY_USER_ID`` and ``SUMMARY_AS_OF``
(``YYYY-MM-DD``, defaults to today).
"""

import os

from src.application.use_cases.encode_summary import dumps_payload
from src.domain.errors import FinanceError
from src.infrastructure.container import build_dashboard_summary_use_case
from src.infrastructure.logging.logger import get_app_logger


def main() -> None:
    """Compute and print the dashboard summary for one user."""
    logger = get_app_logger()
    user_id = os.getenv("SUMMARY_USER_ID")
    if not user_id:
        logger.error("SUMMARY_USER_ID is required to compute a summary.")
        raise SystemExit(2)
    as_of = os.getenv("SUMMARY_AS_OF") or None

    use_case = build_dashboard_summary_use_case()
    try:
        payload = use_case.execute_payload(user_id, as_of)
    except FinanceError as exc:
        logger.error(f"Failed to compute dashboard summary: {exc}")
        raise SystemExit(1) from exc

    print(dumps_payload(payload))


if __name__ == "__main__":  # pragma: no cover
    main()
