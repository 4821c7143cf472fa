"""CLI adapter refreshing stored FX rates for a date.

Safe to schedule: re-running for the same ``FX_REFRESH_DATE`` overwrites the
stored rates with the provider's latest values.
"""

from datetime import date
import os

from src.domain.errors import FinanceError
from src.domain.services.normalization import normalize_as_of
from src.infrastructure.container import build_refresh_fx_rates_use_case
from src.infrastructure.logging.logger import get_app_logger


def main() -> None:
    """Run the FX refresh use case."""
    logger = get_app_logger()
    try:
        on_date = normalize_as_of(os.getenv("FX_REFRESH_DATE"), date.today())
        result = build_refresh_fx_rates_use_case().execute(on_date)
    except FinanceError as exc:
        logger.error(f"FX refresh failed: {exc}")
        raise SystemExit(1) from exc

    print(
        f"FX rates refreshed for {result.date.isoformat()}: "
        f"{result.pair_count} pairs written, "
        f"{len(result.fallback_pairs)} pairs skipped."
    )


if __name__ == "__main__":  # pragma: no cover
    main()
