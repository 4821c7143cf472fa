"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os

import dotenv

from src.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class FinanceSettings:
    """Runtime settings for the valuation services.

    Attributes:
        fx_provider: FX provider identifier (static or frankfurter).
        price_provider: Market price provider identifier (static).
        max_workers: Threads used by the dashboard summary.
        provider_max_attempts: Provider attempts before degrading.
        provider_backoff_seconds: Initial delay between provider attempts.
    """

    fx_provider: str = "static"
    price_provider: str = "static"
    max_workers: int = 4
    provider_max_attempts: int = 3
    provider_backoff_seconds: float = 0.5

    @classmethod
    def from_env(cls) -> "FinanceSettings":
        """Build settings from environment variables.

        Returns:
            FinanceSettings: Settings sourced from environment variables.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        defaults = cls()
        return cls(
            fx_provider=os.getenv("FX_PROVIDER", defaults.fx_provider)
            .strip()
            .lower(),
            price_provider=os.getenv("PRICE_PROVIDER", defaults.price_provider)
            .strip()
            .lower(),
            max_workers=cls._read_number(
                "SUMMARY_MAX_WORKERS",
                defaults.max_workers,
                int,
                logger,
            ),
            provider_max_attempts=cls._read_number(
                "PROVIDER_MAX_ATTEMPTS",
                defaults.provider_max_attempts,
                int,
                logger,
            ),
            provider_backoff_seconds=cls._read_number(
                "PROVIDER_BACKOFF_SECONDS",
                defaults.provider_backoff_seconds,
                float,
                logger,
            ),
        )

    @staticmethod
    def _read_number(name: str, default, cast, logger):
        """Read a numeric environment variable, keeping the default if invalid.

        Args:
            name: Environment variable name.
            default: Value used when missing or invalid.
            cast: Conversion callable (int or float).
            logger: Logger used for warnings.

        Returns:
            The converted value or the default.
        """
        raw = os.getenv(name)
        if raw is None or not raw.strip():
            return default
        try:
            return cast(raw.strip())
        except ValueError:
            logger.warning(f"Invalid value for {name}: {raw!r}; using {default}")
            return default


__all__ = ["FinanceSettings"]
