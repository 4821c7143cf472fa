"""Bounded retry helper for provider calls."""

from collections.abc import Callable
import time
from typing import TypeVar

T = TypeVar("T")


def retry_call(
    func: Callable[[], T],
    *,
    retry_on: type[Exception] | tuple[type[Exception], ...],
    attempts: int = 3,
    backoff_seconds: float = 0.5,
    sleep: Callable[[float], None] = time.sleep,
    logger=None,
) -> T:
    """Call ``func`` until it succeeds or the attempts are exhausted.

    The delay doubles after each failed attempt.

    Args:
        func: Zero-argument callable to invoke.
        retry_on: Exception type(s) that trigger another attempt.
        attempts: Maximum number of calls, at least one.
        backoff_seconds: Delay before the second attempt.
        sleep: Sleep function, injectable for tests.
        logger: Optional logger for retry warnings.

    Returns:
        The value returned by ``func``.

    Raises:
        The last ``retry_on`` exception when every attempt fails.
    """
    attempts = max(1, attempts)
    delay = backoff_seconds
    for attempt in range(1, attempts + 1):
        try:
            return func()
        except retry_on as exc:
            if attempt == attempts:
                raise
            if logger is not None:
                logger.warning(
                    f"Attempt {attempt}/{attempts} failed: {exc}; "
                    f"retrying in {delay:.2f}s"
                )
            sleep(delay)
            delay *= 2
    raise AssertionError("unreachable")


__all__ = ["retry_call"]
