"""Error taxonomy for the valuation core."""


class FinanceError(Exception):
    """Base class for valuation errors."""


class NotFoundError(FinanceError, LookupError):
    """Raised when settings or a referenced entity do not exist."""


class ValidationError(FinanceError, ValueError):
    """Raised when caller input is malformed (dates, codes, types)."""


class UpstreamUnavailableError(FinanceError, RuntimeError):
    """Raised when an FX or price provider cannot answer.

    Callers absorb it with a defined fallback instead of aborting.
    """


class StoreError(FinanceError, RuntimeError):
    """Raised when the entity store fails; aborts the whole request."""


__all__ = [
    "FinanceError",
    "NotFoundError",
    "ValidationError",
    "UpstreamUnavailableError",
    "StoreError",
]
