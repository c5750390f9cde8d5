"""Classify persistence failures as retryable or fatal."""

from sqlalchemy.exc import DisconnectionError, OperationalError, SQLAlchemyError, TimeoutError

from src.libs.result import Error

STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
STORE_ERROR = "STORE_ERROR"

RETRYABLE_ERRORS = (OperationalError, DisconnectionError, TimeoutError)


def is_retryable(exc: SQLAlchemyError) -> bool:
    return isinstance(exc, RETRYABLE_ERRORS)


def classify_store_error(exc: SQLAlchemyError) -> Error:
    """Error for the caller; never carries driver detail"""
    if is_retryable(exc):
        return Error(STORE_UNAVAILABLE, "Storage temporarily unavailable", reason="retryable")
    return Error(STORE_ERROR, "Internal server error", reason="fatal")
