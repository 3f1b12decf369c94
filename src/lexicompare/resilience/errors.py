"""Error classification for structured error handling.

Classifies exceptions by category to enable:
- Retry of source lookups on transient database faults only
- Structured logging in route handlers (transient vs permanent)
- Mapping domain errors to client-facing responses
"""

from __future__ import annotations

from enum import Enum

from sqlalchemy.exc import DBAPIError, OperationalError

_TRANSIENT_DB_MARKERS = (
    "database is locked",
    "database table is locked",
    "could not connect",
    "connection refused",
    "server closed the connection",
)


class ErrorClass(Enum):
    TRANSIENT = "transient"  # locked database, dropped connection
    SERVER = "server"  # 5xx-equivalent failures
    TIMEOUT = "timeout"  # deadline exceeded
    CLIENT = "client"  # bad input, missing record, CAS rejection
    UNKNOWN = "unknown"  # unclassified, do NOT retry


def classify_error(error: BaseException) -> ErrorClass:
    """Classify an error to determine handling strategy.

    Timeouts are checked first, then database driver errors, then
    a structured ``status_code`` attribute (domain errors carry one),
    falling back to string matching for untyped exceptions.
    """
    if isinstance(error, TimeoutError):
        return ErrorClass.TIMEOUT

    if isinstance(error, DBAPIError):
        if error.connection_invalidated:
            return ErrorClass.TRANSIENT
        msg = str(error.orig or error).lower()
        if any(marker in msg for marker in _TRANSIENT_DB_MARKERS):
            return ErrorClass.TRANSIENT
        if isinstance(error, OperationalError):
            return ErrorClass.SERVER
        return ErrorClass.UNKNOWN

    status_code = getattr(error, "status_code", None)
    if isinstance(status_code, int):
        if 400 <= status_code < 500:
            return ErrorClass.CLIENT
        if 500 <= status_code < 600:
            return ErrorClass.SERVER

    msg = str(error).lower()
    if "timeout" in msg or "timed out" in msg:
        return ErrorClass.TIMEOUT
    if any(marker in msg for marker in _TRANSIENT_DB_MARKERS):
        return ErrorClass.TRANSIENT

    return ErrorClass.UNKNOWN


_RETRYABLE = frozenset({
    ErrorClass.TRANSIENT,
    ErrorClass.SERVER,
})


def is_retryable(error: BaseException) -> bool:
    """Return True if the error category supports retry."""
    return classify_error(error) in _RETRYABLE
