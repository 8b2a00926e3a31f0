"""
Error classifier — maps an HTTP status and error text to a SyncErrorType.

Pure and deterministic. Order matters: an auth phrase beats a 5xx status
because no retry gets past a revoked credential.
"""
from typing import Optional

from inventory_hub.core.constants.sync import RETRYABLE_STATUS_CODES
from inventory_hub.schemas.inventory_sync import SyncErrorType

AUTH_PATTERNS: tuple[str, ...] = (
    "access denied",
    "unauthorized",
    "invalid token",
    "token expired",
    "authentication",
    "forbidden",
)

NETWORK_PATTERNS: tuple[str, ...] = (
    "timeout",
    "network",
    "fetch failed",
    "econnrefused",
    "enotfound",
    "socket hang up",
    "connection refused",
    "connecterror",
    "connection reset",
)

PARTIAL_FAILURE_PATTERNS: tuple[str, ...] = (
    "partial",
    "some items failed",
)


def _matches(message: str, patterns: tuple[str, ...]) -> bool:
    return any(pattern in message for pattern in patterns)


def classify_error(http_status: Optional[int], message: Optional[str]) -> SyncErrorType:
    lower = (message or "").lower()

    if http_status in (401, 403) or _matches(lower, AUTH_PATTERNS):
        return SyncErrorType.AUTH_REVOKED

    if http_status == 429:
        return SyncErrorType.RATE_LIMITED

    if http_status is not None and 500 <= http_status < 600:
        return SyncErrorType.STORE_UNREACHABLE

    if _matches(lower, NETWORK_PATTERNS):
        return SyncErrorType.STORE_UNREACHABLE

    if _matches(lower, PARTIAL_FAILURE_PATTERNS):
        return SyncErrorType.PARTIAL_FAILURE

    # Unknown errors are assumed retryable
    return SyncErrorType.TRANSIENT


def is_retryable_status(status: int) -> bool:
    """True for the explicitly transient statuses (408, 429, 5xx gateway family)."""
    return status in RETRYABLE_STATUS_CODES
