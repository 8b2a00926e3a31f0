"""
Constants package — re-exports from domain-specific modules.

Usage:
    from inventory_hub.core.constants.sync import WRITE_BATCH_SIZE
    # or
    from inventory_hub.core.constants import sync
"""

from inventory_hub.core.constants import sync
from inventory_hub.core.constants.sync import (
    NODES_BATCH_SIZE,
    WRITE_BATCH_SIZE,
    API_DELAY_SECONDS,
    DEFAULT_MAX_RETRIES,
    RETRY_DELAYS_SECONDS,
    RETRYABLE_STATUS_CODES,
    NON_RETRYABLE_STATUS_CODES,
    HIGH_FAILURE_RATE_THRESHOLD,
    CONSECUTIVE_FAILURES_THRESHOLD,
)

__all__ = [
    "sync",
    "NODES_BATCH_SIZE",
    "WRITE_BATCH_SIZE",
    "API_DELAY_SECONDS",
    "DEFAULT_MAX_RETRIES",
    "RETRY_DELAYS_SECONDS",
    "RETRYABLE_STATUS_CODES",
    "NON_RETRYABLE_STATUS_CODES",
    "HIGH_FAILURE_RATE_THRESHOLD",
    "CONSECUTIVE_FAILURES_THRESHOLD",
]
