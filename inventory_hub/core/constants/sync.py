"""
Sync constants — batch sizes, delays, retry policy, alert thresholds.

Inventory sync engine constants.
"""

# Shopify nodes(ids:) lookup limit
NODES_BATCH_SIZE: int = 250

# Write batches stay small so a bad mutation affects at most this many items
WRITE_BATCH_SIZE: int = 10

# Pause between chunks of one operation (seconds)
API_DELAY_SECONDS: float = 0.1

# Retry policy
DEFAULT_MAX_RETRIES: int = 2

# Fixed delay table (seconds); attempts past the end reuse the last entry
RETRY_DELAYS_SECONDS: tuple[float, ...] = (0.1, 0.5)

RETRYABLE_STATUS_CODES: frozenset[int] = frozenset({
    408,  # Request Timeout
    429,  # Too Many Requests
    500,  # Internal Server Error
    502,  # Bad Gateway
    503,  # Service Unavailable
    504,  # Gateway Timeout
})

NON_RETRYABLE_STATUS_CODES: frozenset[int] = frozenset({
    400,  # Bad Request
    401,  # Unauthorized
    403,  # Forbidden
    404,  # Not Found
    422,  # Unprocessable Entity
})

# Critical failure thresholds
HIGH_FAILURE_RATE_THRESHOLD: float = 0.5
CONSECUTIVE_FAILURES_THRESHOLD: int = 3

# Owner store token is refreshed when it expires within this window (seconds)
TOKEN_REFRESH_BUFFER_SECONDS: int = 5 * 60

# sync_logs.sync_type for this engine
INVENTORY_SYNC_TYPE: str = "inventory"

# Pseudo partner used on owner-store alerts
OWNER_STORE_ALERT_SHOP: str = "owner_store"
