"""
Custom exception hierarchy for the inventory hub.

Exceptions are categorized as:
- RetryableError: Transient errors that should trigger Celery retry
- NonRetryableError: Permanent errors that should fail immediately

Remote Shopify failures inside a sync run are not raised; they are returned
as values and classified by SyncErrorType. These exceptions cover the
surrounding infrastructure (database, token refresh, configuration).
"""


class InventoryHubException(Exception):
    """Base exception for the inventory hub."""
    pass


# ============================================
# RETRYABLE ERRORS - Will trigger Celery retry
# ============================================
class RetryableError(InventoryHubException):
    """
    Base class for errors that should trigger retry.

    Use this for transient errors where retrying might succeed:
    - Network timeouts
    - Temporary service unavailability
    """
    pass


class ExternalAPIError(RetryableError):
    """
    Error from an external API (Shopify OAuth, Shopify Admin).

    Typically transient - the external service might recover.
    """
    def __init__(self, service: str, message: str, status_code: int = None):
        self.service = service
        self.status_code = status_code
        super().__init__(f"{service} API error: {message}")


class DatabaseTransientError(RetryableError):
    """
    Transient database error.

    Examples: connection pool exhausted, deadlock, temporary unavailability
    """
    pass


# ============================================
# NON-RETRYABLE ERRORS - No automatic retry
# ============================================
class NonRetryableError(InventoryHubException):
    """
    Base class for errors that should NOT trigger retry.

    Use this for permanent errors where retrying won't help:
    - Missing configuration
    - Authentication errors (need config fix)
    """
    pass


class ConfigurationError(NonRetryableError):
    """Required environment configuration is missing."""
    pass


class AuthenticationError(NonRetryableError):
    """
    API authentication failed.

    Needs configuration fix, not retry.
    """
    def __init__(self, service: str, message: str, status_code: int = None):
        self.service = service
        self.status_code = status_code
        super().__init__(f"{service} authentication failed: {message}")
