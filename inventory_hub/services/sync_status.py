"""
Sync status derivation and critical failure detection.

All functions here are pure: status is recomputed from a single run's
result, and the consecutive failure counter is the only cross-run input.
"""
from typing import Optional

from inventory_hub.core.constants.sync import (
    CONSECUTIVE_FAILURES_THRESHOLD,
    HIGH_FAILURE_RATE_THRESHOLD,
    OWNER_STORE_ALERT_SHOP,
)
from inventory_hub.schemas.inventory_sync import (
    CriticalErrorType,
    CriticalSyncError,
    PartnerSyncResult,
    PartnerSyncStatus,
    SyncErrorType,
)


def failure_rate(result: PartnerSyncResult) -> float:
    if result.items_processed <= 0:
        return 0.0
    return result.items_failed / result.items_processed


def determine_sync_status(result: PartnerSyncResult) -> PartnerSyncStatus:
    if not result.success:
        return PartnerSyncStatus.FAILED

    if result.items_processed > 0:
        rate = failure_rate(result)
        if rate >= HIGH_FAILURE_RATE_THRESHOLD:
            return PartnerSyncStatus.FAILED
        if rate > 0:
            return PartnerSyncStatus.WARNING

    return PartnerSyncStatus.SUCCESS


def calculate_consecutive_failures(result: PartnerSyncResult, previous_failures: int) -> int:
    if result.success:
        return 0
    return previous_failures + 1


def detect_critical_failure(
    result: PartnerSyncResult,
    consecutive_failures: int,
) -> Optional[CriticalSyncError]:
    """
    Decide whether a partner's run needs a human.

    Checks run in priority order and the first match wins. Returns None when
    the run is healthy enough to stay quiet.
    """
    shop = result.partner_shop
    details = "; ".join(result.errors)

    if result.error_type == SyncErrorType.AUTH_REVOKED:
        return CriticalSyncError(
            type=CriticalErrorType.TOKEN_REVOKED,
            partner_shop=shop,
            message=f"Partner store {shop} access token has been revoked or is invalid",
            details=details,
        )

    if result.error_type == SyncErrorType.STORE_UNREACHABLE and not result.success:
        return CriticalSyncError(
            type=CriticalErrorType.STORE_UNREACHABLE,
            partner_shop=shop,
            message=f"Partner store {shop} is unreachable after multiple retry attempts",
            details=details,
        )

    if result.items_processed > 0:
        rate = failure_rate(result)
        if rate >= HIGH_FAILURE_RATE_THRESHOLD:
            return CriticalSyncError(
                type=CriticalErrorType.HIGH_FAILURE_RATE,
                partner_shop=shop,
                message=f"High failure rate ({round(rate * 100)}%) syncing inventory from {shop}",
                details=details,
                failure_rate=rate,
            )

    if consecutive_failures >= CONSECUTIVE_FAILURES_THRESHOLD:
        return CriticalSyncError(
            type=CriticalErrorType.CONSECUTIVE_FAILURES,
            partner_shop=shop,
            message=f"Partner {shop} has failed {consecutive_failures} consecutive inventory syncs",
            details=details,
            consecutive_failures=consecutive_failures,
        )

    return None


def create_owner_store_disconnected_error(error: str) -> CriticalSyncError:
    return CriticalSyncError(
        type=CriticalErrorType.OWNER_STORE_DISCONNECTED,
        partner_shop=OWNER_STORE_ALERT_SHOP,
        message="Owner store connection failed - inventory sync cannot proceed",
        details=error,
    )
