"""
Unit tests for sync status derivation and critical failure detection.
"""
import pytest

from inventory_hub.schemas.inventory_sync import (
    CriticalErrorType,
    PartnerSyncResult,
    PartnerSyncStatus,
    SyncErrorType,
)
from inventory_hub.services.sync_status import (
    calculate_consecutive_failures,
    create_owner_store_disconnected_error,
    detect_critical_failure,
    determine_sync_status,
    failure_rate,
)


pytestmark = pytest.mark.unit

SHOP = "partner-one.myshopify.com"


def _result(success=True, processed=100, failed=0, updated=None, error_type=None, errors=None):
    updated = processed - failed if updated is None else updated
    return PartnerSyncResult(
        partner_shop=SHOP,
        success=success,
        items_processed=processed,
        items_updated=updated,
        items_failed=failed,
        errors=errors or [],
        error_type=error_type,
    )


class TestDetermineSyncStatus:

    @pytest.mark.parametrize("success,processed,failed,expected", [
        (True, 100, 0, PartnerSyncStatus.SUCCESS),
        (True, 100, 40, PartnerSyncStatus.WARNING),
        (True, 100, 50, PartnerSyncStatus.FAILED),
        (True, 100, 60, PartnerSyncStatus.FAILED),
        (True, 0, 0, PartnerSyncStatus.SUCCESS),
        (False, 100, 0, PartnerSyncStatus.FAILED),
        (False, 0, 0, PartnerSyncStatus.FAILED),
    ])
    def test_status_table(self, success, processed, failed, expected):
        assert determine_sync_status(_result(success, processed, failed)) == expected

    def test_failure_rate_with_nothing_processed(self):
        assert failure_rate(_result(processed=0)) == 0.0


class TestConsecutiveFailures:

    def test_success_resets_counter(self):
        assert calculate_consecutive_failures(_result(success=True), 7) == 0

    def test_failure_increments_counter(self):
        assert calculate_consecutive_failures(_result(success=False), 2) == 3

    def test_third_consecutive_failed_run_triggers_alert_despite_low_rate(self):
        previous = 0
        for _ in range(2):
            run = _result(success=False, failed=1)
            previous = calculate_consecutive_failures(run, previous)
            assert detect_critical_failure(run, previous) is None

        third_run = _result(success=False, failed=1)
        consecutive = calculate_consecutive_failures(third_run, previous)
        critical = detect_critical_failure(third_run, consecutive)

        assert consecutive == 3
        assert critical is not None
        assert critical.type == CriticalErrorType.CONSECUTIVE_FAILURES
        assert critical.consecutive_failures == 3
        assert critical.message == f"Partner {SHOP} has failed 3 consecutive inventory syncs"


class TestDetectCriticalFailure:

    def test_token_revoked_has_priority(self):
        result = _result(success=False, processed=5, failed=0, updated=0,
                         error_type=SyncErrorType.AUTH_REVOKED,
                         errors=["Partner fetch error: HTTP 401: Unauthorized"])

        critical = detect_critical_failure(result, consecutive_failures=10)

        assert critical.type == CriticalErrorType.TOKEN_REVOKED
        assert critical.message == f"Partner store {SHOP} access token has been revoked or is invalid"
        assert critical.details == "Partner fetch error: HTTP 401: Unauthorized"

    def test_store_unreachable_requires_failed_run(self):
        failing = _result(success=False, failed=1, error_type=SyncErrorType.STORE_UNREACHABLE)
        passing = _result(success=True, failed=0, error_type=SyncErrorType.STORE_UNREACHABLE)

        assert detect_critical_failure(failing, 1).type == CriticalErrorType.STORE_UNREACHABLE
        assert detect_critical_failure(passing, 0) is None

    def test_high_failure_rate_carries_rate(self):
        critical = detect_critical_failure(_result(success=False, processed=10, failed=6), 1)

        assert critical.type == CriticalErrorType.HIGH_FAILURE_RATE
        assert critical.failure_rate == pytest.approx(0.6)
        assert critical.message == f"High failure rate (60%) syncing inventory from {SHOP}"

    def test_details_join_errors(self):
        critical = detect_critical_failure(
            _result(success=False, processed=2, failed=2, errors=["first", "second"]), 1
        )
        assert critical.details == "first; second"

    def test_healthy_run_returns_none(self):
        assert detect_critical_failure(_result(), 0) is None

    def test_below_threshold_failures_return_none(self):
        assert detect_critical_failure(_result(success=False, failed=1), 2) is None


class TestOwnerStoreDisconnected:

    def test_builds_owner_store_alert(self):
        critical = create_owner_store_disconnected_error("Owner store not connected: error")

        assert critical.type == CriticalErrorType.OWNER_STORE_DISCONNECTED
        assert critical.partner_shop == "owner_store"
        assert critical.message == "Owner store connection failed - inventory sync cannot proceed"
        assert critical.details == "Owner store not connected: error"
