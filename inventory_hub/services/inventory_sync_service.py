"""
Inventory sync service — one full sync run across all partners.

Flow:
1. Owner store credential + location (abort and alert if unavailable)
2. Active product mappings (optionally one partner)
3. Group mappings by partner shop
4. Per partner: credentials, prior failures, sync log, partner sync,
   status + counter, critical alert, close sync log
5. Aggregate result

Partners run strictly one after another. A store error while syncing one
partner marks the run failed, closes that partner's sync log as failed when
one was opened, and moves on to the next partner.
"""
import logging
from typing import Optional

from inventory_hub.core.exceptions import InventoryHubException
from inventory_hub.db.mapping_store import MappingStore
from inventory_hub.db.partner_store import PartnerStore
from inventory_hub.db.sync_log_store import SyncLogStore
from inventory_hub.schemas.inventory_sync import (
    InventorySyncResult,
    OwnerStoreCredential,
    PartnerSyncResult,
    SyncLogStatus,
    TokenStatus,
)
from inventory_hub.services.alert_service import AlertService
from inventory_hub.services.inventory_pipeline import InventoryPipeline
from inventory_hub.services.owner_store_service import OwnerStoreService
from inventory_hub.services.partner_sync import sync_partner_inventory
from inventory_hub.services.sync_status import (
    calculate_consecutive_failures,
    create_owner_store_disconnected_error,
    detect_critical_failure,
    determine_sync_status,
)
from inventory_hub.utils.batch_grouping import group_mappings_by_partner

logger = logging.getLogger("inventory_sync_service")


class InventorySyncService:
    def __init__(
        self,
        owner_store: OwnerStoreService,
        pipeline: InventoryPipeline,
        mapping_store: MappingStore,
        partner_store: PartnerStore,
        sync_log_store: SyncLogStore,
        alerts: AlertService,
    ):
        self._owner_store = owner_store
        self._pipeline = pipeline
        self._mappings = mapping_store
        self._partners = partner_store
        self._sync_logs = sync_log_store
        self._alerts = alerts

    async def _abort_owner_store(self, result: InventorySyncResult, message: str) -> InventorySyncResult:
        logger.error("inventory sync aborted: %s", message)
        result.success = False
        result.errors.append(message)
        await self._alerts.send_critical_failure_alert(create_owner_store_disconnected_error(message))
        return result

    @staticmethod
    def _owner_store_problem(credential: OwnerStoreCredential) -> Optional[str]:
        if credential.status != TokenStatus.CONNECTED or not credential.access_token:
            return f"Owner store not connected: {credential.error or credential.status.value}"
        if not credential.location_id:
            return "Owner store location ID not available. Refresh the store connection."
        return None

    async def run_inventory_sync(self, partner_shop: Optional[str] = None) -> InventorySyncResult:
        """Sync every partner with active mappings, or only partner_shop when given."""
        result = InventorySyncResult()
        logger.info("inventory sync started partner_shop=%s", partner_shop)

        credential = await self._owner_store.get_valid_credential()
        problem = self._owner_store_problem(credential)
        if problem:
            return await self._abort_owner_store(result, problem)

        try:
            mappings = await self._mappings.get_active_mappings(partner_shop)
        except InventoryHubException as e:
            logger.error("failed to load product mappings error=%s", e)
            result.success = False
            result.errors.append(f"Failed to fetch product mappings: {e}")
            return result

        if not mappings:
            logger.info("no active product mappings, nothing to sync")
            return result

        for shop, partner_mappings in group_mappings_by_partner(mappings).items():
            try:
                partner_result = await self._sync_partner(shop, partner_mappings, credential)
            except InventoryHubException as e:
                logger.error("partner sync aborted shop=%s error=%s", shop, e)
                result.success = False
                result.errors.append(f"{shop}: {e}")
                continue

            if partner_result is None:
                result.errors.append(f"Skipping {shop}: inactive or missing credentials")
                continue
            result.add_partner_result(partner_result)

        logger.info(
            "inventory sync finished success=%s partners=%s processed=%s updated=%s failed=%s skipped=%s",
            result.success, result.partners_processed, result.total_items_processed,
            result.total_items_updated, result.total_items_failed, result.total_items_skipped,
        )
        return result

    async def _sync_partner(
        self, shop: str, mappings, credential: OwnerStoreCredential
    ) -> Optional[PartnerSyncResult]:
        partner = await self._partners.get_partner_by_shop(shop)
        if partner is None or not partner.can_sync:
            logger.warning("skipping partner shop=%s: inactive or missing credentials", shop)
            return None

        previous_failures = await self._partners.get_consecutive_failures(shop)
        log_id = await self._sync_logs.create_log(partner.id, len(mappings))

        try:
            return await self._run_partner(shop, mappings, credential, partner.access_token, previous_failures, log_id)
        except InventoryHubException as e:
            if log_id:
                await self._close_failed_log(log_id, len(mappings), str(e))
            raise

    async def _close_failed_log(self, log_id: str, items_processed: int, error: str) -> None:
        try:
            await self._sync_logs.update_log(log_id, SyncLogStatus.FAILED, items_processed, 0, 0, [error])
        except InventoryHubException as e:
            logger.error("could not close sync log log_id=%s error=%s", log_id, e)

    async def _run_partner(
        self,
        shop: str,
        mappings,
        credential: OwnerStoreCredential,
        partner_token: str,
        previous_failures: int,
        log_id: Optional[str],
    ) -> PartnerSyncResult:
        partner_result = await sync_partner_inventory(
            self._pipeline,
            shop,
            partner_token,
            credential.shop,
            credential.access_token,
            credential.location_id,
            mappings,
        )

        status = determine_sync_status(partner_result)
        consecutive_failures = calculate_consecutive_failures(partner_result, previous_failures)
        await self._partners.update_sync_status(shop, status, consecutive_failures)

        critical = detect_critical_failure(partner_result, consecutive_failures)
        if critical:
            logger.warning("critical sync failure shop=%s type=%s", shop, critical.type.value)
            await self._alerts.send_critical_failure_alert(critical)

        if log_id:
            await self._sync_logs.update_log(
                log_id,
                SyncLogStatus.COMPLETED if partner_result.success else SyncLogStatus.FAILED,
                partner_result.items_processed,
                partner_result.items_updated,
                partner_result.items_failed,
                partner_result.errors,
            )

        return partner_result

    async def sync_single_partner(self, partner_shop: str) -> Optional[PartnerSyncResult]:
        result = await self.run_inventory_sync(partner_shop)
        return result.partner_results[0] if result.partner_results else None
