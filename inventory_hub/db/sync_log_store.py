"""
Sync log store — one sync_logs row per partner per run.
"""
import logging
from datetime import datetime, timezone
from typing import List, Optional

from inventory_hub.core.constants.sync import INVENTORY_SYNC_TYPE
from inventory_hub.db.base_store import BaseStore
from inventory_hub.schemas.inventory_sync import SyncLogStatus

logger = logging.getLogger("sync_log_store")

TABLE = "sync_logs"


class SyncLogStore(BaseStore):
    async def create_log(
        self,
        partner_id: str,
        items_processed: int,
        status: SyncLogStatus = SyncLogStatus.STARTED,
        sync_type: str = INVENTORY_SYNC_TYPE,
    ) -> Optional[str]:
        """Insert a log row and return its id, or None if the insert returned nothing."""
        row = await self._insert(
            TABLE,
            {
                "partner_id": partner_id,
                "sync_type": sync_type,
                "status": status.value,
                "items_processed": items_processed,
                "started_at": datetime.now(timezone.utc).isoformat(),
            },
        )
        log_id = row.get("id")
        return str(log_id) if log_id is not None else None

    async def update_log(
        self,
        log_id: str,
        status: SyncLogStatus,
        items_processed: int,
        items_updated: int,
        items_failed: int,
        errors: List[str],
    ) -> None:
        await self._update(
            TABLE,
            {"id": log_id},
            {
                "status": status.value,
                "items_processed": items_processed,
                "items_updated": items_updated,
                "items_failed": items_failed,
                "error_message": "; ".join(errors) if errors else None,
                "completed_at": datetime.now(timezone.utc).isoformat(),
            },
        )
        logger.info("sync log closed id=%s status=%s", log_id, status.value)
