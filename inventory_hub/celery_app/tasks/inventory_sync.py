"""
Inventory sync task — scheduled and on-demand partner inventory syncs.

Tasks:
- run_inventory_sync: one full run (optionally a single partner), serialized
  across workers by the Redis run lock
"""
import logging
from typing import Any, Dict, Optional

from inventory_hub.celery_app.celery_config import celery_app
from inventory_hub.celery_app.tasks.base import BaseTask, run_async
from inventory_hub.container import execute_inventory_sync, get_app_settings_store
from inventory_hub.core.exceptions import RetryableError
from inventory_hub.schemas.inventory_sync import InventorySyncSummary
from inventory_hub.utils.run_lock import acquire_run_lock, release_run_lock

logger = logging.getLogger(__name__)


@celery_app.task(
    bind=True,
    base=BaseTask,
    name="tasks.inventory_sync.run_inventory_sync",
    autoretry_for=(RetryableError,),
    max_retries=2,
)
def run_inventory_sync(
    self, partner_shop: Optional[str] = None, scheduled: bool = False
) -> Dict[str, Any]:
    """
    Run an inventory sync.

    Scheduled runs honour the operator toggle in app_settings; on-demand
    runs always proceed. Either kind skips when another run holds the lock.
    """
    if scheduled and not run_async(get_app_settings_store().is_inventory_sync_enabled()):
        logger.info("inventory sync disabled in app_settings, skipping scheduled run")
        return {"status": "skipped", "reason": "sync_disabled"}

    holder = self.request.id or "unknown"
    if not acquire_run_lock(holder):
        return {"status": "skipped", "reason": "already_running"}

    try:
        result = run_async(execute_inventory_sync(partner_shop))
    finally:
        release_run_lock(holder)

    summary = InventorySyncSummary.from_result(result)
    logger.info(
        "inventory sync task done success=%s partners=%s updated=%s failed=%s",
        summary.success, summary.partners_processed,
        summary.total_items_updated, summary.total_items_failed,
    )
    return {"status": "completed", **summary.model_dump()}
