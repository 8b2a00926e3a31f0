"""
Cron trigger routes for inventory sync.

GET  /api/cron/inventory-sync  -> liveness for the cron caller
POST /api/cron/inventory-sync  -> run a sync now (Bearer CRON_SECRET)
"""
import logging
import secrets
import uuid
from typing import Optional

from fastapi import APIRouter, Header, HTTPException, Query, status

from inventory_hub.container import execute_inventory_sync
from inventory_hub.core.config import settings
from inventory_hub.schemas.inventory_sync import InventorySyncSummary
from inventory_hub.utils.run_lock import acquire_run_lock, release_run_lock

logger = logging.getLogger("routes.inventory_sync")

router = APIRouter(prefix="/api/cron", tags=["inventory-sync"])


def _is_authorized(authorization: Optional[str]) -> bool:
    if not settings.cron_secret or not authorization:
        return False
    return secrets.compare_digest(authorization, f"Bearer {settings.cron_secret}")


@router.get("/inventory-sync")
async def inventory_sync_status():
    return {"status": "ok", "endpoint": "inventory-sync"}


@router.post("/inventory-sync", response_model=InventorySyncSummary)
async def trigger_inventory_sync(
    authorization: Optional[str] = Header(None),
    partner_shop: Optional[str] = Query(None),
):
    """
    Run an inventory sync in-process and return the aggregate summary.

    Raises:
        HTTPException: 401 without a valid cron secret, 409 while another run holds the lock
    """
    if not _is_authorized(authorization):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")

    holder = f"cron:{uuid.uuid4()}"
    if not acquire_run_lock(holder):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Inventory sync already running")

    try:
        result = await execute_inventory_sync(partner_shop)
    finally:
        release_run_lock(holder)

    logger.info("cron inventory sync done success=%s partners=%s", result.success, result.partners_processed)
    return InventorySyncSummary.from_result(result)
