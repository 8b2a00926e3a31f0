"""
Partner store — partner credentials and per-partner sync state.

The partners row carries both the credential used to read the partner
store and the cross-run sync state (last status, consecutive failures).
"""
import logging
from datetime import datetime, timezone
from typing import Optional

from postgrest.exceptions import APIError

from inventory_hub.db.base_store import BaseStore
from inventory_hub.schemas.inventory_sync import PartnerCredential, PartnerSyncStatus

logger = logging.getLogger("partner_store")

TABLE = "partners"

# PostgREST code for .single() matching zero rows
NO_ROWS_CODE = "PGRST116"


class PartnerStore(BaseStore):
    async def get_partner_by_shop(self, shop: str) -> Optional[PartnerCredential]:
        try:
            response = (
                self._client.table(TABLE)
                .select("id,shop,access_token,is_active,is_deleted")
                .eq("shop", shop)
                .single()
                .execute()
            )
        except APIError as e:
            if e.code == NO_ROWS_CODE:
                return None
            raise self._wrap("select from", TABLE, e)

        if not response.data:
            return None
        row = dict(response.data)
        row["id"] = str(row["id"])
        row["is_active"] = bool(row.get("is_active"))
        row["is_deleted"] = bool(row.get("is_deleted"))
        return PartnerCredential.model_validate(row)

    async def get_consecutive_failures(self, shop: str) -> int:
        rows = await self._select(TABLE, "consecutive_sync_failures", {"shop": shop})
        if not rows:
            return 0
        return int(rows[0].get("consecutive_sync_failures") or 0)

    async def update_sync_status(
        self, shop: str, status: PartnerSyncStatus, consecutive_failures: int
    ) -> None:
        await self._update(
            TABLE,
            {"shop": shop},
            {
                "last_sync_status": status.value,
                "last_sync_at": datetime.now(timezone.utc).isoformat(),
                "consecutive_sync_failures": consecutive_failures,
            },
        )
        logger.info(
            "partner sync status updated shop=%s status=%s consecutive_failures=%s",
            shop, status.value, consecutive_failures,
        )
