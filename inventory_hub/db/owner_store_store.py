"""
Owner store record — the destination store's token and cached location.

Single row in owner_store keyed by shop.
"""
import logging
from typing import Any, Dict, Optional

from inventory_hub.db.base_store import BaseStore

logger = logging.getLogger("owner_store_store")

TABLE = "owner_store"


class OwnerStoreStore(BaseStore):
    async def get_owner_store(self, shop: str) -> Optional[Dict[str, Any]]:
        rows = await self._select(
            TABLE, "shop,access_token,scope,is_connected,expires_at,location_id", {"shop": shop}
        )
        return rows[0] if rows else None

    async def upsert_token(
        self, shop: str, access_token: str, scope: Optional[str], expires_at: str, connected_at: str
    ) -> None:
        await self._upsert(
            TABLE,
            {
                "shop": shop,
                "access_token": access_token,
                "scope": scope,
                "is_connected": True,
                "connected_at": connected_at,
                "expires_at": expires_at,
            },
            on_conflict="shop",
        )
        logger.info("owner store token saved shop=%s expires_at=%s", shop, expires_at)

    async def save_location_id(self, shop: str, location_id: str) -> None:
        await self._update(TABLE, {"shop": shop}, {"location_id": location_id})
