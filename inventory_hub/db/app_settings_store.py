"""
App settings store — operator toggles for the scheduled inventory sync.
"""
import logging
from typing import Any, Dict, Optional

from inventory_hub.db.base_store import BaseStore

logger = logging.getLogger("app_settings_store")

TABLE = "app_settings"


class AppSettingsStore(BaseStore):
    async def get_inventory_sync_settings(self) -> Optional[Dict[str, Any]]:
        """First app_settings row, or None when the table is empty."""
        rows = await self._select(TABLE, "inventory_sync_enabled,inventory_sync_interval_minutes")
        return rows[0] if rows else None

    async def is_inventory_sync_enabled(self, default: bool = True) -> bool:
        row = await self.get_inventory_sync_settings()
        if row is None or row.get("inventory_sync_enabled") is None:
            return default
        return bool(row["inventory_sync_enabled"])
