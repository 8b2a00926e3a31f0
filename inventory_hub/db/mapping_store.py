"""
Product mapping store — reads the active partner/owner variant links.
"""
import logging
from typing import List, Optional

from inventory_hub.db.base_store import BaseStore
from inventory_hub.schemas.inventory_sync import ProductMapping

logger = logging.getLogger("mapping_store")

TABLE = "product_mappings"
COLUMNS = "partner_shop,partner_variant_id,my_variant_id"


class MappingStore(BaseStore):
    async def get_active_mappings(self, partner_shop: Optional[str] = None) -> List[ProductMapping]:
        """Active mappings, optionally limited to one partner shop."""
        filters = {"is_active": True}
        if partner_shop:
            filters["partner_shop"] = partner_shop

        rows = await self._select(TABLE, COLUMNS, filters)
        mappings = [ProductMapping.model_validate(row) for row in rows]
        logger.info("active mappings loaded count=%s partner_shop=%s", len(mappings), partner_shop)
        return mappings
