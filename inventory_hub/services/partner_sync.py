"""
Partner sync — runs the inventory pipeline for one partner's mappings.

fetch partner quantities -> resolve owner inventory items -> write quantities
"""
import logging
from typing import List

from inventory_hub.schemas.inventory_sync import (
    InventoryUpdate,
    PartnerSyncResult,
    ProductMapping,
    SyncErrorType,
)
from inventory_hub.services.inventory_pipeline import InventoryPipeline

logger = logging.getLogger("partner_sync")


async def sync_partner_inventory(
    pipeline: InventoryPipeline,
    partner_shop: str,
    partner_token: str,
    owner_shop: str,
    owner_token: str,
    location_id: str,
    mappings: List[ProductMapping],
) -> PartnerSyncResult:
    """
    Sync inventory from one partner store into the owner store.

    Returns a PartnerSyncResult whose counts satisfy
    processed == updated + failed + skipped, except when the partner token
    is revoked and nothing could be fetched (early return, all zero).
    """
    result = PartnerSyncResult(
        partner_shop=partner_shop,
        items_processed=len(mappings),
    )

    partner_variant_ids = [m.partner_variant_id for m in mappings]
    fetched = await pipeline.fetch_partner_inventory(partner_shop, partner_token, partner_variant_ids)
    result.errors.extend(fetched.errors)
    result.error_type = fetched.error_type

    if fetched.error_type == SyncErrorType.AUTH_REVOKED and not fetched.inventory:
        logger.warning("partner token revoked, aborting sync shop=%s", partner_shop)
        result.success = False
        return result

    my_variant_ids = [m.my_variant_id for m in mappings]
    resolved = await pipeline.resolve_inventory_item_ids(owner_shop, owner_token, my_variant_ids)
    result.errors.extend(resolved.errors)

    updates: List[InventoryUpdate] = []
    for mapping in mappings:
        quantity = fetched.inventory.get(mapping.partner_variant_id)
        if quantity is None:
            result.items_skipped += 1
            continue

        inventory_item_id = resolved.item_map.get(mapping.my_variant_id)
        if not inventory_item_id:
            result.items_skipped += 1
            result.errors.append(
                f"Could not resolve inventory item for owner variant {mapping.my_variant_id}"
            )
            continue

        updates.append(InventoryUpdate(inventory_item_id=inventory_item_id, quantity=quantity))

    if not updates:
        logger.info(
            "nothing to write shop=%s processed=%s skipped=%s",
            partner_shop, result.items_processed, result.items_skipped,
        )
        return result

    written = await pipeline.set_inventory_quantities(owner_shop, owner_token, location_id, updates)
    result.items_updated = written.updated
    result.items_failed = written.failed
    result.errors.extend(written.errors)

    if written.failed > 0:
        result.success = False

    logger.info(
        "partner sync finished shop=%s processed=%s updated=%s failed=%s skipped=%s",
        partner_shop, result.items_processed, result.items_updated,
        result.items_failed, result.items_skipped,
    )
    return result
