"""
Inventory pipeline — batched fetch / resolve / write against Shopify.

Three operations, each chunking its id list and running chunks one after
another with a short pause between them:

- fetch_partner_inventory: partner variant -> available quantity (250/chunk, retried)
- resolve_inventory_item_ids: owner variant -> inventory item id (250/chunk, retried)
- set_inventory_quantities: absolute writes at one location (10/chunk, not retried)
"""
import asyncio
import logging
from typing import Awaitable, Callable, List, Optional, Sequence

from inventory_hub.clients.shopify_client import ShopifyClient
from inventory_hub.core.constants.sync import (
    API_DELAY_SECONDS,
    DEFAULT_MAX_RETRIES,
    NODES_BATCH_SIZE,
    RETRY_DELAYS_SECONDS,
    WRITE_BATCH_SIZE,
)
from inventory_hub.schemas.inventory_sync import (
    FetchInventoryResult,
    InventoryUpdate,
    ResolveInventoryItemsResult,
    WriteInventoryResult,
)
from inventory_hub.schemas.shopify import InventoryQuantityInput, InventorySetQuantitiesInput
from inventory_hub.services.retry import fetch_with_retry
from inventory_hub.utils.batch_grouping import chunk

logger = logging.getLogger("inventory_pipeline")

Sleep = Callable[[float], Awaitable[None]]


class InventoryPipeline:
    """Batched Shopify inventory operations used by one partner sync."""

    def __init__(
        self,
        client: ShopifyClient,
        max_retries: int = DEFAULT_MAX_RETRIES,
        retry_delays: Sequence[float] = RETRY_DELAYS_SECONDS,
        api_delay: float = API_DELAY_SECONDS,
        read_batch_size: int = NODES_BATCH_SIZE,
        write_batch_size: int = WRITE_BATCH_SIZE,
        sleep: Optional[Sleep] = None,
    ) -> None:
        self._client = client
        self._max_retries = max_retries
        self._retry_delays = retry_delays
        self._api_delay = api_delay
        self._read_batch_size = read_batch_size
        self._write_batch_size = write_batch_size
        self._sleep = sleep or asyncio.sleep

    async def _pause_between(self, batch_count: int) -> None:
        if batch_count > 1:
            await self._sleep(self._api_delay)

    async def fetch_partner_inventory(
        self, shop: str, access_token: str, variant_ids: List[str]
    ) -> FetchInventoryResult:
        """Fetch available quantities for partner variants.

        Null quantities are skipped. Every failed chunk adds an error string;
        the last classified error type is kept for critical failure detection.
        """
        result = FetchInventoryResult()
        batches = chunk(variant_ids, self._read_batch_size)

        for batch in batches:
            outcome = await fetch_with_retry(
                lambda batch=batch: self._client.fetch_variant_inventory(shop, access_token, batch),
                max_retries=self._max_retries,
                delays=self._retry_delays,
                sleep=self._sleep,
            )

            if outcome.error:
                logger.error(
                    "partner inventory fetch failed shop=%s type=%s retries=%s error=%s",
                    shop, outcome.error_type, outcome.retry_count, outcome.error,
                )
                result.errors.append(f"Partner fetch error: {outcome.error}")
                if outcome.error_type:
                    result.error_type = outcome.error_type
                continue

            for node in outcome.data.nodes:
                if node and node.id and node.inventoryQuantity is not None:
                    result.inventory[node.id] = node.inventoryQuantity

            await self._pause_between(len(batches))

        logger.info(
            "partner inventory fetched shop=%s requested=%s found=%s errors=%s",
            shop, len(variant_ids), len(result.inventory), len(result.errors),
        )
        return result

    async def resolve_inventory_item_ids(
        self, shop: str, access_token: str, variant_ids: List[str]
    ) -> ResolveInventoryItemsResult:
        """Resolve owner-store variant ids to inventory item ids.

        Resolution failures are collected but never classified: they point at
        data problems, not store availability.
        """
        result = ResolveInventoryItemsResult()
        batches = chunk(variant_ids, self._read_batch_size)

        for batch in batches:
            outcome = await fetch_with_retry(
                lambda batch=batch: self._client.fetch_variant_inventory_items(shop, access_token, batch),
                max_retries=self._max_retries,
                delays=self._retry_delays,
                sleep=self._sleep,
            )

            if outcome.error:
                logger.error("inventory item resolution failed shop=%s error=%s", shop, outcome.error)
                result.errors.append(f"Resolve error: {outcome.error}")
                continue

            for node in outcome.data.nodes:
                if node and node.id and node.inventoryItem and node.inventoryItem.id:
                    result.item_map[node.id] = node.inventoryItem.id

            await self._pause_between(len(batches))

        return result

    async def set_inventory_quantities(
        self,
        shop: str,
        access_token: str,
        location_id: str,
        updates: List[InventoryUpdate],
    ) -> WriteInventoryResult:
        """Write absolute quantities in small batches.

        A failed batch counts all of its items as failed and the loop moves
        on; one bad batch never blocks the others.
        """
        result = WriteInventoryResult()
        batches = chunk(updates, self._write_batch_size)

        for batch in batches:
            set_input = InventorySetQuantitiesInput(
                quantities=[
                    InventoryQuantityInput(
                        inventoryItemId=u.inventory_item_id,
                        locationId=location_id,
                        quantity=u.quantity,
                    )
                    for u in batch
                ],
            )
            response = await self._client.set_inventory_quantities(shop, access_token, set_input)

            if response.error is not None:
                logger.error("inventory write batch failed shop=%s size=%s error=%s", shop, len(batch), response.error)
                result.failed += len(batch)
                result.errors.append(f"Batch write error: {response.error}")
                continue

            payload = response.data.inventorySetQuantities if response.data else None
            user_errors = payload.userErrors if payload else []
            if user_errors:
                logger.error("inventory write batch rejected shop=%s size=%s user_errors=%s", shop, len(batch), len(user_errors))
                result.failed += len(batch)
                result.errors.extend(e.describe() for e in user_errors)
            else:
                result.updated += len(batch)

            await self._pause_between(len(batches))

        logger.info("inventory written shop=%s updated=%s failed=%s", shop, result.updated, result.failed)
        return result
