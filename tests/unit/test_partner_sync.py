"""
Unit tests for sync_partner_inventory.

Runs the real InventoryPipeline against a mocked ShopifyClient to cover
the fail-fast rule, skip accounting, and write failures.
"""
import pytest

from inventory_hub.schemas.inventory_sync import SyncErrorType
from inventory_hub.services.inventory_pipeline import InventoryPipeline
from inventory_hub.services.partner_sync import sync_partner_inventory


pytestmark = pytest.mark.unit

PARTNER = "partner-one.myshopify.com"
OWNER = "owner-store.myshopify.com"
LOCATION = "gid://shopify/Location/1"


@pytest.fixture
def pipeline(mock_shopify_client, no_sleep):
    return InventoryPipeline(mock_shopify_client, sleep=no_sleep)


async def _run(pipeline, mappings):
    return await sync_partner_inventory(pipeline, PARTNER, "partner-tok", OWNER, "owner-tok", LOCATION, mappings)


def _accounting_holds(result):
    return result.items_processed == result.items_updated + result.items_failed + result.items_skipped


class TestFailFast:

    @pytest.mark.asyncio
    async def test_revoked_partner_token_aborts_before_resolution(self, pipeline, mock_shopify_client, mappings_factory, gql):
        mock_shopify_client.fetch_variant_inventory.return_value = gql.error("HTTP 401: Unauthorized", 401)

        result = await _run(pipeline, mappings_factory(5))

        assert result.success is False
        assert result.error_type == SyncErrorType.AUTH_REVOKED
        assert result.items_processed == 5
        assert (result.items_updated, result.items_failed, result.items_skipped) == (0, 0, 0)
        assert result.errors == ["Partner fetch error: HTTP 401: Unauthorized"]
        mock_shopify_client.fetch_variant_inventory_items.assert_not_awaited()
        mock_shopify_client.set_inventory_quantities.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_revoked_with_partial_inventory_keeps_going(self, pipeline, mock_shopify_client, mappings_factory, gql):
        mappings = mappings_factory(260)
        mock_shopify_client.fetch_variant_inventory.side_effect = [
            gql.quantities({mappings[0].partner_variant_id: 3}),
            gql.error("HTTP 401: Unauthorized", 401),
        ]
        mock_shopify_client.fetch_variant_inventory_items.return_value = gql.items(
            {mappings[0].my_variant_id: "gid://shopify/InventoryItem/1"}
        )

        result = await _run(pipeline, mappings)

        assert result.error_type == SyncErrorType.AUTH_REVOKED
        assert result.items_updated == 1
        assert result.items_skipped == 259
        assert _accounting_holds(result)


class TestSkipAccounting:

    @pytest.mark.asyncio
    async def test_ten_mappings_two_null_quantities(self, pipeline, mock_shopify_client, mappings_factory, gql):
        mappings = mappings_factory(10)
        quantities = {m.partner_variant_id: 10 + i for i, m in enumerate(mappings)}
        quantities[mappings[3].partner_variant_id] = None
        quantities[mappings[7].partner_variant_id] = None
        mock_shopify_client.fetch_variant_inventory.return_value = gql.quantities(quantities)
        mock_shopify_client.fetch_variant_inventory_items.return_value = gql.items(
            {m.my_variant_id: f"gid://shopify/InventoryItem/{i}" for i, m in enumerate(mappings)}
        )

        result = await _run(pipeline, mappings)

        assert result.success is True
        assert result.items_processed == 10
        assert result.items_updated == 8
        assert result.items_skipped == 2
        assert result.items_failed == 0
        assert result.errors == []
        mock_shopify_client.set_inventory_quantities.assert_awaited_once()
        written = mock_shopify_client.set_inventory_quantities.await_args.args[2].quantities
        assert len(written) == 8
        assert written[0].inventoryItemId == "gid://shopify/InventoryItem/0"
        assert written[0].quantity == 10

    @pytest.mark.asyncio
    async def test_unresolved_owner_variant_is_skipped_with_error(self, pipeline, mock_shopify_client, mappings_factory, gql):
        mappings = mappings_factory(2)
        mock_shopify_client.fetch_variant_inventory.return_value = gql.quantities(
            {m.partner_variant_id: 1 for m in mappings}
        )
        mock_shopify_client.fetch_variant_inventory_items.return_value = gql.items(
            {mappings[0].my_variant_id: "gid://shopify/InventoryItem/1"}
        )

        result = await _run(pipeline, mappings)

        assert result.items_updated == 1
        assert result.items_skipped == 1
        assert result.errors == [
            f"Could not resolve inventory item for owner variant {mappings[1].my_variant_id}"
        ]
        assert result.success is True

    @pytest.mark.asyncio
    async def test_nothing_to_write_is_not_a_failure(self, pipeline, mock_shopify_client, mappings_factory):
        result = await _run(pipeline, mappings_factory(3))

        assert result.success is True
        assert result.items_skipped == 3
        mock_shopify_client.set_inventory_quantities.assert_not_awaited()
        assert _accounting_holds(result)


class TestWriteFailures:

    @pytest.mark.asyncio
    async def test_failed_write_batch_marks_partner_failed(self, pipeline, mock_shopify_client, mappings_factory, gql):
        mappings = mappings_factory(12)
        mock_shopify_client.fetch_variant_inventory.return_value = gql.quantities(
            {m.partner_variant_id: 5 for m in mappings}
        )
        mock_shopify_client.fetch_variant_inventory_items.return_value = gql.items(
            {m.my_variant_id: f"gid://shopify/InventoryItem/{i}" for i, m in enumerate(mappings)}
        )
        mock_shopify_client.set_inventory_quantities.side_effect = [
            gql.write(),
            gql.error("HTTP 500: Internal Server Error", 500),
        ]

        result = await _run(pipeline, mappings)

        assert result.success is False
        assert result.items_updated == 10
        assert result.items_failed == 2
        assert result.errors == ["Batch write error: HTTP 500: Internal Server Error"]
        assert _accounting_holds(result)
