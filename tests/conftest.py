"""
Pytest configuration and shared fixtures for inventory sync tests.

Provides settings, GraphQL result builders, mocked Shopify client and
stores, and sample mappings.
"""
from types import SimpleNamespace

import pytest
from unittest.mock import AsyncMock, MagicMock

from inventory_hub.schemas.inventory_sync import PartnerCredential, ProductMapping
from inventory_hub.schemas.shopify import (
    GraphQLResult,
    InventorySetQuantitiesResponse,
    VariantInventoryItemsResponse,
    VariantInventoryResponse,
)


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_settings():
    """Settings object with test defaults (no real credentials)."""
    from inventory_hub.core.config import Settings
    return Settings(
        supabase_url="https://test.supabase.co",
        supabase_service_role_key="test-service-key",
        shopify_api_version="2025-01",
        owner_store_domain="owner-store.myshopify.com",
        owner_client_id="owner-client-id",
        owner_client_secret="owner-client-secret",
        resend_api_key="re_test_key",
        alert_email_to="ops@example.com, oncall@example.com",
        alert_email_from="Inventory Hub <alerts@example.com>",
        app_url="https://hub.example.com",
        redis_url="redis://localhost:6379/0",
        cron_secret="cron-secret",
    )


# ---------------------------------------------------------------------------
# GraphQL result builders
# ---------------------------------------------------------------------------

def quantity_result(quantities):
    """Partner inventory lookup result: {variant_gid: quantity or None}."""
    nodes = [{"id": vid, "inventoryQuantity": qty} for vid, qty in quantities.items()]
    return GraphQLResult(data=VariantInventoryResponse.model_validate({"nodes": nodes}), http_status=200)


def item_result(item_ids):
    """Owner inventory item lookup result: {variant_gid: inventory_item_gid}."""
    nodes = [{"id": vid, "inventoryItem": {"id": iid}} for vid, iid in item_ids.items()]
    return GraphQLResult(data=VariantInventoryItemsResponse.model_validate({"nodes": nodes}), http_status=200)


def write_result(user_errors=None):
    payload = {"inventorySetQuantities": {"inventoryAdjustmentGroup": None, "userErrors": user_errors or []}}
    return GraphQLResult(data=InventorySetQuantitiesResponse.model_validate(payload), http_status=200)


def error_result(message, http_status=None):
    return GraphQLResult(error=message, http_status=http_status)


@pytest.fixture
def gql():
    """GraphQL result builders: quantities, items, write, error."""
    return SimpleNamespace(
        quantities=quantity_result,
        items=item_result,
        write=write_result,
        error=error_result,
    )


# ---------------------------------------------------------------------------
# Collaborators (mocked)
# ---------------------------------------------------------------------------

@pytest.fixture
def no_sleep():
    """Awaitable sleep that records requested delays without waiting."""
    return AsyncMock(return_value=None)


@pytest.fixture
def mock_shopify_client():
    """Mocked ShopifyClient with the typed inventory operations."""
    client = MagicMock()
    client.fetch_variant_inventory = AsyncMock(return_value=quantity_result({}))
    client.fetch_variant_inventory_items = AsyncMock(return_value=item_result({}))
    client.set_inventory_quantities = AsyncMock(return_value=write_result())
    client.fetch_primary_location = AsyncMock()
    client.request_client_credentials_token = AsyncMock()
    return client


@pytest.fixture
def mock_supabase():
    """Mock SupabaseClient with a chained table builder."""
    supabase_client = MagicMock()
    table = MagicMock()
    for method in ("select", "insert", "upsert", "update", "eq", "single"):
        getattr(table, method).return_value = table
    table.execute.return_value = MagicMock(data=[])
    supabase_client.client.table.return_value = table
    return supabase_client, table


# ---------------------------------------------------------------------------
# Sample data
# ---------------------------------------------------------------------------

PARTNER_SHOP = "partner-one.myshopify.com"
OWNER_SHOP = "owner-store.myshopify.com"
LOCATION_ID = "gid://shopify/Location/1"


def make_mappings(count, partner_shop=PARTNER_SHOP):
    return [
        ProductMapping(
            partner_shop=partner_shop,
            partner_variant_id=f"gid://shopify/ProductVariant/{100 + i}",
            my_variant_id=f"gid://shopify/ProductVariant/{900 + i}",
        )
        for i in range(count)
    ]


@pytest.fixture
def mappings_factory():
    return make_mappings


@pytest.fixture
def sample_partner():
    return PartnerCredential(
        id="partner-uuid-1",
        shop=PARTNER_SHOP,
        access_token="shpat_partner",
        is_active=True,
        is_deleted=False,
    )
