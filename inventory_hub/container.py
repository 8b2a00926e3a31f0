"""
Lazy DI container — cached access to stores and services.

Stores and the alert service are process-wide singletons. The Shopify
client wraps an httpx.AsyncClient bound to one event loop, so it is opened
by the caller for each run and passed in to build_inventory_sync_service.
"""

from functools import lru_cache

from inventory_hub.clients.shopify_client import ShopifyClient
from inventory_hub.clients.supabase_client import SupabaseClient
from inventory_hub.core.config import settings
from inventory_hub.db.app_settings_store import AppSettingsStore
from inventory_hub.db.mapping_store import MappingStore
from inventory_hub.db.owner_store_store import OwnerStoreStore
from inventory_hub.db.partner_store import PartnerStore
from inventory_hub.db.sync_log_store import SyncLogStore
from inventory_hub.services.alert_service import AlertService
from inventory_hub.services.inventory_pipeline import InventoryPipeline
from inventory_hub.services.inventory_sync_service import InventorySyncService
from inventory_hub.services.owner_store_service import OwnerStoreService


# -- Clients ---------------------------------------------------------------

@lru_cache(maxsize=1)
def get_supabase_client():
    return SupabaseClient(settings)


# -- DB Stores -------------------------------------------------------------

@lru_cache(maxsize=1)
def get_mapping_store():
    return MappingStore(get_supabase_client())


@lru_cache(maxsize=1)
def get_partner_store():
    return PartnerStore(get_supabase_client())


@lru_cache(maxsize=1)
def get_sync_log_store():
    return SyncLogStore(get_supabase_client())


@lru_cache(maxsize=1)
def get_owner_store_store():
    return OwnerStoreStore(get_supabase_client())


@lru_cache(maxsize=1)
def get_app_settings_store():
    return AppSettingsStore(get_supabase_client())


# -- Services --------------------------------------------------------------

@lru_cache(maxsize=1)
def get_alert_service():
    return AlertService(settings)


def build_inventory_sync_service(shopify: ShopifyClient) -> InventorySyncService:
    """Wire a sync service around a Shopify client opened by the caller."""
    return InventorySyncService(
        owner_store=OwnerStoreService(settings, shopify, get_owner_store_store()),
        pipeline=InventoryPipeline(shopify),
        mapping_store=get_mapping_store(),
        partner_store=get_partner_store(),
        sync_log_store=get_sync_log_store(),
        alerts=get_alert_service(),
    )


async def execute_inventory_sync(partner_shop: str | None = None):
    """Open a Shopify client, run one inventory sync, and close the client."""
    async with ShopifyClient(settings) as shopify:
        service = build_inventory_sync_service(shopify)
        return await service.run_inventory_sync(partner_shop)
