"""
Owner store token provider.

Keeps a valid Admin API token for the owner (destination) store by using
the client credentials grant, and resolves the primary location that
inventory writes target. Failures come back as an OwnerStoreCredential with
status "error" rather than as exceptions so the sync run can turn them into
an owner_store_disconnected alert.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from inventory_hub.clients.shopify_client import ShopifyClient
from inventory_hub.core.config import Settings
from inventory_hub.core.constants.sync import TOKEN_REFRESH_BUFFER_SECONDS
from inventory_hub.core.exceptions import ConfigurationError, InventoryHubException
from inventory_hub.db.owner_store_store import OwnerStoreStore
from inventory_hub.schemas.inventory_sync import OwnerStoreCredential, TokenStatus

logger = logging.getLogger("owner_store_service")


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def needs_refresh(access_token: Optional[str], expires_at: Optional[str], now: datetime) -> bool:
    """True when there is no token, no expiry, or the expiry is inside the refresh buffer."""
    expiry = _parse_timestamp(expires_at)
    if not access_token or expiry is None:
        return True
    return (expiry - now) < timedelta(seconds=TOKEN_REFRESH_BUFFER_SECONDS)


class OwnerStoreService:
    def __init__(self, settings: Settings, shopify_client: ShopifyClient, store: OwnerStoreStore):
        self._settings = settings
        self._shopify = shopify_client
        self._store = store
        self._shop = ShopifyClient.normalize_store_domain(settings.owner_store_domain)

    def _not_configured(self) -> OwnerStoreCredential:
        return OwnerStoreCredential(status=TokenStatus.NOT_CONFIGURED, error="OWNER_STORE_DOMAIN not set")

    def _error(self, message: str) -> OwnerStoreCredential:
        logger.error("owner store credential unavailable shop=%s error=%s", self._shop, message)
        return OwnerStoreCredential(status=TokenStatus.ERROR, shop=self._shop, error=message)

    async def _request_token(self, now: datetime) -> OwnerStoreCredential:
        client_id = self._settings.owner_client_id
        client_secret = self._settings.owner_client_secret
        if not client_id or not client_secret:
            raise ConfigurationError("Missing OWNER_CLIENT_ID or OWNER_CLIENT_SECRET")

        payload = await self._shopify.request_client_credentials_token(self._shop, client_id, client_secret)
        expires_at = (now + timedelta(seconds=int(payload.get("expires_in") or 0))).isoformat()

        await self._store.upsert_token(
            self._shop,
            payload["access_token"],
            payload.get("scope"),
            expires_at,
            now.isoformat(),
        )
        logger.info("owner store token refreshed shop=%s expires_at=%s", self._shop, expires_at)
        return OwnerStoreCredential(
            status=TokenStatus.CONNECTED,
            shop=self._shop,
            access_token=payload["access_token"],
            expires_at=expires_at,
        )

    async def _resolve_location(self, credential: OwnerStoreCredential) -> Optional[str]:
        response = await self._shopify.fetch_primary_location(credential.shop, credential.access_token)
        if response.error or response.data is None:
            logger.warning("owner store location lookup failed shop=%s error=%s", credential.shop, response.error)
            return None

        edges = response.data.locations.edges
        if not edges:
            logger.warning("owner store has no locations shop=%s", credential.shop)
            return None

        location_id = edges[0].node.id
        await self._store.save_location_id(credential.shop, location_id)
        return location_id

    async def get_valid_credential(self) -> OwnerStoreCredential:
        """Current owner store credential, refreshing the token when close to expiry."""
        if not self._shop:
            return self._not_configured()

        now = datetime.now(timezone.utc)
        try:
            record = await self._store.get_owner_store(self._shop) or {}

            if needs_refresh(record.get("access_token"), record.get("expires_at"), now):
                credential = await self._request_token(now)
            else:
                credential = OwnerStoreCredential(
                    status=TokenStatus.CONNECTED,
                    shop=self._shop,
                    access_token=record["access_token"],
                    expires_at=record.get("expires_at"),
                )

            credential.location_id = record.get("location_id") or await self._resolve_location(credential)
        except InventoryHubException as e:
            return self._error(str(e))

        return credential
