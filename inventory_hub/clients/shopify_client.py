import logging
from typing import Any, Dict, List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from inventory_hub.core.config import Settings
from inventory_hub.core.constants.shopify import (
    INVENTORY_SET_QUANTITIES_MUTATION,
    PRIMARY_LOCATION_QUERY,
    VARIANT_INVENTORY_ITEMS_QUERY,
    VARIANT_INVENTORY_QUERY,
)
from inventory_hub.core.exceptions import AuthenticationError, ExternalAPIError
from inventory_hub.schemas.shopify import (
    GraphQLResult,
    InventorySetQuantitiesInput,
    InventorySetQuantitiesResponse,
    LocationsResponse,
    VariantInventoryItemsResponse,
    VariantInventoryResponse,
)

logger = logging.getLogger("shopify_client")

ModelT = TypeVar("ModelT", bound=BaseModel)


class ShopifyClient:
    """
    Shopify Admin GraphQL transport shared by partner and owner stores.

    The shop and access token are passed per call since one sync run talks to
    many partner stores plus the owner store. GraphQL calls never raise for
    remote failures: they return a GraphQLResult whose error and http_status
    feed the error classifier.

    The underlying httpx.AsyncClient is owned by whoever constructs this
    client. Use it as an async context manager, or inject a client.
    """

    def __init__(self, settings: Settings, http_client: Optional[httpx.AsyncClient] = None) -> None:
        self._api_version = settings.shopify_api_version
        self._timeout = settings.shopify_http_timeout
        self._http = http_client
        self._owns_http = http_client is None
        logger.info("ShopifyClient initialized api_version=%s", self._api_version)

    async def __aenter__(self) -> "ShopifyClient":
        if self._http is None:
            self._http = httpx.AsyncClient(timeout=self._timeout)
            self._owns_http = True
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._http is not None and self._owns_http:
            await self._http.aclose()
            self._http = None

    @property
    def http(self) -> httpx.AsyncClient:
        if self._http is None:
            raise RuntimeError("ShopifyClient used outside its 'async with' block")
        return self._http

    @staticmethod
    def normalize_store_domain(domain: Optional[str]) -> Optional[str]:
        """
        Normalize Shopify store domain to ensure it has .myshopify.com suffix.

        Handles these formats:
        - "my-store" -> "my-store.myshopify.com"
        - "my-store.myshopify.com" -> "my-store.myshopify.com" (unchanged)
        - "https://my-store.myshopify.com" -> "my-store.myshopify.com" (strips protocol)
        """
        if not domain:
            return domain

        domain = domain.replace("https://", "").replace("http://", "")
        domain = domain.rstrip("/")

        if not domain.endswith(".myshopify.com"):
            domain = f"{domain}.myshopify.com"

        return domain

    def graphql_url(self, shop: str) -> str:
        return f"https://{self.normalize_store_domain(shop)}/admin/api/{self._api_version}/graphql.json"

    async def call_shopify_graphql(
        self,
        shop: str,
        access_token: str,
        query: str,
        variables: Optional[Dict[str, Any]] = None,
        response_model: Optional[Type[ModelT]] = None,
    ) -> GraphQLResult:
        """POST a GraphQL document and return data or an error string, never raising."""
        headers = {
            "X-Shopify-Access-Token": access_token or "",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        payload = {"query": query, "variables": variables or {}}

        try:
            resp = await self.http.post(self.graphql_url(shop), headers=headers, json=payload)
        except httpx.HTTPError as exc:
            logger.info("shopify graphql transport error shop=%s error=%s", shop, exc)
            return GraphQLResult(error=f"Network error ({type(exc).__name__}): {exc}", http_status=None)

        logger.info("shopify graphql response shop=%s status=%s", shop, resp.status_code)
        if resp.status_code >= 400:
            return GraphQLResult(
                error=f"HTTP {resp.status_code}: {resp.reason_phrase}",
                http_status=resp.status_code,
            )

        try:
            body = resp.json()
        except ValueError:
            return GraphQLResult(error="Invalid JSON in GraphQL response", http_status=resp.status_code)

        errors = body.get("errors")
        if errors:
            if isinstance(errors, list):
                message = "; ".join(str(e.get("message", e)) if isinstance(e, dict) else str(e) for e in errors)
            else:
                message = str(errors)
            return GraphQLResult(error=message or "GraphQL request failed", http_status=resp.status_code)

        data = body.get("data")
        if data is None:
            return GraphQLResult(error="GraphQL response contained no data", http_status=resp.status_code)

        if response_model is None:
            return GraphQLResult(data=data, http_status=resp.status_code)

        try:
            parsed = response_model.model_validate(data)
        except ValidationError as exc:
            return GraphQLResult(
                error=f"Unexpected GraphQL response shape: {exc.error_count()} validation errors",
                http_status=resp.status_code,
            )
        return GraphQLResult(data=parsed, http_status=resp.status_code)

    # -- Typed operations ---------------------------------------------------

    async def fetch_variant_inventory(
        self, shop: str, access_token: str, variant_ids: List[str]
    ) -> GraphQLResult[VariantInventoryResponse]:
        return await self.call_shopify_graphql(
            shop, access_token, VARIANT_INVENTORY_QUERY, {"ids": variant_ids}, VariantInventoryResponse
        )

    async def fetch_variant_inventory_items(
        self, shop: str, access_token: str, variant_ids: List[str]
    ) -> GraphQLResult[VariantInventoryItemsResponse]:
        return await self.call_shopify_graphql(
            shop, access_token, VARIANT_INVENTORY_ITEMS_QUERY, {"ids": variant_ids}, VariantInventoryItemsResponse
        )

    async def set_inventory_quantities(
        self, shop: str, access_token: str, set_input: InventorySetQuantitiesInput
    ) -> GraphQLResult[InventorySetQuantitiesResponse]:
        return await self.call_shopify_graphql(
            shop,
            access_token,
            INVENTORY_SET_QUANTITIES_MUTATION,
            {"input": set_input.model_dump()},
            InventorySetQuantitiesResponse,
        )

    async def fetch_primary_location(
        self, shop: str, access_token: str
    ) -> GraphQLResult[LocationsResponse]:
        return await self.call_shopify_graphql(
            shop, access_token, PRIMARY_LOCATION_QUERY, None, LocationsResponse
        )

    # -- OAuth ----------------------------------------------------------------

    async def request_client_credentials_token(
        self, shop: str, client_id: str, client_secret: str
    ) -> Dict[str, Any]:
        """
        Exchange app credentials for an Admin API token (client credentials grant).

        Returns the raw token payload: access_token, scope, expires_in.
        Raises AuthenticationError on 401/403, ExternalAPIError otherwise.
        """
        url = f"https://{self.normalize_store_domain(shop)}/admin/oauth/access_token"
        data = {
            "grant_type": "client_credentials",
            "client_id": client_id,
            "client_secret": client_secret,
        }
        try:
            resp = await self.http.post(url, data=data)
        except httpx.HTTPError as exc:
            raise ExternalAPIError("Shopify OAuth", f"Network error ({type(exc).__name__}): {exc}")

        logger.info("shopify token exchange shop=%s status=%s", shop, resp.status_code)
        if resp.status_code in (401, 403):
            raise AuthenticationError("Shopify OAuth", resp.text, status_code=resp.status_code)
        if resp.status_code >= 400:
            raise ExternalAPIError(
                "Shopify OAuth",
                f"Failed to fetch token: {resp.status_code} - {resp.text}",
                status_code=resp.status_code,
            )

        try:
            payload = resp.json()
        except ValueError:
            raise ExternalAPIError("Shopify OAuth", "Invalid JSON in token response", status_code=resp.status_code)

        if not isinstance(payload, dict) or not payload.get("access_token"):
            raise ExternalAPIError("Shopify OAuth", "Token response missing access_token", status_code=resp.status_code)
        return payload
