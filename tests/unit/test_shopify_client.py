"""
Unit tests for ShopifyClient GraphQL transport.

Uses httpx.MockTransport so requests never leave the process.
"""
import json

import httpx
import pytest

from inventory_hub.clients.shopify_client import ShopifyClient
from inventory_hub.core.exceptions import AuthenticationError, ExternalAPIError
from inventory_hub.schemas.shopify import InventoryQuantityInput, InventorySetQuantitiesInput


pytestmark = pytest.mark.unit

SHOP = "partner-one.myshopify.com"


def _client(mock_settings, handler):
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ShopifyClient(mock_settings, http_client=http)


class TestNormalizeStoreDomain:

    def test_none_returns_none(self):
        assert ShopifyClient.normalize_store_domain(None) is None

    def test_bare_domain_appends_myshopify(self):
        assert ShopifyClient.normalize_store_domain("test-store") == "test-store.myshopify.com"

    def test_full_https_url_stripped(self):
        assert ShopifyClient.normalize_store_domain("https://test-store.myshopify.com/") == "test-store.myshopify.com"


class TestLifecycle:

    def test_http_outside_context_raises(self, mock_settings):
        with pytest.raises(RuntimeError):
            ShopifyClient(mock_settings).http

    @pytest.mark.asyncio
    async def test_owned_client_is_closed_on_exit(self, mock_settings):
        client = ShopifyClient(mock_settings)
        async with client:
            assert isinstance(client.http, httpx.AsyncClient)
        with pytest.raises(RuntimeError):
            client.http


class TestCallShopifyGraphql:

    @pytest.mark.asyncio
    async def test_posts_to_versioned_endpoint_with_token(self, mock_settings):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            seen["token"] = request.headers["X-Shopify-Access-Token"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"data": {"nodes": [{"id": "gid://shopify/ProductVariant/1", "inventoryQuantity": 9}]}})

        client = _client(mock_settings, handler)
        result = await client.fetch_variant_inventory(SHOP, "shpat_x", ["gid://shopify/ProductVariant/1"])

        assert seen["url"] == "https://partner-one.myshopify.com/admin/api/2025-01/graphql.json"
        assert seen["token"] == "shpat_x"
        assert seen["body"]["variables"] == {"ids": ["gid://shopify/ProductVariant/1"]}
        assert result.error is None
        assert result.http_status == 200
        assert result.data.nodes[0].inventoryQuantity == 9

    @pytest.mark.asyncio
    async def test_http_error_status(self, mock_settings):
        client = _client(mock_settings, lambda request: httpx.Response(401))

        result = await client.fetch_variant_inventory(SHOP, "bad", ["gid://shopify/ProductVariant/1"])

        assert result.data is None
        assert result.http_status == 401
        assert result.error == "HTTP 401: Unauthorized"

    @pytest.mark.asyncio
    async def test_graphql_errors_are_joined(self, mock_settings):
        body = {"errors": [{"message": "Throttled"}, {"message": "Field missing"}]}
        client = _client(mock_settings, lambda request: httpx.Response(200, json=body))

        result = await client.fetch_variant_inventory_items(SHOP, "tok", ["gid://shopify/ProductVariant/1"])

        assert result.error == "Throttled; Field missing"
        assert result.http_status == 200

    @pytest.mark.asyncio
    async def test_blank_graphql_error_message_is_still_an_error(self, mock_settings):
        client = _client(mock_settings, lambda request: httpx.Response(200, json={"errors": [{"message": ""}]}))

        result = await client.fetch_variant_inventory(SHOP, "tok", ["gid://shopify/ProductVariant/1"])

        assert result.data is None
        assert result.error == "GraphQL request failed"

    @pytest.mark.asyncio
    async def test_network_error_has_no_status(self, mock_settings):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = _client(mock_settings, handler)
        result = await client.fetch_variant_inventory(SHOP, "tok", [])

        assert result.http_status is None
        assert result.error.startswith("Network error (ConnectError)")

    @pytest.mark.asyncio
    async def test_unexpected_shape_is_an_error(self, mock_settings):
        body = {"data": {"locations": {"edges": [{"node": {"name": "no id"}}]}}}
        client = _client(mock_settings, lambda request: httpx.Response(200, json=body))

        result = await client.fetch_primary_location(SHOP, "tok")

        assert result.data is None
        assert result.error.startswith("Unexpected GraphQL response shape")

    @pytest.mark.asyncio
    async def test_set_quantities_sends_input(self, mock_settings):
        seen = {}

        def handler(request):
            seen["variables"] = json.loads(request.content)["variables"]
            return httpx.Response(200, json={"data": {"inventorySetQuantities": {"userErrors": []}}})

        set_input = InventorySetQuantitiesInput(
            quantities=[InventoryQuantityInput(inventoryItemId="gid://shopify/InventoryItem/1", locationId="gid://shopify/Location/1", quantity=4)]
        )
        result = await _client(mock_settings, handler).set_inventory_quantities(SHOP, "tok", set_input)

        assert seen["variables"]["input"]["ignoreCompareQuantity"] is True
        assert seen["variables"]["input"]["quantities"][0]["quantity"] == 4
        assert result.data.inventorySetQuantities.userErrors == []


class TestClientCredentialsToken:

    @pytest.mark.asyncio
    async def test_returns_payload(self, mock_settings):
        def handler(request):
            assert request.url.path == "/admin/oauth/access_token"
            assert b"grant_type=client_credentials" in request.content
            return httpx.Response(200, json={"access_token": "shpat_new", "scope": "write_inventory", "expires_in": 86399})

        payload = await _client(mock_settings, handler).request_client_credentials_token("owner-store", "id", "secret")

        assert payload["access_token"] == "shpat_new"

    @pytest.mark.asyncio
    async def test_rejected_credentials_raise_authentication_error(self, mock_settings):
        client = _client(mock_settings, lambda request: httpx.Response(401, text="invalid_client"))

        with pytest.raises(AuthenticationError):
            await client.request_client_credentials_token("owner-store", "id", "bad")

    @pytest.mark.asyncio
    async def test_server_error_raises_external_api_error(self, mock_settings):
        client = _client(mock_settings, lambda request: httpx.Response(500, text="oops"))

        with pytest.raises(ExternalAPIError) as exc_info:
            await client.request_client_credentials_token("owner-store", "id", "secret")
        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_non_json_body_raises_external_api_error(self, mock_settings):
        client = _client(mock_settings, lambda request: httpx.Response(200, text="<html>maintenance</html>"))

        with pytest.raises(ExternalAPIError) as exc_info:
            await client.request_client_credentials_token("owner-store", "id", "secret")
        assert "Invalid JSON in token response" in str(exc_info.value)
        assert exc_info.value.status_code == 200
