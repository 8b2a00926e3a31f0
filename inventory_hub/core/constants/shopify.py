"""
Shopify GraphQL documents used by the inventory sync engine.

The two lookups use nodes(ids:) which accepts up to 250 ids per request.
"""

# Sent to the PARTNER store: variant GIDs -> inventoryQuantity
VARIANT_INVENTORY_QUERY: str = """
query getVariantInventory($ids: [ID!]!) {
  nodes(ids: $ids) {
    ... on ProductVariant {
      id
      inventoryQuantity
    }
  }
}
"""

# Sent to the OWNER store: variant GIDs -> inventoryItem.id
VARIANT_INVENTORY_ITEMS_QUERY: str = """
query getVariantInventoryItems($ids: [ID!]!) {
  nodes(ids: $ids) {
    ... on ProductVariant {
      id
      inventoryItem {
        id
      }
    }
  }
}
"""

# Sent to the OWNER store: absolute quantities at one location
INVENTORY_SET_QUANTITIES_MUTATION: str = """
mutation inventorySetQuantities($input: InventorySetQuantitiesInput!) {
  inventorySetQuantities(input: $input) {
    inventoryAdjustmentGroup {
      createdAt
      reason
    }
    userErrors {
      field
      message
    }
  }
}
"""

# Sent to the OWNER store: primary location for inventory writes
PRIMARY_LOCATION_QUERY: str = """
query getLocations {
  locations(first: 1) {
    edges {
      node {
        id
        name
        isActive
      }
    }
  }
}
"""
