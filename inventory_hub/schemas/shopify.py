"""
Shopify schemas — typed responses for each Admin GraphQL operation.

One response model per operation (variant quantities, inventory item
resolution, quantity writes, locations) so callers never reach into a
generic JSON blob.
"""
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel


T = TypeVar("T")


class GraphQLResult(BaseModel, Generic[T]):
    """Outcome of one GraphQL call. Exactly one of data / error is set."""
    data: Optional[T] = None
    error: Optional[str] = None
    http_status: Optional[int] = None


# -- Partner store: variant quantities ------------------------------------

class VariantInventoryNode(BaseModel):
    # Non-variant ids come back as empty objects
    id: Optional[str] = None
    inventoryQuantity: Optional[int] = None


class VariantInventoryResponse(BaseModel):
    nodes: List[Optional[VariantInventoryNode]] = []


# -- Owner store: variant -> inventory item -------------------------------

class InventoryItemRef(BaseModel):
    id: str


class VariantInventoryItemNode(BaseModel):
    id: Optional[str] = None
    inventoryItem: Optional[InventoryItemRef] = None


class VariantInventoryItemsResponse(BaseModel):
    nodes: List[Optional[VariantInventoryItemNode]] = []


# -- Owner store: absolute quantity writes --------------------------------

class UserError(BaseModel):
    field: Optional[List[str]] = None
    message: str

    def describe(self) -> str:
        if self.field:
            return f"{'.'.join(self.field)}: {self.message}"
        return self.message


class InventoryAdjustmentGroup(BaseModel):
    createdAt: Optional[str] = None
    reason: Optional[str] = None


class InventorySetQuantitiesPayload(BaseModel):
    inventoryAdjustmentGroup: Optional[InventoryAdjustmentGroup] = None
    userErrors: List[UserError] = []


class InventorySetQuantitiesResponse(BaseModel):
    inventorySetQuantities: Optional[InventorySetQuantitiesPayload] = None


class InventoryQuantityInput(BaseModel):
    inventoryItemId: str
    locationId: str
    quantity: int


class InventorySetQuantitiesInput(BaseModel):
    name: str = "available"
    reason: str = "correction"
    # Partner value always wins; deprecated after 2026-04 in favour of
    # changeFromQuantity: null per quantity
    ignoreCompareQuantity: bool = True
    quantities: List[InventoryQuantityInput]


# -- Owner store: primary location ----------------------------------------

class LocationNode(BaseModel):
    id: str
    name: Optional[str] = None
    isActive: Optional[bool] = None


class LocationEdge(BaseModel):
    node: LocationNode


class LocationConnection(BaseModel):
    edges: List[LocationEdge] = []


class LocationsResponse(BaseModel):
    locations: LocationConnection
