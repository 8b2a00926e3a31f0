"""
Route aggregation module.
"""
from inventory_hub.routes.health import router as health_router
from inventory_hub.routes.inventory_sync import router as inventory_sync_router

__all__ = ["health_router", "inventory_sync_router"]
