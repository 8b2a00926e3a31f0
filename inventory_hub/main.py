import logging

from fastapi import FastAPI

from inventory_hub.routes import health_router, inventory_sync_router

logger = logging.getLogger(__name__)

app = FastAPI(title="Inventory Hub Sync")
logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(name)s:%(message)s")

app.include_router(health_router)
app.include_router(inventory_sync_router)
