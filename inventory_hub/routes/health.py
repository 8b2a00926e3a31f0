"""
Health routes — liveness and readiness for the sync service.

GET /health        -> process is up
GET /health/ready  -> Redis (run lock, Celery broker) and Supabase reachable
"""
import logging

import redis
from fastapi import APIRouter
from fastapi.responses import JSONResponse

from inventory_hub.container import get_app_settings_store
from inventory_hub.core.exceptions import InventoryHubException
from inventory_hub.utils.run_lock import get_redis

logger = logging.getLogger("routes.health")

router = APIRouter(tags=["health"])


def _check_redis() -> str:
    try:
        get_redis().ping()
    except redis.RedisError as e:
        logger.warning("readiness: redis unavailable error=%s", e)
        return f"error: {e}"
    return "ok"


async def _check_supabase() -> str:
    try:
        await get_app_settings_store().get_inventory_sync_settings()
    except InventoryHubException as e:
        logger.warning("readiness: supabase unavailable error=%s", e)
        return f"error: {e}"
    return "ok"


@router.get("/health")
async def health_check():
    return {"status": "healthy"}


@router.get("/health/ready")
async def readiness_check():
    """503 with per-dependency detail when Redis or Supabase is unreachable."""
    checks = {"redis": _check_redis(), "supabase": await _check_supabase()}
    ready = all(value == "ok" for value in checks.values())
    return JSONResponse(
        status_code=200 if ready else 503,
        content={"status": "ready" if ready else "unavailable", "checks": checks},
    )
