"""
Inventory sync run lock — one sync run at a time across all workers.

Partner sync state (last status, consecutive failures) is read at the start
of a partner's sync and written at the end, so two overlapping runs would
race on it. A Redis SET NX EX key serializes runs; the TTL frees the lock
if a worker dies mid-run.
"""
import logging
from typing import Optional

import redis

from inventory_hub.core.config import settings

logger = logging.getLogger("run_lock")

LOCK_KEY = "inventory_sync:run_lock"


def get_redis() -> redis.Redis:
    return redis.Redis.from_url(settings.redis_url, decode_responses=True)


def acquire_run_lock(holder: str = "unknown", ttl: Optional[int] = None) -> bool:
    """Returns True if this caller now holds the lock, False if a run is in progress."""
    r = get_redis()
    ttl = ttl or settings.inventory_sync_lock_ttl

    acquired = r.set(LOCK_KEY, holder, nx=True, ex=ttl)
    if acquired:
        logger.info("inventory sync lock acquired holder=%s ttl=%ss", holder, ttl)
    else:
        logger.info("inventory sync lock held by %s, skipping", r.get(LOCK_KEY))
    return bool(acquired)


def release_run_lock(holder: str = "unknown") -> None:
    """Release the lock if this holder still owns it."""
    r = get_redis()
    if r.get(LOCK_KEY) == holder:
        r.delete(LOCK_KEY)
        logger.debug("inventory sync lock released holder=%s", holder)
