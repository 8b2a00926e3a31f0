"""
Celery configuration — broker, queue, and beat schedule for inventory sync.

Running:
    Worker:
        celery -A inventory_hub.celery_app worker -Q inventory_sync --concurrency=1 -l info -n inventory@%h

    Beat (scheduler):
        celery -A inventory_hub.celery_app beat -l info

On Windows use --pool=solo.

Environment:
    INVENTORY_SYNC_ENABLED: "true" or "false", master switch for scheduled runs (default: true)
    INVENTORY_SYNC_INTERVAL_MINUTES: minutes between scheduled runs (default: 60)
    INVENTORY_SYNC_LOCK_TTL: seconds before a stale run lock expires (default: 1800)
"""
import logging

from celery import Celery
from celery.schedules import crontab
from kombu import Queue

from inventory_hub.core.config import settings

logger = logging.getLogger(__name__)

INVENTORY_SYNC_QUEUE = "inventory_sync"
INVENTORY_SYNC_ENABLED = settings.inventory_sync_enabled
INVENTORY_SYNC_INTERVAL_MINUTES = settings.inventory_sync_interval_minutes


def _interval_schedule(minutes: int):
    """Every N minutes; intervals of an hour or more run on the hour."""
    if minutes >= 60 and minutes % 60 == 0:
        hours = minutes // 60
        return crontab(minute=0) if hours == 1 else crontab(minute=0, hour=f"*/{hours}")
    return crontab(minute=f"*/{max(minutes, 1)}")


def _build_beat_schedule() -> dict:
    if not INVENTORY_SYNC_ENABLED:
        logger.info("inventory sync schedule disabled (INVENTORY_SYNC_ENABLED=false)")
        return {}

    return {
        "scheduled-inventory-sync": {
            "task": "tasks.inventory_sync.run_inventory_sync",
            "schedule": _interval_schedule(INVENTORY_SYNC_INTERVAL_MINUTES),
            "kwargs": {"scheduled": True},
            "options": {"queue": INVENTORY_SYNC_QUEUE},
        },
    }


celery_app = Celery(
    "inventory_hub",
    broker=settings.celery_broker_url,
    backend=settings.celery_result_backend,
    include=[
        "inventory_hub.celery_app.tasks.inventory_sync",
    ]
)

celery_app.conf.update(
    # Serialization
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,

    # Task execution settings
    task_acks_late=True,
    task_reject_on_worker_lost=True,
    worker_prefetch_multiplier=1,

    task_queues=(
        Queue(INVENTORY_SYNC_QUEUE),
    ),
    task_default_queue=INVENTORY_SYNC_QUEUE,
    task_routes={
        "tasks.inventory_sync.*": {"queue": INVENTORY_SYNC_QUEUE},
    },

    beat_schedule=_build_beat_schedule(),

    # Result expiration
    result_expires=86400,

    # Worker log formats
    worker_log_format="[%(asctime)s: %(levelname)s/%(processName)s] %(name)s: %(message)s",
    worker_task_log_format="[%(asctime)s: %(levelname)s/%(processName)s] [%(task_name)s(%(task_id)s)] %(name)s: %(message)s",
)
