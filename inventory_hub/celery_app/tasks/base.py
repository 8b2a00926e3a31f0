"""
Base task class — retry policy, lifecycle logging, and the async bridge.
"""
import asyncio
import logging
from celery import Task

logger = logging.getLogger(__name__)


class BaseTask(Task):
    """Base task with common functionality for all workers."""

    abstract = True

    # Do NOT set autoretry_for here; each task declares which exceptions
    # trigger autoretry so permanent failures are recorded, not retried.
    retry_backoff = True
    retry_backoff_max = 300
    retry_jitter = True
    max_retries = 3

    track_started = True

    def on_failure(self, exc, task_id, args, kwargs, einfo):
        """Called when task fails after all retries exhausted."""
        logger.error("Task %s[%s] failed: %s", self.name, task_id, exc)

    def on_retry(self, exc, task_id, args, kwargs, einfo):
        logger.warning("Task %s[%s] retrying (attempt %s): %s", self.name, task_id, self.request.retries, exc)

    def on_success(self, retval, task_id, args, kwargs):
        logger.info("Task %s[%s] succeeded", self.name, task_id)


def run_async(coro):
    """
    Run async function in sync context.

    Each call creates a new event loop, so anything bound to a loop (the
    httpx client inside ShopifyClient) must be created inside coro.
    """
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()
