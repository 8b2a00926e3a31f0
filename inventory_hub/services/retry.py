"""
Retry executor for remote Shopify calls.

Runs an operation that reports failure as a value (GraphQLResult) rather
than raising, and retries it on a fixed delay table. Auth failures and
permanent 4xx statuses stop after the first attempt.
"""
import asyncio
import logging
from typing import Awaitable, Callable, Optional, Sequence

from inventory_hub.core.constants.sync import (
    DEFAULT_MAX_RETRIES,
    NON_RETRYABLE_STATUS_CODES,
    RETRY_DELAYS_SECONDS,
)
from inventory_hub.schemas.inventory_sync import RetryOutcome, SyncErrorType
from inventory_hub.schemas.shopify import GraphQLResult
from inventory_hub.services.error_classifier import classify_error

logger = logging.getLogger("retry")

Operation = Callable[[], Awaitable[GraphQLResult]]
Sleep = Callable[[float], Awaitable[None]]


def retry_delay(attempt: int, delays: Sequence[float] = RETRY_DELAYS_SECONDS) -> float:
    """Delay before retry number attempt+1, clamped to the last table entry."""
    if attempt < len(delays):
        return delays[attempt]
    return delays[-1]


def _is_permanent(error_type: SyncErrorType, http_status: Optional[int]) -> bool:
    return error_type == SyncErrorType.AUTH_REVOKED or http_status in NON_RETRYABLE_STATUS_CODES


async def fetch_with_retry(
    operation: Operation,
    max_retries: int = DEFAULT_MAX_RETRIES,
    delays: Sequence[float] = RETRY_DELAYS_SECONDS,
    sleep: Optional[Sleep] = None,
) -> RetryOutcome:
    """
    Execute operation up to max_retries + 1 times.

    Args:
        operation: Zero-argument coroutine factory returning a GraphQLResult.
        max_retries: Retries after the first attempt.
        delays: Fixed delay table in seconds.
        sleep: Awaitable sleep, injectable for tests (defaults to asyncio.sleep).

    Returns:
        RetryOutcome with data on success, or the last error classified.
    """
    sleep = sleep or asyncio.sleep
    last: Optional[GraphQLResult] = None
    retry_count = 0

    for attempt in range(max_retries + 1):
        result = await operation()
        last = result

        if result.data is not None and result.error is None:
            return RetryOutcome(
                data=result.data,
                http_status=result.http_status,
                retry_count=retry_count,
            )

        error_type = classify_error(result.http_status, result.error or "")
        if _is_permanent(error_type, result.http_status):
            logger.info(
                "not retrying permanent failure status=%s type=%s error=%s",
                result.http_status, error_type.value, result.error,
            )
            return RetryOutcome(
                error=result.error or "Unknown error",
                http_status=result.http_status,
                error_type=error_type,
                retry_count=retry_count,
            )

        if attempt < max_retries:
            wait = retry_delay(attempt, delays)
            logger.info(
                "retrying after failure attempt=%s wait=%.2fs type=%s error=%s",
                attempt + 1, wait, error_type.value, result.error,
            )
            await sleep(wait)
            retry_count += 1

    final_error = (last.error if last else None) or "All retry attempts failed"
    final_status = last.http_status if last else None
    return RetryOutcome(
        error=final_error,
        http_status=final_status,
        error_type=classify_error(final_status, final_error),
        retry_count=retry_count,
    )
