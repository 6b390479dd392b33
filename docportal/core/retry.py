"""
Fixed-interval retry for external store operations.

Retries a zero-argument coroutine factory up to ``max_retries`` additional
times with a constant delay between attempts. No jitter, no backoff
growth. The last observed error is re-raised once attempts run out.

Dependencies: tenacity
System role: Only local recovery mechanism for transient upstream failures
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_RETRIES = 2
DEFAULT_DELAY_MS = 1000


def _log_retry(retry_state: RetryCallState) -> None:
    error = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        "Operation failed, retrying",
        extra={
            "attempt": retry_state.attempt_number,
            "delay_s": retry_state.next_action.sleep if retry_state.next_action else None,
            "error": str(error),
        },
    )


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    max_retries: int = DEFAULT_MAX_RETRIES,
    delay_ms: int = DEFAULT_DELAY_MS,
    retry_on: tuple[type[Exception], ...] = (Exception,),
) -> T:
    """
    Run ``operation`` with bounded fixed-interval retries.

    Args:
        operation: Callable returning a fresh awaitable per attempt
        max_retries: Additional attempts after the first (total = max_retries + 1)
        delay_ms: Delay between attempts in milliseconds
        retry_on: Exception types that trigger another attempt

    Returns:
        T: Result of the first successful attempt

    Raises:
        Exception: The error from the final attempt
    """
    if max_retries < 0:
        raise ValueError("max_retries must be non-negative")

    retrying = AsyncRetrying(
        retry=retry_if_exception_type(retry_on),
        stop=stop_after_attempt(max_retries + 1),
        wait=wait_fixed(delay_ms / 1000),
        sleep=asyncio.sleep,
        before_sleep=_log_retry,
        reraise=True,
    )
    # operation may be a plain lambda returning a coroutine; await it inside the attempt
    async for attempt in retrying:
        with attempt:
            return await operation()
    raise RuntimeError("retry loop exited without a result")
