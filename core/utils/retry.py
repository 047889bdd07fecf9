"""Retry utilities for async operations."""

import asyncio
import logging
from typing import Awaitable, Callable, Sequence, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


async def retry_on_result(
    fn: Callable[[], Awaitable[T]],
    initial: T,
    should_retry: Callable[[T], bool],
    delays: Sequence[float],
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """Re-run an async call on a fixed delay schedule while its result is unwanted.

    Unlike exception-driven retry, this retries on a successful result that
    signals a transient condition (e.g. a service reporting overload).
    At most ``len(delays)`` extra calls are made. Exceptions raised by ``fn``
    are not retried; they propagate to the caller.

    Args:
        fn: Async callable producing a fresh result
        initial: Result of the call already made
        should_retry: Predicate deciding whether a result warrants another try.
            Checked before each sleep and again before each call.
        delays: Seconds to wait before each extra attempt, in order
        sleep: Awaitable sleep function

    Returns:
        The first result for which should_retry is False, or the last
        result once the schedule is exhausted.
    """
    result = initial
    for attempt, delay in enumerate(delays, start=1):
        if not should_retry(result):
            break
        logger.debug(f"Retry {attempt}/{len(delays)} in {delay}s")
        await sleep(delay)
        # The predicate may depend on outside state (e.g. a stop flag)
        if not should_retry(result):
            break
        result = await fn()
    return result
