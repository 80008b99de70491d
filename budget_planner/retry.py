"""Retry wrapper for network calls made by the budget planner.

Every request to the budgeting API goes through :func:`invoke`.  The
backend is hosted on a free tier that sleeps when idle, so the first
request after a quiet period frequently fails while the service wakes
up.  A handful of evenly spaced retries is enough to ride that out.

The policy is a fixed number of attempts with a
constant pause in between.  There is no backoff curve, no jitter and no
distinction between transient and permanent failures.  Only the failure
of the final attempt reaches the caller; it is re-raised unchanged.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """How many times to attempt an operation and how long to wait in between.

    Args:
        max_attempts: Total number of attempts, including the first one.
        delay_ms: Pause between consecutive attempts, in milliseconds.
    """

    max_attempts: int = 3
    delay_ms: int = 2000

    def __post_init__(self) -> None:
        if isinstance(self.max_attempts, bool) or not isinstance(self.max_attempts, int):
            raise TypeError("max_attempts must be an integer")
        if isinstance(self.delay_ms, bool) or not isinstance(self.delay_ms, int):
            raise TypeError("delay_ms must be an integer")
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {self.max_attempts}")
        if self.delay_ms < 0:
            raise ValueError(f"delay_ms must not be negative, got {self.delay_ms}")

    @property
    def delay_seconds(self) -> float:
        return self.delay_ms / 1000.0


DEFAULT_RETRY_POLICY = RetryPolicy()


async def invoke(
    operation: Callable[[], Awaitable[T]],
    policy: RetryPolicy = DEFAULT_RETRY_POLICY,
    *,
    sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
) -> T:
    """Await ``operation()`` until it succeeds or the attempts run out.

    Args:
        operation: Zero-argument callable returning an awaitable.  It is
            called once per attempt, so it must build a fresh request each
            time.
        policy: Attempt count and delay to apply.
        sleep: Coroutine used for the pause between attempts.

    Returns:
        The value produced by the first successful attempt.

    Raises:
        Exception: Whatever the final attempt raised, unchanged.
    """
    last_index = policy.max_attempts - 1
    for attempt in range(policy.max_attempts):
        try:
            return await operation()
        except Exception as exc:
            if attempt == last_index:
                raise
            logger.warning(
                "Attempt %d/%d failed (%s); retrying in %d ms",
                attempt + 1,
                policy.max_attempts,
                exc,
                policy.delay_ms,
            )
            await sleep(policy.delay_seconds)
    # RetryPolicy guarantees at least one attempt, so the loop always
    # returns or raises.
    raise AssertionError("unreachable")


def run_with_retry(
    operation: Callable[[], Awaitable[T]],
    policy: RetryPolicy = DEFAULT_RETRY_POLICY,
) -> T:
    """Synchronous entry point for callers without a running event loop.

    Streamlit executes page scripts on a plain thread, so the UI drives
    the coroutine to completion here.
    """
    return asyncio.run(invoke(operation, policy))
