"""
Backoff retry logic for Blink Debit API calls.

Retries transient failures (network errors, 429 rate limits, 5xx responses)
with exponential or fixed backoff and a bounded number of retries.
Validation, expired-token, decode and other 4xx errors are raised at once.

Attempts run strictly one after another. ``asyncio.CancelledError`` is never
caught here, so cancelling the caller aborts the in-flight attempt or the
pending backoff sleep and no further attempt is made.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, TypeVar

from blink_debit.errors import BlinkDebitError, NetworkError

logger = logging.getLogger("blink_debit.retry")

T = TypeVar("T")

MAX_RETRIES = 2
BASE_DELAY = 1.0
MAX_DELAY = 30.0

EXPONENTIAL = "exponential"
FIXED = "fixed"


@dataclass(frozen=True)
class RetryPolicy:
    """How many times, and how far apart, a failed call is retried."""

    max_retries: int = MAX_RETRIES
    base_delay: float = BASE_DELAY
    max_delay: float = MAX_DELAY
    backoff: str = EXPONENTIAL
    attempt_timeout: Optional[float] = None  # Seconds per attempt, None for no limit

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError("max_retries must not be negative")
        if self.backoff not in (EXPONENTIAL, FIXED):
            raise ValueError(f"Unknown backoff strategy: {self.backoff}")

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1

    def delay_for(self, retry_number: int) -> float:
        """Delay before retry ``retry_number`` (0 for the first retry)."""
        if self.backoff == FIXED:
            return min(self.base_delay, self.max_delay)
        return min(self.base_delay * (2**retry_number), self.max_delay)

    @classmethod
    def from_settings(cls, settings) -> "RetryPolicy":
        return cls(
            max_retries=settings.max_retries,
            base_delay=settings.retry_base_delay,
            max_delay=settings.retry_max_delay,
            backoff=settings.retry_backoff,
        )


DEFAULT_POLICY = RetryPolicy()


async def _attempt(
    func: Callable[..., Awaitable[T]], policy: RetryPolicy, *args: Any, **kwargs: Any
) -> T:
    if policy.attempt_timeout is None:
        return await func(*args, **kwargs)
    try:
        return await asyncio.wait_for(func(*args, **kwargs), timeout=policy.attempt_timeout)
    except TimeoutError:
        raise NetworkError(f"Attempt timed out after {policy.attempt_timeout:.1f}s") from None


async def with_retry(
    func: Callable[..., Awaitable[T]],
    *args: Any,
    policy: RetryPolicy = DEFAULT_POLICY,
    **kwargs: Any,
) -> T:
    """
    Execute an async function, retrying retriable errors with backoff.

    Args:
        func: Async callable to execute. It is re-invoked for every attempt.
        policy: Retry bounds and backoff.

    Returns:
        The result of the first successful attempt.

    Raises:
        BlinkDebitError: The first non-retriable error, or the last attempt's
            error once retries are exhausted.
    """
    retry_number = 0
    while True:
        try:
            return await _attempt(func, policy, *args, **kwargs)
        except BlinkDebitError as e:
            if not e.retriable:
                raise

            if retry_number >= policy.max_retries:
                logger.error("Exhausted %d retries for API call: %s", policy.max_retries, e)
                raise

            sleep_for = policy.delay_for(retry_number)
            retry_after = getattr(e, "retry_after", None)
            if retry_after:
                sleep_for = min(retry_after, policy.max_delay)

            logger.warning(
                "Retriable error on attempt %d/%d: %s, sleeping %.1fs",
                retry_number + 1,
                policy.max_attempts,
                e,
                sleep_for,
            )
            await asyncio.sleep(sleep_for)
            retry_number += 1
