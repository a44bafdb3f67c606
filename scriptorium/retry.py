"""
Retry with exponential backoff for calls to the upstream API.

Only transient network failures are retried. Validation errors, missing data
and other logical failures are raised on the first attempt.
"""

import asyncio
import errno
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, TypeVar

import httpx

from .errors import TransientNetworkError

T = TypeVar("T")

TRANSIENT_ERRNOS = {
    errno.ETIMEDOUT,
    errno.ECONNRESET,
    errno.ECONNREFUSED,
    errno.EHOSTUNREACH,
    errno.ENETUNREACH,
}


@dataclass
class RetryOptions:
    """
    Configuration for with_retry.

    Attributes:
        max_attempts: Total number of invocations in the worst case
        initial_delay_ms: Delay before the first retry
        max_delay_ms: Upper bound for any single delay
        backoff_multiplier: Growth factor between consecutive delays
        on_retry: Observer called as on_retry(error, attempt, delay_ms) before each wait
        sleep: Coroutine used to wait, in seconds (swap out in tests)
    """
    max_attempts: int = 3
    initial_delay_ms: int = 2000
    max_delay_ms: int = 10000
    backoff_multiplier: float = 2
    on_retry: Optional[Callable[[Exception, int, int], None]] = None
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep


def calculate_delay(attempt: int, options: RetryOptions) -> int:
    """Delay in milliseconds before retrying after the given (1-based) attempt."""
    delay = options.initial_delay_ms * options.backoff_multiplier ** (attempt - 1)
    return int(min(delay, options.max_delay_ms))


def is_transient_error(error: BaseException) -> bool:
    """
    Classify an error as transient (worth retrying) or fatal.

    Classification is by exception type as surfaced by the networking layer,
    never by message text.
    """
    if isinstance(error, TransientNetworkError):
        return True
    if isinstance(error, (httpx.TimeoutException, httpx.NetworkError, httpx.RemoteProtocolError)):
        return True
    if isinstance(error, (TimeoutError, ConnectionError)):
        return True
    if isinstance(error, OSError) and error.errno in TRANSIENT_ERRNOS:
        return True
    return False


async def with_retry(fn: Callable[[], Awaitable[T]], options: Optional[RetryOptions] = None) -> T:
    """
    Call an async thunk, retrying transient failures with exponential backoff.

    Args:
        fn: Zero-argument coroutine function to invoke
        options: Retry configuration (defaults to RetryOptions())

    Returns:
        Whatever fn returns on its first successful attempt

    Raises:
        The most recent error once it is fatal or attempts are exhausted
    """
    opts = options or RetryOptions()

    attempt = 1
    while True:
        try:
            return await fn()
        except Exception as e:
            if not is_transient_error(e) or attempt >= opts.max_attempts:
                raise

            delay_ms = calculate_delay(attempt, opts)
            if opts.on_retry:
                opts.on_retry(e, attempt, delay_ms)
            else:
                logging.warning(
                    f"Transient error - retrying (attempt {attempt}/{opts.max_attempts} "
                    f"after {delay_ms}ms): {e}"
                )
            await opts.sleep(delay_ms / 1000)
            attempt += 1
