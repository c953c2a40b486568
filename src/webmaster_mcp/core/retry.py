"""Retry with linear backoff for Webmaster API calls."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeVar

from webmaster_mcp.core.errors import ApiStatusError, ApiTimeoutError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

T = TypeVar("T")

RETRYABLE_STATUS_CODES: frozenset[int] = frozenset({500, 502, 503})


@dataclass(frozen=True, slots=True)
class RetryConfig:
    """Configuration for retry with backoff."""

    max_attempts: int = 3
    base_delay: float = 1.0


def is_retryable(error: Exception) -> bool:
    """Check if an error should trigger a retry."""
    if isinstance(error, ApiTimeoutError):
        return True
    return (
        isinstance(error, ApiStatusError)
        and error.status_code in RETRYABLE_STATUS_CODES
    )


def compute_delay(attempt: int, config: RetryConfig) -> float:
    """Backoff before the attempt after *attempt*: base_delay * attempt."""
    return config.base_delay * attempt


async def retry_with_backoff(
    fn: Callable[[], Awaitable[T]],
    config: RetryConfig | None = None,
    on_retry: Callable[[int, float, Exception], None] | None = None,
) -> T:
    """Execute fn with retry and linear backoff.

    Retries on ApiTimeoutError and on ApiStatusError with a 500, 502
    or 503 status. All other errors propagate immediately.

    Args:
        fn: Zero-arg callable returning an awaitable.
        config: Retry configuration. Uses defaults if None.
        on_retry: Optional callback(attempt, delay, error) before each retry.
            ``attempt`` is the 1-based number of the attempt that failed.

    Returns:
        The result of fn().

    Raises:
        The last error once ``max_attempts`` attempts have failed, or
        immediately for non-retryable errors.
    """
    cfg = config or RetryConfig()

    for attempt in range(1, cfg.max_attempts + 1):
        try:
            return await fn()
        except Exception as e:
            if not is_retryable(e):
                raise
            if attempt >= cfg.max_attempts:
                raise
            delay = compute_delay(attempt, cfg)
            if on_retry is not None:
                on_retry(attempt, delay, e)
            await asyncio.sleep(delay)

    msg = f"Retry loop exited without an attempt (max_attempts={cfg.max_attempts})"
    raise RuntimeError(msg)
