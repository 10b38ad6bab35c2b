"""Retry logic with exponential backoff for model calls."""

from __future__ import annotations

import asyncio
import random
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, TypeVar
import logging

logger = logging.getLogger(__name__)

T = TypeVar('T')


@dataclass
class RetryConfig:
    """Configuration for retry behavior.

    ``max_attempts=1`` disables retrying entirely.
    """
    max_attempts: int = 1
    base_delay: float = 1.0
    max_delay: float = 30.0
    exponential_base: float = 2.0
    jitter_factor: float = 0.2  # ±20% random variation


class TransientError(Exception):
    """Exception for transient errors that should be retried."""
    pass


async def retry_with_backoff(
    func: Callable[..., Awaitable[T]],
    config: RetryConfig,
    *args: Any,
    **kwargs: Any
) -> T:
    """
    Execute an async function with exponential backoff retry logic.

    Only transient errors are retried; anything else is re-raised immediately.

    Args:
        func: Async function to execute
        config: Retry configuration
        *args: Positional arguments for func
        **kwargs: Keyword arguments for func

    Returns:
        Result from successful function execution

    Raises:
        Exception: The last error once attempts are exhausted, or the first
            non-transient error.
    """
    attempts = max(1, config.max_attempts)

    for attempt in range(attempts):
        try:
            result = await func(*args, **kwargs)
            if attempt > 0:
                logger.info("Retry succeeded on attempt %d", attempt + 1)
            return result

        except asyncio.CancelledError:
            raise

        except Exception as e:
            if not is_transient_error(e):
                raise

            if attempt == attempts - 1:
                if attempts > 1:
                    logger.error("All %d retry attempts failed", attempts)
                raise

            delay = compute_delay(config, attempt)
            logger.warning(
                "Attempt %d/%d failed: %s. Retrying in %.2fs...",
                attempt + 1,
                attempts,
                e,
                delay,
            )
            await asyncio.sleep(delay)

    raise RuntimeError("unreachable")


def compute_delay(config: RetryConfig, attempt: int) -> float:
    """Backoff delay for a zero-based attempt index, with jitter."""
    base_delay = min(
        config.base_delay * (config.exponential_base ** attempt),
        config.max_delay
    )
    # Jitter keeps concurrent requests from retrying in lockstep
    jitter = base_delay * config.jitter_factor * (2 * random.random() - 1)
    return max(0.0, base_delay + jitter)


def is_transient_error(error: Exception) -> bool:
    """
    Determine if an error is transient and should be retried.

    Args:
        error: Exception to check

    Returns:
        True if error is transient, False otherwise
    """
    if isinstance(error, TransientError):
        return True

    if isinstance(error, (ConnectionError, TimeoutError, asyncio.TimeoutError)):
        return True

    error_msg = str(error).lower()
    transient_patterns = [
        "timeout",
        "connection",
        "rate limit",
        "429",
        "500",
        "503",
        "504",
        "connection reset",
        "temporary",
        "unavailable",
    ]

    return any(pattern in error_msg for pattern in transient_patterns)
