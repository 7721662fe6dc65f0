#!/usr/bin/env python3
"""Retry utilities for handling transient fetch failures."""

import time
from collections.abc import Callable
from functools import wraps
from typing import TypeVar

from kiosk_locale.core.logging_utils import setup_logger

logger = setup_logger(__name__)

T = TypeVar("T")


def retry(
    tries: int = 3,
    delay: float = 0.5,
    backoff: float = 2.0,
    exceptions: tuple[type[Exception], ...] = (Exception,),
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Retry decorator with exponential backoff.

    Args:
        tries: Maximum number of attempts
        delay: Initial delay between retries in seconds
        backoff: Multiplier for delay after each retry
        exceptions: Tuple of exception types to catch and retry

    Returns:
        Decorated function that retries on failure

    Example:
        @retry(tries=3, delay=0.5, exceptions=(requests.ConnectionError,))
        def fetch_table(url):
            ...
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args, **kwargs) -> T:
            _delay = delay

            for attempt in range(tries):
                try:
                    return func(*args, **kwargs)
                except exceptions as e:
                    if attempt == tries - 1:
                        raise

                    logger.warning(
                        f"{func.__name__} failed (attempt {attempt + 1}/{tries}): {e}. "
                        f"Retrying in {_delay:.1f}s..."
                    )
                    time.sleep(_delay)
                    _delay *= backoff

            raise RuntimeError(f"{func.__name__} failed after {tries} attempts")

        return wrapper

    return decorator
