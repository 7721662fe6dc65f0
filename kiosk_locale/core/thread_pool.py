#!/usr/bin/env python3
"""Bounded thread pool for locale source fetches.

Fetches run off the main thread; their completion callbacks race on the
loader's ready gate, which holds the only lock in the localization runtime.
"""

from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor

from kiosk_locale.core.logging_utils import setup_logger

logger = setup_logger("thread_pool")

# Maximum concurrent fetch threads
MAX_FETCH_THREADS = 2


def create_fetch_executor(max_workers: int = MAX_FETCH_THREADS) -> ThreadPoolExecutor:
    """Create a bounded pool for fetch operations.

    Args:
        max_workers: Maximum concurrent fetches

    Returns:
        ThreadPoolExecutor with bounded concurrency
    """
    executor = ThreadPoolExecutor(
        max_workers=max(1, max_workers),
        thread_name_prefix="locale-fetch",
    )
    logger.debug(f"Fetch thread pool initialized (max_workers={max_workers})")
    return executor


def submit_task(
    executor: ThreadPoolExecutor,
    func: Callable,
    *args,
    name: str | None = None,
    **kwargs,
) -> Future:
    """Submit a task to a pool with start/finish logging.

    Args:
        executor: Pool to submit to
        func: Function to execute
        *args: Positional arguments for func
        name: Optional task name for logging
        **kwargs: Keyword arguments for func

    Returns:
        Future object
    """
    task_name = name or func.__name__
    logger.debug(f"Submitting task: {task_name}")

    def _wrapped():
        try:
            logger.debug(f"Starting task: {task_name}")
            result = func(*args, **kwargs)
            logger.debug(f"Completed task: {task_name}")
            return result
        except Exception as e:
            logger.error(f"Task failed: {task_name}: {e}")
            raise

    return executor.submit(_wrapped)
