"""Retry with exponential backoff."""

import logging
import os
import random
import time
from typing import Callable, Optional, TypeVar

from addondeploy.models.config import RetryConfig


logger = logging.getLogger(__name__)

T = TypeVar("T")


def calculate_delay(config: RetryConfig, attempt: int) -> float:
    """Delay before retry ``attempt`` (1-based), capped at ``max_delay``."""
    # Unit tests set this to keep retry counting without sleeping
    if os.getenv("SKIP_RETRY_DELAYS") == "true":
        return 0.0

    delay = min(config.initial_delay * (2 ** attempt), config.max_delay)
    if config.jitter:
        delay += delay * 0.3 * (random.random() * 2 - 1)
        if delay < 0:
            delay = config.initial_delay / 2
    return delay


def retry_call(
    operation: Callable[[], T],
    config: RetryConfig,
    is_retryable: Callable[[Exception], bool],
    operation_name: str = "operation",
    sleep: Optional[Callable[[float], None]] = None,
) -> T:
    """Run ``operation`` until it succeeds, fails permanently or attempts run out.

    The last exception is re-raised unchanged.
    """
    sleep = sleep or time.sleep
    for attempt in range(config.max_attempts):
        if attempt > 0:
            delay = calculate_delay(config, attempt)
            logger.info(
                f"Retrying {operation_name} after {delay:.1f}s "
                f"(attempt {attempt + 1}/{config.max_attempts})"
            )
            sleep(delay)
        try:
            return operation()
        except Exception as e:
            if not is_retryable(e) or attempt == config.max_attempts - 1:
                raise
            logger.debug(f"{operation_name} failed with retryable error: {e}")
