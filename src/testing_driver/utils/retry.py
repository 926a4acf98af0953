"""Retry logic and transient error classification."""

import time
import random
from typing import Callable
from selenium.common.exceptions import (
    NoSuchElementException,
    NoSuchWindowException,
    StaleElementReferenceException,
)

# Lookup noise that only means "not there yet".
TRANSIENT_LOOKUP_ERRORS = (
    StaleElementReferenceException,
    NoSuchElementException,
)


def is_transient_lookup_error(exc: BaseException) -> bool:
    """True when a failed lookup should be retried silently."""
    return isinstance(exc, TRANSIENT_LOOKUP_ERRORS)


def retry_op(fn: Callable, retries: int = 2, base_delay: float = 0.15,
             retry_on=(NoSuchWindowException, StaleElementReferenceException)):
    """
    Retry a function call that may fail due to transient Selenium exceptions.

    Args:
        fn: The function to call
        retries: Number of retry attempts (default: 2)
        base_delay: Base delay between retries in seconds (default: 0.15)
        retry_on: Exception types considered transient

    Returns:
        The result of the function call

    Raises:
        The last exception if all retries fail
    """
    for attempt in range(retries + 1):
        try:
            return fn()
        except retry_on:
            if attempt == retries:
                raise
            time.sleep(base_delay * (1.0 + random.random()))


__all__ = [
    "TRANSIENT_LOOKUP_ERRORS",
    "is_transient_lookup_error",
    "retry_op",
]
