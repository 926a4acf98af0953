# testing_driver/decorators/envelope.py

import functools
from typing import Any

import logging
logger = logging.getLogger(__name__)


__all__ = [
    "best_effort",
]


def best_effort(_func=None, *, default: Any = None):
    """
    Decorator for operations that must never abort the calling action
    (loading spinner waits, error container probing, screenshots):
      - On success: returns the wrapped function's value.
      - On error: logs the failure at debug level and returns `default`.
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as e:
                logger.debug(f"{func.__name__} failed (non-critical): {e.__class__.__name__}: {e}")
                return default
        return wrapper
    return decorator if _func is None else decorator(_func)
