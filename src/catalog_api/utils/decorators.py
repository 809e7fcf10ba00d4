"""Decorator utilities for cross-cutting concerns."""
import functools
import logging
import time
from typing import Any, Callable, Optional, TypeVar, cast

# Setup logging
logger = logging.getLogger(__name__)

F = TypeVar('F', bound=Callable[..., Any])


def log_execution_time(func: Optional[F] = None, *, level: int = logging.DEBUG):
    """Decorator to log function execution time.

    Can be used bare (``@log_execution_time``) or with a log level
    (``@log_execution_time(level=logging.INFO)``). Failures are always
    logged at ERROR with the elapsed time and re-raised.

    Args:
        func: The function to decorate
        level: Level used for the success message

    Returns:
        Decorated function that logs execution time
    """
    def decorator(fn: F) -> F:
        @functools.wraps(fn)
        def wrapper(*args, **kwargs):
            start_time = time.perf_counter()
            try:
                result = fn(*args, **kwargs)
            except Exception as e:
                duration = time.perf_counter() - start_time
                logger.error(f"{fn.__qualname__} failed after {duration:.3f}s: {e}")
                raise
            duration = time.perf_counter() - start_time
            logger.log(level, f"{fn.__qualname__} completed in {duration:.3f}s")
            return result
        return cast(F, wrapper)

    if func is not None:
        return decorator(func)
    return decorator
