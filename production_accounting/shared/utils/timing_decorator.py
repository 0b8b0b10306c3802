import time
import logging
from functools import wraps

# Dedicated logger for timing so it can be silenced independently
timing_logger = logging.getLogger("timing")


def _qualified_name(func) -> str:
    class_name = ""
    if hasattr(func, '__qualname__'):
        qualname_parts = func.__qualname__.split('.')
        if len(qualname_parts) > 1:
            class_name = qualname_parts[-2] + "."
    return f"{class_name}{func.__name__}"


def async_timed(func):
    """
    Log the execution time of the decorated coroutine function.
    Logs to a logger named 'timing'.
    """
    @wraps(func)
    async def wrapper(*args, **kwargs):
        start_time = time.perf_counter()
        try:
            return await func(*args, **kwargs)
        finally:
            total_time = time.perf_counter() - start_time
            timing_logger.info(f"Async function {_qualified_name(func)} took {total_time:.4f} seconds to execute.")
    return wrapper
