"""
Entry/exit logging for service and adapter calls.
"""

import asyncio
import functools
import time
from typing import Callable, Optional

from shared.logging import get_logger


def log_method_calls(logger_name: Optional[str] = None):
    """Decorator logging entry, exit, duration and failures of a call.

    Arguments are logged at info level, results only at debug level.
    """
    def decorator(func: Callable) -> Callable:
        logger = get_logger(logger_name or f"employees.{func.__module__.rsplit('.', 1)[-1]}")
        qualname = func.__qualname__

        def _call_args(args, kwargs):
            # Drop ``self`` for bound methods
            if args and "." in qualname and "<locals>" not in qualname:
                args = args[1:]
            return {"call_args": [repr(a) for a in args], "call_kwargs": {k: repr(v) for k, v in kwargs.items()}}

        if asyncio.iscoroutinefunction(func):
            @functools.wraps(func)
            async def async_wrapper(*args, **kwargs):
                logger.info("Entering method", method=qualname, **_call_args(args, kwargs))
                start_time = time.perf_counter()
                try:
                    result = await func(*args, **kwargs)
                except Exception as exc:
                    logger.error(
                        "Method raised",
                        method=qualname,
                        duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
                        error=str(exc),
                        error_type=type(exc).__name__,
                    )
                    raise
                logger.info(
                    "Exiting method",
                    method=qualname,
                    duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
                )
                logger.debug("Method result", method=qualname, result=repr(result))
                return result

            return async_wrapper

        @functools.wraps(func)
        def sync_wrapper(*args, **kwargs):
            logger.info("Entering method", method=qualname, **_call_args(args, kwargs))
            start_time = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as exc:
                logger.error(
                    "Method raised",
                    method=qualname,
                    duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
                    error=str(exc),
                    error_type=type(exc).__name__,
                )
                raise
            logger.info(
                "Exiting method",
                method=qualname,
                duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
            )
            logger.debug("Method result", method=qualname, result=repr(result))
            return result

        return sync_wrapper
    return decorator
