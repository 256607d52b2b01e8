import time
from collections.abc import Callable
from functools import wraps

from loguru import logger

from . import logs as ls


def timing_decorator[**P, T](func: Callable[P, T]) -> Callable[P, T]:
    @wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed = (time.perf_counter() - start) * 1000
            logger.info(ls.FUNC_TIMING.format(func=func.__qualname__, time=elapsed))

    return wrapper
