"""Timing helper for image processing steps."""

import time
from collections.abc import Callable
from functools import wraps
from typing import ParamSpec, TypeVar

from loguru import logger

P = ParamSpec("P")
R = TypeVar("R")


def timed(func: Callable[P, R]) -> Callable[P, R]:
    """Decorator logging how long a rendition step took, at DEBUG level.

    The line is written whether the call returns or raises. A ``name``
    keyword argument (the rendition file name) is included so concurrent
    renditions can be told apart.
    """

    @wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        label = func.__qualname__
        if name := kwargs.get("name"):
            label = f"{label}[{name}]"
        start_time = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_time = time.perf_counter() - start_time
            logger.debug(f"[PROFILE] {label} took {elapsed_time:.3f}s")

    return wrapper
