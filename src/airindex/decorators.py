# Airindex: air quality index calculations
# Copyright (C) 2025 Ruaraidh Dobson, South London Scientific

# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.

# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""
Function decorators for cross-cutting concerns.

The index engine never logs. Batch and seeding helpers built on top of it
are wrapped with `with_logging` so a caller can follow what they did by
configuring the "airindex" logger.
"""

import logging
import time
from functools import wraps
from typing import Callable, TypeVar

# Type variable for generic function signatures
F = TypeVar("F", bound=Callable)


def with_logging(logger_name: str | None = None) -> Callable[[F], F]:
    """
    Decorator to log function entry, exit and failure.

    Entry and exit are logged at INFO. The exit message includes the elapsed
    time and, for results that have a length (DataFrames, lists), the number
    of rows returned. Errors are logged at ERROR level and re-raised.

    Args:
        logger_name: Name of logger to use. If None, uses the module name.

    Returns:
        Callable: Decorated function with logging

    Example:
        >>> @with_logging("airindex.seed")
        ... def build_records(stations):
        ...     return make_records(stations)
    """

    def decorator(func: F) -> F:
        func_logger = logging.getLogger(logger_name or func.__module__)

        @wraps(func)
        def wrapper(*args, **kwargs):
            func_logger.info(
                f"Calling {func.__name__}",
                extra={
                    "function": func.__name__,
                    "kwargs_keys": list(kwargs.keys()),
                },
            )
            started = time.perf_counter()

            try:
                result = func(*args, **kwargs)
            except Exception as e:
                func_logger.error(
                    f"Error in {func.__name__}: {e}",
                    extra={
                        "function": func.__name__,
                        "error_type": type(e).__name__,
                    },
                    exc_info=True,
                )
                raise

            elapsed = time.perf_counter() - started
            size = f", {len(result)} rows" if hasattr(result, "__len__") else ""
            func_logger.info(
                f"Completed {func.__name__} in {elapsed:.3f}s{size}",
                extra={"function": func.__name__},
            )
            return result

        return wrapper

    return decorator
