"""Logging setup and API call logging for the accessor layer."""

from __future__ import annotations

import functools
import logging
import os
import time
from typing import Any, Awaitable, Callable, TypeVar

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

api_logger = logging.getLogger("f1scraper.api")


def configure_logging(level: str | int = "INFO", log_file: str | None = None) -> None:
    """Attach console (and optionally file) handlers to the package logger."""
    root = logging.getLogger("f1scraper")
    root.setLevel(level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)
    console = logging.StreamHandler()
    console.setFormatter(formatter)
    root.addHandler(console)

    if log_file is not None:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)


def log_api_call(fn: F) -> F:
    """Decorator that logs accessor calls and the envelope they return."""

    @functools.wraps(fn)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        # Skip 'self'
        arg_parts = [repr(a) for a in args[1:]]
        arg_parts += [f"{k}={v!r}" for k, v in kwargs.items()]
        arg_str = ", ".join(arg_parts)
        api_logger.debug("CALL: %s(%s)", fn.__qualname__, arg_str)

        start = time.monotonic()
        result = await fn(*args, **kwargs)
        elapsed = time.monotonic() - start
        if result.success:
            count = len(result.data) if isinstance(result.data, list) else 1
            api_logger.info(
                "OK: %s(%s) -> %d items (%.3fs)",
                fn.__qualname__, arg_str, count, elapsed,
            )
        else:
            api_logger.error(
                "FAIL: %s(%s) -> %s (%.3fs)",
                fn.__qualname__, arg_str, result.error, elapsed,
            )
        return result

    return wrapper  # type: ignore[return-value]
