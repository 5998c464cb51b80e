"""
Centralized logging configuration for the eigenrank package.

Every component logs through the ``eigenrank`` logger hierarchy. The command
line sends these records to stderr so stdout only carries the rendering.
"""

from __future__ import annotations

import logging
import sys
import time
from contextlib import contextmanager
from functools import wraps
from pathlib import Path
from typing import IO, Any, Callable, TypeVar

F = TypeVar("F", bound=Callable[..., Any])

ROOT_LOGGER_NAME = "eigenrank"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def setup_logging(
    level: str | int = logging.WARNING,
    log_file: str | Path | None = None,
    stream: IO[str] | None = None,
) -> logging.Logger:
    """Set up centralized logging for the eigenrank package.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Defaults to logging.WARNING.
        log_file: Optional file to write logs to. Defaults to None.
        stream: Console stream. Defaults to sys.stderr.

    Returns:
        Configured logger instance.

    Raises:
        ValueError: If ``level`` names an unknown level.
        OSError: If ``log_file`` cannot be opened.
    """
    if isinstance(level, str):
        if level.upper() not in LOG_LEVELS:
            raise ValueError(
                f"Unknown log level: {level}; choose from {', '.join(LOG_LEVELS)}"
            )
        level = getattr(logging, level.upper())

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()

    formatter = logging.Formatter("%(levelname)s: %(message)s")

    console_handler = logging.StreamHandler(
        stream if stream is not None else sys.stderr
    )
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a specific module/component.

    Args:
        name: Name of the component (usually __name__).

    Returns:
        Logger instance under the eigenrank hierarchy.
    """
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


@contextmanager
def log_timing(
    logger: logging.Logger, operation: str, level: int = logging.DEBUG
):
    """Context manager to log the timing of operations.

    Args:
        logger: Logger to use for timing messages.
        operation: Description of the operation being timed.
        level: Logging level for timing messages. Defaults to logging.DEBUG.

    Examples:
        >>> logger = get_logger(__name__)
        >>> with log_timing(logger, "building match matrix"):
        ...     matrix = build_match_matrix(tournament, registry)
    """
    start_time = time.perf_counter()
    logger.log(level, f"Starting {operation}")

    try:
        yield
        elapsed_time = time.perf_counter() - start_time
        logger.log(level, f"Completed {operation} in {elapsed_time:.4f}s")
    except Exception as exception:
        elapsed_time = time.perf_counter() - start_time
        logger.debug(
            f"Failed {operation} after {elapsed_time:.4f}s: {exception}"
        )
        raise


def log_performance(logger: logging.Logger):
    """Decorator to log function performance metrics.

    Args:
        logger: Logger to use for performance messages.
    """

    def decorator(function: F) -> F:
        @wraps(function)
        def wrapper(*args, **kwargs):
            start_time = time.perf_counter()
            function_name = f"{function.__module__}.{function.__name__}"

            logger.debug(
                f"Calling {function_name} with args={len(args)}, kwargs={list(kwargs.keys())}"
            )

            result = function(*args, **kwargs)
            elapsed_time = time.perf_counter() - start_time
            logger.debug(f"{function_name} completed in {elapsed_time:.4f}s")
            return result

        return wrapper

    return decorator
