"""
Logging helpers for ngxconf.

Every module logs through get_logger(), under the "ngxconf" namespace. The
library never installs handlers on its own; applications that want to see
dropped statements or parse summaries call enable_logging().
"""

import logging
import sys
from typing import TextIO

from .const import APP_NAME

DEFAULT_FORMAT = "%(levelname)s %(name)s: %(message)s"


def get_log_level(level_str: str) -> int:
    """Convert string log level to logging constant."""
    levels = {
        "debug": logging.DEBUG,
        "info": logging.INFO,
        "warning": logging.WARNING,
        "warn": logging.WARNING,
        "error": logging.ERROR,
    }
    return levels.get(level_str.lower(), logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a component.

    Args:
        name: Component name (will be prefixed with ngxconf)

    Returns:
        Logger instance
    """
    if name == APP_NAME or name.startswith(f"{APP_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{APP_NAME}.{name}")


def enable_logging(
    level: str = "warning",
    stream: TextIO | None = None,
    fmt: str = DEFAULT_FORMAT,
) -> logging.Handler:
    """
    Send ngxconf log records to a stream.

    Replaces any handler installed by an earlier call, so calling this twice
    does not duplicate output.

    Args:
        level: "debug" shows token and entry counts, "warning" only the
            statements dropped in lenient mode
        stream: Output stream (stderr if None)
        fmt: logging format string

    Returns:
        The installed handler
    """
    logger = logging.getLogger(APP_NAME)
    for handler in [h for h in logger.handlers if getattr(h, "_ngxconf", False)]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(fmt))
    handler._ngxconf = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(get_log_level(level))
    return handler
