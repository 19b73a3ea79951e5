"""
================================================================================
E2E Tools Common Utilities
================================================================================

Shared logging setup and small filesystem helpers for the automation suite.

Exports:
    - init_logger: Initialize loguru with the project format
    - ensure_directory: Create a directory if it does not exist

Usage:
    from e2e_tools.common import init_logger, ensure_directory

    init_logger(level="DEBUG", log_file="reports/logs/e2e.log")
    ensure_directory("e2e/screenshots")

================================================================================
"""

import os
import sys
from pathlib import Path
from typing import Optional, Union

from loguru import logger

# ============================================================
# Logging Setup
# ============================================================

DEFAULT_LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)

_logger_initialized = False


def init_logger(
    level: Optional[str] = None,
    format_string: Optional[str] = None,
    log_file: Optional[str] = None,
) -> None:
    """
    Initializes the loguru logger with standard settings.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to the
            LOGGING_LEVEL environment variable, then INFO.
        format_string: Log format string. Uses default if not provided.
        log_file: Optional file path to write logs to.

    Example:
        init_logger()  # Use defaults
        init_logger(level="DEBUG", log_file="reports/logs/e2e.log")
    """
    global _logger_initialized

    if _logger_initialized:
        return

    # Remove default handler
    logger.remove()

    level = (level or os.getenv("LOGGING_LEVEL", "INFO")).upper()
    format_string = format_string or DEFAULT_LOG_FORMAT

    logger.add(
        sys.stderr,
        format=format_string,
        level=level,
        colorize=True,
    )

    if log_file:
        ensure_directory(Path(log_file).parent)
        logger.add(
            log_file,
            format=format_string,
            level=level,
            rotation="10 MB",
            retention="7 days",
        )

    _logger_initialized = True
    logger.debug(f"Logger initialized with level: {level}")


# ============================================================
# Common Utilities
# ============================================================

def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensures a directory exists, creating it if necessary.

    Args:
        path: Directory path

    Returns:
        The path as a Path (for chaining)
    """
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path


# Export public API
__all__ = [
    "DEFAULT_LOG_FORMAT",
    "init_logger",
    "ensure_directory",
]
