"""
loadenv Logger Module

Log sinks for load, reload and diff reporting.

Usage:
    from loadenv.logger import get_logger, create_logger

    # stdout logger configured from LOADENV_LOG_* variables
    logger = get_logger()
    logger.info("Loading environment", path="/srv/app/.env")

    # Explicit configuration
    logger = create_logger(
        name="my-service",
        level=logging.DEBUG,
        json_format=True,
        log_file="/var/log/my-service.log"
    )

    # Route lines into your own code
    from loadenv.logger import CallbackLogger
    logger = CallbackLogger(lambda level, message, fields: ...)

Environment Variables:
    {PREFIX}_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    {PREFIX}_LOG_FILE: Optional file path for log output
    {PREFIX}_LOG_JSON: Set to "true" for JSON output format

    Where {PREFIX} is derived from the logger name (LOADENV for "loadenv")
"""

import logging
import os
import threading
from typing import Dict, Optional

from .callback_logger import CallbackLogger, LogCallback
from .default_logger import DefaultLogger
from .interface import Logger
from .structured_logger import JsonFormatter, StructuredLogger, TextFormatter


def _get_env_prefix(name: str) -> str:
    """Convert logger name to environment variable prefix.

    Examples:
        "loadenv" -> "LOADENV"
        "my-service" -> "MY_SERVICE"
    """
    return name.upper().replace("-", "_")


def create_logger(
    name: str = "loadenv",
    level: Optional[int] = None,
    log_file: Optional[str] = None,
    json_format: Optional[bool] = None,
) -> Logger:
    """Create a new stdout logger.

    Parameters that are not provided are read from {PREFIX}_LOG_LEVEL,
    {PREFIX}_LOG_FILE and {PREFIX}_LOG_JSON, where PREFIX is derived
    from the name.

    Args:
        name: Logger name
        level: Logging level (defaults to INFO or env var)
        log_file: Optional file path for log output
        json_format: If True, output logs as JSON

    Returns:
        A configured Logger instance
    """
    env_prefix = _get_env_prefix(name)

    if level is None:
        level_str = os.environ.get(f"{env_prefix}_LOG_LEVEL", "INFO").upper()
        level = getattr(logging, level_str, logging.INFO)

    if log_file is None:
        log_file = os.environ.get(f"{env_prefix}_LOG_FILE")

    if json_format is None:
        json_format = os.environ.get(f"{env_prefix}_LOG_JSON", "false").lower() == "true"

    return StructuredLogger(
        name=name,
        level=level,
        log_file=log_file,
        json_format=json_format,
    )


_default_loggers: Dict[str, Logger] = {}
_default_lock = threading.Lock()


def get_logger(name: str = "loadenv") -> Logger:
    """Get the shared default sink for a name.

    The first call configures it from environment variables, unless the
    named logging logger already has handlers, in which case those stay in
    charge. Later calls return the same instance and never touch handlers.

    Example:
        # export LOADENV_LOG_LEVEL=DEBUG
        logger = get_logger()
    """
    with _default_lock:
        logger = _default_loggers.get(name)
        if logger is None:
            if logging.getLogger(name).handlers:
                logger = StructuredLogger(name=name, configure=False)
            else:
                logger = create_logger(name=name)
            _default_loggers[name] = logger
        return logger


__all__ = [
    # Interface
    "Logger",
    # Implementations
    "DefaultLogger",
    "StructuredLogger",
    "CallbackLogger",
    "LogCallback",
    # Formatters (for custom use)
    "JsonFormatter",
    "TextFormatter",
    # Factory functions
    "create_logger",
    "get_logger",
]
