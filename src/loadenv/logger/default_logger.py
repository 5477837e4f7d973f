"""
Stream logger with session tracking.

Writes one formatted line per message to a text stream (stdout by default),
prefixed like ``[ENV]`` so reload output is easy to grep.
"""

import sys
import threading
import uuid
from datetime import datetime, timezone
from typing import Any, Optional, TextIO

from .interface import Logger


class DefaultLogger(Logger):
    """Stream-backed log sink.

    Example:
        logger = DefaultLogger(prefix="[APP]")
        logger.info("Loading environment", path="/srv/app/.env")
        # 2026-01-01T00:00:00+00:00 [APP] [INFO] [session:1a2b3c4d] Loading environment (path=/srv/app/.env)
    """

    def __init__(
        self,
        prefix: str = "[ENV]",
        output: Optional[TextIO] = None,
        include_timestamp: bool = True,
    ):
        """Initialize the stream logger.

        Args:
            prefix: Tag written in front of every line
            output: Output stream (default: stdout at call time)
            include_timestamp: Whether to include timestamps in log lines
        """
        self._prefix = prefix
        self._session_id = str(uuid.uuid4())
        self._output = output
        self._include_timestamp = include_timestamp
        # Scheduler, timer and caller threads share one stream
        self._write_lock = threading.Lock()

    def get_session_id(self) -> str:
        """Get the current session ID."""
        return self._session_id

    def _format_message(self, level: str, message: str, **kwargs: Any) -> str:
        parts = []

        if self._include_timestamp:
            parts.append(datetime.now(timezone.utc).isoformat())

        if self._prefix:
            parts.append(self._prefix)
        parts.append(f"[{level}]")
        parts.append(f"[session:{self._session_id[:8]}]")
        parts.append(message)

        if kwargs:
            extra = " ".join(f"{k}={v}" for k, v in kwargs.items())
            parts.append(f"({extra})")

        return " ".join(parts)

    def _log(self, level: str, message: str, **kwargs: Any) -> None:
        formatted = self._format_message(level, message, **kwargs)
        output = self._output if self._output is not None else sys.stdout
        with self._write_lock:
            print(formatted, file=output, flush=True)

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log a debug message."""
        self._log("DEBUG", message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        """Log an info message."""
        self._log("INFO", message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log a warning message."""
        self._log("WARNING", message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        """Log an error message."""
        self._log("ERROR", message, **kwargs)

    def critical(self, message: str, **kwargs: Any) -> None:
        """Log a critical message."""
        self._log("CRITICAL", message, **kwargs)
