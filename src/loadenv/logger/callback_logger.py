"""
Log sink that forwards every message to a caller-supplied callable.
"""

import uuid
from typing import Any, Callable, Dict

from .interface import Logger

LogCallback = Callable[[str, str, Dict[str, Any]], None]


class CallbackLogger(Logger):
    """Adapts a plain function into a loadenv log sink.

    The callable receives ``(level, message, fields)``.

    Example:
        lines = []
        logger = CallbackLogger(lambda level, msg, fields: lines.append(msg))
    """

    def __init__(self, callback: LogCallback):
        self._callback = callback
        self._session_id = str(uuid.uuid4())

    def get_session_id(self) -> str:
        return self._session_id

    def debug(self, message: str, **kwargs: Any) -> None:
        self._callback("DEBUG", message, kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._callback("INFO", message, kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._callback("WARNING", message, kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._callback("ERROR", message, kwargs)

    def critical(self, message: str, **kwargs: Any) -> None:
        self._callback("CRITICAL", message, kwargs)
