"""
Log sink interface for loadenv.

Status lines ("Loading environment from ...") and diff lines
("Environment variable changed: ...") are written through this contract,
so callers can plug in their own sink.
"""

from abc import ABC, abstractmethod
from typing import Any


class Logger(ABC):
    """Abstract base class for the loadenv log sink.

    Structured context is passed as keyword arguments, e.g.
    ``logger.info("Reloaded environment", path="/srv/app/.env", keys=4)``.

    Example:
        class PrintLogger(Logger):
            def info(self, message: str, **kwargs: Any) -> None:
                print(f"INFO: {message}")
            # ... implement other methods
    """

    @abstractmethod
    def debug(self, message: str, **kwargs: Any) -> None:
        """Log a debug message (dropped events, ignored notifications)."""
        pass

    @abstractmethod
    def info(self, message: str, **kwargs: Any) -> None:
        """Log an info message (loads, reloads, diff lines)."""
        pass

    @abstractmethod
    def warning(self, message: str, **kwargs: Any) -> None:
        """Log a warning message."""
        pass

    @abstractmethod
    def error(self, message: str, **kwargs: Any) -> None:
        """Log an error message (failed reloads, watcher errors)."""
        pass

    @abstractmethod
    def critical(self, message: str, **kwargs: Any) -> None:
        """Log a critical message."""
        pass

    @abstractmethod
    def get_session_id(self) -> str:
        """Get the current session ID.

        Returns:
            The unique session identifier for this logger instance.
        """
        pass
