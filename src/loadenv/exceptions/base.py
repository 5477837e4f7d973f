"""Exception classes for loadenv.

Every loadenv exception carries structured error information:
- code: Machine-readable error identifier
- message: Human-readable error description
- details: Additional context (paths, keys, underlying errors)
"""

from typing import Any, Dict, Optional


class LoadEnvError(Exception):
    """Base exception for all loadenv errors.

    Attributes:
        code: Machine-readable error code (e.g., "READ_FAILED")
        message: Human-readable error message
        details: Optional additional context for debugging/recovery
    """

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        """Initialize error with structured information.

        Args:
            code: Machine-readable error code
            message: Human-readable error message
            details: Optional additional context
        """
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return formatted error string."""
        if self.details:
            return f"{self.code}: {self.message} (details: {self.details})"
        return f"{self.code}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for structured logging.

        Returns:
            Dictionary with code, message, and details keys.
        """
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(LoadEnvError):
    """Raised when loadenv is configured with invalid options."""

    pass


class PathResolutionError(LoadEnvError):
    """Raised when the env file path cannot be turned into an absolute path."""

    def __init__(
        self, message: str, code: str = "PATH_RESOLUTION_FAILED", details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(code=code, message=message, details=details)


class ReadError(LoadEnvError):
    """Raised when the env file is missing, unreadable or not valid UTF-8."""

    def __init__(self, message: str, code: str = "READ_FAILED", details: Optional[Dict[str, Any]] = None):
        super().__init__(code=code, message=message, details=details)


class ApplyError(LoadEnvError):
    """Raised when a parsed pair cannot be written into the environment.

    Pairs written before the failing one stay applied.
    """

    def __init__(self, message: str, code: str = "APPLY_FAILED", details: Optional[Dict[str, Any]] = None):
        super().__init__(code=code, message=message, details=details)


class WatchInitError(LoadEnvError):
    """Raised when the file-change subscription cannot be established."""

    def __init__(
        self, message: str, code: str = "WATCH_INIT_FAILED", details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(code=code, message=message, details=details)


class WatchRuntimeError(LoadEnvError):
    """Error reported by the notification channel while watching.

    Never raised by the scheduler loop; it is logged and the loop continues.
    """

    def __init__(
        self, message: str, code: str = "WATCH_RUNTIME_ERROR", details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(code=code, message=message, details=details)
