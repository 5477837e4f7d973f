"""Exceptions for loadenv.

All exceptions include structured error information:
- code: Machine-readable error identifier
- message: Human-readable error description
- details: Additional context for debugging/recovery

Usage:
    from loadenv.exceptions import (
        LoadEnvError,
        ReadError,
        WatchInitError,
    )

Propagation:
    PathResolutionError / ReadError during the first load are fatal to
    initialization. During a debounced reload they are logged and the
    last-good snapshot is kept. WatchInitError aborts hot reload but not
    the first load. WatchRuntimeError is only ever logged.
"""

from loadenv.exceptions.base import (
    ApplyError,
    ConfigurationError,
    LoadEnvError,
    PathResolutionError,
    ReadError,
    WatchInitError,
    WatchRuntimeError,
)

__all__ = [
    "LoadEnvError",
    "ConfigurationError",
    "PathResolutionError",
    "ReadError",
    "ApplyError",
    "WatchInitError",
    "WatchRuntimeError",
]
