"""loadenv - Load a KEY=VALUE env file into os.environ, with hot reload.

This package provides:
- parser: KEY=VALUE text to an ordered, read-only mapping
- loader: read + parse + apply under an exclusive lock
- watcher / scheduler: watchdog notifications debounced into one reload
- differ: added / changed / removed keys between two snapshots
- logger: pluggable log sinks (stdout, stream, callback)
- exceptions: structured error taxonomy
"""

__version__ = "1.0.0"

from loadenv.config import EnvLoader, LoadEnvConfig

from loadenv.differ import Added, Changed, DiffEvent, Removed, diff

from loadenv.environment import EnvironmentStore

from loadenv.exceptions import (
    ApplyError,
    ConfigurationError,
    LoadEnvError,
    PathResolutionError,
    ReadError,
    WatchInitError,
    WatchRuntimeError,
)

from loadenv.loader import Loader, ReloadResult

from loadenv.logger import (
    CallbackLogger,
    DefaultLogger,
    Logger,
    StructuredLogger,
    create_logger,
    get_logger,
)

from loadenv.parser import ConfigMap, format_env_text, parse_env_text

from loadenv.reloader import (
    EnvReloader,
    close_env,
    get_reloader,
    init_env,
    reset_env,
)

from loadenv.scheduler import ReloadScheduler, SchedulerState

from loadenv.session import WatchSession

from loadenv.snapshot import SnapshotStore

from loadenv.watcher import EventKind, FileWatcher, WatchEvent

__all__ = [
    "__version__",
    # Entry points
    "init_env",
    "close_env",
    "get_reloader",
    "reset_env",
    "EnvReloader",
    # Config
    "LoadEnvConfig",
    "EnvLoader",
    # Core
    "ConfigMap",
    "parse_env_text",
    "format_env_text",
    "SnapshotStore",
    "EnvironmentStore",
    "Loader",
    "ReloadResult",
    "FileWatcher",
    "WatchEvent",
    "EventKind",
    "ReloadScheduler",
    "SchedulerState",
    "WatchSession",
    "diff",
    "DiffEvent",
    "Added",
    "Changed",
    "Removed",
    # Logger
    "Logger",
    "DefaultLogger",
    "StructuredLogger",
    "CallbackLogger",
    "create_logger",
    "get_logger",
    # Exceptions
    "LoadEnvError",
    "ConfigurationError",
    "PathResolutionError",
    "ReadError",
    "ApplyError",
    "WatchInitError",
    "WatchRuntimeError",
]
