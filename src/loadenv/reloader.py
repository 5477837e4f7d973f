"""Env file loading with optional hot reload.

Usage:
    from loadenv import LoadEnvConfig, init_env, close_env

    init_env(LoadEnvConfig(file_path=".env", hot_reload=True, reload_delay=1.0))
    ...
    close_env()

``init_env`` runs once per process; every caller (including concurrent ones)
gets the same reloader or the same exception.

Keys removed from the file are reported as removed but stay set in the
process environment.
"""

import threading
from typing import Any, Callable, List, Optional

from watchdog.observers import Observer

from loadenv.config import LoadEnvConfig
from loadenv.differ import DiffEvent, diff
from loadenv.environment import EnvironmentStore
from loadenv.exceptions import LoadEnvError
from loadenv.loader import Loader, ReloadResult
from loadenv.once import OnceInitializer
from loadenv.parser import ConfigMap
from loadenv.session import WatchSession
from loadenv.snapshot import SnapshotStore


class EnvReloader:
    """Owns the loader, the snapshots and the optional watch session.

    Example:
        with EnvReloader(LoadEnvConfig(file_path="app.env", hot_reload=True)) as reloader:
            reloader.start()
            print(reloader.current()["DATABASE_URL"])
    """

    def __init__(
        self,
        config: Optional[LoadEnvConfig] = None,
        environment: Optional[EnvironmentStore] = None,
        observer_factory: Callable[[], Any] = Observer,
        min_gap: Optional[float] = None,
    ) -> None:
        self.config = config or LoadEnvConfig()
        self.logger = self.config.resolve_logger()
        self.environment = environment or EnvironmentStore()
        self.snapshots = SnapshotStore()
        self.loader = Loader(self.config.file_path, self.environment, self.snapshots, self.logger)
        self._observer_factory = observer_factory
        self._min_gap = min_gap
        self._session: Optional[WatchSession] = None
        self._lock = threading.Lock()
        self._closed = False

    @property
    def session(self) -> Optional[WatchSession]:
        return self._session

    def start(self) -> "EnvReloader":
        """First load, then start watching if hot reload is enabled.

        Raises:
            PathResolutionError, ReadError, ApplyError: First load failed
            WatchInitError: Watching failed; the first load stays applied
        """
        self.load()
        if self.config.hot_reload:
            self.watch()
        return self

    def load(self) -> ReloadResult:
        """Initial load. Errors propagate to the caller."""
        result = self.loader.reload()
        self.logger.info(
            "Loaded environment file", path=str(result.path), keys=len(result.current)
        )
        return result

    def watch(self) -> WatchSession:
        """Start the watch session for the resolved file path.

        Raises:
            WatchInitError: If the subscription cannot be established
        """
        with self._lock:
            if self._closed:
                raise LoadEnvError("RELOADER_CLOSED", "Reloader is closed")
            if self._session is not None:
                return self._session
            session = WatchSession(
                self.loader.resolve_path(),
                self.reload_from_watch,
                self.config.reload_delay,
                logger=self.logger,
                min_gap=self._min_gap,
                observer_factory=self._observer_factory,
            )
            session.start()
            self._session = session
            return session

    def reload(self) -> List[DiffEvent]:
        """Reload now and report the differences.

        Raises:
            LoadEnvError: If the reload fails; snapshots stay unchanged
        """
        result = self.loader.reload()
        self.logger.info("Successfully reloaded environment file", path=str(result.path))
        # Lock already released: diffing and reporting happen outside it
        events = diff(result.previous, result.current)
        self._report(events)
        return events

    def reload_from_watch(self) -> None:
        """Settle-timer action. Failures are logged, never raised."""
        try:
            self.reload()
        except LoadEnvError as e:
            self.logger.error("Reload failed", code=e.code, error=str(e))

    def _report(self, events: List[DiffEvent]) -> None:
        for event in events:
            self.logger.info(event.describe(), key=event.key)

        on_change = self.config.on_change
        if on_change is None:
            return
        try:
            on_change(events)
        except Exception as e:
            self.logger.error("on_change callback failed", error=str(e))

    def current(self) -> ConfigMap:
        return self.snapshots.current

    def previous(self) -> ConfigMap:
        return self.snapshots.previous

    def close(self) -> None:
        """Stop watching. Idempotent."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            session = self._session
        if session is not None:
            session.close()

    def __enter__(self) -> "EnvReloader":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


# Process-wide initialization
_initializer: OnceInitializer[EnvReloader] = OnceInitializer()
_reloader: Optional[EnvReloader] = None
_state_lock = threading.Lock()


def init_env(config: Optional[LoadEnvConfig] = None) -> EnvReloader:
    """Load the env file and, if configured, start hot reload. Runs once.

    Subsequent calls ignore ``config`` and return the first outcome.

    Raises:
        PathResolutionError, ReadError, ApplyError: First load failed
        WatchInitError: Hot reload could not start (environment is loaded)
    """
    def _initialize() -> EnvReloader:
        global _reloader
        reloader = EnvReloader(config)
        reloader.load()
        with _state_lock:
            _reloader = reloader
        if reloader.config.hot_reload:
            reloader.watch()
        return reloader

    return _initializer.run(_initialize)


def get_reloader() -> Optional[EnvReloader]:
    """Return the process reloader once its first load succeeded."""
    with _state_lock:
        return _reloader


def close_env() -> None:
    """Stop hot reload for the process reloader. Idempotent."""
    reloader = get_reloader()
    if reloader is not None:
        reloader.close()


def reset_env() -> None:
    """Close and forget the process reloader (primarily for testing)."""
    global _initializer, _reloader
    close_env()
    with _state_lock:
        _reloader = None
        _initializer = OnceInitializer()
