"""Watch session: one FileWatcher plus the scheduler thread consuming it."""

import threading
from pathlib import Path
from typing import Any, Callable, Optional, Union

from watchdog.observers import Observer

from loadenv.logger import Logger, get_logger
from loadenv.scheduler import ReloadScheduler
from loadenv.watcher import FileWatcher


class WatchSession:
    """Active subscription for one absolute path.

    Example:
        session = WatchSession(Path("/srv/app/.env"), reloader.reload_from_watch, delay=2.0)
        session.start()
        ...
        session.close()
    """

    def __init__(
        self,
        path: Union[str, Path],
        action: Callable[[], None],
        delay: float,
        logger: Optional[Logger] = None,
        min_gap: Optional[float] = None,
        observer_factory: Callable[[], Any] = Observer,
    ) -> None:
        self._logger = logger or get_logger()
        self.watcher = FileWatcher(path, logger=self._logger, observer_factory=observer_factory)
        self.path = self.watcher.path
        self.scheduler = ReloadScheduler(
            self.watcher.events,
            action,
            delay,
            logger=self._logger,
            min_gap=min_gap,
            on_terminate=self.watcher.close,
        )
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()
        self._closed = False

    @property
    def is_running(self) -> bool:
        thread = self._thread
        return thread is not None and thread.is_alive()

    def start(self) -> "WatchSession":
        """Subscribe and start the event loop thread.

        Raises:
            WatchInitError: If the subscription cannot be established
        """
        self.watcher.start()
        self._thread = threading.Thread(
            target=self.scheduler.run,
            daemon=True,
            name="loadenv-watch",
        )
        self._thread.start()
        return self

    def close(self, timeout: float = 5.0) -> None:
        """Stop the loop, cancel a pending reload and release the watcher.

        Safe to call more than once; only the first call has effect.
        """
        with self._lock:
            if self._closed:
                return
            self._closed = True

        self.scheduler.stop()
        self.watcher.close()

        thread = self._thread
        if thread is not None and thread is not threading.current_thread() and thread.is_alive():
            thread.join(timeout=timeout)
