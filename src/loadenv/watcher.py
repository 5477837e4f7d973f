"""File watcher for the env file.

Uses watchdog for cross-platform filesystem notifications (inotify,
FSEvents, ReadDirectoryChangesW). The parent directory is watched rather
than the file itself, and events are filtered down to the target path.
Editors that save through a temp file and rename it over the target are
therefore still seen (as CREATE).

Classified events are delivered on a ``queue.Queue``; ``None`` on the queue
means the channel is closed.
"""

import os
import queue
import threading
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Optional, Union

from watchdog.events import (
    EVENT_TYPE_CREATED,
    EVENT_TYPE_DELETED,
    EVENT_TYPE_MODIFIED,
    EVENT_TYPE_MOVED,
    FileSystemEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer

from loadenv.exceptions import WatchInitError, WatchRuntimeError
from loadenv.logger import Logger, get_logger


class EventKind(str, Enum):
    WRITE = "write"
    CREATE = "create"
    REMOVE = "remove"
    RENAME = "rename"
    ERROR = "error"


@dataclass(frozen=True)
class WatchEvent:
    kind: EventKind
    path: str
    error: Optional[BaseException] = None


def _normalize(path: Union[str, bytes]) -> str:
    # Backends such as FSEvents report paths with symlinked directories
    # resolved (/var -> /private/var), the file name itself is kept as is
    if not path:
        return ""
    absolute = os.path.abspath(os.fsdecode(path))
    directory, name = os.path.split(absolute)
    return os.path.join(os.path.realpath(directory), name)


class _TargetEventHandler(FileSystemEventHandler):
    """Turns watchdog events for one file into WatchEvents."""

    def __init__(self, target: str, directory: str, sink: Callable[[WatchEvent], None]) -> None:
        super().__init__()
        self._target = _normalize(target)
        self._directory = _normalize(directory)
        self._sink = sink

    def classify(self, event: FileSystemEvent) -> Optional[WatchEvent]:
        src = _normalize(event.src_path)
        dest = _normalize(getattr(event, "dest_path", "") or "")

        if event.is_directory:
            if event.event_type == EVENT_TYPE_DELETED and src == self._directory:
                return WatchEvent(
                    EventKind.ERROR,
                    self._target,
                    WatchRuntimeError(
                        "Watched directory was removed", details={"directory": self._directory}
                    ),
                )
            return None

        if event.event_type == EVENT_TYPE_MOVED:
            if dest == self._target:
                return WatchEvent(EventKind.CREATE, self._target)
            if src == self._target:
                return WatchEvent(EventKind.RENAME, self._target)
            return None

        if src != self._target:
            return None
        if event.event_type == EVENT_TYPE_MODIFIED:
            return WatchEvent(EventKind.WRITE, self._target)
        if event.event_type == EVENT_TYPE_CREATED:
            return WatchEvent(EventKind.CREATE, self._target)
        if event.event_type == EVENT_TYPE_DELETED:
            return WatchEvent(EventKind.REMOVE, self._target)
        # opened / closed / closed_no_write carry no content change
        return None

    def on_any_event(self, event: FileSystemEvent) -> None:
        try:
            watch_event = self.classify(event)
        except Exception as e:
            watch_event = WatchEvent(
                EventKind.ERROR,
                self._target,
                WatchRuntimeError("Failed to process file event", details={"error": str(e)}),
            )
        if watch_event is not None:
            self._sink(watch_event)


class FileWatcher:
    """Subscribes to change notifications for one absolute file path.

    Example:
        watcher = FileWatcher(Path("/srv/app/.env"))
        watcher.start()
        event = watcher.events.get()
        watcher.close()
    """

    def __init__(
        self,
        path: Union[str, Path],
        logger: Optional[Logger] = None,
        observer_factory: Callable[[], Any] = Observer,
    ) -> None:
        self.path = Path(_normalize(os.fspath(path)))
        self.events: "queue.Queue[Optional[WatchEvent]]" = queue.Queue()
        self._logger = logger or get_logger()
        self._observer_factory = observer_factory
        self._observer: Optional[Any] = None
        self._lock = threading.Lock()
        self._started = False
        self._closed = False

    @property
    def is_running(self) -> bool:
        with self._lock:
            return self._started and not self._closed

    def start(self) -> None:
        """Establish the subscription.

        Raises:
            WatchInitError: If the file does not exist, the watcher was
                already started or closed, or the OS refuses the watch
        """
        with self._lock:
            if self._closed:
                raise WatchInitError("Watcher is closed", details={"path": str(self.path)})
            if self._started:
                raise WatchInitError("Watcher already started", details={"path": str(self.path)})
            if not self.path.is_file():
                raise WatchInitError(
                    f"Cannot watch missing file: {self.path}", details={"path": str(self.path)}
                )

            directory = str(self.path.parent)
            handler = _TargetEventHandler(str(self.path), directory, self.events.put)
            observer = self._observer_factory()
            try:
                observer.schedule(handler, directory, recursive=False)
                observer.start()
            except (OSError, RuntimeError) as e:
                self._discard(observer)
                raise WatchInitError(
                    f"Cannot watch {self.path}",
                    details={"path": str(self.path), "error": str(e)},
                ) from e

            self._observer = observer
            self._started = True

        self._logger.info("Starting hot reload watcher", path=str(self.path))

    def _discard(self, observer: Any) -> None:
        """Release a half-started observer; the start error is what gets raised."""
        try:
            observer.unschedule_all()
            observer.stop()
            if observer.is_alive():
                observer.join(timeout=5.0)
        except (OSError, RuntimeError) as e:
            self._logger.warning("Failed to release watcher", path=str(self.path), error=str(e))

    def close(self) -> None:
        """Stop the observer and close the event channel. Idempotent."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            observer, self._observer = self._observer, None

        if observer is not None:
            observer.stop()
            if observer.is_alive():
                observer.join(timeout=5.0)
            self._logger.info("Stopped hot reload watcher", path=str(self.path))
        self.events.put(None)
