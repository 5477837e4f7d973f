"""Tests for loadenv.watcher."""

import queue
import time
from pathlib import Path

import pytest
from watchdog.events import (
    DirDeletedEvent,
    FileClosedEvent,
    FileCreatedEvent,
    FileDeletedEvent,
    FileModifiedEvent,
    FileMovedEvent,
)

from conftest import FakeObserver
from loadenv.exceptions import WatchInitError, WatchRuntimeError
from loadenv.watcher import EventKind, FileWatcher, WatchEvent, _TargetEventHandler


@pytest.fixture
def target(tmp_path: Path) -> Path:
    path = tmp_path / ".env"
    path.write_text("A=1\n")
    return path


@pytest.fixture
def handler(target: Path):
    received = []
    h = _TargetEventHandler(str(target), str(target.parent), received.append)
    h.received = received
    return h


class TestClassification:
    """Tests for mapping watchdog events onto EventKind."""

    def test_modified_is_write(self, handler, target):
        assert handler.classify(FileModifiedEvent(str(target))) == WatchEvent(
            EventKind.WRITE, str(target)
        )

    def test_created_is_create(self, handler, target):
        assert handler.classify(FileCreatedEvent(str(target))).kind is EventKind.CREATE

    def test_deleted_is_remove(self, handler, target):
        assert handler.classify(FileDeletedEvent(str(target))).kind is EventKind.REMOVE

    def test_moved_away_is_rename(self, handler, target):
        event = FileMovedEvent(str(target), str(target.parent / "backup.env"))
        assert handler.classify(event).kind is EventKind.RENAME

    def test_moved_onto_target_is_create(self, handler, target):
        """Test that an atomic rename-over is seen as a new file."""
        event = FileMovedEvent(str(target.parent / ".env.tmp"), str(target))
        assert handler.classify(event).kind is EventKind.CREATE

    def test_other_files_ignored(self, handler, target):
        assert handler.classify(FileModifiedEvent(str(target.parent / "other.env"))) is None

    def test_closed_ignored(self, handler, target):
        assert handler.classify(FileClosedEvent(str(target))) is None

    def test_watched_directory_removed_is_error(self, handler, target):
        event = handler.classify(DirDeletedEvent(str(target.parent)))
        assert event.kind is EventKind.ERROR
        assert isinstance(event.error, WatchRuntimeError)

    def test_symlinked_directory_matches_resolved_paths(self, tmp_path: Path):
        """Test that events reported under the resolved directory still match."""
        real_dir = tmp_path / "real"
        real_dir.mkdir()
        (real_dir / ".env").write_text("A=1\n")
        link_dir = tmp_path / "link"
        link_dir.symlink_to(real_dir, target_is_directory=True)

        received = []
        h = _TargetEventHandler(str(link_dir / ".env"), str(link_dir), received.append)

        event = h.classify(FileModifiedEvent(str(real_dir / ".env")))
        assert event is not None
        assert event.kind is EventKind.WRITE
        assert event.path == str(real_dir.resolve() / ".env")

    def test_watcher_path_is_resolved(self, tmp_path: Path):
        real_dir = tmp_path / "real"
        real_dir.mkdir()
        link_dir = tmp_path / "link"
        link_dir.symlink_to(real_dir, target_is_directory=True)

        watcher = FileWatcher(link_dir / ".env")
        assert watcher.path.parent == real_dir.resolve()

    def test_dispatch_forwards_to_sink(self, handler, target):
        handler.dispatch(FileModifiedEvent(str(target)))
        handler.dispatch(FileModifiedEvent(str(target.parent / "other")))
        assert [e.kind for e in handler.received] == [EventKind.WRITE]


class TestFileWatcherLifecycle:
    """Tests for start/close with a fake observer."""

    def test_start_schedules_parent_directory(self, target, fake_observer, capture_logger):
        watcher = FileWatcher(target, logger=capture_logger, observer_factory=lambda: fake_observer)
        watcher.start()

        assert fake_observer.started
        assert fake_observer.path == str(target.parent)
        assert fake_observer.recursive is False
        assert watcher.is_running
        watcher.close()

    def test_events_reach_queue(self, target, fake_observer, capture_logger):
        watcher = FileWatcher(target, logger=capture_logger, observer_factory=lambda: fake_observer)
        watcher.start()

        fake_observer.handler.dispatch(FileModifiedEvent(str(target)))

        assert watcher.events.get(timeout=1).kind is EventKind.WRITE
        watcher.close()

    def test_missing_file(self, tmp_path, fake_observer, capture_logger):
        watcher = FileWatcher(
            tmp_path / "missing.env", logger=capture_logger, observer_factory=lambda: fake_observer
        )
        with pytest.raises(WatchInitError) as exc_info:
            watcher.start()
        assert exc_info.value.code == "WATCH_INIT_FAILED"
        assert not fake_observer.started

    def test_os_refuses_watch(self, target, capture_logger):
        failing = FakeObserver(fail_on_schedule=True)
        watcher = FileWatcher(target, logger=capture_logger, observer_factory=lambda: failing)

        with pytest.raises(WatchInitError) as exc_info:
            watcher.start()
        assert "inotify" in exc_info.value.details["error"]

    def test_failed_start_releases_observer(self, target, capture_logger):
        """Test that a scheduled watch is dropped when the observer cannot start."""
        failing = FakeObserver(fail_on_start=True)
        watcher = FileWatcher(target, logger=capture_logger, observer_factory=lambda: failing)

        with pytest.raises(WatchInitError):
            watcher.start()

        assert failing.unscheduled
        assert failing.stop_calls == 1
        assert not watcher.is_running

    def test_double_start_rejected(self, target, fake_observer, capture_logger):
        watcher = FileWatcher(target, logger=capture_logger, observer_factory=lambda: fake_observer)
        watcher.start()
        with pytest.raises(WatchInitError):
            watcher.start()
        watcher.close()

    def test_close_is_idempotent(self, target, fake_observer, capture_logger):
        watcher = FileWatcher(target, logger=capture_logger, observer_factory=lambda: fake_observer)
        watcher.start()

        watcher.close()
        watcher.close()

        assert fake_observer.stop_calls == 1
        assert watcher.events.get_nowait() is None
        with pytest.raises(queue.Empty):
            watcher.events.get_nowait()
        assert not watcher.is_running

    def test_start_after_close_rejected(self, target, fake_observer, capture_logger):
        watcher = FileWatcher(target, logger=capture_logger, observer_factory=lambda: fake_observer)
        watcher.close()
        with pytest.raises(WatchInitError):
            watcher.start()


class TestRealObserver:
    """Tests against watchdog's platform observer."""

    def test_write_is_reported(self, target, capture_logger):
        watcher = FileWatcher(target, logger=capture_logger)
        watcher.start()
        try:
            time.sleep(0.1)
            target.write_text("A=2\n")

            deadline = time.monotonic() + 10
            kinds = set()
            while time.monotonic() < deadline and not kinds & {EventKind.WRITE, EventKind.CREATE}:
                try:
                    event = watcher.events.get(timeout=0.5)
                except queue.Empty:
                    continue
                if event is not None:
                    kinds.add(event.kind)

            assert kinds & {EventKind.WRITE, EventKind.CREATE}
        finally:
            watcher.close()
