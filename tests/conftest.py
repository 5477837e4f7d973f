"""Shared fixtures for loadenv tests."""

import threading
from typing import Any, Dict, List, Optional, Tuple

import pytest

from loadenv.logger import CallbackLogger
from loadenv.reloader import reset_env


class CapturingLogger(CallbackLogger):
    """CallbackLogger that keeps every line and can wait for one."""

    def __init__(self) -> None:
        self.records: List[Tuple[str, str, Dict[str, Any]]] = []
        self._cond = threading.Condition()
        super().__init__(self._record)

    def _record(self, level: str, message: str, fields: Dict[str, Any]) -> None:
        with self._cond:
            self.records.append((level, message, fields))
            self._cond.notify_all()

    def messages(self, level: Optional[str] = None) -> List[str]:
        with self._cond:
            return [m for lvl, m, _ in self.records if level is None or lvl == level]

    def wait_for(self, text: str, timeout: float = 5.0) -> bool:
        with self._cond:
            return self._cond.wait_for(
                lambda: any(text in m for _, m, _ in self.records), timeout=timeout
            )


class FakeObserver:
    """Stands in for watchdog's Observer; tests dispatch events by hand."""

    def __init__(self, fail_on_schedule: bool = False, fail_on_start: bool = False) -> None:
        self.fail_on_schedule = fail_on_schedule
        self.fail_on_start = fail_on_start
        self.handler: Any = None
        self.path: Optional[str] = None
        self.recursive: Optional[bool] = None
        self.started = False
        self.stop_calls = 0
        self.unscheduled = False

    def schedule(self, handler: Any, path: str, recursive: bool = False) -> None:
        if self.fail_on_schedule:
            raise OSError("inotify watch limit reached")
        self.handler = handler
        self.path = path
        self.recursive = recursive

    def start(self) -> None:
        if self.fail_on_start:
            raise RuntimeError("can't start new thread")
        self.started = True

    def unschedule_all(self) -> None:
        self.handler = None
        self.unscheduled = True

    def stop(self) -> None:
        self.stop_calls += 1

    def is_alive(self) -> bool:
        return False

    def join(self, timeout: Optional[float] = None) -> None:
        pass


@pytest.fixture
def capture_logger() -> CapturingLogger:
    return CapturingLogger()


@pytest.fixture
def fake_observer() -> FakeObserver:
    return FakeObserver()


@pytest.fixture(autouse=True)
def _reset_process_reloader():
    reset_env()
    yield
    reset_env()
