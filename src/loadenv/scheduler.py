"""Debounced reload scheduler.

Consumes WatchEvents and turns bursts of writes into one deferred reload:

1. Gap filter: a WRITE/CREATE arriving less than ``min_gap`` after the
   previously accepted event is dropped outright. This bounds reload
   frequency under sustained writes.
2. Settle timer: every accepted event (re)starts a ``threading.Timer``;
   the reload runs once ``delay`` passes without another accepted event.

States::

    IDLE --accepted--> PENDING --timer fires--> (reload) --> IDLE
    PENDING --accepted--> PENDING (timer restarted)
    any --stop / channel closed--> TERMINATED (pending timer cancelled)

A timer that already fired cannot be cancelled; its reload may overlap a
later one. The Loader lock serializes the apply step in that case.
"""

import queue
import threading
import time
from enum import Enum
from typing import Callable, Optional

from loadenv.logger import Logger, get_logger
from loadenv.watcher import EventKind, WatchEvent

_RELOAD_KINDS = frozenset({EventKind.WRITE, EventKind.CREATE})


class SchedulerState(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    TERMINATED = "terminated"


class ReloadScheduler:
    """Debounces watcher events into calls to ``action``.

    Args:
        events: Queue produced by a FileWatcher; ``None`` closes it
        action: Reload callable run on the timer thread
        delay: Settle delay in seconds
        logger: Log sink
        min_gap: Gap filter window in seconds (default: ``delay``)
        clock: Monotonic clock, injectable for tests
        on_terminate: Called once when the loop exits (releases the watcher)
    """

    def __init__(
        self,
        events: "queue.Queue[Optional[WatchEvent]]",
        action: Callable[[], None],
        delay: float,
        logger: Optional[Logger] = None,
        min_gap: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
        on_terminate: Optional[Callable[[], None]] = None,
    ) -> None:
        self._events = events
        self._action = action
        self.delay = delay
        self.min_gap = delay if min_gap is None else min_gap
        self._logger = logger or get_logger()
        self._clock = clock
        self._on_terminate = on_terminate

        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._timer: Optional[threading.Timer] = None
        self._generation = 0
        self._last_accepted: Optional[float] = None
        self._state = SchedulerState.IDLE
        self._terminated = False

    @property
    def state(self) -> SchedulerState:
        with self._lock:
            return self._state

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()

    def handle_event(self, event: WatchEvent) -> bool:
        """Apply the debounce rules to one event.

        Returns:
            True if the event was accepted and the settle timer (re)started
        """
        if event.kind is EventKind.ERROR:
            self._logger.error("Watcher error", path=event.path, error=str(event.error))
            return False

        if event.kind not in _RELOAD_KINDS:
            self._logger.debug("Ignoring file event", kind=event.kind.value, path=event.path)
            return False

        with self._lock:
            if self._stop.is_set():
                return False

            now = self._clock()
            if self._last_accepted is not None and now - self._last_accepted < self.min_gap:
                self._logger.debug(
                    "Dropping file event inside debounce window",
                    kind=event.kind.value,
                    since_last=round(now - self._last_accepted, 3),
                )
                return False

            self._last_accepted = now
            if self._timer is not None:
                self._timer.cancel()
            self._generation += 1
            timer = threading.Timer(self.delay, self._fire, args=(self._generation,))
            timer.daemon = True
            timer.name = "loadenv-settle-timer"
            self._timer = timer
            self._state = SchedulerState.PENDING
            timer.start()

        return True

    def _fire(self, generation: int) -> None:
        with self._lock:
            # Cancellation token: stop signal plus timer generation
            if self._stop.is_set() or generation != self._generation:
                return
            self._timer = None
            self._state = SchedulerState.IDLE

        try:
            self._action()
        except Exception as e:
            self._logger.error("Reload action failed", error=str(e))

    def run(self) -> None:
        """Consume events until stopped or the channel closes."""
        try:
            while not self._stop.is_set():
                event = self._events.get()
                if event is None or self._stop.is_set():
                    break
                self.handle_event(event)
        finally:
            self._terminate()

    def stop(self) -> None:
        """Signal the loop to exit and cancel any pending timer. Idempotent."""
        with self._lock:
            if self._stop.is_set():
                return
            self._stop.set()
            self._cancel_timer_locked()
        # Wake a loop blocked on the queue
        self._events.put(None)

    def _cancel_timer_locked(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self._state = SchedulerState.TERMINATED

    def _terminate(self) -> None:
        with self._lock:
            self._stop.set()
            self._cancel_timer_locked()
            if self._terminated:
                return
            self._terminated = True
        if self._on_terminate is not None:
            self._on_terminate()
