"""State-guarded exactly-once initializer."""

import threading
from enum import Enum
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")


class OnceState(str, Enum):
    NEW = "new"
    RUNNING = "running"
    DONE = "done"


class OnceInitializer(Generic[T]):
    """Runs a function at most once and hands every caller the same outcome.

    The first caller executes the function; concurrent callers wait on a
    condition until it finishes. Later callers get the stored result, or
    the stored exception is raised again.

    Example:
        once = OnceInitializer()
        value = once.run(expensive_setup)
    """

    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._state = OnceState.NEW
        self._result: Optional[T] = None
        self._error: Optional[BaseException] = None

    @property
    def state(self) -> OnceState:
        with self._cond:
            return self._state

    @property
    def done(self) -> bool:
        return self.state is OnceState.DONE

    def run(self, func: Callable[[], T]) -> T:
        with self._cond:
            if self._state is OnceState.NEW:
                self._state = OnceState.RUNNING
                owner = True
            else:
                owner = False
                self._cond.wait_for(lambda: self._state is OnceState.DONE)

        if owner:
            try:
                result = func()
            except BaseException as e:
                with self._cond:
                    self._error = e
                    self._state = OnceState.DONE
                    self._cond.notify_all()
                raise
            with self._cond:
                self._result = result
                self._state = OnceState.DONE
                self._cond.notify_all()
            return result

        return self.outcome()

    def outcome(self) -> T:
        """Return the stored result or raise the stored error."""
        with self._cond:
            if self._state is not OnceState.DONE:
                raise RuntimeError("Initializer has not completed")
            if self._error is not None:
                raise self._error
            return self._result  # type: ignore[return-value]
