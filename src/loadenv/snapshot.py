"""Current/previous snapshot pair used for diffing."""

import threading
from typing import Mapping, Tuple

from loadenv.parser import EMPTY_CONFIG, ConfigMap, freeze


class SnapshotStore:
    """Holds the current ConfigMap and the one loaded before it.

    Both start empty. ``previous`` always equals the value ``current`` had
    right before the most recent successful swap.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._current: ConfigMap = EMPTY_CONFIG
        self._previous: ConfigMap = EMPTY_CONFIG
        self._generation = 0

    def swap(self, new: Mapping[str, str]) -> Tuple[ConfigMap, ConfigMap]:
        """Install ``new`` as current and return ``(previous, current)``."""
        frozen = freeze(new)
        with self._lock:
            self._previous = self._current
            self._current = frozen
            self._generation += 1
            return self._previous, self._current

    def pair(self) -> Tuple[ConfigMap, ConfigMap]:
        """Return ``(previous, current)`` as one consistent read."""
        with self._lock:
            return self._previous, self._current

    @property
    def current(self) -> ConfigMap:
        with self._lock:
            return self._current

    @property
    def previous(self) -> ConfigMap:
        with self._lock:
            return self._previous

    @property
    def generation(self) -> int:
        """Number of successful swaps so far."""
        with self._lock:
            return self._generation
