"""Explicit handle on the process environment table.

Wraps ``os.environ`` (or any mutable mapping, for tests) so the Loader
receives the process-wide state as a collaborator instead of reaching
for a global.
"""

import os
import threading
from typing import Dict, Mapping, MutableMapping, Optional

from loadenv.exceptions import ApplyError


class EnvironmentStore:
    """Write-only-forward view of an environment table.

    ``apply`` adds or overwrites keys and never deletes them: keys removed
    from the env file stay set in the live environment.
    """

    def __init__(self, environ: Optional[MutableMapping[str, str]] = None) -> None:
        self._environ: MutableMapping[str, str] = os.environ if environ is None else environ
        self._lock = threading.RLock()

    def apply(self, values: Mapping[str, str]) -> int:
        """Write every pair into the environment.

        Returns:
            Number of keys written

        Raises:
            ApplyError: If a key or value is rejected by the OS (e.g. NUL bytes)
        """
        written = 0
        with self._lock:
            for key, value in values.items():
                try:
                    self._environ[key] = value
                except (ValueError, OSError) as e:
                    raise ApplyError(
                        f"Cannot set environment variable {key!r}",
                        details={"key": key, "error": str(e), "applied": written},
                    ) from e
                written += 1
        return written

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        with self._lock:
            return self._environ.get(key, default)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._environ

    def snapshot(self) -> Dict[str, str]:
        """Copy of the whole table."""
        with self._lock:
            return dict(self._environ)
