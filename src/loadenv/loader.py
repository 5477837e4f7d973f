"""Loader: read the env file, apply it to the environment, swap snapshots."""

import os
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from loadenv.environment import EnvironmentStore
from loadenv.exceptions import PathResolutionError, ReadError
from loadenv.logger import Logger, get_logger
from loadenv.parser import ConfigMap, parse_env_text
from loadenv.snapshot import SnapshotStore


@dataclass(frozen=True)
class ReloadResult:
    """Outcome of one successful load."""

    path: Path
    previous: ConfigMap
    current: ConfigMap


class Loader:
    """Loads one env file into an EnvironmentStore.

    ``reload`` holds an exclusive lock for the read, parse and apply steps so
    two reloads never interleave. Readers of the environment are not blocked.

    Example:
        loader = Loader(".env", EnvironmentStore(), SnapshotStore())
        result = loader.reload()
        print(dict(result.current))
    """

    def __init__(
        self,
        file_path: Union[str, Path],
        environment: EnvironmentStore,
        snapshots: SnapshotStore,
        logger: Optional[Logger] = None,
    ) -> None:
        self.file_path = file_path
        self.environment = environment
        self.snapshots = snapshots
        self._logger = logger or get_logger()
        self._lock = threading.Lock()

    def resolve_path(self) -> Path:
        """Return the absolute path of the env file.

        Raises:
            PathResolutionError: If the path cannot be made absolute
        """
        try:
            return Path(os.path.abspath(os.fspath(self.file_path)))
        except (OSError, TypeError, ValueError) as e:
            raise PathResolutionError(
                f"Cannot resolve env file path {self.file_path!r}",
                details={"path": str(self.file_path), "error": str(e)},
            ) from e

    def _read(self, path: Path) -> str:
        try:
            return path.read_bytes().decode("utf-8")
        except FileNotFoundError as e:
            raise ReadError(
                f"Env file not found: {path}", details={"path": str(path)}
            ) from e
        except (OSError, ValueError) as e:
            # ValueError covers UnicodeDecodeError and NUL bytes in the path
            raise ReadError(
                f"Cannot read env file: {path}",
                details={"path": str(path), "error": str(e)},
            ) from e

    def reload(self) -> ReloadResult:
        """Read, parse and apply the env file.

        On failure nothing in the snapshot store changes and the error
        propagates to the caller.

        Raises:
            PathResolutionError: If the path cannot be resolved
            ReadError: If the file is missing, unreadable or not UTF-8
            ApplyError: If the environment rejects a pair
        """
        path = self.resolve_path()

        with self._lock:
            self._logger.info("Loading environment", path=str(path))
            config = parse_env_text(self._read(path))
            self.environment.apply(config)
            previous, current = self.snapshots.swap(config)

        return ReloadResult(path=path, previous=previous, current=current)
