"""Dataclass settings for loadenv.

Recognized options:
    file_path: location of the env file (default ".env")
    hot_reload: start the watcher after the first load (default False)
    reload_delay: debounce window in seconds, used by both the gap filter
        and the settle timer (default 2.0)
    logger: log sink for status and diff lines (default: stdout logger)
    on_change: optional callable receiving the diff of every reload
"""

import math
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Callable, List, Mapping, Optional, Union

from loadenv.config.env_loader import EnvLoader
from loadenv.exceptions import ConfigurationError
from loadenv.logger import Logger, get_logger

if TYPE_CHECKING:
    from loadenv.differ import DiffEvent

DEFAULT_FILE_PATH = ".env"
DEFAULT_RELOAD_DELAY = 2.0

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


def _parse_bool(value: str, name: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigurationError(
        "INVALID_BOOLEAN",
        f"{name} must be a boolean, got {value!r}",
        {"name": name, "value": value},
    )


def _parse_delay(value: str, name: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise ConfigurationError(
            "INVALID_DURATION",
            f"{name} must be a number of seconds, got {value!r}",
            {"name": name, "value": value},
        ) from exc


@dataclass
class LoadEnvConfig:
    """Options for loading and hot-reloading an env file.

    Attributes:
        file_path: Env file location, relative paths resolve against the cwd
            at load time
        hot_reload: Whether to watch the file after the first load
        reload_delay: Debounce window in seconds (must be > 0)
        logger: Log sink; None means the stdout logger from get_logger()
        on_change: Called with the list of DiffEvent after each reload
    """

    file_path: Union[str, Path] = DEFAULT_FILE_PATH
    hot_reload: bool = False
    reload_delay: float = DEFAULT_RELOAD_DELAY
    logger: Optional[Logger] = None
    on_change: Optional[Callable[[List["DiffEvent"]], None]] = None

    def __post_init__(self) -> None:
        if not self.file_path:
            self.file_path = DEFAULT_FILE_PATH
        if isinstance(self.reload_delay, bool) or not isinstance(self.reload_delay, (int, float)):
            raise ConfigurationError(
                "INVALID_DURATION",
                "reload_delay must be a number of seconds",
                {"reload_delay": repr(self.reload_delay)},
            )
        if not math.isfinite(self.reload_delay):
            raise ConfigurationError(
                "INVALID_DURATION",
                "reload_delay must be a finite number of seconds",
                {"reload_delay": repr(self.reload_delay)},
            )
        if self.reload_delay <= 0:
            raise ConfigurationError(
                "INVALID_DURATION",
                "reload_delay must be greater than zero",
                {"reload_delay": self.reload_delay},
            )
        self.reload_delay = float(self.reload_delay)

    @classmethod
    def from_env(
        cls,
        prefix: str = "LOADENV",
        env_file: Optional[Union[str, Path]] = None,
        environ: Optional[Mapping[str, str]] = None,
        logger: Optional[Logger] = None,
    ) -> "LoadEnvConfig":
        """Build a config from environment variables.

        Args:
            prefix: Environment variable prefix
            env_file: Optional bootstrap .env holding these settings
            environ: Environment mapping (default: os.environ)
            logger: Log sink to attach

        Environment variables:
            {prefix}_FILE: env file path
            {prefix}_HOT_RELOAD: "true"/"false"
            {prefix}_RELOAD_DELAY: seconds
        """
        data = EnvLoader(env_file, environ=environ).load()

        file_path = data.get(f"{prefix}_FILE", DEFAULT_FILE_PATH)
        hot_reload = _parse_bool(data.get(f"{prefix}_HOT_RELOAD", "false"), f"{prefix}_HOT_RELOAD")
        reload_delay = _parse_delay(
            data.get(f"{prefix}_RELOAD_DELAY", str(DEFAULT_RELOAD_DELAY)), f"{prefix}_RELOAD_DELAY"
        )

        return cls(
            file_path=file_path,
            hot_reload=hot_reload,
            reload_delay=reload_delay,
            logger=logger,
        )

    def resolve_logger(self) -> Logger:
        """Return the configured sink, creating the default one if needed."""
        if self.logger is None:
            self.logger = get_logger("loadenv")
        return self.logger
