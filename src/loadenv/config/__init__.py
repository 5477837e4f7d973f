"""Configuration Module for loadenv

Example:
    from loadenv.config import LoadEnvConfig

    config = LoadEnvConfig(file_path=".env", hot_reload=True, reload_delay=1.0)

    # Or from LOADENV_FILE / LOADENV_HOT_RELOAD / LOADENV_RELOAD_DELAY
    config = LoadEnvConfig.from_env()
"""

from loadenv.config.env_loader import EnvLoader
from loadenv.config.settings import (
    DEFAULT_FILE_PATH,
    DEFAULT_RELOAD_DELAY,
    LoadEnvConfig,
)

__all__ = [
    "LoadEnvConfig",
    "EnvLoader",
    "DEFAULT_FILE_PATH",
    "DEFAULT_RELOAD_DELAY",
]
