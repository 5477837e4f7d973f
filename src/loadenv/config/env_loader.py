"""Layered lookup for loadenv's own settings.

Values are resolved in deterministic order:
1) bootstrap .env file (if provided and exists)
2) OS environment variables
3) Explicit overrides (highest precedence)

This only reads settings such as LOADENV_FILE; it never writes to the
process environment. Loading the watched file is the Loader's job.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, MutableMapping, Optional

from dotenv import dotenv_values


class EnvLoader:
    """Resolve environment-style settings with optional .env bootstrap."""

    def __init__(
        self,
        env_file: Optional[Path | str] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.env_file = Path(env_file) if env_file else None
        self._environ = environ

    def load(self, overrides: Optional[Mapping[str, str]] = None) -> MutableMapping[str, str]:
        """Return the merged view.

        Precedence (low -> high): bootstrap file, OS env vars, overrides
        """
        data: MutableMapping[str, str] = {}

        if self.env_file is not None and self.env_file.exists():
            file_values = dotenv_values(self.env_file)
            data.update({k: v for k, v in file_values.items() if v is not None})

        data.update(os.environ if self._environ is None else self._environ)

        if overrides:
            data.update({k: str(v) for k, v in overrides.items()})

        return data


__all__ = ["EnvLoader"]
