"""Parser for KEY=VALUE env files.

Format:
    - one KEY=VALUE pair per line, split at the first "="
    - surrounding whitespace of lines, keys and values is stripped
    - blank lines and lines starting with "#" are skipped
    - lines without "=" (or with an empty key) are ignored, not errors
    - no quoting, escaping or multi-line values
    - duplicate keys: the last occurrence wins
"""

from types import MappingProxyType
from typing import Dict, Mapping

ConfigMap = Mapping[str, str]

EMPTY_CONFIG: ConfigMap = MappingProxyType({})


def parse_env_text(text: str) -> ConfigMap:
    """Parse env file text into a read-only, insertion-ordered mapping."""
    env: Dict[str, str] = {}
    for line in text.split("\n"):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, _, value = line.partition("=")
        key = key.strip()
        if not key:
            continue
        env[key] = value.strip()
    return MappingProxyType(env)


def format_env_text(config: Mapping[str, str]) -> str:
    """Serialize a mapping back to KEY=VALUE lines, in mapping order."""
    return "".join(f"{key}={value}\n" for key, value in config.items())


def freeze(config: Mapping[str, str]) -> ConfigMap:
    """Return a read-only copy of any mapping."""
    return MappingProxyType(dict(config))


__all__ = ["ConfigMap", "EMPTY_CONFIG", "parse_env_text", "format_env_text", "freeze"]
