"""Snapshot differ.

Compares two ConfigMaps and reports which keys were added, changed or
removed. Unchanged keys produce nothing.
"""

from dataclasses import dataclass
from typing import List, Mapping, Union


@dataclass(frozen=True)
class Added:
    key: str
    value: str

    def describe(self) -> str:
        return f"New environment variable: {self.key} = {self.value}"


@dataclass(frozen=True)
class Changed:
    key: str
    old_value: str
    new_value: str

    def describe(self) -> str:
        return (
            f"Environment variable changed: {self.key} = {self.new_value} "
            f"(old value: {self.old_value})"
        )


@dataclass(frozen=True)
class Removed:
    """A key that disappeared from the file.

    The key is not unset from the live environment.
    """

    key: str

    def describe(self) -> str:
        return f"Environment variable removed: {self.key}"


DiffEvent = Union[Added, Changed, Removed]


def diff(old: Mapping[str, str], new: Mapping[str, str]) -> List[DiffEvent]:
    """Return the changes from ``old`` to ``new``, sorted by key."""
    events: List[DiffEvent] = []

    for key, value in new.items():
        if key not in old:
            events.append(Added(key, value))
        elif old[key] != value:
            events.append(Changed(key, old[key], value))

    for key in old:
        if key not in new:
            events.append(Removed(key))

    events.sort(key=lambda event: event.key)
    return events


__all__ = ["Added", "Changed", "Removed", "DiffEvent", "diff"]
