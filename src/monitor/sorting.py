"""Single-key sorting with radio-like exclusivity.

At most one sort key is active per table.  Activating a key replaces
whatever was active before; clearing leaves the filtered collection in
its insertion order (newest first, as generated).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping

from src.contracts.enums import SortDirection
from src.contracts.records import Record

log = logging.getLogger(__name__)

SortKeyFn = Callable[[Record], Any]


@dataclass(frozen=True)
class SortRule:
    key: str
    direction: SortDirection = SortDirection.DESC


class SortState:
    """Sort keys available on a table and the one currently active."""

    def __init__(
        self,
        keys: Mapping[str, SortKeyFn],
        default: SortRule | None = None,
    ) -> None:
        self._keys = dict(keys)
        if default is not None and default.key not in self._keys:
            raise KeyError(f"Unknown sort key '{default.key}'")
        self._active = default

    @property
    def active(self) -> SortRule | None:
        return self._active

    def keys(self) -> list[str]:
        return list(self._keys)

    def set(self, key: str, direction: SortDirection | str) -> None:
        """Activate *key*; any other active key is cleared."""
        if key not in self._keys:
            raise KeyError(f"Unknown sort key '{key}'")
        self._active = SortRule(key, SortDirection(direction))
        log.debug("Sort set to %s %s", key, self._active.direction.value)

    def clear(self) -> None:
        self._active = None

    def direction_of(self, key: str) -> SortDirection | None:
        """Direction shown on *key*'s control, or None when it is inactive."""
        if self._active is not None and self._active.key == key:
            return self._active.direction
        return None

    def apply(self, records: Iterable[Record]) -> list[Record]:
        rows = list(records)
        if self._active is None:
            return rows
        fn = self._keys[self._active.key]
        return sorted(rows, key=fn, reverse=self._active.direction is SortDirection.DESC)
