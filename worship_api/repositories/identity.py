# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: Identifier allocation.
One monotonically increasing counter per entity kind; ids are never reused.
"""

import threading

from worship_api.models.domain import EntityKind


class IdentityAllocator:
    """Issues unique integer ids per entity kind, starting at 1."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counters: dict[EntityKind, int] = {kind: 0 for kind in EntityKind}

    def next(self, kind: EntityKind) -> int:
        with self._lock:
            self._counters[kind] += 1
            return self._counters[kind]

    def last_issued(self, kind: EntityKind) -> int:
        """Highest id handed out so far for ``kind`` (0 when none)."""
        return self._counters[kind]

    def reset(self) -> None:
        with self._lock:
            for kind in self._counters:
                self._counters[kind] = 0
