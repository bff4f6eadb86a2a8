# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: In-memory entity store.
Encapsulates all read/write operations on members, songs and scales.
NO business rules here — pure CRUD. Reference and uniqueness checks live
in ``services.integrity`` and run under ``WorshipStore.lock``.
"""

import threading
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel

from worship_api.metrics.prometheus import LIVE_RECORDS
from worship_api.models.domain import (
    EntityKind,
    Member,
    Scale,
    Song,
    apply_patch,
)
from worship_api.repositories.identity import IdentityAllocator

R = TypeVar("R", Member, Song, Scale)


class Collection(Generic[R]):
    """Id-keyed records of one entity kind, kept in insertion order."""

    def __init__(
        self,
        kind: EntityKind,
        record_type: type[R],
        allocator: IdentityAllocator,
        lock: threading.RLock,
    ) -> None:
        self.kind = kind
        self._record_type = record_type
        self._allocator = allocator
        self._lock = lock
        self._records: dict[int, R] = {}

    # ── Read ──

    def list(self) -> list[R]:
        with self._lock:
            return [r.model_copy(deep=True) for r in self._records.values()]

    def get_by_id(self, record_id: int) -> Optional[R]:
        with self._lock:
            record = self._records.get(record_id)
            return record.model_copy(deep=True) if record is not None else None

    def exists(self, record_id: int) -> bool:
        with self._lock:
            return record_id in self._records

    def count(self) -> int:
        with self._lock:
            return len(self._records)

    # ── Write ──

    def create(self, draft: BaseModel) -> R:
        with self._lock:
            record = self._record_type.model_validate(
                {**draft.model_dump(), "id": self._allocator.next(self.kind)}
            )
            self._records[record.id] = record
            return record.model_copy(deep=True)

    def update(self, record_id: int, patch: BaseModel) -> Optional[R]:
        with self._lock:
            current = self._records.get(record_id)
            if current is None:
                return None
            merged = apply_patch(current, patch)
            self._records[record_id] = merged
            return merged.model_copy(deep=True)

    def delete(self, record_id: int) -> bool:
        with self._lock:
            return self._records.pop(record_id, None) is not None

    # ── Bulk / internal ──

    def clear(self) -> None:
        with self._lock:
            self._records.clear()


class WorshipStore:
    """
    The three collections of the service plus their shared id allocator.

    One re-entrant lock guards everything: services hold it across
    validate-then-commit so a check can never race a concurrent delete.
    """

    def __init__(self) -> None:
        self.lock = threading.RLock()
        self.allocator = IdentityAllocator()
        self.members: Collection[Member] = Collection(
            EntityKind.MEMBER, Member, self.allocator, self.lock
        )
        self.songs: Collection[Song] = Collection(
            EntityKind.SONG, Song, self.allocator, self.lock
        )
        self.scales: Collection[Scale] = Collection(
            EntityKind.SCALE, Scale, self.allocator, self.lock
        )

    def collection(self, kind: EntityKind) -> Collection:
        return {
            EntityKind.MEMBER: self.members,
            EntityKind.SONG: self.songs,
            EntityKind.SCALE: self.scales,
        }[kind]

    def counts(self) -> dict[str, int]:
        with self.lock:
            return {kind.value: self.collection(kind).count() for kind in EntityKind}

    def reset(self) -> None:
        """Drop every record and restart id allocation at 1."""
        with self.lock:
            for kind in EntityKind:
                self.collection(kind).clear()
                LIVE_RECORDS.labels(kind=kind.value).set(0)
            self.allocator.reset()
