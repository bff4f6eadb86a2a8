# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Referential integrity — read-only checks, no storage of its own.
Every check raises before any mutation; callers hold ``store.lock`` across
check and commit.
"""

from typing import Optional, Sequence

from worship_api.models.domain import EntityKind, SongAssignment
from worship_api.models.errors import DuplicateEmail, ReferenceNotFound, ValidationError
from worship_api.repositories.store import WorshipStore


class ReferenceValidator:
    """Cross-entity reference and uniqueness checks against the store."""

    def __init__(self, store: WorshipStore) -> None:
        self._store = store

    def validate_soloist_reference(self, member_id: int, field: str = "soloist_id") -> None:
        if not self._store.members.exists(member_id):
            raise ReferenceNotFound(EntityKind.MEMBER.value, field, member_id)

    def validate_song_reference(self, song_id: int, field: str = "song_id") -> None:
        if not self._store.songs.exists(song_id):
            raise ReferenceNotFound(EntityKind.SONG.value, field, song_id)

    def validate_scale_assignments(self, assignments: Sequence[SongAssignment]) -> None:
        """
        Reject an empty sequence, then walk it in order and fail on the first
        unresolved reference (the song of a slot is checked before its soloist).
        """
        if not assignments:
            raise ValidationError("A scale needs at least one song assignment")
        for position, assignment in enumerate(assignments):
            self.validate_song_reference(assignment.song_id, f"songs[{position}].song_id")
            self.validate_soloist_reference(
                assignment.soloist_id, f"songs[{position}].soloist_id"
            )

    def validate_unique_email(self, email: str, exclude_id: Optional[int] = None) -> None:
        # Plain equality: no case folding, no trimming.
        for member in self._store.members.list():
            if member.id != exclude_id and member.email == email:
                raise DuplicateEmail(email)
