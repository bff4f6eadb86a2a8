# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Repertoire management — songs and their default soloist.
"""

from typing import Any

from worship_api.core.logging import get_logger
from worship_api.metrics.prometheus import (
    LIVE_RECORDS,
    RECORDS_CREATED,
    RECORDS_DELETED,
    RECORDS_UPDATED,
    WRITES_REJECTED,
)
from worship_api.models.domain import EntityKind, Song, SongDraft, SongPatch
from worship_api.models.errors import RecordNotFound, WriteRejected
from worship_api.repositories.store import WorshipStore
from worship_api.services.integrity import ReferenceValidator

logger = get_logger(__name__)

KIND = EntityKind.SONG.value


class SongService:
    """Business logic for the song repertoire."""

    def __init__(self, store: WorshipStore, validator: ReferenceValidator) -> None:
        self._store = store
        self._validator = validator

    # ── Commands ──

    def create_song(self, draft: SongDraft) -> Song:
        """Add a song. Raises ReferenceNotFound if the soloist does not exist."""
        with self._store.lock:
            try:
                self._validator.validate_soloist_reference(draft.soloist_id)
            except WriteRejected as e:
                WRITES_REJECTED.labels(kind=KIND, reason=e.code).inc()
                raise
            song = self._store.songs.create(draft)
            LIVE_RECORDS.labels(kind=KIND).set(self._store.songs.count())

        RECORDS_CREATED.labels(kind=KIND).inc()
        logger.info("Song created: id=%d, soloist_id=%d", song.id, song.soloist_id)
        return song

    def update_song(self, song_id: int, patch: SongPatch) -> Song:
        """Partially update a song. Raises RecordNotFound / ReferenceNotFound."""
        with self._store.lock:
            if not self._store.songs.exists(song_id):
                raise RecordNotFound(KIND, song_id)
            if patch.soloist_id is not None:
                try:
                    self._validator.validate_soloist_reference(patch.soloist_id)
                except WriteRejected as e:
                    WRITES_REJECTED.labels(kind=KIND, reason=e.code).inc()
                    raise
            song = self._store.songs.update(song_id, patch)

        RECORDS_UPDATED.labels(kind=KIND).inc()
        logger.info("Song updated: id=%d, fields=%s", song_id, sorted(patch.model_fields_set))
        return song

    def delete_song(self, song_id: int) -> dict[str, Any]:
        """Delete a song. Scales that list it keep the dangling reference."""
        with self._store.lock:
            if not self._store.songs.delete(song_id):
                raise RecordNotFound(KIND, song_id)
            LIVE_RECORDS.labels(kind=KIND).set(self._store.songs.count())

        RECORDS_DELETED.labels(kind=KIND).inc()
        logger.info("Song deleted: id=%d", song_id)
        return {"status": "deleted", "id": song_id}

    # ── Queries ──

    def list_songs(self) -> list[Song]:
        return self._store.songs.list()

    def get_song(self, song_id: int) -> Song:
        song = self._store.songs.get_by_id(song_id)
        if song is None:
            raise RecordNotFound(KIND, song_id)
        return song
