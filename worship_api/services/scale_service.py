# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Scale management — dated rotations of songs and soloists.
The assignment list is validated as a whole and replaced wholesale.
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
from worship_api.models.domain import EntityKind, Scale, ScaleDraft, ScalePatch
from worship_api.models.errors import RecordNotFound, WriteRejected
from worship_api.repositories.store import WorshipStore
from worship_api.services.integrity import ReferenceValidator

logger = get_logger(__name__)

KIND = EntityKind.SCALE.value


class ScaleService:
    """Business logic for worship rotation schedules."""

    def __init__(self, store: WorshipStore, validator: ReferenceValidator) -> None:
        self._store = store
        self._validator = validator

    # ── Commands ──

    def create_scale(self, draft: ScaleDraft) -> Scale:
        """Add a scale. Raises ValidationError / ReferenceNotFound."""
        with self._store.lock:
            try:
                self._validator.validate_scale_assignments(draft.songs)
            except WriteRejected as e:
                WRITES_REJECTED.labels(kind=KIND, reason=e.code).inc()
                raise
            scale = self._store.scales.create(draft)
            LIVE_RECORDS.labels(kind=KIND).set(self._store.scales.count())

        RECORDS_CREATED.labels(kind=KIND).inc()
        logger.info(
            "Scale created: id=%d, date=%s, songs=%d", scale.id, scale.date, len(scale.songs)
        )
        return scale

    def update_scale(self, scale_id: int, patch: ScalePatch) -> Scale:
        """Partially update a scale. Raises RecordNotFound / ValidationError / ReferenceNotFound."""
        with self._store.lock:
            if not self._store.scales.exists(scale_id):
                raise RecordNotFound(KIND, scale_id)
            if patch.songs is not None:
                try:
                    self._validator.validate_scale_assignments(patch.songs)
                except WriteRejected as e:
                    WRITES_REJECTED.labels(kind=KIND, reason=e.code).inc()
                    raise
            scale = self._store.scales.update(scale_id, patch)

        RECORDS_UPDATED.labels(kind=KIND).inc()
        logger.info("Scale updated: id=%d, fields=%s", scale_id, sorted(patch.model_fields_set))
        return scale

    def delete_scale(self, scale_id: int) -> dict[str, Any]:
        with self._store.lock:
            if not self._store.scales.delete(scale_id):
                raise RecordNotFound(KIND, scale_id)
            LIVE_RECORDS.labels(kind=KIND).set(self._store.scales.count())

        RECORDS_DELETED.labels(kind=KIND).inc()
        logger.info("Scale deleted: id=%d", scale_id)
        return {"status": "deleted", "id": scale_id}

    # ── Queries ──

    def list_scales(self) -> list[Scale]:
        return self._store.scales.list()

    def get_scale(self, scale_id: int) -> Scale:
        scale = self._store.scales.get_by_id(scale_id)
        if scale is None:
            raise RecordNotFound(KIND, scale_id)
        return scale
