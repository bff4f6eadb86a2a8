# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Member management — business logic for CRUD operations.
Hashes passwords, enforces email uniqueness, updates metrics.
"""

from typing import Any, Optional

from worship_api.core.logging import get_logger
from worship_api.core.security import hash_password
from worship_api.metrics.prometheus import (
    LIVE_RECORDS,
    RECORDS_CREATED,
    RECORDS_DELETED,
    RECORDS_UPDATED,
    WRITES_REJECTED,
)
from worship_api.models.domain import (
    AccessLevel,
    EntityKind,
    Member,
    MemberDraft,
    MemberPatch,
)
from worship_api.models.errors import RecordNotFound, WriteRejected
from worship_api.repositories.store import WorshipStore
from worship_api.services.integrity import ReferenceValidator

logger = get_logger(__name__)

KIND = EntityKind.MEMBER.value


class MemberService:
    """Business logic for the members of the worship group."""

    def __init__(self, store: WorshipStore, validator: ReferenceValidator) -> None:
        self._store = store
        self._validator = validator

    # ── Commands ──

    def create_member(
        self,
        name: str,
        voice_type: str,
        email: str,
        password: str,
        access_level: AccessLevel,
    ) -> Member:
        """Hash the password and add the member. Raises DuplicateEmail."""
        return self.add_member(
            MemberDraft(
                name=name,
                voice_type=voice_type,
                email=email,
                password_hash=hash_password(password),
                access_level=access_level,
            )
        )

    def add_member(self, draft: MemberDraft) -> Member:
        """Store a member whose password is already hashed."""
        with self._store.lock:
            try:
                self._validator.validate_unique_email(draft.email)
            except WriteRejected as e:
                WRITES_REJECTED.labels(kind=KIND, reason=e.code).inc()
                raise
            member = self._store.members.create(draft)
            LIVE_RECORDS.labels(kind=KIND).set(self._store.members.count())

        RECORDS_CREATED.labels(kind=KIND).inc()
        logger.info("Member created: id=%d, access_level=%s", member.id, member.access_level.value)
        return member

    def update_member(self, member_id: int, changes: dict[str, Any]) -> Member:
        """
        Partially update a member. ``changes`` may carry a plaintext
        ``password``, which is hashed before it reaches the store.
        Raises RecordNotFound / DuplicateEmail.
        """
        fields = dict(changes)
        password = fields.pop("password", None)
        if password:
            fields["password_hash"] = hash_password(password)
        patch = MemberPatch(**fields)

        with self._store.lock:
            current = self._store.members.get_by_id(member_id)
            if current is None:
                raise RecordNotFound(KIND, member_id)
            if patch.email is not None and patch.email != current.email:
                try:
                    self._validator.validate_unique_email(patch.email, exclude_id=member_id)
                except WriteRejected as e:
                    WRITES_REJECTED.labels(kind=KIND, reason=e.code).inc()
                    raise
            member = self._store.members.update(member_id, patch)

        RECORDS_UPDATED.labels(kind=KIND).inc()
        logger.info(
            "Member updated: id=%d, fields=%s",
            member_id, sorted(f for f in patch.model_fields_set if f != "password_hash"),
        )
        return member

    def delete_member(self, member_id: int) -> dict[str, Any]:
        """Delete a member. Songs and scales keep their (now dangling) references."""
        with self._store.lock:
            if not self._store.members.delete(member_id):
                raise RecordNotFound(KIND, member_id)
            LIVE_RECORDS.labels(kind=KIND).set(self._store.members.count())

        RECORDS_DELETED.labels(kind=KIND).inc()
        logger.info("Member deleted: id=%d", member_id)
        return {"status": "deleted", "id": member_id}

    # ── Queries ──

    def list_members(self) -> list[Member]:
        return self._store.members.list()

    def get_member(self, member_id: int) -> Member:
        member = self._store.members.get_by_id(member_id)
        if member is None:
            raise RecordNotFound(KIND, member_id)
        return member

    def find_by_email(self, email: str) -> Optional[Member]:
        for member in self._store.members.list():
            if member.email == email:
                return member
        return None
