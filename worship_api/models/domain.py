# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Domain models — pure data structures, NO FastAPI dependency.

Three record types live in the store (Member, Song, Scale). Each has:
  - a *Draft* holding the caller-supplied fields of a new record (no id),
  - a *Patch* whose fields are all optional; only the fields explicitly set
    on a patch are applied by ``apply_patch``.
"""

from enum import Enum
from typing import Optional, TypeVar

from pydantic import BaseModel, Field


class EntityKind(str, Enum):
    MEMBER = "member"
    SONG = "song"
    SCALE = "scale"


class AccessLevel(str, Enum):
    ADMIN = "admin"
    COMMON = "common"


# ── Member ──

class MemberDraft(BaseModel):
    name: str
    voice_type: str
    email: str
    password_hash: str
    access_level: AccessLevel


class Member(MemberDraft):
    """A person in the worship group."""
    id: int


class MemberPatch(BaseModel):
    name: Optional[str] = None
    voice_type: Optional[str] = None
    email: Optional[str] = None
    password_hash: Optional[str] = None
    access_level: Optional[AccessLevel] = None


# ── Song ──

class SongDraft(BaseModel):
    name: str
    key: str
    version_link: str
    lyrics: str
    soloist_id: int


class Song(SongDraft):
    """An item of the repertoire; ``soloist_id`` is a weak member reference."""
    id: int


class SongPatch(BaseModel):
    name: Optional[str] = None
    key: Optional[str] = None
    version_link: Optional[str] = None
    lyrics: Optional[str] = None
    soloist_id: Optional[int] = None


# ── Scale ──

class SongAssignment(BaseModel):
    """One performance slot of a scale: which song, sung by whom."""
    song_id: int
    soloist_id: int


class ScaleDraft(BaseModel):
    name: str
    date: str
    songs: list[SongAssignment] = Field(default_factory=list)


class Scale(ScaleDraft):
    """A dated rotation of songs and their soloists, in performance order."""
    id: int


class ScalePatch(BaseModel):
    name: Optional[str] = None
    date: Optional[str] = None
    songs: Optional[list[SongAssignment]] = None


# ── Principal ──

class Principal(BaseModel):
    """The authenticated actor of a request, decoded from its bearer token."""
    id: int
    email: str
    name: str
    access_level: AccessLevel

    @property
    def is_admin(self) -> bool:
        return self.access_level == AccessLevel.ADMIN


RecordT = TypeVar("RecordT", Member, Song, Scale)


def apply_patch(record: RecordT, patch: BaseModel) -> RecordT:
    """
    Merge ``patch`` over ``record`` field by field and return a new record.

    Only fields explicitly set on the patch replace existing values; every
    other field keeps its prior value. No record field is nullable, so a
    patch field set to None carries nothing. The identifier always comes
    from ``record``.
    """
    merged = record.model_dump()
    for field in patch.model_fields_set:
        if field == "id" or field not in merged:
            continue
        value = getattr(patch, field)
        if value is None:
            continue
        if isinstance(value, list):
            value = [v.model_dump() if isinstance(v, BaseModel) else v for v in value]
        merged[field] = value
    merged["id"] = record.id
    return type(record).model_validate(merged)
