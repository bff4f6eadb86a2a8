# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Request / Response schemas — API contract definitions.
These are Pydantic models used ONLY at the controller (HTTP) boundary.
"""

from pydantic import BaseModel, Field
from typing import Optional

from worship_api.models.domain import AccessLevel

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"
DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


# ── Auth Schemas ──

class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1, max_length=255, description="Member email")
    password: str = Field(..., min_length=1, description="Plaintext password")


# ── Member Schemas ──

class MemberCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, description="Full name")
    voice_type: str = Field(..., min_length=1, max_length=100, description="Voice or instrument")
    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN, description="Unique email")
    password: str = Field(..., min_length=1, description="Plaintext password, hashed on write")
    access_level: AccessLevel = Field(..., description="Access level: admin or common")


class MemberUpdateRequest(BaseModel):
    """Partial update model for PUT /api/v1/members/{id}."""
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    voice_type: Optional[str] = Field(default=None, min_length=1, max_length=100)
    email: Optional[str] = Field(default=None, max_length=255, pattern=EMAIL_PATTERN)
    password: Optional[str] = Field(default=None, min_length=1)
    access_level: Optional[AccessLevel] = None


class MemberResponse(BaseModel):
    id: int
    name: str
    voice_type: str
    email: str
    access_level: AccessLevel


class MemberSnapshot(BaseModel):
    id: int
    name: str
    voice_type: str


class MemberListResponse(BaseModel):
    members: list[MemberResponse]


class MemberMutationResponse(BaseModel):
    message: str
    member: MemberResponse


class LoginResponse(BaseModel):
    token: str
    token_type: str
    expires_in: int
    member: MemberResponse


# ── Music Schemas ──

class SongCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    key: str = Field(..., min_length=1, max_length=20, description="Musical key, e.g. 'G'")
    version_link: str = Field(..., min_length=1, max_length=2048, description="Reference recording")
    lyrics: str = Field(..., min_length=1)
    soloist_id: int = Field(..., ge=1, description="Member id of the default soloist")


class SongUpdateRequest(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    key: Optional[str] = Field(default=None, min_length=1, max_length=20)
    version_link: Optional[str] = Field(default=None, min_length=1, max_length=2048)
    lyrics: Optional[str] = Field(default=None, min_length=1)
    soloist_id: Optional[int] = Field(default=None, ge=1)


class SongSnapshot(BaseModel):
    id: int
    name: str
    key: str
    version_link: str


class SongResponse(BaseModel):
    id: int
    name: str
    key: str
    version_link: str
    lyrics: str
    soloist_id: int
    soloist: Optional[MemberSnapshot] = None


class MusicListResponse(BaseModel):
    music: list[SongResponse]


class SongMutationResponse(BaseModel):
    message: str
    song: SongResponse


# ── Scale Schemas ──

class SongAssignmentRequest(BaseModel):
    song_id: int = Field(..., ge=1)
    soloist_id: int = Field(..., ge=1)


class ScaleCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, description="Scale name")
    date: str = Field(..., pattern=DATE_PATTERN, description="Service date (YYYY-MM-DD)")
    songs: list[SongAssignmentRequest] = Field(
        ..., description="Ordered song/soloist assignments (at least one)"
    )


class ScaleUpdateRequest(BaseModel):
    """Partial update model; ``songs`` replaces the whole assignment list."""
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    date: Optional[str] = Field(default=None, pattern=DATE_PATTERN)
    songs: Optional[list[SongAssignmentRequest]] = None


class AssignmentResponse(BaseModel):
    song_id: int
    soloist_id: int
    song: Optional[SongSnapshot] = None
    soloist: Optional[MemberSnapshot] = None


class ScaleResponse(BaseModel):
    id: int
    name: str
    date: str
    songs: list[AssignmentResponse]


class ScaleListResponse(BaseModel):
    scales: list[ScaleResponse]


class ScaleMutationResponse(BaseModel):
    message: str
    scale: ScaleResponse


class MessageResponse(BaseModel):
    message: str
