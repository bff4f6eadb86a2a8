# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
FastAPI dependency injection — wire the store and services.
"""

from worship_api.core.config import settings
from worship_api.repositories.store import WorshipStore
from worship_api.services.auth_service import AuthService
from worship_api.services.integrity import ReferenceValidator
from worship_api.services.member_service import MemberService
from worship_api.services.rate_limiter import SlidingWindowRateLimiter
from worship_api.services.scale_service import ScaleService
from worship_api.services.song_service import SongService

# ── Singleton store instance (in-memory, rebuilt on every process start) ──
_store = WorshipStore()
_validator = ReferenceValidator(_store)

# ── Service instances (with injected dependencies) ──
_member_service = MemberService(store=_store, validator=_validator)
_song_service = SongService(store=_store, validator=_validator)
_scale_service = ScaleService(store=_store, validator=_validator)
_auth_service = AuthService(member_service=_member_service)
_rate_limiter = SlidingWindowRateLimiter(
    settings.RATE_LIMIT_MAX_REQUESTS, settings.RATE_LIMIT_WINDOW_SECONDS
)


# ── FastAPI dependency functions ──
def get_store() -> WorshipStore:
    return _store


def get_member_service() -> MemberService:
    return _member_service


def get_song_service() -> SongService:
    return _song_service


def get_scale_service() -> ScaleService:
    return _scale_service


def get_auth_service() -> AuthService:
    return _auth_service


def get_rate_limiter() -> SlidingWindowRateLimiter:
    return _rate_limiter
