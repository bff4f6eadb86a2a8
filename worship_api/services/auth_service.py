# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Authentication service — email/password login and token issuance."""
from typing import Any

from worship_api.core.config import settings
from worship_api.core.logging import get_logger
from worship_api.core.security import create_access_token, verify_password
from worship_api.metrics.prometheus import LOGIN_ATTEMPTS
from worship_api.models.errors import InvalidCredentials
from worship_api.services.enrichment import public_member
from worship_api.services.member_service import MemberService

logger = get_logger(__name__)

# Well-formed salt$hash that no password matches; unknown emails are checked
# against it so every rejected login pays the same PBKDF2 cost.
DUMMY_PASSWORD_HASH = f"{'0' * 32}${'0' * 64}"


class AuthService:
    def __init__(self, member_service: MemberService) -> None:
        self._members = member_service

    def login(self, email: str, password: str) -> dict[str, Any]:
        """Exchange credentials for a bearer token. Raises InvalidCredentials."""
        member = self._members.find_by_email(email)
        stored_hash = member.password_hash if member is not None else DUMMY_PASSWORD_HASH
        password_ok = verify_password(password, stored_hash)
        if member is None or not password_ok:
            LOGIN_ATTEMPTS.labels(outcome="rejected").inc()
            logger.warning("Login rejected for email=%s", email)
            raise InvalidCredentials()

        LOGIN_ATTEMPTS.labels(outcome="accepted").inc()
        logger.info("Login accepted: member_id=%d", member.id)
        return {
            "token": create_access_token(member),
            "token_type": "bearer",
            "expires_in": settings.ACCESS_TOKEN_EXPIRE_HOURS * 3600,
            "member": public_member(member),
        }
