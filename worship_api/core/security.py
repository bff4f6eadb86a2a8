# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Security helpers: password hashing, JWT access tokens and the access
control dependencies used by the controllers.

Passwords are hashed with PBKDF2-HMAC-SHA256 and a random salt, stored as
``<salt hex>$<hash hex>``. Access tokens are HS256 JWTs signed with
``settings.JWT_SECRET`` and embed the member's id, email, name and access
level.
"""

import hashlib
import hmac
import os
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from worship_api.core.config import settings
from worship_api.models.domain import AccessLevel, Member, Principal


class TokenError(Exception):
    """Raised when an access token cannot be trusted."""


# ── Passwords ──

def hash_password(password: str, iterations: Optional[int] = None) -> str:
    """Hash ``password`` with a fresh 16-byte salt."""
    salt = os.urandom(16)
    rounds = iterations or settings.PASSWORD_HASH_ITERATIONS
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, rounds)
    return f"{salt.hex()}${dk.hex()}"


def verify_password(plain_password: str, hashed_password: str, iterations: Optional[int] = None) -> bool:
    """Constant-time check of ``plain_password`` against a stored salt$hash."""
    try:
        salt_hex, hash_hex = hashed_password.split("$", 1)
        salt = bytes.fromhex(salt_hex)
        stored_hash = bytes.fromhex(hash_hex)
    except ValueError:
        return False
    rounds = iterations or settings.PASSWORD_HASH_ITERATIONS
    dk = hashlib.pbkdf2_hmac("sha256", plain_password.encode("utf-8"), salt, rounds)
    return hmac.compare_digest(dk, stored_hash)


# ── Tokens ──

def create_access_token(member: Member, expires_hours: Optional[int] = None) -> str:
    """Issue a signed, time-limited token for ``member``."""
    now = datetime.now(timezone.utc)
    hours = expires_hours if expires_hours is not None else settings.ACCESS_TOKEN_EXPIRE_HOURS
    payload: dict[str, Any] = {
        "sub": str(member.id),
        "email": member.email,
        "name": member.name,
        "access_level": AccessLevel(member.access_level).value,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(hours=hours)).timestamp()),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> Principal:
    """
    Verify ``token`` and return the principal it carries.

    Raises:
        TokenError: bad signature, expired, or malformed claims.
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["exp", "sub"]},
        )
    except jwt.ExpiredSignatureError:
        raise TokenError("Access token has expired")
    except jwt.InvalidTokenError as e:
        raise TokenError(f"Invalid access token: {e}")

    try:
        return Principal(
            id=int(payload["sub"]),
            email=payload["email"],
            name=payload["name"],
            access_level=payload["access_level"],
        )
    except (KeyError, ValueError) as e:
        raise TokenError(f"Malformed access token: {e}")


# ── FastAPI dependencies ──

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Principal:
    """401 when the bearer token is missing, invalid or expired."""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        return decode_access_token(credentials.credentials)
    except TokenError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )


def require_admin(principal: Principal = Depends(get_current_principal)) -> Principal:
    """403 when the authenticated principal is not an administrator."""
    if not principal.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only administrators can perform this operation",
        )
    return principal
