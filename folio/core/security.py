"""Security utilities for JWT authentication and password hashing."""

from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import VerificationError, VerifyMismatchError

from folio.config import settings

ph = PasswordHasher()

# Token types
ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


def hash_password(password: str) -> str:
    """Hash a password using Argon2."""
    return ph.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    try:
        return ph.verify(hashed_password, plain_password)
    except (VerifyMismatchError, VerificationError):
        return False


def _encode(user_id: UUID, token_type: str, lifetime: timedelta, claims: dict[str, Any] | None = None) -> str:
    now = datetime.now(UTC)
    payload = {
        "sub": str(user_id),
        "exp": now + lifetime,
        "iat": now,
        "type": token_type,
    }
    if claims:
        payload.update(claims)
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def create_access_token(
    user_id: UUID,
    additional_claims: dict[str, Any] | None = None,
) -> str:
    """Create a JWT access token."""
    lifetime = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    return _encode(user_id, ACCESS_TOKEN_TYPE, lifetime, additional_claims)


def create_refresh_token(user_id: UUID) -> str:
    """Create a JWT refresh token."""
    lifetime = timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS)
    return _encode(user_id, REFRESH_TOKEN_TYPE, lifetime)


def decode_token(token: str) -> dict[str, Any]:
    """Decode and validate a JWT token."""
    try:
        return jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
        )
    except jwt.ExpiredSignatureError:
        raise ValueError("Token has expired")
    except jwt.InvalidTokenError as e:
        raise ValueError(f"Invalid token: {e}")


def _verify(token: str, token_type: str) -> dict[str, Any]:
    payload = decode_token(token)
    if payload.get("type") != token_type:
        raise ValueError("Invalid token type")
    return payload


def verify_access_token(token: str) -> dict[str, Any]:
    """Verify an access token and return its payload."""
    return _verify(token, ACCESS_TOKEN_TYPE)


def verify_refresh_token(token: str) -> dict[str, Any]:
    """Verify a refresh token and return its payload."""
    return _verify(token, REFRESH_TOKEN_TYPE)


def refresh_token_key(user_id: UUID | str) -> str:
    """Redis key holding a user's current refresh token."""
    return f"refresh_token:{user_id}"
