from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from enum import Enum

import jwt
from src.core.config import Settings


class TokenError(Exception):
    """Raised when a token cannot be decoded or validated."""


class Role(str, Enum):
    ADMIN = "admin"
    EMPLOYEE = "employee"

    @classmethod
    def contains(cls, value: str) -> bool:
        return value in {role.value for role in cls}


@dataclass(frozen=True, slots=True)
class TokenClaims:
    """Identity carried by a verified access token."""

    user_id: str
    role: Role


def create_access_token(
    user_id: str,
    *,
    role: Role,
    settings: Settings,
    expires_delta: timedelta | None = None,
) -> str:
    """Generate a signed JWT binding a user id to its role."""
    now = datetime.now(UTC)
    ttl = expires_delta or timedelta(seconds=settings.access_token_ttl_seconds)
    payload = {
        "id": user_id,
        "role": Role(role).value,
        "iat": int(now.timestamp()),
        "exp": int((now + ttl).timestamp()),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, *, settings: Settings) -> TokenClaims:
    """Decode and validate a JWT access token."""
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["id", "role", "exp"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise TokenError("Token expired") from exc
    except jwt.PyJWTError as exc:  # pragma: no cover - third-party raises numerous subclasses
        raise TokenError("Invalid token") from exc

    user_id = payload["id"]
    role = payload["role"]
    if not isinstance(user_id, str) or not user_id:
        raise TokenError("Token missing subject")
    if not isinstance(role, str) or not Role.contains(role):
        raise TokenError(f"Unsupported role: {role}")

    return TokenClaims(user_id=user_id, role=Role(role))
