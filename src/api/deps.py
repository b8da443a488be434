from __future__ import annotations

from collections.abc import AsyncIterator, Callable

import structlog
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession
from src.core.auth import Role, TokenError, decode_access_token
from src.core.config import Settings, get_settings
from src.domain import Identity
from src.infrastructure.db.models import UserModel
from src.infrastructure.db.session import get_session
from structlog.contextvars import bind_contextvars

bearer_scheme = HTTPBearer(auto_error=False)
logger = structlog.get_logger()


async def get_db_session() -> AsyncIterator[AsyncSession]:
    """Provide an async SQLAlchemy session for API handlers."""
    async for session in get_session():
        yield session


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),  # noqa: B008
    session: AsyncSession = Depends(get_db_session),  # noqa: B008
    settings: Settings = Depends(get_settings),  # noqa: B008
) -> Identity:
    """Resolve the authenticated user from a bearer token."""
    if credentials is None:
        raise _unauthorized("Not authorized. No token provided.")

    try:
        claims = decode_access_token(credentials.credentials, settings=settings)
    except TokenError as exc:
        await logger.ainfo("auth_token_rejected", reason=str(exc))
        raise _unauthorized("Not authorized. Invalid token.") from exc

    user = await session.get(UserModel, claims.user_id)
    if user is None:
        raise _unauthorized("Not authorized. User not found.")

    bind_contextvars(user_id=user.id)
    # The stored role wins over the one baked into an older token
    return Identity(user_id=user.id, role=user.role)


def require_roles(*roles: Role) -> Callable[..., Identity]:
    """Dependency factory enforcing that the authenticated user has one of the given roles."""
    if not roles:
        raise ValueError("At least one role is required")
    allowed = frozenset(Role(role) for role in roles)

    def dependency(identity: Identity = Depends(get_current_user)) -> Identity:  # noqa: B008
        if identity.role not in allowed:
            raise _forbidden(f"Access denied. Role '{identity.role.value}' is not permitted.")
        return identity

    return dependency


require_admin = require_roles(Role.ADMIN)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _forbidden(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)
