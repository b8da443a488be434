"""Authentication service with password hashing and user management."""

from __future__ import annotations

import structlog
from passlib.context import CryptContext
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from src.core.auth import Role, create_access_token
from src.core.config import Settings
from src.domain.errors import ConflictError, NotFoundError, UnauthorizedError
from src.infrastructure.db.models import UserModel

logger = structlog.get_logger()

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

INVALID_CREDENTIALS = "Invalid email or password."


def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


class AuthService:
    """Registration, login and profile lookups against the users table."""

    def __init__(self, session: AsyncSession, settings: Settings) -> None:
        self.session = session
        self.settings = settings

    async def register_user(
        self,
        *,
        name: str,
        email: str,
        password: str,
        role: Role = Role.EMPLOYEE,
    ) -> dict:
        """
        Register a new user.

        Returns:
            dict with user data and an access token
        """
        email = email.lower()
        await logger.ainfo("register_attempt", email=email, role=role.value)

        existing = await self.session.scalar(select(UserModel.id).where(UserModel.email == email))
        if existing is not None:
            await logger.awarning("register_duplicate_email", email=email)
            raise ConflictError("User already exists with this email.")

        user = UserModel(
            name=name,
            email=email,
            hashed_password=hash_password(password),
            role=role,
        )

        try:
            self.session.add(user)
            await self.session.commit()
        except IntegrityError as exc:
            # Lost a race with a concurrent registration for the same email
            await self.session.rollback()
            await logger.awarning("register_duplicate_email", email=email, race=True)
            raise ConflictError("User already exists with this email.") from exc

        await logger.ainfo("register_success", user_id=user.id, email=email)

        return {"user": self._user_to_dict(user), "token": self._issue_token(user)}

    async def login(self, *, email: str, password: str) -> dict:
        """
        Authenticate user with email and password.

        Returns:
            dict with user data and an access token
        """
        email = email.lower()
        await logger.ainfo("login_attempt", email=email)

        user = await self.session.scalar(select(UserModel).where(UserModel.email == email))

        if user is None:
            await logger.awarning("login_user_not_found", email=email)
            raise UnauthorizedError(INVALID_CREDENTIALS)

        if not verify_password(password, user.hashed_password):
            await logger.awarning("login_invalid_password", email=email)
            raise UnauthorizedError(INVALID_CREDENTIALS)

        await logger.ainfo("login_success", user_id=user.id, email=email)

        return {"user": self._user_to_dict(user), "token": self._issue_token(user)}

    async def get_user_by_id(self, user_id: str) -> dict:
        """Get user by ID."""
        user = await self.session.get(UserModel, user_id)

        if user is None:
            raise NotFoundError("User not found.")

        return self._user_to_dict(user)

    def _issue_token(self, user: UserModel) -> str:
        return create_access_token(user.id, role=user.role, settings=self.settings)

    def _user_to_dict(self, user: UserModel) -> dict:
        """Convert UserModel to dict for response."""
        return {
            "id": user.id,
            "name": user.name,
            "email": user.email,
            "role": user.role.value,
            "created_at": user.created_at,
        }
