"""Unit tests for authentication service."""

from __future__ import annotations

import pytest
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from src.api.schemas.auth import LoginRequest, RegisterRequest
from src.core.auth import Role, decode_access_token
from src.core.config import get_settings
from src.domain.errors import ConflictError, NotFoundError, UnauthorizedError
from src.domain.services.auth_service import AuthService, hash_password, verify_password


class TestPasswordHashing:
    """Tests for password hashing functions."""

    def test_hash_password_returns_bcrypt_hash(self) -> None:
        hashed = hash_password("test_password_123")

        assert hashed.startswith("$2b$")
        assert len(hashed) == 60

    def test_hash_password_unique_per_call(self) -> None:
        """Same password should produce different hashes (due to salt)."""
        assert hash_password("secret-pass") != hash_password("secret-pass")

    def test_verify_password(self) -> None:
        hashed = hash_password("TestPassword123")

        assert verify_password("TestPassword123", hashed) is True
        assert verify_password("testpassword123", hashed) is False


class TestAuthSchemas:
    def test_register_request_defaults_to_employee(self) -> None:
        request = RegisterRequest(name="Test User", email="test@example.com", password="password123")

        assert request.role is Role.EMPLOYEE

    def test_register_request_rejects_unknown_role(self) -> None:
        with pytest.raises(ValidationError):
            RegisterRequest(
                name="Test User", email="test@example.com", password="password123", role="manager"
            )

    def test_register_request_invalid_email(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            RegisterRequest(name="Test User", email="not-an-email", password="password123")

        assert "valid email address" in str(exc_info.value)

    def test_login_request_requires_password(self) -> None:
        with pytest.raises(ValidationError):
            LoginRequest(email="test@example.com")  # type: ignore[call-arg]


class TestAuthService:
    async def test_register_returns_user_and_verifiable_token(self, db: AsyncSession) -> None:
        settings = get_settings()
        service = AuthService(db, settings)

        result = await service.register_user(
            name="Ada", email="Ada@Example.com", password="password123", role=Role.ADMIN
        )

        assert result["user"]["email"] == "ada@example.com"
        assert result["user"]["role"] == "admin"
        claims = decode_access_token(result["token"], settings=settings)
        assert claims.user_id == result["user"]["id"]
        assert claims.role is Role.ADMIN

    async def test_register_duplicate_email_conflicts(self, db: AsyncSession) -> None:
        service = AuthService(db, get_settings())
        await service.register_user(name="Ada", email="ada@example.com", password="password123")

        with pytest.raises(ConflictError, match="already exists"):
            await service.register_user(
                name="Other Ada", email="ADA@example.com", password="password456"
            )

    async def test_login_with_wrong_password(self, db: AsyncSession) -> None:
        service = AuthService(db, get_settings())
        await service.register_user(name="Ada", email="ada@example.com", password="password123")

        with pytest.raises(UnauthorizedError, match="Invalid email or password"):
            await service.login(email="ada@example.com", password="wrong-password")

    async def test_login_unknown_email(self, db: AsyncSession) -> None:
        service = AuthService(db, get_settings())

        with pytest.raises(UnauthorizedError):
            await service.login(email="nobody@example.com", password="password123")

    async def test_get_user_by_id_unknown(self, db: AsyncSession) -> None:
        service = AuthService(db, get_settings())

        with pytest.raises(NotFoundError):
            await service.get_user_by_id("missing")
