"""Pydantic schemas for authentication endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import EmailStr, Field
from src.api.schemas.common import CamelModel
from src.core.auth import Role

# --- Request Schemas ---


class RegisterRequest(CamelModel):
    """Request schema for user registration."""

    name: str = Field(..., min_length=1, max_length=128, description="User's full name")
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(
        ...,
        min_length=6,
        max_length=128,
        description="Password (min 6 characters)",
    )
    role: Role = Field(default=Role.EMPLOYEE, description="User role (defaults to employee)")


class LoginRequest(CamelModel):
    """Request schema for user login."""

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")


# --- Response Schemas ---


class UserResponse(CamelModel):
    """Response schema for user data."""

    id: str = Field(..., description="User ID")
    name: str = Field(..., description="User's full name")
    email: str = Field(..., description="User email")
    role: Role = Field(..., description="User role")
    created_at: datetime | None = Field(None, description="Account creation timestamp")


class AuthResponse(CamelModel):
    """Response schema for registration and login."""

    message: str
    token: str = Field(..., description="Bearer access token")
    user: UserResponse


class MeResponse(CamelModel):
    """Response schema for current user info."""

    user: UserResponse
