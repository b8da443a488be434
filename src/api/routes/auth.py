"""Authentication routes - register, login, profile."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from src.api.deps import get_current_user, get_db_session
from src.api.schemas.auth import (
    AuthResponse,
    LoginRequest,
    MeResponse,
    RegisterRequest,
    UserResponse,
)
from src.core.config import Settings, get_settings
from src.domain import Identity
from src.domain.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register new user",
    description="Create an admin or employee account and return an access token.",
)
async def register(
    payload: RegisterRequest,
    session: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
) -> AuthResponse:
    """Register a new user."""
    service = AuthService(session, settings)
    result = await service.register_user(
        name=payload.name,
        email=payload.email,
        password=payload.password,
        role=payload.role,
    )
    return AuthResponse(
        message="Registration successful.",
        token=result["token"],
        user=UserResponse(**result["user"]),
    )


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="User login",
    description="Authenticate user with email and password, returns a JWT.",
)
async def login(
    payload: LoginRequest,
    session: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
) -> AuthResponse:
    """Authenticate user and return a token."""
    service = AuthService(session, settings)
    result = await service.login(email=payload.email, password=payload.password)
    return AuthResponse(
        message="Login successful.",
        token=result["token"],
        user=UserResponse(**result["user"]),
    )


@router.get(
    "/me",
    response_model=MeResponse,
    summary="Get current user",
    description="Get the currently authenticated user's profile.",
)
async def get_me(
    identity: Identity = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
) -> MeResponse:
    """Get current authenticated user's profile."""
    service = AuthService(session, settings)
    user_data = await service.get_user_by_id(identity.user_id)
    return MeResponse(user=UserResponse(**user_data))
