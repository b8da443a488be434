from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from src.api.deps import get_db_session
from src.api.main import app
from src.core.auth import Role
from src.infrastructure.db.base import Base
from src.infrastructure.db.models import TrainingModel, UserModel


@pytest.fixture()
async def engine() -> AsyncIterator[AsyncEngine]:
    # In-memory SQLite keeps a single shared connection for the whole test
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture()
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest.fixture()
async def async_client(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncClient]:
    """HTTP client bound to the app with its database swapped for the test engine."""

    async def override_db_session() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.pop(get_db_session, None)


@pytest.fixture()
async def db(session_factory: async_sessionmaker[AsyncSession]) -> AsyncIterator[AsyncSession]:
    """Provide a database session for tests that need direct DB access."""
    async with session_factory() as session:
        yield session


@pytest.fixture()
def make_user(db: AsyncSession) -> Callable[..., Awaitable[UserModel]]:
    """Insert a user directly, skipping the bcrypt cost of the register route."""

    async def _make_user(name: str, role: Role = Role.EMPLOYEE, email: str | None = None) -> UserModel:
        user = UserModel(
            name=name,
            email=email or f"{name.lower().replace(' ', '.')}@example.com",
            hashed_password="not-a-real-hash",
            role=role,
        )
        db.add(user)
        await db.commit()
        return user

    return _make_user


@pytest.fixture()
def make_training(db: AsyncSession) -> Callable[..., Awaitable[TrainingModel]]:
    async def _make_training(
        creator: UserModel, title: str = "Fire Safety", duration_hours: float = 1.5
    ) -> TrainingModel:
        training = TrainingModel(
            title=title,
            description=f"{title} essentials",
            category="Compliance",
            duration_hours=duration_hours,
            created_by_id=creator.id,
        )
        db.add(training)
        await db.commit()
        return training

    return _make_training
