from __future__ import annotations

import enum
import uuid
from datetime import UTC, datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from src.core.auth import Role

from .base import Base


def _uuid() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(UTC)


class AssignmentStatus(str, enum.Enum):
    """Assignment progress status.

    Any status may move to any other; completed is revocable.
    """

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"

    @classmethod
    def values(cls) -> tuple[str, ...]:
        return tuple(status.value for status in cls)


class UserModel(Base):
    """SQLAlchemy model for users table."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[Role] = mapped_column(
        Enum(Role, name="user_role", values_callable=lambda e: [x.value for x in e]),
        default=Role.EMPLOYEE,
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False
    )

    def __repr__(self) -> str:
        return f"<UserModel(id={self.id}, email={self.email}, role={self.role.value})>"


class TrainingModel(Base):
    __tablename__ = "trainings"
    __table_args__ = (CheckConstraint("duration_hours >= 0.5", name="ck_trainings_min_duration"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(128), nullable=False)
    duration_hours: Mapped[float] = mapped_column(Float, nullable=False)
    created_by_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id"), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False
    )

    creator: Mapped[UserModel] = relationship(lazy="raise")


class AssignmentModel(Base):
    """Links an employee to a training and tracks progress."""

    __tablename__ = "assignments"
    __table_args__ = (
        UniqueConstraint("employee_id", "training_id", name="uq_assignment_employee_training"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    employee_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id"), nullable=False, index=True
    )
    training_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("trainings.id", ondelete="CASCADE"), nullable=False, index=True
    )
    assigned_by_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id"), nullable=False
    )
    status: Mapped[AssignmentStatus] = mapped_column(
        Enum(
            AssignmentStatus,
            name="assignment_status",
            values_callable=lambda e: [x.value for x in e],
        ),
        default=AssignmentStatus.PENDING,
        nullable=False,
    )
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False
    )

    employee: Mapped[UserModel] = relationship(foreign_keys=[employee_id], lazy="raise")
    training: Mapped[TrainingModel] = relationship(lazy="raise")
    assigned_by: Mapped[UserModel] = relationship(foreign_keys=[assigned_by_id], lazy="raise")

    def set_status(self, status: AssignmentStatus) -> None:
        """Write status and keep completed_at in step with it."""
        self.status = status
        self.completed_at = _utcnow() if status is AssignmentStatus.COMPLETED else None
