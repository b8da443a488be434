"""Assignment ledger: which employee must take which training, and how far along they are."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import assert_never

import structlog
from sqlalchemy import Integer, case, delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from src.core.auth import Role
from src.domain.errors import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationFailedError,
)
from src.domain.models import Identity
from src.infrastructure.db.models import (
    AssignmentModel,
    AssignmentStatus,
    TrainingModel,
    UserModel,
)

logger = structlog.get_logger()

ALREADY_ASSIGNED = "This training is already assigned to the employee."


def is_owner_or_admin(identity: Identity, employee_id: str) -> bool:
    """Admins may touch any assignment; employees only their own."""
    match identity.role:
        case Role.ADMIN:
            return True
        case Role.EMPLOYEE:
            return identity.user_id == employee_id
        case _:
            assert_never(identity.role)


def parse_status(value: str) -> AssignmentStatus:
    try:
        return AssignmentStatus(value)
    except ValueError as exc:
        allowed = ", ".join(AssignmentStatus.values())
        raise ValidationFailedError(f"Invalid status. Allowed values: {allowed}.") from exc


def format_completion_rate(completed: int, total: int) -> str:
    return f"{completed / total * 100:.1f}%"


@dataclass(frozen=True, slots=True)
class EmployeeProgress:
    employee_id: str
    name: str
    email: str
    total: int
    completed: int
    in_progress: int
    pending: int

    @property
    def completion_rate(self) -> str:
        return format_completion_rate(self.completed, self.total)


class AssignmentService:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def assign(
        self,
        *,
        employee_id: str,
        training_id: str,
        assigned_by_id: str,
    ) -> AssignmentModel:
        employee = await self.session.get(UserModel, employee_id)
        if employee is None or employee.role is not Role.EMPLOYEE:
            raise NotFoundError("Employee not found.")

        training = await self.session.get(TrainingModel, training_id)
        if training is None:
            raise NotFoundError("Training not found.")

        if await self._exists(employee_id, training_id):
            raise ConflictError(ALREADY_ASSIGNED)

        assignment = AssignmentModel(
            employee_id=employee_id,
            training_id=training_id,
            assigned_by_id=assigned_by_id,
            status=AssignmentStatus.PENDING,
            completed_at=None,
        )
        try:
            self.session.add(assignment)
            await self.session.commit()
        except IntegrityError as exc:
            # A concurrent request inserted the same pair after our check
            await self.session.rollback()
            await logger.awarning(
                "assignment_duplicate_race",
                employee_id=employee_id,
                training_id=training_id,
            )
            raise ConflictError(ALREADY_ASSIGNED) from exc

        await logger.ainfo(
            "assignment_created",
            assignment_id=assignment.id,
            employee_id=employee_id,
            training_id=training_id,
            admin_user=assigned_by_id,
        )
        return await self._load(assignment.id)

    async def list_for(self, identity: Identity) -> Sequence[AssignmentModel]:
        """Admins see every assignment; employees only their own. Newest first."""
        stmt = self._select().order_by(AssignmentModel.created_at.desc())
        if not identity.is_admin:
            stmt = stmt.where(AssignmentModel.employee_id == identity.user_id)
        return (await self.session.scalars(stmt)).all()

    async def get(self, assignment_id: str, identity: Identity) -> AssignmentModel:
        assignment = await self._load(assignment_id)
        if not is_owner_or_admin(identity, assignment.employee_id):
            raise ForbiddenError("Access denied.")
        return assignment

    async def update_status(
        self, assignment_id: str, identity: Identity, status: str
    ) -> AssignmentModel:
        new_status = parse_status(status)

        assignment = await self.session.get(AssignmentModel, assignment_id)
        if assignment is None:
            raise NotFoundError("Assignment not found.")
        if not is_owner_or_admin(identity, assignment.employee_id):
            await logger.awarning(
                "assignment_status_denied",
                assignment_id=assignment_id,
                user_id=identity.user_id,
            )
            raise ForbiddenError("Access denied.")

        previous = assignment.status
        assignment.set_status(new_status)
        await self.session.commit()

        await logger.ainfo(
            "assignment_status_updated",
            assignment_id=assignment_id,
            from_status=previous.value,
            to_status=new_status.value,
            user_id=identity.user_id,
        )
        return await self._load(assignment_id)

    async def delete(self, assignment_id: str) -> None:
        result = await self.session.execute(
            delete(AssignmentModel).where(AssignmentModel.id == assignment_id)
        )
        if result.rowcount == 0:
            await self.session.rollback()
            raise NotFoundError("Assignment not found.")
        await self.session.commit()
        await logger.ainfo("assignment_deleted", assignment_id=assignment_id)

    async def progress_summary(self) -> list[EmployeeProgress]:
        """Per-employee status counts, ordered by employee name."""

        def count_of(status: AssignmentStatus):
            return func.sum(case((AssignmentModel.status == status, 1), else_=0), type_=Integer)

        counts = (
            select(
                AssignmentModel.employee_id.label("employee_id"),
                func.count(AssignmentModel.id).label("total"),
                count_of(AssignmentStatus.COMPLETED).label("completed"),
                count_of(AssignmentStatus.IN_PROGRESS).label("in_progress"),
                count_of(AssignmentStatus.PENDING).label("pending"),
            )
            .group_by(AssignmentModel.employee_id)
            .subquery()
        )
        stmt = (
            select(
                counts.c.employee_id,
                UserModel.name,
                UserModel.email,
                counts.c.total,
                counts.c.completed,
                counts.c.in_progress,
                counts.c.pending,
            )
            .select_from(counts)
            .join(UserModel, UserModel.id == counts.c.employee_id)
            .order_by(UserModel.name.asc(), UserModel.email.asc())
        )
        rows = (await self.session.execute(stmt)).mappings().all()

        return [
            EmployeeProgress(
                employee_id=row["employee_id"],
                name=row["name"],
                email=row["email"],
                total=row["total"],
                completed=row["completed"] or 0,
                in_progress=row["in_progress"] or 0,
                pending=row["pending"] or 0,
            )
            for row in rows
        ]

    async def _exists(self, employee_id: str, training_id: str) -> bool:
        stmt = select(AssignmentModel.id).where(
            AssignmentModel.employee_id == employee_id,
            AssignmentModel.training_id == training_id,
        )
        return await self.session.scalar(stmt) is not None

    def _select(self):
        return select(AssignmentModel).options(
            selectinload(AssignmentModel.employee),
            selectinload(AssignmentModel.training),
            selectinload(AssignmentModel.assigned_by),
        )

    async def _load(self, assignment_id: str) -> AssignmentModel:
        stmt = (
            self._select()
            .where(AssignmentModel.id == assignment_id)
            .execution_options(populate_existing=True)
        )
        assignment = await self.session.scalar(stmt)
        if assignment is None:
            raise NotFoundError("Assignment not found.")
        return assignment
