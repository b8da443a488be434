from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from src.api.deps import get_current_user, get_db_session, require_admin
from src.api.schemas.assignments import (
    AssignmentCreate,
    AssignmentDetail,
    AssignmentEnvelope,
    AssignmentMutationResponse,
    AssignmentsResponse,
    ProgressEntry,
    ProgressResponse,
    StatusUpdate,
)
from src.api.schemas.common import MessageResponse, UserSummary
from src.domain import Identity
from src.domain.services.assignments import AssignmentService

router = APIRouter(
    prefix="/assignments",
    tags=["Assignments"],
    dependencies=[Depends(get_current_user)],
)


# Declared before "/{assignment_id}" so "progress" is not taken for an id
@router.get("/progress", response_model=ProgressResponse)
async def progress_summary(
    session: AsyncSession = Depends(get_db_session),
    _: Identity = Depends(require_admin),
) -> ProgressResponse:
    """Per-employee completion summary (admin-only)."""
    rows = await AssignmentService(session).progress_summary()
    return ProgressResponse(
        summary=[
            ProgressEntry(
                employee=UserSummary(id=row.employee_id, name=row.name, email=row.email),
                total=row.total,
                completed=row.completed,
                in_progress=row.in_progress,
                pending=row.pending,
                completion_rate=row.completion_rate,
            )
            for row in rows
        ]
    )


@router.get("", response_model=AssignmentsResponse)
async def list_assignments(
    session: AsyncSession = Depends(get_db_session),
    identity: Identity = Depends(get_current_user),
) -> AssignmentsResponse:
    """Admins see every assignment, employees their own."""
    assignments = await AssignmentService(session).list_for(identity)
    items = [AssignmentDetail.model_validate(assignment) for assignment in assignments]
    return AssignmentsResponse(count=len(items), assignments=items)


@router.get("/{assignment_id}", response_model=AssignmentEnvelope)
async def get_assignment(
    assignment_id: str,
    session: AsyncSession = Depends(get_db_session),
    identity: Identity = Depends(get_current_user),
) -> AssignmentEnvelope:
    assignment = await AssignmentService(session).get(assignment_id, identity)
    return AssignmentEnvelope(assignment=AssignmentDetail.model_validate(assignment))


@router.post(
    "", response_model=AssignmentMutationResponse, status_code=status.HTTP_201_CREATED
)
async def assign_training(
    payload: AssignmentCreate,
    session: AsyncSession = Depends(get_db_session),
    admin: Identity = Depends(require_admin),
) -> AssignmentMutationResponse:
    """Assign a training to an employee (admin-only)."""
    assignment = await AssignmentService(session).assign(
        employee_id=payload.employee_id,
        training_id=payload.training_id,
        assigned_by_id=admin.user_id,
    )
    return AssignmentMutationResponse(
        message="Training assigned successfully.",
        assignment=AssignmentDetail.model_validate(assignment),
    )


@router.patch("/{assignment_id}/status", response_model=AssignmentMutationResponse)
async def update_assignment_status(
    assignment_id: str,
    payload: StatusUpdate,
    session: AsyncSession = Depends(get_db_session),
    identity: Identity = Depends(get_current_user),
) -> AssignmentMutationResponse:
    """Employees update their own assignments; admins may update any."""
    assignment = await AssignmentService(session).update_status(
        assignment_id, identity, payload.status
    )
    return AssignmentMutationResponse(
        message="Status updated successfully.",
        assignment=AssignmentDetail.model_validate(assignment),
    )


@router.delete("/{assignment_id}", response_model=MessageResponse)
async def delete_assignment(
    assignment_id: str,
    session: AsyncSession = Depends(get_db_session),
    _: Identity = Depends(require_admin),
) -> MessageResponse:
    await AssignmentService(session).delete(assignment_id)
    return MessageResponse(message="Assignment deleted successfully.")
