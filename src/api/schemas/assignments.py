from __future__ import annotations

from datetime import datetime

from pydantic import Field
from src.api.schemas.common import CamelModel, UserSummary
from src.infrastructure.db.models import AssignmentStatus


class AssignmentCreate(CamelModel):
    employee_id: str = Field(..., min_length=1)
    training_id: str = Field(..., min_length=1)


class StatusUpdate(CamelModel):
    # Checked against AssignmentStatus by the service so the error names the allowed values
    status: str


class TrainingSummary(CamelModel):
    id: str
    title: str
    category: str
    description: str
    duration_hours: float


class AssignmentDetail(CamelModel):
    id: str
    employee: UserSummary
    training: TrainingSummary
    assigned_by: UserSummary
    status: AssignmentStatus
    completed_at: datetime | None = None
    created_at: datetime
    updated_at: datetime


class AssignmentEnvelope(CamelModel):
    assignment: AssignmentDetail


class AssignmentMutationResponse(CamelModel):
    message: str
    assignment: AssignmentDetail


class AssignmentsResponse(CamelModel):
    count: int
    assignments: list[AssignmentDetail]


class ProgressEntry(CamelModel):
    employee: UserSummary
    total: int
    completed: int
    in_progress: int
    pending: int
    completion_rate: str


class ProgressResponse(CamelModel):
    summary: list[ProgressEntry]
