from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from src.api.deps import get_current_user, get_db_session, require_admin
from src.api.schemas.common import MessageResponse
from src.api.schemas.trainings import (
    TrainingCreate,
    TrainingDetail,
    TrainingEnvelope,
    TrainingMutationResponse,
    TrainingsResponse,
    TrainingUpdate,
)
from src.domain import Identity
from src.domain.services.trainings import TrainingService

# Every route needs an authenticated caller; writes are narrowed to admins per route
router = APIRouter(
    prefix="/trainings",
    tags=["Trainings"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=TrainingsResponse)
async def list_trainings(session: AsyncSession = Depends(get_db_session)) -> TrainingsResponse:
    """Return all trainings, newest first."""
    trainings = await TrainingService(session).list()
    items = [TrainingDetail.model_validate(training) for training in trainings]
    return TrainingsResponse(count=len(items), trainings=items)


@router.get("/{training_id}", response_model=TrainingEnvelope)
async def get_training(
    training_id: str,
    session: AsyncSession = Depends(get_db_session),
) -> TrainingEnvelope:
    training = await TrainingService(session).get(training_id)
    return TrainingEnvelope(training=TrainingDetail.model_validate(training))


@router.post("", response_model=TrainingMutationResponse, status_code=status.HTTP_201_CREATED)
async def create_training(
    payload: TrainingCreate,
    session: AsyncSession = Depends(get_db_session),
    admin: Identity = Depends(require_admin),
) -> TrainingMutationResponse:
    """Create a new training (admin-only)."""
    training = await TrainingService(session).create(
        title=payload.title,
        description=payload.description,
        category=payload.category,
        duration_hours=payload.duration_hours,
        creator_id=admin.user_id,
    )
    return TrainingMutationResponse(
        message="Training created successfully.",
        training=TrainingDetail.model_validate(training),
    )


@router.put("/{training_id}", response_model=TrainingMutationResponse)
async def update_training(
    training_id: str,
    payload: TrainingUpdate,
    session: AsyncSession = Depends(get_db_session),
    _: Identity = Depends(require_admin),
) -> TrainingMutationResponse:
    """Update any subset of a training's fields (admin-only)."""
    training = await TrainingService(session).update(
        training_id,
        title=payload.title,
        description=payload.description,
        category=payload.category,
        duration_hours=payload.duration_hours,
    )
    return TrainingMutationResponse(
        message="Training updated successfully.",
        training=TrainingDetail.model_validate(training),
    )


@router.delete("/{training_id}", response_model=MessageResponse)
async def delete_training(
    training_id: str,
    session: AsyncSession = Depends(get_db_session),
    _: Identity = Depends(require_admin),
) -> MessageResponse:
    """Delete a training and its assignments (admin-only)."""
    await TrainingService(session).delete(training_id)
    return MessageResponse(message="Training deleted successfully.")
