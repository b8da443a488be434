"""Training catalog: admin-managed training definitions."""

from __future__ import annotations

import math
from collections.abc import Sequence

import structlog
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from src.domain.errors import NotFoundError, ValidationFailedError
from src.infrastructure.db.models import AssignmentModel, TrainingModel

logger = structlog.get_logger()

MIN_DURATION_HOURS = 0.5


def _check_duration(duration_hours: float) -> None:
    if not math.isfinite(duration_hours) or duration_hours < MIN_DURATION_HOURS:
        raise ValidationFailedError(f"Duration must be at least {MIN_DURATION_HOURS} hours.")


class TrainingService:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(
        self,
        *,
        title: str,
        description: str,
        category: str,
        duration_hours: float,
        creator_id: str,
    ) -> TrainingModel:
        _check_duration(duration_hours)

        training = TrainingModel(
            title=title,
            description=description,
            category=category,
            duration_hours=duration_hours,
            created_by_id=creator_id,
        )
        self.session.add(training)
        await self.session.commit()

        await logger.ainfo(
            "training_created",
            training_id=training.id,
            title=training.title,
            admin_user=creator_id,
        )
        return await self._load(training.id)

    async def list(self) -> Sequence[TrainingModel]:
        """Return all trainings, newest first."""
        stmt = (
            select(TrainingModel)
            .options(selectinload(TrainingModel.creator))
            .order_by(TrainingModel.created_at.desc())
        )
        return (await self.session.scalars(stmt)).all()

    async def get(self, training_id: str) -> TrainingModel:
        return await self._load(training_id)

    async def update(
        self,
        training_id: str,
        *,
        title: str | None = None,
        description: str | None = None,
        category: str | None = None,
        duration_hours: float | None = None,
    ) -> TrainingModel:
        """Apply the provided fields; omitted (None) fields keep their value."""
        training = await self._load(training_id)

        if duration_hours is not None:
            _check_duration(duration_hours)

        updates = {
            "title": title,
            "description": description,
            "category": category,
            "duration_hours": duration_hours,
        }
        changed = [field for field, value in updates.items() if value is not None]
        for field in changed:
            setattr(training, field, updates[field])

        await self.session.commit()

        await logger.ainfo(
            "training_updated", training_id=training_id, updated_fields=changed
        )
        return await self._load(training_id)

    async def delete(self, training_id: str) -> None:
        # Assignments hang off the training; drop them in the same transaction
        removed = await self.session.execute(
            delete(AssignmentModel).where(AssignmentModel.training_id == training_id)
        )
        result = await self.session.execute(
            delete(TrainingModel).where(TrainingModel.id == training_id)
        )
        if result.rowcount == 0:
            await self.session.rollback()
            raise NotFoundError("Training not found.")
        await self.session.commit()

        await logger.ainfo(
            "training_deleted",
            training_id=training_id,
            assignments_removed=removed.rowcount,
        )

    async def _load(self, training_id: str) -> TrainingModel:
        stmt = (
            select(TrainingModel)
            .where(TrainingModel.id == training_id)
            .options(selectinload(TrainingModel.creator))
            .execution_options(populate_existing=True)
        )
        training = await self.session.scalar(stmt)
        if training is None:
            raise NotFoundError("Training not found.")
        return training
