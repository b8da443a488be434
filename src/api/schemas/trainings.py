from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import AliasChoices, Field, StringConstraints
from src.api.schemas.common import CamelModel, UserSummary

Title = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]
Category = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=128)]
Description = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class TrainingCreate(CamelModel):
    title: Title
    description: Description
    category: Category
    duration_hours: float = Field(
        ..., ge=0.5, allow_inf_nan=False, description="Duration in hours, at least 0.5"
    )


class TrainingUpdate(CamelModel):
    title: Title | None = None
    description: Description | None = None
    category: Category | None = None
    duration_hours: float | None = Field(None, ge=0.5, allow_inf_nan=False)


class TrainingDetail(CamelModel):
    id: str
    title: str
    description: str
    category: str
    duration_hours: float
    # ORM attribute is "creator"; re-validation of dumped responses sees "createdBy"
    created_by: UserSummary = Field(
        ...,
        validation_alias=AliasChoices("creator", "createdBy", "created_by"),
        serialization_alias="createdBy",
    )
    created_at: datetime
    updated_at: datetime


class TrainingEnvelope(CamelModel):
    training: TrainingDetail


class TrainingMutationResponse(CamelModel):
    message: str
    training: TrainingDetail


class TrainingsResponse(CamelModel):
    count: int
    trainings: list[TrainingDetail]
