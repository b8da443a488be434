"""Domain services."""

from src.domain.services.assignments import AssignmentService, EmployeeProgress
from src.domain.services.auth_service import AuthService
from src.domain.services.trainings import TrainingService

__all__ = [
    "AssignmentService",
    "AuthService",
    "EmployeeProgress",
    "TrainingService",
]
