"""Domain failures raised by services and translated to HTTP responses by the API layer."""

from __future__ import annotations


class DomainError(Exception):
    """Base class for expected, user-facing failures."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationFailedError(DomainError):
    """Input has the right shape but an unacceptable value."""


class UnauthorizedError(DomainError):
    """Credentials are missing, invalid, or expired."""


class ForbiddenError(DomainError):
    """Caller is authenticated but lacks the role or ownership required."""


class NotFoundError(DomainError):
    """A referenced entity does not exist."""


class ConflictError(DomainError):
    """A uniqueness rule would be violated."""
