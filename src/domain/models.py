from __future__ import annotations

from dataclasses import dataclass

from src.core.auth import Role


@dataclass(frozen=True, slots=True)
class Identity:
    """Represents the authenticated actor behind a request."""

    user_id: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN
