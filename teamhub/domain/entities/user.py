"""Domain entities representing users and authenticated principals."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class UserRole(str, Enum):
    """Roles a user can hold across the workspace."""

    MEMBER = "MEMBER"
    MANAGER = "MANAGER"


@dataclass
class User:
    """Core attributes describing an application user."""

    id: str | None
    name: str
    email: str
    password: str | None
    role: UserRole = UserRole.MEMBER
    avatar: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def is_manager(self) -> bool:
        """Return ``True`` when the user has the manager role."""

        return self.role == UserRole.MANAGER


@dataclass(frozen=True)
class Principal:
    """Identity decoded from a bearer credential."""

    id: str
    email: str
    name: str
    role: str


__all__ = ["User", "UserRole", "Principal"]
