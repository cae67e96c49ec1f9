"""Domain entity describing the signed-in user."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class UserRole(str, Enum):
    CLIENT = "client"
    FREELANCER = "freelancer"
    ADMIN = "admin"


@dataclass(frozen=True)
class UserSession:
    """Identity and bearer token of the authenticated user."""

    user_id: str
    token: str
    role: UserRole | None = None

    def is_ready(self) -> bool:
        """Return ``True`` when both identity and token are present."""

        return bool(self.user_id) and bool(self.token)


__all__ = ["UserRole", "UserSession"]
