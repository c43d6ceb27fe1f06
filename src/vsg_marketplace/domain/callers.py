"""Authenticated caller identity."""

from dataclasses import dataclass
from enum import Enum


class CallerRole(Enum):
    """Roles a caller may hold."""

    USER = "user"
    ADMIN = "admin"


@dataclass(frozen=True)
class Caller:
    """Caller resolved by the API layer from a validated token."""

    email: str
    role: CallerRole = CallerRole.USER

    @property
    def is_admin(self) -> bool:
        return self.role is CallerRole.ADMIN
