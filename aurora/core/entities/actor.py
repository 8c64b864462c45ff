"""Acting user passed into every attributed operation."""

from enum import Enum

from pydantic import BaseModel


class UserRole(str, Enum):
    """Roles known to the dashboard."""

    ADMIN = "ADMIN"
    INTERNAL_EMPLOYEE = "INTERNAL_EMPLOYEE"
    CONTRACTOR = "CONTRACTOR"


class Actor(BaseModel):
    """The user performing an operation."""

    user_id: str
    role: UserRole = UserRole.INTERNAL_EMPLOYEE

    @classmethod
    def system(cls) -> "Actor":
        return cls(user_id="system", role=UserRole.ADMIN)
