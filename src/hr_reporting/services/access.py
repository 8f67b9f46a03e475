"""Caller identity and ownership checks."""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

ROLE_ADMIN = "admin"
ROLE_EMPLOYEE = "employee"
ROLE_CEO = "ceo"
ROLES = (ROLE_ADMIN, ROLE_EMPLOYEE, ROLE_CEO)


class NotAuthorizedError(Exception):
    """Raised when a caller may not act on a resource."""

    def __init__(self, message: str, status_code: int = 403):
        self.status_code = status_code
        super().__init__(message)


@dataclass(frozen=True)
class Caller:
    """The user a request acts for."""

    user_id: UUID
    role: str = ROLE_EMPLOYEE

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    def owns(self, employee_id: UUID) -> bool:
        """Check if a record belongs to the caller."""
        return self.user_id == employee_id


def require_owner_or_admin(
    caller: Caller,
    employee_id: UUID,
    message: str,
    status_code: int = 403,
) -> None:
    """Raise NotAuthorizedError unless the caller owns the record or is an admin."""
    if not caller.owns(employee_id) and not caller.is_admin:
        raise NotAuthorizedError(message, status_code=status_code)
