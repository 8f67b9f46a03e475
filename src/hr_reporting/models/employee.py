"""Employee directory model."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint, DateTime, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hr_reporting.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from hr_reporting.models.attendance import AttendanceRecord
    from hr_reporting.models.payroll import PayrollRecord
    from hr_reporting.models.submission import SubmissionRecord


class Employee(Base, TimestampMixin):
    """A person in the employee directory.

    Employees are referenced by attendance, submission and payroll records.
    Only rows with role ``employee`` take part in reporting.
    """

    __tablename__ = "employee"

    employee_id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    name: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    role: Mapped[str] = mapped_column(String, nullable=False, default="employee")
    department: Mapped[str | None] = mapped_column(String, nullable=True)
    position: Mapped[str | None] = mapped_column(String, nullable=True)
    status: Mapped[str] = mapped_column(String, nullable=False, default="active")
    base_salary: Mapped[Decimal] = mapped_column(
        Numeric(14, 2), nullable=False, default=Decimal("0")
    )
    join_date: Mapped[datetime | None] = mapped_column(DateTime(), nullable=True)

    __table_args__ = (
        CheckConstraint(
            "role IN ('admin', 'employee', 'ceo')",
            name="employee_role_check",
        ),
        CheckConstraint(
            "status IN ('active', 'inactive')",
            name="employee_status_check",
        ),
    )

    # Relationships
    attendance: Mapped[list[AttendanceRecord]] = relationship(back_populates="employee")
    submissions: Mapped[list[SubmissionRecord]] = relationship(back_populates="employee")
    payrolls: Mapped[list[PayrollRecord]] = relationship(back_populates="employee")

    @property
    def is_active(self) -> bool:
        """Check if the employee is currently active."""
        return self.status == "active"
