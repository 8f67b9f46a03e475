"""Leave and resignation submission model."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hr_reporting.models.base import Base, TimestampMixin, UpdatedAtMixin

if TYPE_CHECKING:
    from hr_reporting.models.employee import Employee


class SubmissionType(str, Enum):
    """Submission types."""

    LEAVE = "leave"
    RESIGNATION = "resignation"


class SubmissionRecord(Base, TimestampMixin, UpdatedAtMixin):
    """A leave request or resignation filed by an employee."""

    __tablename__ = "submission"

    submission_id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    employee_id: Mapped[UUID] = mapped_column(
        ForeignKey("employee.employee_id", ondelete="CASCADE"),
        nullable=False,
    )
    type: Mapped[str] = mapped_column(String, nullable=False)
    reason: Mapped[str] = mapped_column(Text, nullable=False)
    start_date: Mapped[datetime | None] = mapped_column(DateTime(), nullable=True)
    end_date: Mapped[datetime | None] = mapped_column(DateTime(), nullable=True)
    status: Mapped[str] = mapped_column(String, nullable=False, default="pending")
    file_url: Mapped[str | None] = mapped_column(String, nullable=True)
    admin_notes: Mapped[str] = mapped_column(Text, nullable=False, default="")

    __table_args__ = (
        CheckConstraint("type IN ('leave', 'resignation')", name="submission_type_check"),
        CheckConstraint(
            "status IN ('pending', 'approved', 'rejected')",
            name="submission_status_check",
        ),
        CheckConstraint(
            "(type = 'leave' AND start_date IS NOT NULL AND end_date IS NOT NULL) "
            "OR (type = 'resignation' AND start_date IS NULL AND end_date IS NULL)",
            name="submission_leave_dates_check",
        ),
        Index("submission_employee_status_idx", "employee_id", "status"),
        Index("submission_type_status_idx", "type", "status"),
    )

    # Relationships
    employee: Mapped[Employee] = relationship(back_populates="submissions")
