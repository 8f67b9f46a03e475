"""Attendance record model."""

from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint, Date, DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hr_reporting.models.base import Base, TimestampMixin, UpdatedAtMixin

if TYPE_CHECKING:
    from hr_reporting.models.employee import Employee


class AttendanceStatus(str, Enum):
    """Attendance status values."""

    PRESENT = "present"
    ABSENT = "absent"
    LEAVE = "leave"
    LATE = "late"
    SICK = "sick"
    WEEKEND = "weekend"


class AttendanceRecord(Base, TimestampMixin, UpdatedAtMixin):
    """One attendance entry for one employee on one calendar day."""

    __tablename__ = "attendance"

    attendance_id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    employee_id: Mapped[UUID] = mapped_column(
        ForeignKey("employee.employee_id", ondelete="CASCADE"),
        nullable=False,
    )
    date: Mapped[dt.datetime] = mapped_column(DateTime(), nullable=False)
    day: Mapped[dt.date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(
        String, nullable=False, default=AttendanceStatus.PRESENT.value
    )
    note: Mapped[str | None] = mapped_column(String(500), nullable=True)

    __table_args__ = (
        UniqueConstraint("employee_id", "day", name="attendance_employee_day_unique"),
        CheckConstraint(
            "status IN ('present', 'absent', 'leave', 'late', 'sick', 'weekend')",
            name="attendance_status_check",
        ),
    )

    # Relationships
    employee: Mapped[Employee] = relationship(back_populates="attendance")
