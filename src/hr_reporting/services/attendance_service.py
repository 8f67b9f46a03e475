"""Attendance record service: self-service check-in, admin entry, auto-absent."""

from __future__ import annotations

import logging
from datetime import date, datetime, time
from typing import Any, Callable
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from hr_reporting.models import AttendanceRecord, AttendanceStatus
from hr_reporting.reporting.date_range import parse_selector, resolve_calendar_range
from hr_reporting.reporting.working_days import is_working_day
from hr_reporting.services.access import Caller, require_owner_or_admin
from hr_reporting.stores import AttendanceStore, EmployeeStore

logger = logging.getLogger(__name__)

RECENT_LIMIT = 30
UPDATABLE_FIELDS = ("status", "note")


class AttendanceWindowError(Exception):
    """Raised when attendance is submitted or edited outside its window."""


class DuplicateAttendanceError(Exception):
    """Raised when an employee already has a record for a day."""

    def __init__(self, employee_id: UUID, day: date):
        self.employee_id = employee_id
        self.day = day
        super().__init__("Attendance already submitted for today")


class AttendanceNotFoundError(Exception):
    """Raised when an attendance record does not exist."""

    def __init__(self, attendance_id: UUID):
        self.attendance_id = attendance_id
        super().__init__("Attendance record not found")


class AttendanceValidationError(Exception):
    """Raised when attendance input is invalid."""


class AttendanceService:
    """Creates, updates and lists attendance records.

    Every record carries the calendar day it belongs to, and at most one
    record exists per employee and day. Records entered for another day have
    their creation time stamped to that day so window queries place them in
    the right month.
    """

    def __init__(
        self,
        session: AsyncSession,
        clock: Callable[[], datetime] = datetime.now,
        open_hour: int = 8,
        close_hour: int = 17,
    ):
        self.session = session
        self.clock = clock
        self.open_hour = open_hour
        self.close_hour = close_hour
        self.attendance = AttendanceStore(session)
        self.employees = EmployeeStore(session)

    def check_window(self, now: datetime) -> None:
        """Raise AttendanceWindowError unless now is inside working hours."""
        if not is_working_day(now):
            raise AttendanceWindowError("Today is the weekend. Attendance is not required.")
        if now.hour < self.open_hour or now.hour >= self.close_hour:
            raise AttendanceWindowError(
                f"Attendance is only allowed between {self.open_hour:02d}:00 "
                f"and {self.close_hour:02d}:00."
            )

    async def submit_attendance(
        self,
        employee_id: UUID,
        status: str,
        note: str | None = None,
    ) -> AttendanceRecord:
        """Record the caller's own attendance for today.

        Raises:
            AttendanceWindowError: On weekends or outside working hours
            DuplicateAttendanceError: If today already has a record
        """
        now = self.clock()
        self.check_window(now)
        _validate_status(status)

        if await self.attendance.find_attendance_today(employee_id, now) is not None:
            raise DuplicateAttendanceError(employee_id, now.date())

        record = AttendanceRecord(
            employee_id=employee_id,
            date=now,
            day=now.date(),
            status=status,
            note=note,
            created_at=now,
            updated_at=now,
        )
        return await self.attendance.add(record)

    async def record_attendance(
        self,
        employee_id: UUID,
        day: date,
        status: str,
        note: str | None = None,
    ) -> AttendanceRecord:
        """Record attendance for any employee and day (admin entry).

        Raises:
            AttendanceValidationError: If the employee does not exist
            DuplicateAttendanceError: If the day already has a record
        """
        _validate_status(status)
        if await self.employees.find_employee_by_id(employee_id) is None:
            raise AttendanceValidationError(f"Employee {employee_id} not found")
        if await self.attendance.find_attendance_on_day(employee_id, day) is not None:
            raise DuplicateAttendanceError(employee_id, day)

        stamp = datetime.combine(day, self.clock().time())
        record = AttendanceRecord(
            employee_id=employee_id,
            date=stamp,
            day=day,
            status=status,
            note=note,
            created_at=stamp,
            updated_at=self.clock(),
        )
        return await self.attendance.add(record)

    async def get_attendance(self, attendance_id: UUID) -> AttendanceRecord:
        """Get one record.

        Raises:
            AttendanceNotFoundError: If no such record exists
        """
        record = await self.attendance.get(attendance_id)
        if record is None:
            raise AttendanceNotFoundError(attendance_id)
        return record

    async def update_attendance(
        self,
        attendance_id: UUID,
        caller: Caller,
        changes: dict[str, Any],
    ) -> AttendanceRecord:
        """Change status and/or note of a record.

        Owners may edit today's record only; admins may edit any record.
        Keys missing from changes keep their value.
        """
        record = await self.get_attendance(attendance_id)
        require_owner_or_admin(
            caller,
            record.employee_id,
            "Not authorized to update this attendance record",
            status_code=401,
        )
        if record.day != self.clock().date() and not caller.is_admin:
            raise AttendanceWindowError("Cannot update past attendance records")

        if changes.get("status"):
            _validate_status(changes["status"])
            record.status = changes["status"]
        if "note" in changes:
            record.note = changes["note"]
        record.updated_at = self.clock()

        await self.session.flush()
        return record

    async def list_recent(self, employee_id: UUID) -> list[AttendanceRecord]:
        """The caller's most recent records."""
        return await self.attendance.list_recent(employee_id, limit=RECENT_LIMIT)

    async def list_all(self) -> list[AttendanceRecord]:
        """Every record with its employee."""
        return await self.attendance.list_all()

    async def list_for_employee(
        self,
        employee_id: UUID,
        month: int | None = None,
        year: int | None = None,
    ) -> list[AttendanceRecord]:
        """Records of an employee in a month or year, or all of them."""
        window = resolve_calendar_range(parse_selector(month, year), self.clock())
        if window is None:
            return await self.attendance.list_for_employee(employee_id)
        return await self.attendance.list_for_employee(
            employee_id, window.start, window.end
        )

    async def mark_absentees(self, day: date | None = None) -> list[AttendanceRecord]:
        """Mark every active employee without a record on a weekday as absent.

        Returns the records created; weekends create nothing.
        """
        if day is None:
            day = self.clock().date()
        if not is_working_day(day):
            logger.info("Skipping auto-absent for %s: not a working day", day)
            return []

        stamp = datetime.combine(day, time(hour=self.close_hour))
        note = (
            "Automatically marked absent due to no attendance by "
            f"{self.close_hour:02d}:00"
        )

        created = []
        for employee in await self.employees.find_employees_by_role("employee"):
            existing = await self.attendance.find_attendance_on_day(
                employee.employee_id, day
            )
            if existing is not None:
                continue
            record = AttendanceRecord(
                employee_id=employee.employee_id,
                date=stamp,
                day=day,
                status=AttendanceStatus.ABSENT.value,
                note=note,
                created_at=stamp,
                updated_at=stamp,
            )
            created.append(await self.attendance.add(record))

        logger.info("Marked %d employee(s) absent for %s", len(created), day)
        return created


def _validate_status(status: str) -> None:
    valid = {s.value for s in AttendanceStatus}
    if status not in valid:
        raise AttendanceValidationError(
            f"Invalid attendance status '{status}', expected one of {sorted(valid)}"
        )
