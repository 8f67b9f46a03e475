"""Tests for attendance entry and automatic absences."""

from datetime import date, datetime, time
from uuid import uuid4

import pytest

from hr_reporting.services import (
    AttendanceNotFoundError,
    AttendanceService,
    AttendanceValidationError,
    AttendanceWindowError,
    Caller,
    DuplicateAttendanceError,
    NotAuthorizedError,
)

pytestmark = pytest.mark.asyncio


@pytest.fixture
def service(session, clock):
    return AttendanceService(session, clock=clock)


class TestAttendanceWindow:
    """Test the submission window."""

    def test_weekend(self, service):
        with pytest.raises(AttendanceWindowError) as exc_info:
            service.check_window(datetime(2024, 3, 16, 10, 0))

        assert str(exc_info.value) == "Today is the weekend. Attendance is not required."

    @pytest.mark.parametrize("hour, minute", [(7, 59), (17, 0), (18, 30)])
    def test_outside_hours(self, service, hour, minute):
        with pytest.raises(AttendanceWindowError) as exc_info:
            service.check_window(datetime(2024, 3, 15, hour, minute))

        assert str(exc_info.value) == "Attendance is only allowed between 08:00 and 17:00."

    @pytest.mark.parametrize("hour, minute", [(8, 0), (12, 30), (16, 59)])
    def test_inside_hours(self, service, hour, minute):
        service.check_window(datetime(2024, 3, 15, hour, minute))


class TestSubmitAttendance:
    """Test self-service attendance."""

    async def test_submit(self, service, make_employee, now):
        employee = await make_employee()

        record = await service.submit_attendance(employee.employee_id, "present", "On site")

        assert record.status == "present"
        assert record.day == now.date()
        assert record.created_at == now
        assert record.note == "On site"

    async def test_second_submission_rejected(self, service, make_employee):
        employee = await make_employee()
        await service.submit_attendance(employee.employee_id, "present")

        with pytest.raises(DuplicateAttendanceError) as exc_info:
            await service.submit_attendance(employee.employee_id, "late")

        assert str(exc_info.value) == "Attendance already submitted for today"

    async def test_invalid_status(self, service, make_employee):
        employee = await make_employee()

        with pytest.raises(AttendanceValidationError):
            await service.submit_attendance(employee.employee_id, "vacation")

    async def test_weekend_rejected(self, session, make_employee):
        employee = await make_employee()
        service = AttendanceService(session, clock=lambda: datetime(2024, 3, 17, 10, 0))

        with pytest.raises(AttendanceWindowError):
            await service.submit_attendance(employee.employee_id, "present")


class TestRecordAttendance:
    """Test admin entry for arbitrary days."""

    async def test_record_past_day(self, service, make_employee):
        employee = await make_employee()

        record = await service.record_attendance(
            employee.employee_id, date(2024, 3, 4), "sick", "Flu"
        )

        assert record.day == date(2024, 3, 4)
        assert record.created_at == datetime(2024, 3, 4, 10, 0)

    async def test_duplicate_day(self, service, make_employee, add_attendance):
        employee = await make_employee()
        await add_attendance(employee, date(2024, 3, 4))

        with pytest.raises(DuplicateAttendanceError):
            await service.record_attendance(employee.employee_id, date(2024, 3, 4), "late")

    async def test_unknown_employee(self, service):
        with pytest.raises(AttendanceValidationError):
            await service.record_attendance(uuid4(), date(2024, 3, 4), "present")


class TestUpdateAttendance:
    """Test record changes and ownership."""

    async def test_owner_updates_today(self, service, make_employee, add_attendance, now):
        employee = await make_employee()
        record = await add_attendance(employee, now.date())

        updated = await service.update_attendance(
            record.attendance_id,
            Caller(user_id=employee.employee_id),
            {"status": "late", "note": "Train delay"},
        )

        assert updated.status == "late"
        assert updated.note == "Train delay"

    async def test_note_kept_when_omitted(self, service, make_employee, add_attendance, now):
        employee = await make_employee()
        record = await add_attendance(employee, now.date(), note="Remote")

        updated = await service.update_attendance(
            record.attendance_id, Caller(user_id=employee.employee_id), {"status": "late"}
        )

        assert updated.note == "Remote"

    async def test_other_employee_rejected(
        self, service, make_employee, add_attendance, now
    ):
        owner = await make_employee()
        other = await make_employee()
        record = await add_attendance(owner, now.date())

        with pytest.raises(NotAuthorizedError) as exc_info:
            await service.update_attendance(
                record.attendance_id, Caller(user_id=other.employee_id), {"status": "late"}
            )

        assert exc_info.value.status_code == 401

    async def test_owner_cannot_edit_past(self, service, make_employee, add_attendance):
        employee = await make_employee()
        record = await add_attendance(employee, date(2024, 3, 14))

        with pytest.raises(AttendanceWindowError):
            await service.update_attendance(
                record.attendance_id,
                Caller(user_id=employee.employee_id),
                {"status": "late"},
            )

    async def test_admin_edits_past(self, service, make_employee, add_attendance):
        employee = await make_employee()
        admin = await make_employee(role="admin")
        record = await add_attendance(employee, date(2024, 3, 14))

        updated = await service.update_attendance(
            record.attendance_id,
            Caller(user_id=admin.employee_id, role="admin"),
            {"status": "sick"},
        )

        assert updated.status == "sick"

    async def test_missing_record(self, service):
        with pytest.raises(AttendanceNotFoundError):
            await service.update_attendance(uuid4(), Caller(user_id=uuid4()), {})


class TestListAttendance:
    """Test record listings."""

    async def test_list_for_month(self, service, make_employee, add_attendance):
        employee = await make_employee()
        await add_attendance(employee, date(2024, 2, 29))
        await add_attendance(employee, date(2024, 3, 1))
        await add_attendance(employee, date(2024, 3, 4))

        march = await service.list_for_employee(employee.employee_id, month=3, year=2024)
        everything = await service.list_for_employee(employee.employee_id)

        assert [r.day for r in march] == [date(2024, 3, 1), date(2024, 3, 4)]
        assert len(everything) == 3

    async def test_list_recent_newest_first(self, service, make_employee, add_attendance):
        employee = await make_employee()
        await add_attendance(employee, date(2024, 3, 1))
        await add_attendance(employee, date(2024, 3, 4))

        records = await service.list_recent(employee.employee_id)

        assert [r.day for r in records] == [date(2024, 3, 4), date(2024, 3, 1)]


class TestMarkAbsentees:
    """Test automatic absences at close of day."""

    async def test_marks_missing_employees(self, service, make_employee, add_attendance, now):
        present = await make_employee(name="Alice")
        missing = await make_employee(name="Bob")
        await make_employee(name="Carol", status="inactive")
        await make_employee(name="Root", role="admin")
        await add_attendance(present, now.date())

        created = await service.mark_absentees(now.date())

        assert [r.employee_id for r in created] == [missing.employee_id]
        record = created[0]
        assert record.status == "absent"
        assert record.created_at == datetime.combine(now.date(), time(17, 0))
        assert record.note == "Automatically marked absent due to no attendance by 17:00"

    async def test_second_run_creates_nothing(self, service, make_employee, now):
        await make_employee()

        await service.mark_absentees(now.date())

        assert await service.mark_absentees(now.date()) == []

    async def test_weekend_skipped(self, service, make_employee):
        await make_employee()

        assert await service.mark_absentees(date(2024, 3, 16)) == []

    async def test_defaults_to_today(self, service, make_employee, now):
        await make_employee()

        created = await service.mark_absentees()

        assert created[0].day == now.date()
