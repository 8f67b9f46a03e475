"""Pytest fixtures for HR reporting tests."""

from __future__ import annotations

import itertools
from datetime import date, datetime, time
from decimal import Decimal
from typing import AsyncGenerator, Callable
from uuid import uuid4

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from hr_reporting.models import (
    AttendanceRecord,
    Base,
    Employee,
    PayrollRecord,
    SubmissionRecord,
)

# In-memory SQLite shared by every session of a test
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# A Friday, inside attendance hours
TEST_NOW = datetime(2024, 3, 15, 10, 0)
DEFAULT_JOIN_DATE = datetime(2023, 1, 2)


@pytest_asyncio.fixture
async def engine():
    """Create test database engine with a fresh schema."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    """Session factory configured like the application's."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create a database session for each test."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def now() -> datetime:
    """The fixed current time used by services under test."""
    return TEST_NOW


@pytest.fixture
def clock(now: datetime) -> Callable[[], datetime]:
    """A clock that always returns the fixed current time."""
    return lambda: now


@pytest.fixture
def make_employee(session: AsyncSession):
    """Factory creating directory entries."""
    counter = itertools.count(1)

    async def factory(
        name: str | None = None,
        department: str | None = "Engineering",
        position: str | None = "Engineer",
        join_date: datetime | None = DEFAULT_JOIN_DATE,
        role: str = "employee",
        status: str = "active",
        base_salary: Decimal | str = Decimal("5000.00"),
    ) -> Employee:
        n = next(counter)
        employee = Employee(
            employee_id=uuid4(),
            name=name or f"Employee {n:02d}",
            email=f"employee{n}@example.com",
            role=role,
            department=department,
            position=position,
            status=status,
            base_salary=Decimal(base_salary),
            join_date=join_date,
        )
        session.add(employee)
        await session.flush()
        return employee

    return factory


@pytest.fixture
def add_attendance(session: AsyncSession):
    """Factory creating an attendance record stamped on its day."""

    async def factory(
        employee: Employee,
        day: date,
        status: str = "present",
        at: time = time(9, 0),
        note: str | None = None,
    ) -> AttendanceRecord:
        stamp = datetime.combine(day, at)
        record = AttendanceRecord(
            attendance_id=uuid4(),
            employee_id=employee.employee_id,
            employee=employee,
            date=stamp,
            day=day,
            status=status,
            note=note,
            created_at=stamp,
            updated_at=stamp,
        )
        session.add(record)
        await session.flush()
        return record

    return factory


@pytest.fixture
def add_submission(session: AsyncSession):
    """Factory creating a submission filed at a given time."""

    async def factory(
        employee: Employee,
        created_at: datetime,
        type: str = "leave",
        status: str = "pending",
        reason: str = "Family matters",
    ) -> SubmissionRecord:
        dated = type == "leave"
        submission = SubmissionRecord(
            submission_id=uuid4(),
            employee_id=employee.employee_id,
            employee=employee,
            type=type,
            reason=reason,
            start_date=created_at if dated else None,
            end_date=created_at if dated else None,
            status=status,
            admin_notes="",
            created_at=created_at,
            updated_at=created_at,
        )
        session.add(submission)
        await session.flush()
        return submission

    return factory


@pytest.fixture
def add_payroll(session: AsyncSession):
    """Factory creating a payroll record whose total matches its parts."""

    async def factory(
        employee: Employee,
        month: int,
        year: int,
        deductions: str = "0.00",
        bonus: str = "0.00",
        tax: str = "0.00",
        status: str = "unpaid",
    ) -> PayrollRecord:
        payroll = PayrollRecord(
            payroll_id=uuid4(),
            employee_id=employee.employee_id,
            employee=employee,
            month=month,
            year=year,
            deductions=Decimal(deductions),
            bonus=Decimal(bonus),
            tax=Decimal(tax),
            total_amount=(
                employee.base_salary - Decimal(deductions) + Decimal(bonus) - Decimal(tax)
            ),
            status=status,
            created_at=datetime(year, month, 1),
            updated_at=datetime(year, month, 1),
        )
        session.add(payroll)
        await session.flush()
        return payroll

    return factory
