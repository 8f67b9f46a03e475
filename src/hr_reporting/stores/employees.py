"""Employee directory queries."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from hr_reporting.models import Employee


class EmployeeStore:
    """Read access to the employee directory, plus status changes."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_employee_by_id(self, employee_id: UUID) -> Employee | None:
        """Get one employee, or None."""
        return await self.session.get(Employee, employee_id)

    async def find_employees_by_role(
        self,
        role: str,
        status: str | None = "active",
    ) -> list[Employee]:
        """List employees with a role, optionally restricted to a status.

        Rows come back in a stable order (name, then ID) so rankings built
        on top of them are reproducible.
        """
        query = select(Employee).where(Employee.role == role)
        if status is not None:
            query = query.where(Employee.status == status)
        query = query.order_by(Employee.name, Employee.employee_id)

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def find_employees_by_department(
        self,
        department: str,
        role: str = "employee",
        status: str | None = "active",
    ) -> list[Employee]:
        """List employees of a department."""
        query = select(Employee).where(
            Employee.department == department,
            Employee.role == role,
        )
        if status is not None:
            query = query.where(Employee.status == status)
        query = query.order_by(Employee.name, Employee.employee_id)

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def distinct_departments(self) -> list[str]:
        """All non-null department names, sorted."""
        result = await self.session.execute(
            select(Employee.department)
            .where(Employee.department.is_not(None))
            .distinct()
            .order_by(Employee.department)
        )
        return [row for row in result.scalars().all() if row]

    async def set_status(self, employee_id: UUID, status: str) -> None:
        """Change an employee's status."""
        await self.session.execute(
            update(Employee)
            .where(Employee.employee_id == employee_id)
            .values(status=status)
        )
