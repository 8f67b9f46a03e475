"""Monthly payroll record model."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hr_reporting.models.base import Base, TimestampMixin, UpdatedAtMixin

if TYPE_CHECKING:
    from hr_reporting.models.employee import Employee


class PayrollRecord(Base, TimestampMixin, UpdatedAtMixin):
    """Payroll for one employee for one calendar month.

    ``total_amount`` always equals the employee's base salary minus
    deductions plus bonus minus tax.
    """

    __tablename__ = "payroll"

    payroll_id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    employee_id: Mapped[UUID] = mapped_column(
        ForeignKey("employee.employee_id", ondelete="CASCADE"),
        nullable=False,
    )
    month: Mapped[int] = mapped_column(Integer, nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    deductions: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    bonus: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    tax: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    total_amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    status: Mapped[str] = mapped_column(String, nullable=False, default="unpaid")
    payment_method: Mapped[str | None] = mapped_column(String, nullable=True)
    payment_reference: Mapped[str | None] = mapped_column(String, nullable=True)
    payment_date: Mapped[datetime | None] = mapped_column(DateTime(), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        UniqueConstraint(
            "employee_id", "month", "year", name="payroll_employee_period_unique"
        ),
        CheckConstraint("month BETWEEN 1 AND 12", name="payroll_month_check"),
        CheckConstraint("status IN ('paid', 'unpaid')", name="payroll_status_check"),
        CheckConstraint(
            "payment_method IS NULL OR payment_method IN ('bank', 'cash', 'check')",
            name="payroll_payment_method_check",
        ),
    )

    # Relationships
    employee: Mapped[Employee] = relationship(back_populates="payrolls")

    def recompute_total(self, base_salary: Decimal) -> Decimal:
        """Recompute total_amount from the base salary and adjustments."""
        self.total_amount = (
            Decimal(base_salary) - self.deductions + self.bonus - self.tax
        )
        return self.total_amount
