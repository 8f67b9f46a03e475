"""Tests for payroll computation, generation and payments."""

from datetime import date, datetime, timedelta
from decimal import Decimal
from uuid import uuid4

import pytest

from hr_reporting.reporting.working_days import is_working_day
from hr_reporting.services import (
    InvalidTransitionError,
    PaymentValidationError,
    PayrollNotFoundError,
    PayrollService,
)
from hr_reporting.services.payroll_service import compute_payroll_amounts

pytestmark = pytest.mark.asyncio


class TestComputePayrollAmounts:
    """Test deductions, bonus and tax rules."""

    def test_full_attendance_earns_bonus(self):
        amounts = compute_payroll_amounts(
            Decimal("5000"), working_days=20, present=20, absent=0, late=0, sick=0, leave=0
        )

        assert amounts["deductions"] == Decimal("0.00")
        assert amounts["bonus"] == Decimal("1000.00")
        assert amounts["tax"] == Decimal("250.00")
        assert amounts["total_amount"] == Decimal("5750.00")

    def test_absent_and_late_days_deducted(self):
        amounts = compute_payroll_amounts(
            Decimal("5000"), working_days=20, present=15, absent=3, late=2, sick=0, leave=0
        )

        # 3 full days plus 2 half days at 250 per day
        assert amounts["deductions"] == Decimal("1000.00")
        assert amounts["bonus"] == Decimal("0.00")
        assert amounts["total_amount"] == Decimal("3750.00")

    def test_sick_and_leave_count_toward_bonus(self):
        amounts = compute_payroll_amounts(
            Decimal("5000"), working_days=20, present=15, absent=0, late=0, sick=2, leave=2
        )

        assert amounts["bonus"] == Decimal("1000.00")

    def test_bonus_threshold_is_strict(self):
        amounts = compute_payroll_amounts(
            Decimal("5000"), working_days=20, present=18, absent=2, late=0, sick=0, leave=0
        )

        assert amounts["bonus"] == Decimal("0.00")

    def test_amounts_rounded_to_cents(self):
        amounts = compute_payroll_amounts(
            Decimal("3000"), working_days=21, present=20, absent=1, late=0, sick=0, leave=0
        )

        assert amounts["deductions"] == Decimal("142.86")
        assert amounts["total_amount"] == Decimal("3000") - Decimal("142.86") + Decimal(
            "600.00"
        ) - Decimal("150.00")


class TestGenerateMonthlyPayroll:
    """Test monthly payroll generation."""

    @pytest.fixture
    def service(self, session, clock):
        return PayrollService(session, clock=clock)

    async def test_generates_from_previous_month(
        self, service, make_employee, add_attendance, add_payroll
    ):
        alice = await make_employee(name="Alice", base_salary="4200.00")
        bob = await make_employee(name="Bob")
        await make_employee(name="Root", role="admin")
        await add_payroll(bob, 3, 2024)

        # February 2024 has 21 working days; Alice records 20 of them
        day = date(2024, 2, 1)
        recorded = 0
        while recorded < 20:
            if is_working_day(day):
                await add_attendance(alice, day)
                recorded += 1
            day += timedelta(days=1)

        created = await service.generate_monthly_payroll(datetime(2024, 3, 1))

        assert len(created) == 1
        record = created[0]
        assert record.employee_id == alice.employee_id
        assert (record.month, record.year) == (3, 2024)
        assert record.status == "unpaid"
        assert record.deductions == Decimal("200.00")
        assert record.bonus == Decimal("840.00")
        assert record.tax == Decimal("210.00")
        assert record.total_amount == Decimal("4630.00")

    async def test_generation_is_idempotent(self, service, make_employee):
        await make_employee()

        first = await service.generate_monthly_payroll(datetime(2024, 3, 1))
        second = await service.generate_monthly_payroll(datetime(2024, 3, 1))

        assert len(first) == 1
        assert second == []

    async def test_uses_clock_by_default(self, service, make_employee):
        await make_employee()

        created = await service.generate_monthly_payroll()

        assert (created[0].month, created[0].year) == (3, 2024)


class TestPayrollRecords:
    """Test listing and adjustments."""

    @pytest.fixture
    def service(self, session, clock):
        return PayrollService(session, clock=clock)

    async def test_list_for_period(self, service, make_employee, add_payroll):
        alice = await make_employee(name="Alice")
        await add_payroll(alice, 1, 2024)
        await add_payroll(alice, 2, 2024)

        records = await service.list_for_period(1, 2024)

        assert [(r.month, r.year) for r in records] == [(1, 2024)]

    async def test_list_for_employee_without_payroll(self, service, make_employee):
        employee = await make_employee()

        with pytest.raises(PayrollNotFoundError):
            await service.list_for_employee(employee.employee_id)

    async def test_get_missing(self, service):
        with pytest.raises(PayrollNotFoundError) as exc_info:
            await service.get_payroll(uuid4())

        assert str(exc_info.value) == "Payroll not found"

    async def test_adjustment_recomputes_total(self, service, make_employee, add_payroll):
        employee = await make_employee(base_salary="5000.00")
        payroll = await add_payroll(employee, 1, 2024, deductions="100.00", tax="250.00")

        updated = await service.update_payroll(payroll.payroll_id, {"bonus": 500})

        assert updated.bonus == Decimal("500.00")
        assert updated.total_amount == Decimal("5150.00")

    async def test_payment_details_keep_total(self, service, make_employee, add_payroll):
        employee = await make_employee(base_salary="5000.00")
        payroll = await add_payroll(employee, 1, 2024, tax="250.00")

        updated = await service.update_payroll(
            payroll.payroll_id, {"payment_method": "bank", "notes": "March run"}
        )

        assert updated.payment_method == "bank"
        assert updated.notes == "March run"
        assert updated.total_amount == Decimal("4750.00")

    async def test_invalid_method_rejected(self, service, make_employee, add_payroll):
        employee = await make_employee()
        payroll = await add_payroll(employee, 1, 2024)

        with pytest.raises(PaymentValidationError):
            await service.update_payroll(payroll.payroll_id, {"payment_method": "crypto"})


class TestProcessPayment:
    """Test the paid/unpaid lifecycle."""

    @pytest.fixture
    def service(self, session, clock):
        return PayrollService(session, clock=clock)

    @pytest.fixture
    async def payroll(self, make_employee, add_payroll):
        employee = await make_employee()
        return await add_payroll(employee, 2, 2024, tax="250.00")

    async def test_paid_requires_method_and_date(self, service, payroll):
        with pytest.raises(PaymentValidationError) as exc_info:
            await service.process_payment(payroll.payroll_id, status="paid")

        assert "Payment method and payment date are required" in str(exc_info.value)
        assert payroll.status == "unpaid"

    async def test_mark_paid(self, service, payroll):
        paid_at = datetime(2024, 3, 1, 9, 0)

        record = await service.process_payment(
            payroll.payroll_id,
            status="paid",
            payment_method="bank",
            payment_reference="TRX-1001",
            payment_date=paid_at,
        )

        assert record.status == "paid"
        assert record.payment_method == "bank"
        assert record.payment_reference == "TRX-1001"
        assert record.payment_date == paid_at

    async def test_revert_clears_details(self, service, payroll):
        await service.process_payment(
            payroll.payroll_id,
            status="paid",
            payment_method="cash",
            payment_date=datetime(2024, 3, 1),
            notes="Paid at the desk",
        )

        record = await service.process_payment(payroll.payroll_id, status="unpaid")

        assert record.status == "unpaid"
        assert record.payment_method is None
        assert record.payment_reference is None
        assert record.payment_date is None
        assert record.notes is None

    async def test_details_without_status(self, service, payroll):
        record = await service.process_payment(payroll.payroll_id, notes="Pending approval")

        assert record.status == "unpaid"
        assert record.notes == "Pending approval"

    async def test_invalid_status(self, service, payroll):
        with pytest.raises(PaymentValidationError):
            await service.process_payment(payroll.payroll_id, status="void")

    async def test_invalid_method(self, service, payroll):
        with pytest.raises(PaymentValidationError):
            await service.process_payment(
                payroll.payroll_id,
                status="paid",
                payment_method="crypto",
                payment_date=datetime(2024, 3, 1),
            )


def test_invalid_transition_message():
    error = InvalidTransitionError("paid", "void")

    assert str(error) == "Invalid transition from 'paid' to 'void'"
