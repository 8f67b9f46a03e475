"""Leave and resignation submissions."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from hr_reporting.models import SubmissionRecord, SubmissionType
from hr_reporting.services.access import Caller, require_owner_or_admin
from hr_reporting.services.state_machine import SubmissionStateMachine, SubmissionStatus
from hr_reporting.stores import EmployeeStore, SubmissionStore

logger = logging.getLogger(__name__)


class SubmissionNotFoundError(Exception):
    """Raised when a submission does not exist."""

    def __init__(self, submission_id: UUID):
        self.submission_id = submission_id
        super().__init__("Submission not found")


class SubmissionValidationError(Exception):
    """Raised when submission input is invalid."""


class SubmissionService:
    """Files submissions and moves them through review.

    Review is one-way: a pending submission becomes approved or rejected
    and stays that way. Approving a resignation deactivates the employee.
    """

    def __init__(
        self,
        session: AsyncSession,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.session = session
        self.clock = clock
        self.submissions = SubmissionStore(session)
        self.employees = EmployeeStore(session)

    async def create_submission(
        self,
        employee_id: UUID,
        type: str,
        reason: str,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
        file_url: str | None = None,
    ) -> SubmissionRecord:
        """File a submission for an employee.

        Leave needs both dates; resignations never keep dates.

        Raises:
            SubmissionValidationError: On an unknown type or missing leave dates
        """
        if type not in {t.value for t in SubmissionType}:
            raise SubmissionValidationError(f"Invalid submission type '{type}'")

        if type == SubmissionType.LEAVE.value:
            if start_date is None or end_date is None:
                raise SubmissionValidationError(
                    "Start date and end date are required for leave requests"
                )
            if end_date < start_date:
                raise SubmissionValidationError("End date must not be before start date")
        else:
            start_date = end_date = None

        now = self.clock()
        submission = SubmissionRecord(
            employee_id=employee_id,
            type=type,
            reason=reason,
            start_date=start_date,
            end_date=end_date,
            file_url=file_url,
            status=SubmissionStatus.PENDING.value,
            admin_notes="",
            created_at=now,
            updated_at=now,
        )
        return await self.submissions.add(submission)

    async def list_for_employee(self, employee_id: UUID) -> list[SubmissionRecord]:
        """An employee's submissions, newest first."""
        return await self.submissions.list_submissions(employee_id=employee_id)

    async def list_submissions(
        self,
        type: str | None = None,
        status: str | None = None,
        employee_id: UUID | None = None,
    ) -> list[SubmissionRecord]:
        """Every submission matching the filters, newest first."""
        return await self.submissions.list_submissions(
            type=type, status=status, employee_id=employee_id
        )

    async def get_submission(
        self, submission_id: UUID, caller: Caller | None = None
    ) -> SubmissionRecord:
        """Get one submission, checking ownership when a caller is given.

        Raises:
            SubmissionNotFoundError: If no such submission exists
            NotAuthorizedError: If the caller is neither owner nor admin
        """
        submission = await self.submissions.get(submission_id)
        if submission is None:
            raise SubmissionNotFoundError(submission_id)
        if caller is not None:
            require_owner_or_admin(
                caller,
                submission.employee_id,
                "Not authorized to view this submission",
            )
        return submission

    async def update_status(
        self,
        submission_id: UUID,
        status: str,
        admin_notes: str | None = None,
    ) -> SubmissionRecord:
        """Approve or reject a pending submission.

        Raises:
            SubmissionNotFoundError: If no such submission exists
            InvalidTransitionError: If the submission was already reviewed
        """
        submission = await self.get_submission(submission_id)
        SubmissionStateMachine.validate_transition(submission.status, status)

        submission.status = status
        if admin_notes:
            submission.admin_notes = admin_notes
        submission.updated_at = self.clock()

        if (
            submission.type == SubmissionType.RESIGNATION.value
            and status == SubmissionStatus.APPROVED.value
        ):
            await self.employees.set_status(submission.employee_id, "inactive")
            logger.info(
                "Employee %s deactivated by resignation %s",
                submission.employee_id,
                submission.submission_id,
            )

        await self.session.flush()
        return submission
