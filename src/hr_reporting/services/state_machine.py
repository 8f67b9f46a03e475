"""Submission and payroll status machines with transition validation."""

from __future__ import annotations

from enum import Enum


class SubmissionStatus(str, Enum):
    """Submission status values."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class PayrollStatus(str, Enum):
    """Payroll payment status values."""

    UNPAID = "unpaid"
    PAID = "paid"


class InvalidTransitionError(Exception):
    """Raised when an invalid state transition is attempted."""

    def __init__(self, from_status: str, to_status: str, reason: str | None = None):
        self.from_status = from_status
        self.to_status = to_status
        self.reason = reason
        msg = f"Invalid transition from '{from_status}' to '{to_status}'"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class SubmissionStateMachine:
    """State machine for submission review.

    Allowed transitions:
    - pending → approved
    - pending → rejected

    Approved and rejected are terminal.
    """

    VALID_TRANSITIONS: dict[str, list[str]] = {
        SubmissionStatus.PENDING.value: [
            SubmissionStatus.APPROVED.value,
            SubmissionStatus.REJECTED.value,
        ],
        SubmissionStatus.APPROVED.value: [],
        SubmissionStatus.REJECTED.value: [],
    }

    @classmethod
    def can_transition(cls, from_status: str, to_status: str) -> bool:
        """Check if a transition is valid."""
        allowed = cls.VALID_TRANSITIONS.get(from_status, [])
        return to_status in allowed

    @classmethod
    def validate_transition(cls, from_status: str, to_status: str) -> None:
        """Validate a transition, raising InvalidTransitionError if invalid."""
        if not cls.can_transition(from_status, to_status):
            raise InvalidTransitionError(from_status, to_status)

    @classmethod
    def is_terminal(cls, status: str) -> bool:
        """Check if no further transition is possible."""
        return not cls.VALID_TRANSITIONS.get(status, [])


class PayrollStateMachine:
    """State machine for payroll payment status.

    Allowed transitions:
    - unpaid → paid (requires payment method and date)
    - paid → unpaid (clears payment details)
    """

    VALID_TRANSITIONS: dict[str, list[str]] = {
        PayrollStatus.UNPAID.value: [PayrollStatus.PAID.value],
        PayrollStatus.PAID.value: [PayrollStatus.UNPAID.value],
    }

    PAYMENT_METHODS = {"bank", "cash", "check"}

    @classmethod
    def can_transition(cls, from_status: str, to_status: str) -> bool:
        """Check if a transition is valid."""
        allowed = cls.VALID_TRANSITIONS.get(from_status, [])
        return to_status in allowed

    @classmethod
    def validate_transition(cls, from_status: str, to_status: str) -> None:
        """Validate a transition, raising InvalidTransitionError if invalid."""
        if not cls.can_transition(from_status, to_status):
            raise InvalidTransitionError(from_status, to_status)

    @classmethod
    def is_reversal(cls, from_status: str, to_status: str) -> bool:
        """Check if this transition reverts a payment (paid → unpaid)."""
        return from_status == PayrollStatus.PAID.value and to_status == PayrollStatus.UNPAID.value
