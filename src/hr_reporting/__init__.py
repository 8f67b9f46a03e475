"""HR reporting service: attendance, submission and payroll statistics."""

__version__ = "0.1.0"
