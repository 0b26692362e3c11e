"""Validators for time entry data quality."""

from src.validators.entry_validator import TimeEntryValidator
from src.validators.validation_report import (
    ValidationIssue,
    ValidationReport,
    ValidationSeverity,
)

__all__ = [
    "TimeEntryValidator",
    "ValidationIssue",
    "ValidationReport",
    "ValidationSeverity",
]
