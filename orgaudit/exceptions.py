"""Error types raised by the org audit pipeline.

Malformed employees and policy settings raise ``ValueError`` at construction.
Everything here is for the later stages: reading the export, validating the
structure, and defects found while analysing.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from orgaudit.validation.findings import ValidationResult


class OrgAuditError(Exception):
    """Base class for all org audit errors."""


class EmployeeParseError(OrgAuditError):
    """The employee export could not be turned into an employee set."""

    def __init__(self, message: str, line_number: int | None = None) -> None:
        self.line_number = line_number
        if line_number is not None:
            message = f"Error at line {line_number}: {message}"
        super().__init__(message)


class StructuralInvariantError(OrgAuditError):
    """A cycle or dangling manager reference was hit while walking a reporting line.

    The structural validator reports these as ordinary errors. Seeing this one
    means analysis ran on data that was never validated (or the validator
    missed something), so no reporting-line numbers can be trusted.
    """

    def __init__(
        self,
        message: str,
        employee_id: str,
        manager_id: str | None = None,
    ) -> None:
        self.employee_id = employee_id
        self.manager_id = manager_id
        super().__init__(f"Structural invariant violated during analysis: {message}")


class ValidationFailedError(OrgAuditError):
    """Structural validation produced errors, so analysis was not attempted."""

    def __init__(self, result: ValidationResult) -> None:
        self.result = result
        super().__init__(
            f"Organization data failed validation with {result.error_count} error(s)"
        )
