"""Structured validation findings and the immutable result that collects them."""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

type EmployeeID = str


class Severity(StrEnum):
    ERROR = "error"
    WARNING = "warning"


class FindingKind(StrEnum):
    EMPTY_ORGANIZATION = "empty_organization"
    MISSING_CEO = "missing_ceo"
    MULTIPLE_CEOS = "multiple_ceos"
    MISSING_MANAGER = "missing_manager"
    CIRCULAR_REFERENCE = "circular_reference"
    DISCONNECTED_EMPLOYEE = "disconnected_employee"
    ZERO_SALARY = "zero_salary"
    EXCESSIVE_SALARY = "excessive_salary"


@dataclass(frozen=True)
class Finding:
    kind: FindingKind
    severity: Severity
    message: str
    employee_ids: tuple[EmployeeID, ...] = ()
    related_id: EmployeeID | None = None

    def __str__(self) -> str:
        return self.message


def error(kind: FindingKind, message: str, *employee_ids: EmployeeID, related_id: EmployeeID | None = None) -> Finding:
    return Finding(kind, Severity.ERROR, message, tuple(employee_ids), related_id)


def warning(kind: FindingKind, message: str, *employee_ids: EmployeeID, related_id: EmployeeID | None = None) -> Finding:
    return Finding(kind, Severity.WARNING, message, tuple(employee_ids), related_id)


@dataclass(frozen=True)
class ValidationResult:
    """Errors block analysis; warnings are advisory only."""

    errors: tuple[Finding, ...] = ()
    warnings: tuple[Finding, ...] = ()

    @classmethod
    def success(cls) -> "ValidationResult":
        return cls()

    @classmethod
    def from_findings(cls, findings: Iterable[Finding]) -> "ValidationResult":
        """Split findings by severity, keeping their order."""
        errors: list[Finding] = []
        warnings: list[Finding] = []
        for finding in findings:
            match finding.severity:
                case Severity.ERROR:
                    errors.append(finding)
                case Severity.WARNING:
                    warnings.append(finding)
        return cls(tuple(errors), tuple(warnings))

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def warning_count(self) -> int:
        return len(self.warnings)

    @property
    def error_messages(self) -> list[str]:
        return [f.message for f in self.errors]

    @property
    def warning_messages(self) -> list[str]:
        return [f.message for f in self.warnings]

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        return ValidationResult(self.errors + other.errors, self.warnings + other.warnings)

    def __str__(self) -> str:
        return (
            f"ValidationResult(valid={self.is_valid}, "
            f"errors={self.error_count}, warnings={self.warning_count})"
        )
