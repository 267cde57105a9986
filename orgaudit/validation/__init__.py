"""Structural validation of the employee hierarchy before analysis."""

from orgaudit.validation.findings import Finding, FindingKind, Severity, ValidationResult
from orgaudit.validation.structure import validate_organization
from orgaudit.validation.reporters import format_validation_result
