"""Validate-then-analyse orchestration over one employee set and policy."""

import logging
from dataclasses import dataclass

from orgaudit.config import PolicyConfig
from orgaudit.exceptions import ValidationFailedError
from orgaudit.hierarchy.analyzer import AnalysisStatistics, OrganizationAnalyzer
from orgaudit.hierarchy.compensation import SalaryAnalysisResult
from orgaudit.hierarchy.models import EmployeeSet
from orgaudit.hierarchy.org_structure import ReportingLineResult
from orgaudit.validation.findings import ValidationResult
from orgaudit.validation.structure import validate_organization

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuditOutcome:
    validation: ValidationResult
    statistics: AnalysisStatistics
    salary_results: tuple[SalaryAnalysisResult, ...]
    reporting_line_results: tuple[ReportingLineResult, ...]
    analyzer: OrganizationAnalyzer


def audit_organization(
    employees: EmployeeSet,
    config: PolicyConfig | None = None,
    validation: ValidationResult | None = None,
) -> AuditOutcome:
    """Validate the employee set and, if it is structurally sound, analyse it.

    A ``validation`` already computed for the same set is reused instead of
    running the checks again. Raises ``ValidationFailedError`` when validation
    reports errors; warnings never block analysis.
    """
    if validation is None:
        validation = validate_organization(employees)
    if not validation.is_valid:
        raise ValidationFailedError(validation)
    if validation.has_warnings:
        logger.warning("Proceeding with %d validation warning(s)", validation.warning_count)

    analyzer = OrganizationAnalyzer(employees, config)
    statistics = analyzer.run_analysis()
    return AuditOutcome(
        validation=validation,
        statistics=statistics,
        salary_results=analyzer.analyze_manager_salaries(),
        reporting_line_results=analyzer.analyze_reporting_lines(),
        analyzer=analyzer,
    )
