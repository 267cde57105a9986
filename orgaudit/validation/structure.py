"""Structural checks that prove an employee set is a single rooted tree.

Each check is an independent pass over the raw employee set returning its
own findings, so any of them can be run (and tested) on its own. They all run
even when an earlier one fails; only an empty set short-circuits.
"""

import logging
from collections.abc import Callable

from orgaudit.hierarchy.models import EmployeeSet
from orgaudit.hierarchy.org_structure import (
    ChainEnd,
    build_subordinate_index,
    collect_reachable,
    find_roots,
    walk_manager_chain,
)
from orgaudit.validation.findings import Finding, FindingKind, ValidationResult, error, warning

logger = logging.getLogger(__name__)

type StructuralCheck = Callable[[EmployeeSet], list[Finding]]

EXCESSIVE_SALARY_THRESHOLD = 10_000_000


def check_single_ceo(employees: EmployeeSet) -> list[Finding]:
    roots = find_roots(employees)
    match roots:
        case []:
            return [error(FindingKind.MISSING_CEO, "No CEO found (employee with no manager)")]
        case [_]:
            return []
        case _:
            named = ", ".join(emp.describe() for emp in roots)
            return [
                error(
                    FindingKind.MULTIPLE_CEOS,
                    f"Multiple CEOs found: {named}",
                    *(emp.employee_id for emp in roots),
                )
            ]


def check_manager_references(employees: EmployeeSet) -> list[Finding]:
    return [
        error(
            FindingKind.MISSING_MANAGER,
            f"Employee {emp.describe()} references non-existent manager: {emp.manager_id}",
            emp.employee_id,
            related_id=emp.manager_id,
        )
        for emp in employees.values()
        if not emp.is_ceo and emp.manager_id not in employees
    ]


def check_circular_references(employees: EmployeeSet) -> list[Finding]:
    findings = []
    for emp in employees.values():
        walk = walk_manager_chain(emp, employees)
        if walk.end is ChainEnd.CYCLE:
            findings.append(
                error(
                    FindingKind.CIRCULAR_REFERENCE,
                    f"Circular reference detected starting from employee {emp.describe()}",
                    emp.employee_id,
                    related_id=walk.stopped_at,
                )
            )
    return findings


def check_connectivity(employees: EmployeeSet) -> list[Finding]:
    """Warn about employees the CEO cannot reach through subordinate links.

    Only meaningful with a unique CEO; root cardinality problems are already
    reported by ``check_single_ceo``.
    """
    roots = find_roots(employees)
    if len(roots) != 1:
        return []

    reachable = collect_reachable(roots[0].employee_id, build_subordinate_index(employees))
    return [
        warning(
            FindingKind.DISCONNECTED_EMPLOYEE,
            f"Employee {emp.describe()} is not connected to the CEO hierarchy",
            emp.employee_id,
        )
        for emp in employees.values()
        if emp.employee_id not in reachable
    ]


def check_salary_quality(employees: EmployeeSet) -> list[Finding]:
    findings = []
    for emp in employees.values():
        if emp.salary == 0:
            findings.append(
                warning(
                    FindingKind.ZERO_SALARY,
                    f"Employee {emp.describe()} has zero salary",
                    emp.employee_id,
                )
            )
        elif emp.salary > EXCESSIVE_SALARY_THRESHOLD:
            findings.append(
                warning(
                    FindingKind.EXCESSIVE_SALARY,
                    f"Employee {emp.describe()} has unusually high salary: {emp.salary:.2f}",
                    emp.employee_id,
                )
            )
    return findings


STRUCTURAL_CHECKS: tuple[StructuralCheck, ...] = (
    check_single_ceo,
    check_manager_references,
    check_circular_references,
    check_connectivity,
    check_salary_quality,
)


def validate_organization(employees: EmployeeSet) -> ValidationResult:
    """Run every structural and data-quality check over the employee set."""
    if not employees:
        result = ValidationResult.from_findings(
            [error(FindingKind.EMPTY_ORGANIZATION, "No employees found in the data")]
        )
        logger.warning("Data validation failed: no employees")
        return result

    findings: list[Finding] = []
    for check in STRUCTURAL_CHECKS:
        findings.extend(check(employees))
    result = ValidationResult.from_findings(findings)

    if result.is_valid:
        logger.info(
            "Data validation passed for %d employees (%d warning(s))",
            len(employees), result.warning_count,
        )
    else:
        logger.warning("Data validation failed with %d error(s)", result.error_count)
    return result
