"""Manager salary band analysis relative to direct subordinates."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum

import numpy as np

from orgaudit.config import PolicyConfig
from orgaudit.hierarchy.models import Employee, SalaryAmount

logger = logging.getLogger(__name__)

type SalaryRange = tuple[SalaryAmount, SalaryAmount]  # (min, max)


class SalaryStatus(StrEnum):
    UNDERPAID = "underpaid"
    WITHIN_RANGE = "within_range"
    OVERPAID = "overpaid"


@dataclass(frozen=True)
class SalaryAnalysisResult:
    manager: Employee
    average_subordinate_salary: SalaryAmount
    actual_salary: SalaryAmount
    min_expected_salary: SalaryAmount
    max_expected_salary: SalaryAmount
    status: SalaryStatus

    @property
    def deviation(self) -> SalaryAmount:
        """Distance outside the band; zero when compliant."""
        match self.status:
            case SalaryStatus.UNDERPAID:
                return self.min_expected_salary - self.actual_salary
            case SalaryStatus.OVERPAID:
                return self.actual_salary - self.max_expected_salary
            case SalaryStatus.WITHIN_RANGE:
                return 0.0

    @property
    def is_compliant(self) -> bool:
        return self.status is SalaryStatus.WITHIN_RANGE


def average_salary(employees: Sequence[Employee]) -> SalaryAmount:
    """Mean salary using numpy's pairwise summation."""
    if not employees:
        return 0.0
    return float(np.mean([emp.salary for emp in employees]))


def expected_salary_range(average: SalaryAmount, config: PolicyConfig) -> SalaryRange:
    return config.min_expected_salary(average), config.max_expected_salary(average)


def classify_salary(actual: SalaryAmount, band: SalaryRange) -> SalaryStatus:
    """Place a salary against the band; both band edges count as within range."""
    low, high = band
    if actual < low:
        return SalaryStatus.UNDERPAID
    if actual > high:
        return SalaryStatus.OVERPAID
    return SalaryStatus.WITHIN_RANGE


def evaluate_manager_salary(
    manager: Employee,
    subordinates: Sequence[Employee],
    config: PolicyConfig,
) -> SalaryAnalysisResult:
    """Compare a manager's salary to the band implied by their direct reports."""
    if not subordinates:
        raise ValueError(f"Manager {manager.employee_id} has no direct subordinates")

    avg = average_salary(subordinates)
    band = expected_salary_range(avg, config)
    status = classify_salary(manager.salary, band)
    if status is not SalaryStatus.WITHIN_RANGE:
        logger.debug(
            "Manager %s is %s: salary %.2f vs band %.2f-%.2f",
            manager.employee_id, status, manager.salary, *band,
        )
    return SalaryAnalysisResult(
        manager=manager,
        average_subordinate_salary=avg,
        actual_salary=manager.salary,
        min_expected_salary=band[0],
        max_expected_salary=band[1],
        status=status,
    )
