"""Analysis engine for manager salary bands and reporting-line depth.

The analyzer works over one immutable employee set and one policy. Both
analyses are computed on first use and cached for the life of the instance;
the caches are populated under a lock so concurrent first calls see either
nothing or the complete result tuple.

Reporting-line analysis assumes the set passed structural validation. A
cycle or dangling manager found mid-walk raises ``StructuralInvariantError``
and no partial results are kept.
"""

import logging
import threading
import time
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from orgaudit.config import PolicyConfig
from orgaudit.hierarchy.compensation import (
    SalaryAnalysisResult,
    SalaryStatus,
    evaluate_manager_salary,
)
from orgaudit.hierarchy.models import Employee, EmployeeID, EmployeeSet
from orgaudit.hierarchy.org_structure import (
    ReportingLineResult,
    SubordinateIndex,
    build_subordinate_index,
    evaluate_reporting_line,
    find_roots,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisStatistics:
    total_employees: int
    total_managers: int
    underpaid_manager_count: int
    overpaid_manager_count: int
    long_reporting_line_count: int
    max_reporting_line_depth: int
    execution_time: timedelta = timedelta(0)
    analyzed_at: datetime = field(default_factory=datetime.now)

    @property
    def total_issues(self) -> int:
        return (
            self.underpaid_manager_count
            + self.overpaid_manager_count
            + self.long_reporting_line_count
        )

    @property
    def has_issues(self) -> bool:
        return self.total_issues > 0

    @property
    def compliance_rate(self) -> float:
        """Percentage of managers paid within their band."""
        if self.total_managers == 0:
            return 100.0
        compliant = (
            self.total_managers - self.underpaid_manager_count - self.overpaid_manager_count
        )
        return compliant * 100.0 / self.total_managers

    def __str__(self) -> str:
        return (
            f"AnalysisStatistics(employees={self.total_employees}, "
            f"managers={self.total_managers}, underpaid={self.underpaid_manager_count}, "
            f"overpaid={self.overpaid_manager_count}, "
            f"long_lines={self.long_reporting_line_count}, "
            f"exec_time={self.execution_time.total_seconds() * 1000:.0f}ms)"
        )


class OrganizationAnalyzer:
    def __init__(self, employees: EmployeeSet, config: PolicyConfig | None = None) -> None:
        if employees is None:
            raise ValueError("Employees mapping cannot be None")
        self._config = config or PolicyConfig.defaults()
        self._employees: dict[EmployeeID, Employee] = dict(employees)
        self._index: SubordinateIndex = build_subordinate_index(self._employees)

        self._lock = threading.Lock()
        self._salary_results: tuple[SalaryAnalysisResult, ...] | None = None
        self._reporting_results: tuple[ReportingLineResult, ...] | None = None

        logger.debug(
            "Initialized analyzer with %d employees, config: %s",
            len(self._employees), self._config,
        )

    @property
    def config(self) -> PolicyConfig:
        return self._config

    @property
    def employee_count(self) -> int:
        return len(self._employees)

    def find_ceo(self) -> Employee | None:
        roots = find_roots(self._employees)
        return roots[0] if roots else None

    def direct_subordinates(self, manager_id: EmployeeID) -> tuple[Employee, ...]:
        return self._index.get(manager_id, ())

    # -- salary bands -----------------------------------------------------

    def analyze_manager_salaries(self) -> tuple[SalaryAnalysisResult, ...]:
        """Evaluate every employee with at least one direct report, in input order."""
        if self._salary_results is None:
            with self._lock:
                if self._salary_results is None:
                    self._salary_results = tuple(
                        evaluate_manager_salary(emp, self._index[emp.employee_id], self._config)
                        for emp in self._employees.values()
                        if self._index.get(emp.employee_id)
                    )
        return self._salary_results

    def underpaid_managers(self) -> list[SalaryAnalysisResult]:
        return [
            r for r in self.analyze_manager_salaries() if r.status is SalaryStatus.UNDERPAID
        ]

    def overpaid_managers(self) -> list[SalaryAnalysisResult]:
        return [
            r for r in self.analyze_manager_salaries() if r.status is SalaryStatus.OVERPAID
        ]

    # -- reporting lines --------------------------------------------------

    def analyze_reporting_lines(self) -> tuple[ReportingLineResult, ...]:
        """Measure the reporting line of every non-CEO employee, in input order.

        Raises ``StructuralInvariantError`` on a cycle or unknown manager.
        """
        if self._reporting_results is None:
            with self._lock:
                if self._reporting_results is None:
                    max_depth = self._config.max_reporting_depth
                    self._reporting_results = tuple(
                        evaluate_reporting_line(emp, self._employees, max_depth)
                        for emp in self._employees.values()
                        if not emp.is_ceo
                    )
        return self._reporting_results

    def long_reporting_lines(self) -> list[ReportingLineResult]:
        return [r for r in self.analyze_reporting_lines() if r.is_too_long]

    # -- summary ----------------------------------------------------------

    def run_analysis(self) -> AnalysisStatistics:
        """Run both analyses and summarise them."""
        started = time.perf_counter()

        salary_results = self.analyze_manager_salaries()
        reporting_results = self.analyze_reporting_lines()

        stats = AnalysisStatistics(
            total_employees=self.employee_count,
            total_managers=len(salary_results),
            underpaid_manager_count=sum(
                1 for r in salary_results if r.status is SalaryStatus.UNDERPAID
            ),
            overpaid_manager_count=sum(
                1 for r in salary_results if r.status is SalaryStatus.OVERPAID
            ),
            long_reporting_line_count=sum(1 for r in reporting_results if r.is_too_long),
            max_reporting_line_depth=max(
                (r.reporting_line_length for r in reporting_results), default=0
            ),
            execution_time=timedelta(seconds=time.perf_counter() - started),
        )
        logger.info("Analysis completed: %s", stats)
        return stats
