"""Org hierarchy audit domain.

Builds the reporting tree from an employee export, then checks manager salary
bands and reporting-line depth against the audit policy.
"""

from orgaudit.hierarchy.models import Employee, EmployeeSet, employee_set
from orgaudit.hierarchy.org_structure import (
    ReportingLineResult,
    build_subordinate_index,
    walk_manager_chain,
)
from orgaudit.hierarchy.compensation import SalaryAnalysisResult, SalaryStatus
from orgaudit.hierarchy.analyzer import AnalysisStatistics, OrganizationAnalyzer
from orgaudit.hierarchy.ingest import load_employees
