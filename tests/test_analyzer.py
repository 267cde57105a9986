"""Tests for the organization analyzer."""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from conftest import chain_org, emp
from orgaudit.config import PolicyConfig
from orgaudit.exceptions import StructuralInvariantError
from orgaudit.hierarchy.analyzer import AnalysisStatistics, OrganizationAnalyzer
from orgaudit.hierarchy.compensation import SalaryStatus
from orgaudit.hierarchy.models import employee_set


def test_underpaid_manager(salary_band_org) -> None:
    analyzer = OrganizationAnalyzer(salary_band_org(55_000))

    underpaid = analyzer.underpaid_managers()

    assert [r.manager.employee_id for r in underpaid] == ["2"]
    assert underpaid[0].deviation == pytest.approx(5_000)
    assert analyzer.overpaid_managers() == []


def test_overpaid_manager(salary_band_org) -> None:
    analyzer = OrganizationAnalyzer(salary_band_org(80_000))

    overpaid = analyzer.overpaid_managers()

    assert [r.manager.employee_id for r in overpaid] == ["2"]
    assert overpaid[0].deviation == pytest.approx(5_000)


def test_manager_within_range(salary_band_org) -> None:
    analyzer = OrganizationAnalyzer(salary_band_org(65_000))

    statuses = {r.manager.employee_id: r.status for r in analyzer.analyze_manager_salaries()}

    assert statuses["2"] is SalaryStatus.WITHIN_RANGE
    assert analyzer.underpaid_managers() == []
    assert analyzer.overpaid_managers() == []


def test_employees_without_reports_are_not_in_salary_results(small_org) -> None:
    analyzer = OrganizationAnalyzer(small_org)

    managers = [r.manager.employee_id for r in analyzer.analyze_manager_salaries()]

    assert managers == ["123", "124", "300"]


def test_salary_results_are_stable_across_calls(small_org) -> None:
    analyzer = OrganizationAnalyzer(small_org)

    first = analyzer.analyze_manager_salaries()

    assert analyzer.analyze_manager_salaries() is first
    assert OrganizationAnalyzer(small_org).analyze_manager_salaries() == first


def test_reporting_line_of_exactly_max_is_not_flagged() -> None:
    analyzer = OrganizationAnalyzer(chain_org(4))

    assert analyzer.long_reporting_lines() == []


def test_reporting_line_one_over_max_is_flagged() -> None:
    analyzer = OrganizationAnalyzer(chain_org(5))

    long_lines = analyzer.long_reporting_lines()

    assert [r.employee.employee_id for r in long_lines] == ["6"]
    assert long_lines[0].reporting_line_length == 5
    assert long_lines[0].excess_length == 1
    assert long_lines[0].chain == ("5", "4", "3", "2", "1")


def test_reporting_lines_cover_every_non_ceo(small_org) -> None:
    results = OrganizationAnalyzer(small_org).analyze_reporting_lines()

    assert {r.employee.employee_id: r.reporting_line_length for r in results} == {
        "124": 1,
        "125": 1,
        "300": 2,
        "305": 3,
    }


def test_configured_depth_is_used() -> None:
    analyzer = OrganizationAnalyzer(chain_org(3), PolicyConfig(max_reporting_depth=2))

    assert [r.excess_length for r in analyzer.long_reporting_lines()] == [1]


def test_cycle_is_fatal_for_reporting_lines() -> None:
    employees = employee_set([emp("1"), emp("2", manager_id="3"), emp("3", manager_id="2")])
    analyzer = OrganizationAnalyzer(employees)

    with pytest.raises(StructuralInvariantError, match="Circular reference"):
        analyzer.analyze_reporting_lines()
    # Nothing partial is cached; the next call fails the same way
    with pytest.raises(StructuralInvariantError):
        analyzer.analyze_reporting_lines()


def test_missing_manager_is_fatal_for_reporting_lines() -> None:
    employees = employee_set([emp("1"), emp("2", manager_id="999")])

    with pytest.raises(StructuralInvariantError, match="Manager not found: 999"):
        OrganizationAnalyzer(employees).analyze_reporting_lines()


def test_find_ceo_and_direct_subordinates(small_org) -> None:
    analyzer = OrganizationAnalyzer(small_org)

    assert analyzer.find_ceo().full_name == "Joe Doe"
    assert [e.employee_id for e in analyzer.direct_subordinates("123")] == ["124", "125"]
    assert analyzer.direct_subordinates("305") == ()
    assert analyzer.employee_count == 5
    assert analyzer.config == PolicyConfig.defaults()


def test_find_ceo_returns_none_without_root() -> None:
    employees = employee_set([emp("1", manager_id="2"), emp("2", manager_id="1")])

    assert OrganizationAnalyzer(employees).find_ceo() is None


def test_run_analysis_statistics(small_org) -> None:
    stats = OrganizationAnalyzer(small_org).run_analysis()

    assert stats.total_employees == 5
    assert stats.total_managers == 3
    assert stats.underpaid_manager_count == 1
    assert stats.overpaid_manager_count == 0
    assert stats.long_reporting_line_count == 0
    assert stats.max_reporting_line_depth == 3
    assert stats.total_issues == 1
    assert stats.has_issues
    assert stats.compliance_rate == pytest.approx(200 / 3)


def test_statistics_without_managers() -> None:
    stats = AnalysisStatistics(1, 0, 0, 0, 0, 0)

    assert stats.compliance_rate == 100.0
    assert not stats.has_issues


def test_concurrent_first_access_sees_one_result(small_org) -> None:
    analyzer = OrganizationAnalyzer(small_org)

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda _: analyzer.analyze_reporting_lines(), range(16)))

    assert all(r is results[0] for r in results)
