"""Shared fixtures for the org audit tests."""
from __future__ import annotations

import pytest

from orgaudit.hierarchy.models import Employee, employee_set


def emp(employee_id: str, salary: float = 50_000, manager_id: str | None = None) -> Employee:
    return Employee(employee_id, f"First{employee_id}", f"Last{employee_id}", salary, manager_id)


def chain_org(length: int) -> dict[str, Employee]:
    """CEO "1" followed by a single line of ``length`` reports, each managing the next."""
    people = [emp("1", 200_000)]
    for n in range(2, length + 2):
        people.append(emp(str(n), 200_000 - n * 10_000, str(n - 1)))
    return employee_set(people)


@pytest.fixture()
def small_org() -> dict[str, Employee]:
    """The sample export: Martin is underpaid, everyone else is within band."""
    return employee_set([
        Employee("123", "Joe", "Doe", 60_000, None),
        Employee("124", "Martin", "Chekov", 45_000, "123"),
        Employee("125", "Bob", "Ronstad", 47_000, "123"),
        Employee("300", "Alice", "Hasacat", 50_000, "124"),
        Employee("305", "Brett", "Hardleaf", 34_000, "300"),
    ])


@pytest.fixture()
def salary_band_org():
    """Manager "2" over two reports averaging 50,000; the CEO stays inside their own band."""

    def _build(manager_salary: float) -> dict[str, Employee]:
        return employee_set([
            emp("1", manager_salary * 1.3),
            emp("2", manager_salary, "1"),
            emp("3", 40_000, "2"),
            emp("4", 60_000, "2"),
        ])

    return _build
