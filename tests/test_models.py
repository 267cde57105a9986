"""Tests for the employee record."""
from __future__ import annotations

import pytest

from orgaudit.hierarchy.models import Employee, employee_set


def test_employee_exposes_its_fields() -> None:
    employee = Employee("123", "John", "Doe", 50_000, "100")

    assert employee.employee_id == "123"
    assert employee.full_name == "John Doe"
    assert employee.salary == 50_000
    assert employee.manager_id == "100"
    assert not employee.is_ceo


@pytest.mark.parametrize("manager_id", [None, "", "   "])
def test_missing_or_blank_manager_marks_ceo(manager_id) -> None:
    assert Employee("1", "Jane", "Smith", 200_000, manager_id).is_ceo


@pytest.mark.parametrize(
    "kwargs",
    [
        {"employee_id": ""},
        {"employee_id": "  "},
        {"employee_id": None},
        {"first_name": ""},
        {"last_name": None},
        {"salary": -1},
        {"salary": float("nan")},
        {"salary": float("inf")},
        {"salary": float("-inf")},
    ],
)
def test_invalid_employee_is_rejected_at_construction(kwargs) -> None:
    fields = {
        "employee_id": "1",
        "first_name": "Jane",
        "last_name": "Smith",
        "salary": 1_000,
        "manager_id": None,
    } | kwargs

    with pytest.raises(ValueError):
        Employee(**fields)


def test_zero_salary_is_allowed() -> None:
    assert Employee("1", "Jane", "Smith", 0, None).salary == 0


def test_equality_and_hash_use_id_only() -> None:
    first = Employee("1", "Jane", "Smith", 100, None)
    same_id = Employee("1", "Other", "Person", 999, "7")
    other_id = Employee("2", "Jane", "Smith", 100, None)

    assert first == same_id
    assert hash(first) == hash(same_id)
    assert first != other_id
    assert len({first, same_id, other_id}) == 2


def test_employee_set_rejects_duplicate_ids() -> None:
    with pytest.raises(ValueError, match="Duplicate employee ID: 1"):
        employee_set([
            Employee("1", "Jane", "Smith", 100, None),
            Employee("1", "John", "Smith", 100, None),
        ])


def test_employee_set_preserves_input_order() -> None:
    keyed = employee_set([
        Employee("b", "B", "B", 1, None),
        Employee("a", "A", "A", 1, "b"),
    ])

    assert list(keyed) == ["b", "a"]
