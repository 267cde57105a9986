"""Employee record and pandera schema for the HRIS employee export."""

import math
from collections.abc import Mapping
from dataclasses import dataclass, field

import pandera as pa
from pandera import Column, Check

type EmployeeID = str
type SalaryAmount = float


@dataclass(frozen=True)
class Employee:
    """A single employee. Identity is the ``employee_id`` alone."""

    employee_id: EmployeeID
    first_name: str = field(compare=False)
    last_name: str = field(compare=False)
    salary: SalaryAmount = field(compare=False)
    manager_id: EmployeeID | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        for attr, label in (
            ("employee_id", "Employee ID"),
            ("first_name", "First name"),
            ("last_name", "Last name"),
        ):
            value = getattr(self, attr)
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"{label} cannot be empty")
        if self.salary is None or not math.isfinite(self.salary):
            raise ValueError(f"Salary must be a finite number for employee {self.employee_id}")
        if self.salary < 0:
            raise ValueError(f"Salary cannot be negative for employee {self.employee_id}")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def is_ceo(self) -> bool:
        """The CEO is the employee with no (or a blank) manager reference."""
        return self.manager_id is None or not self.manager_id.strip()

    def describe(self) -> str:
        return f"{self.employee_id} ({self.full_name})"


# Keyed by employee id; may still be structurally broken (cycles, dangling refs).
type EmployeeSet = Mapping[EmployeeID, Employee]


def employee_set(employees: list[Employee]) -> dict[EmployeeID, Employee]:
    """Key a list of employees by id, rejecting duplicates."""
    keyed: dict[EmployeeID, Employee] = {}
    for emp in employees:
        if emp.employee_id in keyed:
            raise ValueError(f"Duplicate employee ID: {emp.employee_id}")
        keyed[emp.employee_id] = emp
    return keyed


employee_schema = pa.DataFrameSchema(
    {
        "employee_id": Column(str, Check.str_length(min_value=1), unique=True),
        "first_name": Column(str, Check.str_length(min_value=1)),
        "last_name": Column(str, Check.str_length(min_value=1)),
        "salary": Column(float, Check.greater_than_or_equal_to(0)),
        "manager_id": Column(str, nullable=True),
    },
    strict=False,
    coerce=True,
)
