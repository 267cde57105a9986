"""Org hierarchy resolution — subordinate index, manager-chain walks and reporting lines."""

import logging
from collections import defaultdict, deque
from dataclasses import dataclass
from enum import StrEnum

from orgaudit.exceptions import StructuralInvariantError
from orgaudit.hierarchy.models import Employee, EmployeeID, EmployeeSet

logger = logging.getLogger(__name__)

type SubordinateIndex = dict[EmployeeID, tuple[Employee, ...]]
type ManagerChain = tuple[EmployeeID, ...]


class ChainEnd(StrEnum):
    """Why a manager-chain walk stopped."""

    ROOT = "root"
    CYCLE = "cycle"
    MISSING_MANAGER = "missing_manager"
    MAX_STEPS = "max_steps"


@dataclass(frozen=True)
class ChainWalk:
    employee_id: EmployeeID
    chain: ManagerChain
    end: ChainEnd
    # Set for CYCLE (the revisited id) and MISSING_MANAGER (the unknown id).
    stopped_at: EmployeeID | None = None

    @property
    def length(self) -> int:
        return len(self.chain)


@dataclass(frozen=True)
class ReportingLineResult:
    """How many managers sit above an employee, and by how much that exceeds the limit."""

    employee: Employee
    reporting_line_length: int
    max_allowed_length: int
    excess_length: int
    chain: ManagerChain = ()

    @property
    def is_too_long(self) -> bool:
        return self.excess_length > 0


def build_subordinate_index(employees: EmployeeSet) -> SubordinateIndex:
    """Build a manager_id -> direct subordinates map in input order.

    Purely mechanical: dangling manager ids and cycles are indexed like any
    other reference.
    """
    tree: dict[EmployeeID, list[Employee]] = defaultdict(list)
    for emp in employees.values():
        if not emp.is_ceo:
            tree[emp.manager_id].append(emp)
    logger.debug("Indexed %d manager(s) across %d employees", len(tree), len(employees))
    return {mgr: tuple(subs) for mgr, subs in tree.items()}


def find_roots(employees: EmployeeSet) -> list[Employee]:
    return [emp for emp in employees.values() if emp.is_ceo]


def walk_manager_chain(
    employee: Employee,
    employees: EmployeeSet,
    max_steps: int | None = None,
    strict: bool = False,
) -> ChainWalk:
    """Follow ``manager_id`` links upward from ``employee``.

    The walk stops at the CEO, after ``max_steps`` managers, on the first
    revisited id (the starting employee counts as visited) or on a manager id
    that is not in the set. With ``strict`` the last two raise
    ``StructuralInvariantError`` instead of returning.
    """
    visited = {employee.employee_id}
    chain: list[EmployeeID] = []
    current_id = employee.manager_id

    while current_id is not None and current_id.strip():
        if current_id in visited:
            if strict:
                raise StructuralInvariantError(
                    f"Circular reference detected for employee: {employee.employee_id}",
                    employee_id=employee.employee_id,
                    manager_id=current_id,
                )
            return ChainWalk(employee.employee_id, tuple(chain), ChainEnd.CYCLE, current_id)

        manager = employees.get(current_id)
        if manager is None:
            if strict:
                raise StructuralInvariantError(
                    f"Manager not found: {current_id} for employee: {employee.employee_id}",
                    employee_id=employee.employee_id,
                    manager_id=current_id,
                )
            return ChainWalk(
                employee.employee_id, tuple(chain), ChainEnd.MISSING_MANAGER, current_id
            )

        visited.add(current_id)
        chain.append(current_id)
        if max_steps is not None and len(chain) >= max_steps:
            return ChainWalk(employee.employee_id, tuple(chain), ChainEnd.MAX_STEPS)
        current_id = manager.manager_id

    return ChainWalk(employee.employee_id, tuple(chain), ChainEnd.ROOT)


def collect_reachable(root_id: EmployeeID, index: SubordinateIndex) -> set[EmployeeID]:
    """Ids reachable from ``root_id`` by following manager -> subordinate edges."""
    reachable = {root_id}
    queue = deque([root_id])
    while queue:
        for sub in index.get(queue.popleft(), ()):
            if sub.employee_id not in reachable:
                reachable.add(sub.employee_id)
                queue.append(sub.employee_id)
    return reachable


def evaluate_reporting_line(
    employee: Employee,
    employees: EmployeeSet,
    max_reporting_depth: int,
) -> ReportingLineResult:
    """Measure one non-CEO employee's reporting line against the depth limit."""
    walk = walk_manager_chain(employee, employees, strict=True)
    return ReportingLineResult(
        employee=employee,
        reporting_line_length=walk.length,
        max_allowed_length=max_reporting_depth,
        excess_length=max(0, walk.length - max_reporting_depth),
        chain=walk.chain,
    )
