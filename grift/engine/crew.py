"""Crew — employee bonus pools and manager automation toggles.

Bonuses are always recomputed from the hired counts; nothing is cached.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from grift.data.crew import (
    ALL_EMPLOYEES,
    ALL_MANAGERS,
    EmployeeDef,
    ManagerDef,
)


@dataclass(frozen=True)
class EmployeeState:
    employee_id: str
    count: int = 0


@dataclass(frozen=True)
class ManagerState:
    manager_id: str
    is_hired: bool = False


@dataclass(frozen=True)
class EmployeeBonuses:
    speed_bonus: float = 0.0    # 0.25 = 25% faster
    reward_bonus: float = 0.0


def _sum_boost(
    states: Iterable[EmployeeState],
    definitions: Iterable[EmployeeDef],
    attr: str,
) -> float:
    by_id = {d.id: d for d in definitions}
    total = 0.0
    for state in states:
        defn = by_id.get(state.employee_id)
        if defn is not None:
            total += getattr(defn, attr) * state.count
    return total


def speed_bonus(states: Iterable[EmployeeState], definitions: Iterable[EmployeeDef]) -> float:
    """Σ speed_boost × count. Unknown employees contribute nothing."""
    return _sum_boost(states, definitions, "speed_boost")


def reward_bonus(states: Iterable[EmployeeState], definitions: Iterable[EmployeeDef]) -> float:
    """Σ reward_boost × count. Unknown employees contribute nothing."""
    return _sum_boost(states, definitions, "reward_boost")


class EmployeeStore:
    """Hired employee counts."""

    def __init__(self, definitions: dict[str, EmployeeDef] = ALL_EMPLOYEES) -> None:
        self._defs = definitions
        self.employees: dict[str, EmployeeState] = {}

    def hire(self, employee_id: str, amount: int = 1) -> None:
        current = self.employees.get(employee_id)
        count = (current.count if current else 0) + amount
        self.employees = {**self.employees, employee_id: EmployeeState(employee_id, count)}

    def count(self, employee_id: str) -> int:
        state = self.employees.get(employee_id)
        return state.count if state else 0

    def all(self) -> list[EmployeeState]:
        return list(self.employees.values())

    def total_bonuses(self) -> EmployeeBonuses:
        states = self.all()
        defs = self._defs.values()
        return EmployeeBonuses(speed_bonus(states, defs), reward_bonus(states, defs))

    def scam_bonuses(self, scam_id: str) -> EmployeeBonuses:
        """Bonuses from the employees working on *scam_id* only."""
        defs = [d for d in self._defs.values() if d.scam_id == scam_id]
        ids = {d.id for d in defs}
        states = [s for s in self.all() if s.employee_id in ids]
        return EmployeeBonuses(speed_bonus(states, defs), reward_bonus(states, defs))

    def replace_all(self, employees: dict[str, EmployeeState]) -> None:
        self.employees = dict(employees)

    def reset(self) -> None:
        self.employees = {}


class ManagerStore:
    """One-time manager hires; a hired manager automates its scam."""

    def __init__(self, definitions: dict[str, ManagerDef] = ALL_MANAGERS) -> None:
        self._defs = definitions
        self.managers: dict[str, ManagerState] = {}

    def hire(self, manager_id: str) -> None:
        if self.is_hired(manager_id):
            return
        self.managers = {**self.managers, manager_id: ManagerState(manager_id, True)}

    def is_hired(self, manager_id: str) -> bool:
        state = self.managers.get(manager_id)
        return state.is_hired if state else False

    def hired_ids(self) -> list[str]:
        return [m.manager_id for m in self.managers.values() if m.is_hired]

    def is_scam_managed(self, scam_id: str) -> bool:
        for defn in self._defs.values():
            if defn.scam_id == scam_id:
                return self.is_hired(defn.id)
        return False

    def all(self) -> list[ManagerState]:
        return list(self.managers.values())

    def replace_all(self, managers: dict[str, ManagerState]) -> None:
        self.managers = dict(managers)

    def reset(self) -> None:
        self.managers = {}
