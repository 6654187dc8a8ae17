"""Tests for employee bonuses and managers."""

from grift.data.crew import ALL_EMPLOYEES, manager_for_scam
from grift.engine.crew import (
    EmployeeState,
    EmployeeStore,
    ManagerStore,
    reward_bonus,
    speed_bonus,
)


def test_no_hires_no_bonus():
    store = EmployeeStore()
    bonuses = store.total_bonuses()
    assert bonuses.speed_bonus == 0
    assert bonuses.reward_bonus == 0


def test_bonus_sums_count_times_boost():
    states = [EmployeeState("bot-wrangler", 2), EmployeeState("popup-designer", 1)]
    defs = ALL_EMPLOYEES.values()
    # 0.03 * 2 + 0.05
    assert abs(speed_bonus(states, defs) - 0.11) < 1e-9
    # 0.05 * 2 + 0.04
    assert abs(reward_bonus(states, defs) - 0.14) < 1e-9


def test_unknown_employees_contribute_nothing():
    states = [EmployeeState("ghost", 100)]
    assert speed_bonus(states, ALL_EMPLOYEES.values()) == 0


def test_hire_accumulates():
    store = EmployeeStore()
    store.hire("bot-wrangler")
    store.hire("bot-wrangler", 3)
    assert store.count("bot-wrangler") == 4
    assert store.count("resume-faker") == 0


def test_scam_bonuses_only_count_that_scams_crew():
    store = EmployeeStore()
    store.hire("bot-wrangler", 2)
    store.hire("resume-faker", 10)
    bonuses = store.scam_bonuses("bot-farms")
    assert abs(bonuses.speed_bonus - 0.06) < 1e-9
    assert abs(bonuses.reward_bonus - 0.10) < 1e-9
    assert store.scam_bonuses("survey-scams").speed_bonus == 0


def test_employee_reset():
    store = EmployeeStore()
    store.hire("bot-wrangler", 2)
    store.reset()
    assert store.all() == []


def test_manager_hire_is_idempotent():
    store = ManagerStore()
    store.hire("bot-3000")
    store.hire("bot-3000")
    assert store.hired_ids() == ["bot-3000"]
    assert store.is_hired("bot-3000")


def test_manager_automates_its_scam():
    store = ManagerStore()
    assert not store.is_scam_managed("bot-farms")
    store.hire(manager_for_scam("bot-farms").id)
    assert store.is_scam_managed("bot-farms")
    assert not store.is_scam_managed("survey-scams")


def test_manager_reset():
    store = ManagerStore()
    store.hire("bot-3000")
    store.reset()
    assert store.hired_ids() == []
