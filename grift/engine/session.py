"""Game session — wires the stores, the tick loop and the catalog together.

Both front ends (Textual and Flask) drive a ``GameSession``: they call
``tick()`` on their own cadence and forward player gestures to the action
methods, each of which checks affordability before touching any store.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Callable

from grift.data.balance import BALANCE
from grift.data.crew import ALL_EMPLOYEES, ALL_MANAGERS, EmployeeDef, ManagerDef
from grift.data.scams import ALL_SCAMS, ScamDef
from grift.engine.crew import EmployeeStore, ManagerStore
from grift.engine.economy import (
    boosted_duration,
    boosted_reward,
    employee_batch_cost,
    upgrade_cost,
)
from grift.engine.loop import (
    GameLoop,
    OfflineProgress,
    calculate_offline_progress,
    now_ms,
)
from grift.engine.loop import resume as resume_engine
from grift.engine.offline import estimate_offline_earnings
from grift.engine.prestige import (
    PrestigeChoice,
    PrestigeOrchestrator,
    PrestigeResult,
    heat_from_scam,
    is_prestige_forced,
)
from grift.engine.progress import ScamStore
from grift.engine.resources import ResourceStore
from grift.engine.save import SaveData, create_snapshot
from grift.engine.timer import ScamTimer, timer_progress

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Completion:
    """One collected scam payout."""

    scam_id: str
    resource: str
    reward: float
    heat: float


class GameSession:
    """Everything one player's run needs, explicitly constructed."""

    def __init__(
        self,
        resources: ResourceStore | None = None,
        scams: ScamStore | None = None,
        employees: EmployeeStore | None = None,
        managers: ManagerStore | None = None,
        clock: Callable[[], float] = now_ms,
        catalog: dict[str, ScamDef] = ALL_SCAMS,
        employee_defs: dict[str, EmployeeDef] = ALL_EMPLOYEES,
        manager_defs: dict[str, ManagerDef] = ALL_MANAGERS,
    ) -> None:
        self.catalog = catalog
        self.employee_defs = employee_defs
        self.manager_defs = manager_defs
        self.resources = resources or ResourceStore()
        self.scams = scams or ScamStore(catalog.values())
        self.employees = employees or EmployeeStore(employee_defs)
        self.managers = managers or ManagerStore(manager_defs)
        self.loop = GameLoop(clock=clock, on_timer_complete=self._on_timer_complete)
        self.orchestrator = PrestigeOrchestrator(
            self.resources, self.scams, self.employees, self.managers
        )
        self._completed: list[Completion] = []

    # ── Loop control ──────────────────────────────────────────────

    def start(self) -> None:
        self.loop.start()
        self._restart_managed()

    def stop(self) -> None:
        self.loop.stop()

    def pause(self) -> None:
        self.loop.pause()

    def resume(self, credit_gap: bool = True) -> OfflineProgress | None:
        """Unpause. With *credit_gap*, the paused time is paid out offline-style."""
        paused_at = self.loop.state.paused_at
        self.loop.resume()
        if not credit_gap or paused_at is None:
            return None
        return self.catch_up(paused_at, self.loop.now())

    def tick(self) -> list[Completion]:
        """Advance to the clock's time; returns the payouts collected on the way.

        Managed scams restart from the moment they finished, so a long gap
        between ticks pays every cycle that fit into it.
        """
        self._completed = []
        result = self.loop.step()
        while result is not None and result.completed_timers:
            result = self.loop.step()
        return self._completed

    def _on_timer_complete(self, timer: ScamTimer) -> None:
        # Auto-collect: the timer goes away the moment it pays out
        self.loop.remove_timer(timer.scam_id)

        defn = self.catalog.get(timer.scam_id)
        progress = self.scams.get(timer.scam_id)
        if defn is None or progress is None:
            return

        bonuses = self.employees.scam_bonuses(defn.id)
        res = self.resources.resources
        reward = boosted_reward(defn, progress.level, res.trust, res.bots, bonuses.reward_bonus)
        field = defn.resource_type.value
        heat = heat_from_scam(defn)

        self.resources.add(field, reward)
        self.resources.add_heat(heat)
        self.scams.increment_completion(defn.id)
        self._completed.append(Completion(defn.id, field, reward, heat))
        logger.debug("Collected %s: +%s %s, +%s heat", defn.id, reward, field, heat)

        if self.managers.is_scam_managed(defn.id):
            # Next cycle runs back to back; no more than MAX_OFFLINE is ever replayed
            finished_at = max(
                timer.start_time + timer.duration,
                self.loop.now() - BALANCE.engine.max_offline_ms,
            )
            self.start_scam(defn.id, start_at=finished_at if timer.duration > 0 else None)

    def _restart_managed(self) -> None:
        for scam_id in self.catalog:
            if self.managers.is_scam_managed(scam_id):
                self.start_scam(scam_id)

    # ── Queries ───────────────────────────────────────────────────

    def is_running(self, scam_id: str) -> bool:
        return self.loop.timer_for(scam_id) is not None

    def timer_progress(self, scam_id: str) -> float:
        timer = self.loop.timer_for(scam_id)
        return timer_progress(timer, self.loop.now()) if timer else 0.0

    def duration_for(self, scam_id: str) -> int | None:
        defn = self.catalog.get(scam_id)
        progress = self.scams.get(scam_id)
        if defn is None or progress is None:
            return None
        speed = self.employees.scam_bonuses(scam_id).speed_bonus
        return boosted_duration(defn, progress.level, speed)

    def reward_for(self, scam_id: str) -> int | None:
        defn = self.catalog.get(scam_id)
        progress = self.scams.get(scam_id)
        if defn is None or progress is None:
            return None
        res = self.resources.resources
        bonus = self.employees.scam_bonuses(scam_id).reward_bonus
        return boosted_reward(defn, progress.level, res.trust, res.bots, bonus)

    def upgrade_cost_for(self, scam_id: str) -> int | None:
        defn = self.catalog.get(scam_id)
        progress = self.scams.get(scam_id)
        if defn is None or progress is None:
            return None
        return upgrade_cost(defn, progress.level)

    def hire_cost_for(self, employee_id: str, amount: int = 1) -> int | None:
        defn = self.employee_defs.get(employee_id)
        if defn is None:
            return None
        return employee_batch_cost(defn, self.employees.count(employee_id), amount)

    @property
    def prestige_forced(self) -> bool:
        return is_prestige_forced(self.resources.resources.heat)

    # ── Player actions ────────────────────────────────────────────

    def start_scam(self, scam_id: str, start_at: float | None = None) -> bool:
        """Start an unlocked scam that isn't already running."""
        duration = self.duration_for(scam_id)
        if duration is None or not self.scams.is_unlocked(scam_id):
            return False
        if self.is_running(scam_id):
            return False
        self.loop.add_timer(scam_id, duration, start_at)
        return True

    def unlock_scam(self, scam_id: str) -> bool:
        defn = self.catalog.get(scam_id)
        if defn is None or self.scams.is_unlocked(scam_id):
            return False
        if not self.resources.spend("money", defn.unlock_cost or 0):
            return False
        self.scams.unlock(scam_id)
        return True

    def upgrade_scam(self, scam_id: str) -> bool:
        cost = self.upgrade_cost_for(scam_id)
        if cost is None or not self.scams.is_unlocked(scam_id):
            return False
        if not self.resources.spend("money", cost):
            return False
        self.scams.upgrade(scam_id)
        return True

    def hire_employee(self, employee_id: str, amount: int = 1) -> bool:
        if amount < 1:
            return False
        cost = self.hire_cost_for(employee_id, amount)
        if cost is None or not self.resources.spend("money", cost):
            return False
        self.employees.hire(employee_id, amount)
        return True

    def hire_manager(self, manager_id: str) -> bool:
        defn = self.manager_defs.get(manager_id)
        if defn is None or self.managers.is_hired(manager_id):
            return False
        if not self.resources.spend("money", defn.cost):
            return False
        self.managers.hire(manager_id)
        self.start_scam(defn.scam_id)
        return True

    def buy_bot(self) -> bool:
        return self.resources.buy_bot()

    def execute_prestige(self, choice: PrestigeChoice | str) -> PrestigeResult:
        """Abandon every running scam and reset the run."""
        self.loop.clear_timers()
        return self.orchestrator.execute(choice)

    # ── Offline catch-up ──────────────────────────────────────────

    def catch_up(self, last_known: float | None = None, now: float | None = None) -> OfflineProgress:
        """Credit the time away once, then restart the clock at *now*.

        Only managed scams repeat, so only their timers are priced in cycles;
        those timers are dropped and a fresh cycle starts. A scam nobody
        manages keeps its timer and pays once, on the next tick after it is due.
        """
        if now is None:
            now = self.loop.now()
        state = self.loop.state
        if last_known is None:
            last_known = state.last_tick_time

        managed = tuple(
            t for t in state.active_timers if self.managers.is_scam_managed(t.scam_id)
        )

        res = self.resources.resources
        progress = calculate_offline_progress(
            last_known, now, replace(state, active_timers=managed)
        )
        progress = estimate_offline_earnings(
            progress,
            self.scams.scams,
            res.trust,
            res.bots,
            catalog=self.catalog,
            employees=self.employees,
        )

        earned = progress.earnings
        self.resources.add_money(earned.money)
        self.resources.add_bots(earned.bots)
        self.resources.add_reputation(earned.reputation)
        self.resources.add_crypto(earned.crypto)
        self.resources.add_heat(earned.heat)

        resumed = resume_engine(state, now)
        self.loop.state = replace(
            resumed,
            active_timers=tuple(
                t for t in resumed.active_timers if not self.managers.is_scam_managed(t.scam_id)
            ),
        )
        if self.loop.running:
            self._restart_managed()

        logger.info(
            "Offline catch-up: %.0f ms, %d scams, earnings %s",
            progress.elapsed_ms, progress.completed_scams, earned,
        )
        return progress

    # ── Persistence ───────────────────────────────────────────────

    def snapshot(self) -> SaveData:
        return create_snapshot(
            self.resources.resources,
            self.scams.scams,
            now=self.loop.now(),
            employees=self.employees.employees,
            managers=self.managers.managers,
            engine=self.loop.state,
        )

    def restore(self, save: SaveData) -> None:
        self.resources.resources = save.resources
        self.scams.replace_all(save.scams)
        self.employees.replace_all(save.employees)
        self.managers.replace_all(save.managers)
        if save.engine is not None:
            self.loop.state = save.engine
        else:
            self.loop.state = replace(self.loop.state, last_tick_time=save.saved_at, active_timers=())
