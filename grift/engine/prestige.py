"""Prestige — heat, forced escapes, and the Clean Escape / Snitch reset."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum

from grift.data.balance import BALANCE
from grift.data.scams import ScamDef
from grift.engine.crew import EmployeeStore, ManagerStore
from grift.engine.progress import ScamStore
from grift.engine.resources import Resources, ResourceStore

logger = logging.getLogger(__name__)


class PrestigeChoice(Enum):
    """The two ways out when the heat gets too high."""

    CLEAN_ESCAPE = "clean-escape"   # gain trust, keep nothing
    SNITCH = "snitch"               # lose trust, keep a cut


@dataclass(frozen=True)
class PrestigeBonus:
    """A slice of a pre-prestige resource kept after snitching."""

    resource: str
    amount: float


@dataclass(frozen=True)
class PrestigeResult:
    choice: PrestigeChoice
    previous_trust: float
    new_trust: float
    bonuses: tuple[PrestigeBonus, ...] | None = None   # None for clean escape


# (resource, keeps decimals)
_KEPT_RESOURCES: tuple[tuple[str, bool], ...] = (
    ("money", False),
    ("bots", False),
    ("reputation", False),
    ("crypto", True),
    ("skill_points", False),
)


def heat_from_scam(defn: ScamDef) -> float:
    """Heat added by one completion; unknown tiers count as tier 1."""
    table = BALANCE.prestige.heat_per_tier
    return table.get(defn.tier, table[1])


def is_prestige_forced(current_heat: float) -> bool:
    return current_heat >= BALANCE.prestige.max_heat


def clean_escape_result(current_trust: float) -> PrestigeResult:
    return PrestigeResult(
        choice=PrestigeChoice.CLEAN_ESCAPE,
        previous_trust=current_trust,
        new_trust=current_trust + BALANCE.prestige.clean_escape_trust_gain,
        bonuses=None,
    )


def snitch_result(current_trust: float, resources: Resources) -> PrestigeResult:
    """Trust penalty (floored at 1) in exchange for a cut of each resource.

    Integer resources are floored; crypto keeps its decimals. Resources at
    zero produce no bonus entry.
    """
    bal = BALANCE.prestige
    new_trust = max(bal.min_trust, current_trust + bal.snitch_trust_penalty)

    bonuses = []
    for key, fractional in _KEPT_RESOURCES:
        value = getattr(resources, key)
        if value <= 0:
            continue
        amount = value * bal.snitch_keep_fraction
        bonuses.append(PrestigeBonus(key, amount if fractional else math.floor(amount)))

    return PrestigeResult(
        choice=PrestigeChoice.SNITCH,
        previous_trust=current_trust,
        new_trust=new_trust,
        bonuses=tuple(bonuses),
    )


class PrestigeOrchestrator:
    """Resets every store it was handed, preserving only trust."""

    def __init__(
        self,
        resources: ResourceStore,
        scams: ScamStore,
        employees: EmployeeStore,
        managers: ManagerStore,
    ) -> None:
        self.resources = resources
        self.scams = scams
        self.employees = employees
        self.managers = managers

    def reset_all(self, trust_modifier: float | None = None) -> None:
        self.resources.prestige_reset(trust_modifier)
        self.scams.reset()
        self.employees.reset()
        self.managers.reset()

    def _apply_bonuses(self, bonuses: tuple[PrestigeBonus, ...]) -> None:
        for bonus in bonuses:
            self.resources.add(bonus.resource, bonus.amount)

    def execute(self, choice: PrestigeChoice | str) -> PrestigeResult:
        """Run a full prestige.

        Order is fixed: read resources, compute the result, reset the vector
        with the trust delta, reset scams and both crew pools, and only then
        land any snitch bonuses on the fresh vector.
        """
        choice = PrestigeChoice(choice)
        before = self.resources.resources
        trust = before.trust

        if choice is PrestigeChoice.CLEAN_ESCAPE:
            result = clean_escape_result(trust)
        else:
            result = snitch_result(trust, before)

        self.reset_all(result.new_trust - trust)

        if result.bonuses:
            self._apply_bonuses(result.bonuses)

        logger.info(
            "Prestige %s: trust %s -> %s",
            choice.value, result.previous_trust, result.new_trust,
        )
        return result
