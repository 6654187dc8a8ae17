"""Offline catch-up pricing — turns counted cycles into discounted earnings.

This is a coarse estimate shown once on return. Level-ups and unlocks that a
full replay would have produced mid-gap are not simulated.
"""

from __future__ import annotations

import math
from dataclasses import replace

from grift.data.balance import BALANCE
from grift.data.scams import ALL_SCAMS, ScamDef
from grift.engine.crew import EmployeeStore
from grift.engine.economy import boosted_reward
from grift.engine.loop import OfflineEarnings, OfflineProgress
from grift.engine.prestige import heat_from_scam
from grift.engine.progress import ScamProgress


def estimate_offline_earnings(
    progress: OfflineProgress,
    scams: dict[str, ScamProgress],
    trust: float,
    current_bots: float = 0,
    catalog: dict[str, ScamDef] = ALL_SCAMS,
    employees: EmployeeStore | None = None,
    efficiency: float | None = None,
) -> OfflineProgress:
    """Price *progress* at the live reward rate times *efficiency* (default 50%).

    Rewards use the level and bot count at departure. Integer resources are
    floored once per resource; crypto and heat keep their decimals.
    """
    if efficiency is None:
        efficiency = BALANCE.engine.offline_efficiency

    totals = {name: 0.0 for name in ("money", "reputation", "heat", "bots", "crypto")}
    for scam_id, cycles in progress.cycles.items():
        defn = catalog.get(scam_id)
        if defn is None or cycles <= 0:
            continue
        state = scams.get(scam_id)
        level = state.level if state else 1
        bonus = employees.scam_bonuses(scam_id).reward_bonus if employees else 0.0
        reward = boosted_reward(defn, level, trust, current_bots, bonus)
        totals[defn.resource_type.value] += reward * cycles * efficiency
        totals["heat"] += heat_from_scam(defn) * cycles * efficiency

    earnings = OfflineEarnings(
        money=math.floor(totals["money"]),
        reputation=math.floor(totals["reputation"]),
        heat=totals["heat"],
        bots=math.floor(totals["bots"]),
        crypto=totals["crypto"],
    )
    return replace(progress, earnings=earnings)
