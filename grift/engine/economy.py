"""Economy engine — bracket scaling, durations, rewards, costs and number formatting.

Every function here is pure: same inputs, same outputs, no state touched.
"""

from __future__ import annotations

import math
from typing import Literal

from grift.data.balance import BALANCE, LevelBracket, TierBase
from grift.data.crew import EmployeeDef
from grift.data.scams import ResourceType, ScamDef

MultiplierKey = Literal["speed_mult", "profit_mult", "cost_mult"]


def _round_half_up(x: float) -> int:
    return math.floor(x + 0.5)


# ── Bracket math ─────────────────────────────────────────────────


def tier_base(tier: int) -> TierBase:
    """Base values for *tier*, falling back to tier 1 when out of range."""
    for base in BALANCE.economy.tier_bases:
        if base.tier == tier:
            return base
    return BALANCE.economy.tier_bases[0]


def bracket_for_level(level: int) -> LevelBracket:
    """The bracket containing *level*; the last bracket for very high levels."""
    brackets = BALANCE.economy.level_brackets
    for bracket in brackets:
        if level <= bracket.max_level:
            return bracket
    return brackets[-1]


def cumulative_bonus(level: int, tier_rate: float, key: MultiplierKey) -> float:
    """Total bracket bonus at *level* as a multiplier (1.0 = no bonus).

    Level 1 carries no bonus. Levels 2..level are consumed bracket by bracket,
    each adding ``bracket[key] * tier_rate`` percent. Anything past the last
    bracket keeps paying the last bracket's rate.
    """
    if level <= 1:
        return 1.0

    brackets = BALANCE.economy.level_brackets
    bonus_levels = level - 1
    total = 0.0
    processed = 0
    prev_max = 0

    for bracket in brackets:
        if processed >= bonus_levels:
            break
        in_bracket = min(bracket.max_level - prev_max, bonus_levels - processed)
        if in_bracket > 0:
            total += in_bracket * getattr(bracket, key) * tier_rate
            processed += in_bracket
        prev_max = bracket.max_level

    if processed < bonus_levels:
        total += (bonus_levels - processed) * getattr(brackets[-1], key) * tier_rate

    return 1.0 + total / 100.0


def _rate(rates: dict[int, float], tier: int) -> float:
    return rates.get(tier, rates[1])


# ── Scam scaling ─────────────────────────────────────────────────


def scam_duration(defn: ScamDef, level: int) -> int:
    """Duration in ms at *level*. Never below 10% of base."""
    bal = BALANCE.economy
    speed = cumulative_bonus(level, _rate(bal.speed_base_rates, defn.tier), "speed_mult")
    calculated = defn.base_duration / speed
    minimum = defn.base_duration * bal.min_duration_fraction
    return max(_round_half_up(calculated), _round_half_up(minimum))


def bot_multiplier(current_bots: float) -> float:
    """+1% bot reward per bot owned. Linear, uncapped."""
    return 1.0 + current_bots * BALANCE.economy.bot_compound_rate


def bot_purchase_price(current_bots: float) -> float:
    """Price of the next bot: base * (bots + 1)^2."""
    return BALANCE.economy.bot_purchase_base_price * (current_bots + 1) ** 2


def scam_reward(defn: ScamDef, level: int, trust: float, current_bots: float = 0) -> int:
    """Reward for one completion, floored to an integer.

    Trust multiplies everything; the bot compound bonus only touches
    scams that pay out in bots.
    """
    profit = cumulative_bonus(
        level, _rate(BALANCE.economy.profit_base_rates, defn.tier), "profit_mult"
    )
    bots = bot_multiplier(current_bots) if defn.resource_type == ResourceType.BOTS else 1.0
    return math.floor(defn.base_reward * profit * trust * bots)


def upgrade_cost(defn: ScamDef, level: int) -> int:
    """Cost to go from *level* to *level* + 1."""
    bal = BALANCE.economy
    cost_mult = cumulative_bonus(level, _rate(bal.cost_base_rates, defn.tier), "cost_mult")
    return math.floor(bal.base_upgrade_cost * defn.tier * cost_mult)


# ── Crew-adjusted values ─────────────────────────────────────────


def boosted_duration(defn: ScamDef, level: int, speed_bonus: float) -> int:
    """Level duration sped up further by employee speed bonus (0.25 = 25%)."""
    duration = scam_duration(defn, level)
    if speed_bonus <= 0:
        return duration
    minimum = _round_half_up(defn.base_duration * BALANCE.economy.min_duration_fraction)
    return max(_round_half_up(duration / (1.0 + speed_bonus)), minimum)


def boosted_reward(
    defn: ScamDef,
    level: int,
    trust: float,
    current_bots: float = 0,
    reward_bonus: float = 0.0,
) -> int:
    """Level reward multiplied by employee reward bonus."""
    reward = scam_reward(defn, level, trust, current_bots)
    if reward_bonus <= 0:
        return reward
    return math.floor(reward * (1.0 + reward_bonus))


def employee_cost(defn: EmployeeDef, current_count: int) -> int:
    """Cost of the next hire: floor(base * growth^count)."""
    return math.floor(defn.base_cost * BALANCE.economy.employee_cost_growth ** current_count)


def employee_batch_cost(defn: EmployeeDef, current_count: int, amount: int) -> int:
    """Cost of hiring *amount* employees in a row."""
    return sum(employee_cost(defn, current_count + i) for i in range(max(amount, 0)))


# ── Formatting ───────────────────────────────────────────────────


def _trim(n: float, precision: int = 2) -> str:
    text = f"{round(n, precision):.{precision}f}"
    return text.rstrip("0").rstrip(".") if "." in text else text


def format_number(n: float) -> str:
    """Compact notation: 999 → "999", 1500 → "1.5K", 1e6 → "1M"."""
    if n < 0:
        return f"-{format_number(-n)}"

    suffixes = BALANCE.economy.suffixes
    value = n
    index = 0
    while value >= 1000 and index < len(suffixes) - 1:
        value /= 1000
        index += 1
    return f"{_trim(value)}{suffixes[index]}"


def format_percent(n: float) -> str:
    """0.5 → "50%", 0.123 → "12.3%"."""
    return f"{_trim(n * 100)}%"


def format_duration(ms: float) -> str:
    """5000 → "5s", 90000 → "1m 30s", 3600000 → "1h"."""
    total = math.floor(ms / 1000)
    if total <= 0:
        return "0s"

    hours, rest = divmod(total, 3600)
    minutes, seconds = divmod(rest, 60)
    parts = []
    if hours:
        parts.append(f"{hours}h")
    if minutes:
        parts.append(f"{minutes}m")
    if seconds:
        parts.append(f"{seconds}s")
    return " ".join(parts)
