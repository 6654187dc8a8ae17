"""Balance constants — all tuning knobs in one place.

Tweak these to adjust pacing, reward curves and prestige pressure.
Level scaling follows the bracket table below; every bracket adds
(levels_in_bracket * bracket_mult * tier_rate) percent to a cumulative bonus.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class LevelBracket:
    """One level range of the scaling curve."""

    max_level: int       # inclusive
    speed_mult: float
    profit_mult: float
    cost_mult: float


@dataclass(frozen=True)
class TierBase:
    """Starting point for a scam tier before any level scaling."""

    tier: int
    initial_cost: float
    initial_profit: float
    base_duration: int   # ms


@dataclass(frozen=True)
class EconomyBalance:
    """Tuning for durations, rewards and upgrade costs."""

    # At level 10: ~10% bonus, level 25: ~25%, level 100: ~200%+
    level_brackets: tuple[LevelBracket, ...] = (
        LevelBracket(25, 1.0, 3.0, 5.0),
        LevelBracket(50, 2.0, 5.0, 8.0),
        LevelBracket(75, 4.0, 8.0, 12.0),
        LevelBracket(100, 8.0, 12.0, 18.0),
        LevelBracket(150, 16.0, 18.0, 25.0),
        LevelBracket(250, 32.0, 25.0, 35.0),
        LevelBracket(500, 64.0, 35.0, 50.0),
        LevelBracket(1000, 128.0, 50.0, 70.0),
    )

    tier_bases: tuple[TierBase, ...] = (
        TierBase(1, 1, 0.1, 1_000),
        TierBase(2, 100, 10, 2_000),
        TierBase(3, 1_000, 100, 5_000),
        TierBase(4, 15_000, 150, 10_000),
        TierBase(5, 50_000, 500, 30_000),
        TierBase(6, 100_000, 1_000, 60_000),
        TierBase(7, 250_000, 2_500, 120_000),
        TierBase(8, 500_000, 5_000, 300_000),
        TierBase(9, 1_000_000, 10_000, 600_000),
        TierBase(10, 5_000_000, 50_000, 1_200_000),
    )

    # Per-tier base rate fed into the bracket math.
    # Higher tiers speed up slower; profit and cost let the brackets do the work.
    speed_base_rates: dict[int, float] = field(default_factory=lambda: {
        1: 1.0, 2: 0.9, 3: 0.8, 4: 0.7, 5: 0.6,
        6: 0.5, 7: 0.45, 8: 0.4, 9: 0.35, 10: 0.3,
    })
    profit_base_rates: dict[int, float] = field(
        default_factory=lambda: {tier: 1.0 for tier in range(1, 11)}
    )
    cost_base_rates: dict[int, float] = field(
        default_factory=lambda: {tier: 1.0 for tier in range(1, 11)}
    )

    # Durations never drop below this fraction of base
    min_duration_fraction: float = 0.1

    # Upgrade cost = base_upgrade_cost * tier * cost multiplier
    base_upgrade_cost: float = 10.0

    # Bots: +1% bot reward per bot owned, direct price = base * (bots + 1)^2
    bot_compound_rate: float = 0.01
    bot_purchase_base_price: float = 100.0

    # Employee hire cost = base * growth^count
    employee_cost_growth: float = 1.15

    # Large number formatting
    suffixes: tuple[str, ...] = ("", "K", "M", "B", "T")


@dataclass(frozen=True)
class EngineBalance:
    """Tuning for the tick loop and offline catch-up."""

    tick_interval_ms: int = 100                   # 10 ticks per second
    max_offline_ms: int = 8 * 60 * 60 * 1000      # 8 hours
    offline_efficiency: float = 0.5               # fraction of live rate


@dataclass(frozen=True)
class PrestigeBalance:
    """Tuning for heat and the two escape routes."""

    max_heat: float = 100.0
    heat_per_tier: dict[int, float] = field(default_factory=lambda: {
        1: 0.5,   # barely registers
        2: 1.0,
        3: 2.0,
        4: 3.0,
        5: 5.0,   # international task force
    })
    clean_escape_trust_gain: float = 10.0
    snitch_trust_penalty: float = -5.0     # negative; trust floor is 1
    snitch_keep_fraction: float = 0.1
    min_trust: float = 1.0


@dataclass(frozen=True)
class ResourceBalance:
    """Starting values for a fresh run."""

    starting_money: float = 10.0
    starting_trust: float = 1.0


@dataclass(frozen=True)
class SaveBalance:
    """Persistence tuning."""

    version: int = 2
    autosave_interval_s: float = 30.0
    file_name: str = "save.json"


@dataclass(frozen=True)
class GameBalance:
    """Top-level container for all balance constants."""

    economy: EconomyBalance = field(default_factory=EconomyBalance)
    engine: EngineBalance = field(default_factory=EngineBalance)
    prestige: PrestigeBalance = field(default_factory=PrestigeBalance)
    resources: ResourceBalance = field(default_factory=ResourceBalance)
    save: SaveBalance = field(default_factory=SaveBalance)


# Singleton: import this everywhere
BALANCE = GameBalance()
