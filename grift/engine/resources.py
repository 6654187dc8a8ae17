"""Resource vector and its store — the only place money, bots and trust live."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace

from grift.data.balance import BALANCE
from grift.engine.economy import bot_purchase_price


@dataclass(frozen=True)
class Resources:
    """Every tracked resource. Only trust survives a prestige."""

    money: float = 0.0
    reputation: float = 0.0
    heat: float = 0.0          # police attention; forces prestige at the cap
    bots: float = 0.0          # compounding resource from Bot Farms
    skill_points: float = 0.0
    crypto: float = 0.0        # volatile, keeps its decimals
    trust: float = 1.0         # prestige multiplier, never below 1

    def to_dict(self) -> dict[str, float]:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict) -> Resources:
        base = initial_resources()
        values = {f.name: float(d.get(f.name, getattr(base, f.name))) for f in fields(cls)}
        values["trust"] = max(values["trust"], BALANCE.prestige.min_trust)
        return cls(**values)


RESOURCE_KEYS: tuple[str, ...] = tuple(f.name for f in fields(Resources))


def initial_resources(starting_money: float | None = None) -> Resources:
    """Fresh-run baseline: seed money, trust 1, everything else zero."""
    bal = BALANCE.resources
    return Resources(
        money=bal.starting_money if starting_money is None else starting_money,
        trust=bal.starting_trust,
    )


class ResourceStore:
    """Owns the current ``Resources`` snapshot.

    Each mutation swaps in a whole new snapshot, so anything holding the old
    one keeps a consistent view.
    """

    def __init__(self, resources: Resources | None = None, starting_money: float | None = None) -> None:
        self._starting_money = starting_money
        self.resources: Resources = resources if resources is not None else self.baseline()

    def baseline(self) -> Resources:
        return initial_resources(self._starting_money)

    def _check(self, key: str) -> None:
        if key not in RESOURCE_KEYS:
            raise KeyError(f"Unknown resource: {key!r}")

    def get(self, key: str) -> float:
        self._check(key)
        return getattr(self.resources, key)

    def add(self, key: str, amount: float) -> None:
        """Add (or subtract, with a negative amount) to one resource."""
        self._check(key)
        self.resources = replace(self.resources, **{key: getattr(self.resources, key) + amount})

    def set_resource(self, key: str, value: float) -> None:
        self._check(key)
        self.resources = replace(self.resources, **{key: value})

    def can_afford(self, key: str, amount: float) -> bool:
        return self.get(key) >= amount

    def spend(self, key: str, amount: float) -> bool:
        """Deduct *amount* if affordable. Returns True if it was."""
        if not self.can_afford(key, amount):
            return False
        self.add(key, -amount)
        return True

    def add_money(self, amount: float) -> None:
        self.add("money", amount)

    def add_reputation(self, amount: float) -> None:
        self.add("reputation", amount)

    def add_heat(self, amount: float) -> None:
        self.add("heat", amount)

    def add_bots(self, amount: float) -> None:
        self.add("bots", amount)

    def add_skill_points(self, amount: float) -> None:
        self.add("skill_points", amount)

    def add_crypto(self, amount: float) -> None:
        self.add("crypto", amount)

    def add_trust(self, amount: float) -> None:
        self.add("trust", amount)

    def buy_bot(self) -> bool:
        """Buy one bot with money at the quadratic price."""
        price = bot_purchase_price(self.resources.bots)
        if self.resources.money < price:
            return False
        self.resources = replace(
            self.resources,
            money=self.resources.money - price,
            bots=self.resources.bots + 1,
        )
        return True

    def prestige_reset(self, trust_modifier: float | None = None) -> None:
        """Back to baseline in one swap, keeping trust (optionally shifted)."""
        trust = self.resources.trust
        if trust_modifier is not None:
            trust += trust_modifier
        self.resources = replace(self.baseline(), trust=trust)

    def reset(self) -> None:
        """Full wipe, trust included."""
        self.resources = self.baseline()
