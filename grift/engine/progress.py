"""Scam progress — levels, unlocks and completion counts per scam."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable

from grift.data.scams import FOUNDATIONAL_SCAM_ID, TIER_1_SCAMS, ScamDef


@dataclass(frozen=True)
class ScamProgress:
    """Mutable-by-replacement record of how far a scam has come."""

    scam_id: str
    level: int = 1
    is_unlocked: bool = False
    times_completed: int = 0

    def to_dict(self) -> dict:
        return {
            "scam_id": self.scam_id,
            "level": self.level,
            "is_unlocked": self.is_unlocked,
            "times_completed": self.times_completed,
        }

    @classmethod
    def from_dict(cls, d: dict) -> ScamProgress:
        return cls(
            scam_id=str(d["scam_id"]),
            level=max(1, int(d.get("level", 1))),
            is_unlocked=bool(d.get("is_unlocked", False)),
            times_completed=int(d.get("times_completed", 0)),
        )


def initial_progress(
    catalog: Iterable[ScamDef] = TIER_1_SCAMS,
    foundational_id: str = FOUNDATIONAL_SCAM_ID,
) -> dict[str, ScamProgress]:
    """Every catalog scam locked at level 1, except the foundational one."""
    progress = {s.id: ScamProgress(s.id) for s in catalog}
    progress[foundational_id] = ScamProgress(foundational_id, is_unlocked=True)
    return progress


class ScamStore:
    """Owns the scam id → ``ScamProgress`` map. Mutations replace the map."""

    def __init__(
        self,
        catalog: Iterable[ScamDef] = TIER_1_SCAMS,
        foundational_id: str = FOUNDATIONAL_SCAM_ID,
    ) -> None:
        self._catalog = tuple(catalog)
        self._foundational_id = foundational_id
        self.scams: dict[str, ScamProgress] = initial_progress(self._catalog, foundational_id)

    def _swap(self, progress: ScamProgress) -> None:
        self.scams = {**self.scams, progress.scam_id: progress}

    def get(self, scam_id: str) -> ScamProgress | None:
        return self.scams.get(scam_id)

    def all(self) -> list[ScamProgress]:
        return list(self.scams.values())

    def is_unlocked(self, scam_id: str) -> bool:
        progress = self.scams.get(scam_id)
        return progress is not None and progress.is_unlocked

    def unlock(self, scam_id: str) -> None:
        existing = self.scams.get(scam_id)
        if existing is None:
            self._swap(ScamProgress(scam_id, is_unlocked=True))
        elif not existing.is_unlocked:
            self._swap(replace(existing, is_unlocked=True))

    def upgrade(self, scam_id: str) -> None:
        """Level up an unlocked scam. Locked or unknown scams are ignored."""
        existing = self.scams.get(scam_id)
        if existing is None or not existing.is_unlocked:
            return
        self._swap(replace(existing, level=existing.level + 1))

    def increment_completion(self, scam_id: str) -> None:
        existing = self.scams.get(scam_id)
        if existing is None or not existing.is_unlocked:
            return
        self._swap(replace(existing, times_completed=existing.times_completed + 1))

    def replace_all(self, scams: dict[str, ScamProgress]) -> None:
        """Load a restored map. The foundational scam is always unlocked."""
        merged = initial_progress(self._catalog, self._foundational_id)
        merged.update(scams)
        foundation = merged[self._foundational_id]
        merged[self._foundational_id] = replace(foundation, is_unlocked=True)
        self.scams = merged

    def reset(self) -> None:
        self.scams = initial_progress(self._catalog, self._foundational_id)
