"""Save snapshots — building, restoring and migrating them. No I/O here.

Snapshot history:
  v0  pre-release saves, same shape as v1 without a proper version
  v1  resources + scam progress
  v2  adds crew pools and the engine clock/timers (for offline catch-up)
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field, replace
from typing import Any

from grift.data.balance import BALANCE
from grift.engine.crew import EmployeeState, ManagerState
from grift.engine.loop import EngineState
from grift.engine.progress import ScamProgress
from grift.engine.resources import Resources
from grift.engine.timer import ScamTimer

SAVE_VERSION = BALANCE.save.version


class SaveFormatError(ValueError):
    """A save payload could not be understood."""


@dataclass(frozen=True)
class SaveData:
    version: int
    saved_at: float                          # ms since epoch
    resources: Resources
    scams: dict[str, ScamProgress]
    employees: dict[str, EmployeeState] = field(default_factory=dict)
    managers: dict[str, ManagerState] = field(default_factory=dict)
    engine: EngineState | None = None


# ── Snapshot ↔ live state ────────────────────────────────────────


def create_snapshot(
    resources: Resources,
    scams: dict[str, ScamProgress],
    now: float | None = None,
    employees: dict[str, EmployeeState] | None = None,
    managers: dict[str, ManagerState] | None = None,
    engine: EngineState | None = None,
) -> SaveData:
    return SaveData(
        version=SAVE_VERSION,
        saved_at=time.time() * 1000.0 if now is None else now,
        resources=resources,
        scams=dict(scams),
        employees=dict(employees or {}),
        managers=dict(managers or {}),
        engine=engine,
    )


def apply_snapshot(save: SaveData) -> tuple[Resources, dict[str, ScamProgress]]:
    return save.resources, dict(save.scams)


def migrate_if_needed(save: SaveData) -> SaveData:
    """Walk the migration chain forward until *save* is current."""
    migrated = save
    if migrated.version < 1:
        # v1 is the first real schema; v0 only needs the bump
        migrated = replace(migrated, version=1)
    if migrated.version < 2:
        migrated = replace(migrated, version=2, employees={}, managers={}, engine=None)
    return migrated


# ── Dict (JSON) encoding ─────────────────────────────────────────


def _engine_to_dict(engine: EngineState) -> dict[str, Any]:
    return {
        "last_tick_time": engine.last_tick_time,
        "is_paused": engine.is_paused,
        "paused_at": engine.paused_at,
        "timers": [
            {
                "scam_id": t.scam_id,
                "start_time": t.start_time,
                "duration": t.duration,
                "is_complete": t.is_complete,
            }
            for t in engine.active_timers
        ],
    }


def _engine_from_dict(d: dict) -> EngineState:
    timers = tuple(
        ScamTimer(
            scam_id=str(t["scam_id"]),
            start_time=float(t["start_time"]),
            duration=float(t["duration"]),
            is_complete=bool(t.get("is_complete", False)),
        )
        for t in d.get("timers", [])
    )
    paused_at = d.get("paused_at")
    return EngineState(
        last_tick_time=float(d["last_tick_time"]),
        active_timers=timers,
        is_paused=bool(d.get("is_paused", False)),
        paused_at=float(paused_at) if paused_at is not None else None,
    )


def snapshot_to_dict(save: SaveData) -> dict[str, Any]:
    return {
        "version": save.version,
        "saved_at": save.saved_at,
        "resources": save.resources.to_dict(),
        "scams": {sid: p.to_dict() for sid, p in save.scams.items()},
        "employees": {eid: e.count for eid, e in save.employees.items()},
        "managers": [mid for mid, m in save.managers.items() if m.is_hired],
        "engine": _engine_to_dict(save.engine) if save.engine is not None else None,
    }


def snapshot_from_dict(d: Any) -> SaveData:
    """Decode and migrate a raw payload. Raises SaveFormatError if malformed."""
    if not isinstance(d, dict):
        raise SaveFormatError("save payload is not an object")
    try:
        scams = {
            sid: ScamProgress.from_dict({**p, "scam_id": sid})
            for sid, p in d.get("scams", {}).items()
        }
        save = SaveData(
            version=int(d.get("version", 0)),
            saved_at=float(d["saved_at"]),
            resources=Resources.from_dict(d.get("resources", {})),
            scams=scams,
            employees={
                eid: EmployeeState(eid, int(n)) for eid, n in d.get("employees", {}).items()
            },
            managers={mid: ManagerState(mid, True) for mid in d.get("managers", [])},
            engine=_engine_from_dict(d["engine"]) if d.get("engine") else None,
        )
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise SaveFormatError(f"malformed save: {exc}") from exc

    if save.version > SAVE_VERSION:
        raise SaveFormatError(f"save version {save.version} is newer than {SAVE_VERSION}")
    if save.version < SAVE_VERSION:
        # Older schemas never carried these sections; drop whatever was decoded
        return migrate_if_needed(save)
    return save
