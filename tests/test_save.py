"""Tests for snapshots, migration and save files."""

import json

import pytest

from grift.engine.crew import EmployeeState, ManagerState
from grift.engine.loop import EngineState
from grift.engine.progress import ScamProgress, initial_progress
from grift.engine.resources import Resources
from grift.engine.save import (
    SAVE_VERSION,
    SaveData,
    SaveFormatError,
    apply_snapshot,
    create_snapshot,
    migrate_if_needed,
    snapshot_from_dict,
    snapshot_to_dict,
)
from grift.engine.storage import clear_save, has_save_data, load_game, save_game
from grift.engine.timer import ScamTimer


def _full_snapshot() -> SaveData:
    scams = initial_progress()
    scams["survey-scams"] = ScamProgress("survey-scams", level=4, is_unlocked=True, times_completed=9)
    return create_snapshot(
        Resources(money=1234, bots=5, heat=12.5, crypto=0.75, trust=3),
        scams,
        now=1_700_000_000_000,
        employees={"bot-wrangler": EmployeeState("bot-wrangler", 3)},
        managers={"bot-3000": ManagerState("bot-3000", True)},
        engine=EngineState(
            last_tick_time=1_699_999_999_000,
            active_timers=(ScamTimer("bot-farms", 1_699_999_998_500, 1000),),
        ),
    )


def test_snapshot_is_current_version():
    save = _full_snapshot()
    assert save.version == SAVE_VERSION == 2


def test_apply_snapshot_returns_state():
    save = _full_snapshot()
    resources, scams = apply_snapshot(save)
    assert resources.money == 1234
    assert scams["survey-scams"].level == 4


def test_dict_encoding_preserves_everything():
    save = _full_snapshot()
    assert snapshot_from_dict(json.loads(json.dumps(snapshot_to_dict(save)))) == save


def test_migrate_v0_walks_the_whole_chain():
    old = SaveData(version=0, saved_at=1.0, resources=Resources(money=5), scams={})
    migrated = migrate_if_needed(old)
    assert migrated.version == SAVE_VERSION
    assert migrated.employees == {}
    assert migrated.engine is None
    assert migrated.resources.money == 5


def test_current_save_needs_no_migration():
    save = _full_snapshot()
    assert migrate_if_needed(save) is save


def test_v1_payload_drops_unknown_sections():
    payload = {
        "version": 1,
        "saved_at": 1000,
        "resources": {"money": 50},
        "scams": {"bot-farms": {"level": 2, "is_unlocked": True}},
        "employees": {"bot-wrangler": 4},
    }
    save = snapshot_from_dict(payload)
    assert save.version == SAVE_VERSION
    assert save.resources.money == 50
    assert save.scams["bot-farms"].level == 2
    assert save.employees == {}


def test_missing_version_is_v0():
    save = snapshot_from_dict({"saved_at": 1000, "resources": {}, "scams": {}})
    assert save.version == SAVE_VERSION
    assert save.resources.trust == 1


def test_newer_version_is_rejected():
    with pytest.raises(SaveFormatError):
        snapshot_from_dict({"version": 99, "saved_at": 1000})


def test_malformed_payloads_are_rejected():
    with pytest.raises(SaveFormatError):
        snapshot_from_dict([1, 2, 3])
    with pytest.raises(SaveFormatError):
        snapshot_from_dict({"version": 2})
    with pytest.raises(SaveFormatError):
        snapshot_from_dict({"version": 2, "saved_at": 1, "resources": {"money": "lots"}})


# ── Storage ──────────────────────────────────────────────────────────────────

def test_save_and_load(tmp_path):
    path = tmp_path / "nested" / "save.json"
    save = _full_snapshot()
    save_game(save, path)
    assert has_save_data(path)
    assert load_game(path) == save


def test_load_missing_returns_none(tmp_path):
    assert load_game(tmp_path / "nope.json") is None


def test_load_corrupt_returns_none(tmp_path):
    path = tmp_path / "save.json"
    path.write_text("{not json")
    assert load_game(path) is None


def test_load_newer_version_returns_none(tmp_path):
    path = tmp_path / "save.json"
    path.write_text(json.dumps({"version": 99, "saved_at": 1}))
    assert load_game(path) is None


def test_clear_save(tmp_path):
    path = tmp_path / "save.json"
    save_game(_full_snapshot(), path)
    clear_save(path)
    assert not has_save_data(path)
    clear_save(path)   # already gone
