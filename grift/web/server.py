"""Grift Web — Flask JSON API wrapped around a single game session.

Ticks are driven lazily: each request catches up on elapsed time before
acting or returning the current state. Long gaps between requests are
paid out through the offline estimator instead of one giant tick.
"""

from __future__ import annotations

import logging
import threading
import time

from flask import Flask, jsonify, request

from grift.data.balance import BALANCE
from grift.data.crew import employees_for_scam, manager_for_scam
from grift.engine.economy import bot_purchase_price, format_duration, format_number
from grift.engine.prestige import PrestigeChoice
from grift.engine.session import GameSession
from grift.engine.storage import SAVE_FILE, load_game, save_game

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Flask app
# ---------------------------------------------------------------------------

app = Flask(__name__)

# ---------------------------------------------------------------------------
# In-memory game session (single-player)
# ---------------------------------------------------------------------------

# Gaps longer than this between requests go through offline catch-up
_LAZY_CATCH_UP_MS: float = 60_000.0

SAVE_PATH = SAVE_FILE

_lock = threading.Lock()
_session: GameSession | None = None
_last_tick: float = 0.0
_last_autosave: float = 0.0
_was_forced: bool = False
_pending_notifications: list[dict] = []


def reset_session(session: GameSession | None = None) -> None:
    """Drop the current session; the next request builds (or loads) a new one."""
    global _session, _was_forced
    with _lock:
        _session = session
        _was_forced = False
        if session is not None:
            _start(session)
        _pending_notifications.clear()


def _start(session: GameSession) -> None:
    global _last_tick, _last_autosave
    session.start()
    _last_tick = session.loop.now()
    _last_autosave = time.time()


def _ensure_game() -> GameSession:
    """Initialise the game if not yet started."""
    global _session
    if _session is not None:
        return _session
    session = GameSession()
    saved = load_game(SAVE_PATH)
    if saved is not None:
        session.restore(saved)
        logger.info("Loaded save from %s", SAVE_PATH)
        offline = session.catch_up()
        if offline.completed_scams:
            _pending_notifications.append({"type": "offline", **_offline_json(offline)})
    _start(session)
    _session = session
    return session


def _do_ticks(session: GameSession) -> None:
    """Catch up game ticks since the last call."""
    global _last_tick, _last_autosave, _was_forced
    now = session.loop.now()
    if now - _last_tick > _LAZY_CATCH_UP_MS and not session.loop.is_paused:
        offline = session.catch_up()
        if offline.completed_scams:
            _pending_notifications.append({"type": "offline", **_offline_json(offline)})
    _last_tick = now

    for completion in session.tick():
        _pending_notifications.append({
            "type": "completion",
            "scam_id": completion.scam_id,
            "resource": completion.resource,
            "reward": completion.reward,
            "heat": completion.heat,
        })

    # Announce the forced escape once, when the heat first hits the cap
    if session.prestige_forced and not _was_forced:
        _pending_notifications.append({"type": "prestige_forced"})
    _was_forced = session.prestige_forced

    if time.time() - _last_autosave >= BALANCE.save.autosave_interval_s:
        save_game(session.snapshot(), SAVE_PATH)
        _last_autosave = time.time()


def _offline_json(offline) -> dict:
    e = offline.earnings
    return {
        "elapsed": format_duration(offline.elapsed_ms),
        "elapsed_ms": offline.elapsed_ms,
        "completed_scams": offline.completed_scams,
        "earnings": {
            "money": e.money,
            "reputation": e.reputation,
            "heat": e.heat,
            "bots": e.bots,
            "skill_points": e.skill_points,
            "crypto": e.crypto,
        },
    }


def _state_json(session: GameSession) -> dict:
    """Build the JSON blob sent to the client."""
    res = session.resources.resources

    scams = []
    for scam_id, defn in session.catalog.items():
        progress = session.scams.get(scam_id)
        unlocked = progress is not None and progress.is_unlocked
        manager = manager_for_scam(scam_id)
        scams.append({
            "id": scam_id,
            "name": defn.name,
            "tier": defn.tier,
            "resource": defn.resource_type.value,
            "level": progress.level if progress else 1,
            "unlocked": unlocked,
            "unlock_cost": defn.unlock_cost or 0,
            "times_completed": progress.times_completed if progress else 0,
            "running": session.is_running(scam_id),
            "progress": session.timer_progress(scam_id),
            "duration_ms": session.duration_for(scam_id),
            "reward": session.reward_for(scam_id),
            "upgrade_cost": session.upgrade_cost_for(scam_id),
            "managed": session.managers.is_scam_managed(scam_id),
            "manager": {
                "id": manager.id,
                "name": manager.name,
                "cost": manager.cost,
                "hired": session.managers.is_hired(manager.id),
            } if manager else None,
            "employees": [
                {
                    "id": emp.id,
                    "name": emp.name,
                    "count": session.employees.count(emp.id),
                    "hire_cost": session.hire_cost_for(emp.id),
                }
                for emp in employees_for_scam(scam_id)
            ],
        })

    # Drain pending notifications
    notifs = list(_pending_notifications)
    _pending_notifications.clear()

    return {
        "resources": res.to_dict(),
        "display": {
            "money": format_number(res.money),
            "bots": format_number(res.bots),
            "reputation": format_number(res.reputation),
            "trust": format_number(res.trust),
            "crypto": f"{res.crypto:.2f}",
        },
        "bot_price": bot_purchase_price(res.bots),
        "max_heat": BALANCE.prestige.max_heat,
        "prestige_forced": session.prestige_forced,
        "paused": session.loop.is_paused,
        "scams": scams,
        "notifications": notifs,
        "server_time": time.time(),
    }


def _act(action, key: str):
    """Catch up ticks, run *action*, and return the state with its result under *key*."""
    with _lock:
        session = _ensure_game()
        _do_ticks(session)
        result = action(session)
        data = _state_json(session)
        data[key] = result
        return jsonify(data)


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

@app.route("/api/state")
def api_state():
    with _lock:
        session = _ensure_game()
        _do_ticks(session)
        return jsonify(_state_json(session))


@app.route("/api/action/start/<scam_id>", methods=["POST"])
def action_start(scam_id: str):
    return _act(lambda s: s.start_scam(scam_id), "started")


@app.route("/api/action/unlock/<scam_id>", methods=["POST"])
def action_unlock(scam_id: str):
    return _act(lambda s: s.unlock_scam(scam_id), "unlocked")


@app.route("/api/action/upgrade/<scam_id>", methods=["POST"])
def action_upgrade(scam_id: str):
    return _act(lambda s: s.upgrade_scam(scam_id), "upgraded")


@app.route("/api/action/hire/<employee_id>", methods=["POST"])
def action_hire(employee_id: str):
    body = request.get_json(silent=True) or {}
    try:
        amount = int(body.get("amount", 1))
    except (TypeError, ValueError):
        return jsonify({"error": "amount must be an integer"}), 400
    return _act(lambda s: s.hire_employee(employee_id, amount), "hired")


@app.route("/api/action/manager/<manager_id>", methods=["POST"])
def action_manager(manager_id: str):
    return _act(lambda s: s.hire_manager(manager_id), "hired")


@app.route("/api/action/buy_bot", methods=["POST"])
def action_buy_bot():
    return _act(lambda s: s.buy_bot(), "purchased")


@app.route("/api/action/pause", methods=["POST"])
def action_pause():
    return _act(lambda s: s.pause() or True, "paused")


@app.route("/api/action/resume", methods=["POST"])
def action_resume():
    def resume(session: GameSession):
        offline = session.resume()
        return _offline_json(offline) if offline is not None else None
    return _act(resume, "offline")


@app.route("/api/action/prestige", methods=["POST"])
def action_prestige():
    body = request.get_json(silent=True) or {}
    try:
        choice = PrestigeChoice(body.get("choice"))
    except ValueError:
        return jsonify({"error": "choice must be 'clean-escape' or 'snitch'"}), 400

    with _lock:
        session = _ensure_game()
        _do_ticks(session)
        result = session.execute_prestige(choice)
        save_game(session.snapshot(), SAVE_PATH)
        data = _state_json(session)
        data["prestige"] = {
            "choice": result.choice.value,
            "previous_trust": result.previous_trust,
            "new_trust": result.new_trust,
            "bonuses": [
                {"resource": b.resource, "amount": b.amount} for b in result.bonuses or ()
            ],
        }
        return jsonify(data)


@app.route("/api/action/save", methods=["POST"])
def action_save():
    with _lock:
        session = _ensure_game()
        save_game(session.snapshot(), SAVE_PATH)
        return jsonify({"saved": True})


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def run_server(host: str = "127.0.0.1", port: int = 5000, debug: bool = False) -> None:
    """Start the Flask development server."""
    app.run(host=host, port=port, debug=debug, use_reloader=False)
