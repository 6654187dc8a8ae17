"""Tests for the game session wiring."""

from grift.data.balance import BALANCE
from grift.engine.prestige import PrestigeChoice
from grift.engine.session import GameSession


class FakeClock:
    def __init__(self, t: float = 0.0) -> None:
        self.t = t

    def __call__(self) -> float:
        return self.t


def _session(clock: FakeClock, money: float = 0) -> GameSession:
    session = GameSession(clock=clock)
    session.resources.add_money(money)
    session.start()
    return session


def test_fresh_session():
    session = _session(FakeClock())
    assert session.resources.resources.money == BALANCE.resources.starting_money
    assert session.scams.is_unlocked("bot-farms")
    assert not session.is_running("bot-farms")


def test_start_scam_rules():
    session = _session(FakeClock())
    assert session.start_scam("bot-farms")
    assert not session.start_scam("bot-farms")          # already running
    assert not session.start_scam("survey-scams")       # locked
    assert not session.start_scam("made-up")


def test_completion_auto_collects():
    clock = FakeClock()
    session = _session(clock)
    session.start_scam("bot-farms")

    clock.t = 999
    assert session.tick() == []

    clock.t = 1000
    [completion] = session.tick()
    assert completion.scam_id == "bot-farms"
    assert completion.resource == "bots"
    assert completion.reward == 1
    assert completion.heat == 0.5

    res = session.resources.resources
    assert res.bots == 1
    assert res.heat == 0.5
    assert session.scams.get("bot-farms").times_completed == 1
    assert not session.is_running("bot-farms")


def test_tick_before_start_does_nothing():
    session = GameSession(clock=FakeClock())
    session.start_scam("bot-farms")
    assert session.tick() == []


def test_unlock_costs_money():
    session = _session(FakeClock())
    assert not session.unlock_scam("nigerian-prince-emails")
    session.resources.add_money(100)
    assert session.unlock_scam("nigerian-prince-emails")
    assert session.scams.is_unlocked("nigerian-prince-emails")
    assert session.resources.resources.money == BALANCE.resources.starting_money
    assert not session.unlock_scam("nigerian-prince-emails")


def test_upgrade_costs_money():
    session = _session(FakeClock())
    assert session.upgrade_cost_for("bot-farms") == 10
    assert session.upgrade_scam("bot-farms")
    assert session.scams.get("bot-farms").level == 2
    assert session.resources.resources.money == BALANCE.resources.starting_money - 10
    assert not session.upgrade_scam("survey-scams")


def test_hire_employee():
    session = _session(FakeClock(), money=1000)
    assert not session.hire_employee("bot-wrangler", 0)
    assert not session.hire_employee("nobody")
    assert session.hire_employee("bot-wrangler", 2)
    assert session.employees.count("bot-wrangler") == 2
    assert session.resources.resources.money == BALANCE.resources.starting_money + 1000 - 107


def test_employees_speed_up_new_runs():
    session = _session(FakeClock(), money=100_000)
    session.hire_employee("bot-wrangler", 10)
    # 30% faster: round(1000 / 1.3)
    assert session.duration_for("bot-farms") == 769
    session.start_scam("bot-farms")
    assert session.loop.timer_for("bot-farms").duration == 769


def test_manager_restarts_scam():
    clock = FakeClock()
    session = _session(clock, money=500)
    assert session.hire_manager("bot-3000")
    assert not session.hire_manager("bot-3000")
    assert session.is_running("bot-farms")

    clock.t = 1000
    session.tick()
    assert session.is_running("bot-farms")
    assert session.loop.timer_for("bot-farms").start_time == 1000


def test_buy_bot():
    session = _session(FakeClock(), money=90)
    assert session.buy_bot()
    assert session.resources.resources.bots == 1
    assert not session.buy_bot()


def test_prestige_clears_running_scams():
    clock = FakeClock()
    session = _session(clock, money=500)
    session.hire_manager("bot-3000")
    session.resources.add_heat(BALANCE.prestige.max_heat)
    assert session.prestige_forced

    result = session.execute_prestige(PrestigeChoice.CLEAN_ESCAPE)
    assert result.new_trust == 11
    assert session.loop.state.active_timers == ()
    assert not session.prestige_forced
    assert not session.managers.is_hired("bot-3000")

    clock.t = 5000
    assert session.tick() == []


def test_catch_up_pays_once():
    clock = FakeClock()
    session = _session(clock, money=500)
    session.hire_manager("bot-3000")

    clock.t = 10_000
    offline = session.catch_up()
    assert offline.completed_scams == 10
    assert offline.earnings.bots == 5
    res = session.resources.resources
    assert res.bots == 5
    assert res.heat == 2.5

    # the gap is spent; managed scams start a fresh cycle
    assert session.loop.state.last_tick_time == 10_000
    assert session.loop.timer_for("bot-farms").start_time == 10_000
    assert session.catch_up().completed_scams == 0


def test_resume_credits_paused_gap():
    clock = FakeClock()
    session = _session(clock, money=500)
    session.hire_manager("bot-3000")

    clock.t = 500
    session.pause()
    clock.t = 4500
    offline = session.resume()
    assert offline.elapsed_ms == 4000
    assert offline.completed_scams == 4
    assert session.resources.resources.bots == 2
    assert not session.loop.is_paused


def test_resume_without_credit():
    clock = FakeClock()
    session = _session(clock)
    session.pause()
    clock.t = 4000
    assert session.resume(credit_gap=False) is None


def test_snapshot_restore_round_trip():
    clock = FakeClock(1000)
    session = _session(clock, money=2000)
    session.hire_manager("bot-3000")
    session.hire_employee("bot-wrangler", 3)
    session.unlock_scam("nigerian-prince-emails")

    save = session.snapshot()
    assert save.saved_at == 1000

    other = GameSession(clock=clock)
    other.restore(save)
    assert other.resources.resources == session.resources.resources
    assert other.scams.scams == session.scams.scams
    assert other.employees.count("bot-wrangler") == 3
    assert other.managers.is_hired("bot-3000")
    assert other.loop.state == session.loop.state


def test_restore_then_catch_up():
    clock = FakeClock(0)
    session = _session(clock, money=500)
    session.hire_manager("bot-3000")
    save = session.snapshot()

    clock.t = 24 * 60 * 60 * 1000
    later = GameSession(clock=clock)
    later.restore(save)
    offline = later.catch_up()
    assert offline.elapsed_ms == BALANCE.engine.max_offline_ms
    later.start()
    assert later.is_running("bot-farms")


def test_resume_keeps_unfinished_scam_running():
    clock = FakeClock()
    session = _session(clock, money=100)
    session.unlock_scam("nigerian-prince-emails")
    session.start_scam("nigerian-prince-emails")

    clock.t = 4000
    session.pause()
    clock.t = 4500
    offline = session.resume()
    assert offline.completed_scams == 0
    assert session.is_running("nigerian-prince-emails")

    # 4 s were done before the pause, so one more second is owed
    clock.t = 5000
    assert session.tick() == []
    clock.t = 5500
    [completion] = session.tick()
    assert completion.scam_id == "nigerian-prince-emails"
    assert session.resources.resources.money == BALANCE.resources.starting_money + completion.reward
    assert not session.is_running("nigerian-prince-emails")


def test_resume_pays_unmanaged_scam_once():
    clock = FakeClock()
    session = _session(clock)
    session.start_scam("bot-farms")
    session.pause()

    clock.t = 60_000
    offline = session.resume()
    assert offline.completed_scams == 0
    assert session.resources.resources.bots == 0

    clock.t = 61_000
    assert len(session.tick()) == 1
    clock.t = 120_000
    assert session.tick() == []
    assert session.resources.resources.bots == 1
    assert session.scams.get("bot-farms").times_completed == 1


def test_catch_up_leaves_unmanaged_timer_to_live_ticks():
    clock = FakeClock()
    session = _session(clock)
    session.start_scam("bot-farms")

    clock.t = 10_000
    offline = session.catch_up()
    assert offline.completed_scams == 0
    assert session.is_running("bot-farms")

    assert len(session.tick()) == 1
    assert session.scams.get("bot-farms").times_completed == 1
    assert not session.is_running("bot-farms")


def test_tick_pays_every_managed_cycle_in_gap():
    clock = FakeClock()
    session = _session(clock, money=500)
    session.hire_manager("bot-3000")

    clock.t = 30_000
    completions = session.tick()
    assert len(completions) == 30
    assert session.scams.get("bot-farms").times_completed == 30
    assert session.resources.resources.heat == 15
    assert session.loop.timer_for("bot-farms").start_time == 30_000


def test_tick_replay_is_capped():
    clock = FakeClock()
    session = _session(clock, money=500)
    session.hire_manager("bot-3000")

    clock.t = BALANCE.engine.max_offline_ms * 2
    session.tick()
    cap_cycles = BALANCE.engine.max_offline_ms // 1000
    assert session.scams.get("bot-farms").times_completed == cap_cycles + 1
