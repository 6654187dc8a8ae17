"""Tests for the tick engine and its driver."""

from grift.data.balance import BALANCE
from grift.engine.loop import (
    GameLoop,
    add_timer,
    calculate_offline_progress,
    create_engine_state,
    pause,
    remove_timer,
    resume,
    tick,
)

HOUR_MS = 60 * 60 * 1000


class FakeClock:
    def __init__(self, t: float = 0.0) -> None:
        self.t = t

    def __call__(self) -> float:
        return self.t


# ── Pure transitions ─────────────────────────────────────────────────────────

def test_tick_reports_completion_once():
    state = add_timer(create_engine_state(1000), "bot-farms", 500, now=1000)

    first = tick(state, 1600)
    assert [t.scam_id for t in first.completed_timers] == ["bot-farms"]
    assert first.delta_ms == 600

    second = tick(first.state, 2000)
    assert second.completed_timers == []
    assert second.state.active_timers[0] is first.state.active_timers[0]


def test_tick_does_not_touch_input_state():
    state = add_timer(create_engine_state(0), "bot-farms", 100, now=0)
    tick(state, 500)
    assert not state.active_timers[0].is_complete
    assert state.last_tick_time == 0


def test_tick_while_paused_is_a_no_op():
    state = pause(add_timer(create_engine_state(0), "bot-farms", 100, now=0), 50)
    result = tick(state, 5000)
    assert result.state is state
    assert result.delta_ms == 0
    assert result.completed_timers == []


def test_pause_is_idempotent():
    once = pause(create_engine_state(0), 10)
    twice = pause(once, 20)
    assert twice is once
    assert twice.paused_at == 10


def test_resume_discards_paused_interval():
    state = pause(create_engine_state(0), 100)
    resumed = resume(state, 5000)
    assert not resumed.is_paused
    assert resumed.paused_at is None
    assert tick(resumed, 5100).delta_ms == 100


def test_remove_timer_drops_every_matching_id():
    state = create_engine_state(0)
    state = add_timer(state, "a", 100, 0)
    state = add_timer(state, "a", 200, 0)
    state = add_timer(state, "b", 100, 0)
    assert [t.scam_id for t in remove_timer(state, "a").active_timers] == ["b"]


# ── Offline progress ─────────────────────────────────────────────────────────

def test_offline_counts_whole_cycles():
    state = add_timer(create_engine_state(0), "bot-farms", 1000, now=0)
    progress = calculate_offline_progress(0, 10_500, state)
    assert progress.elapsed_ms == 10_500
    assert progress.completed_scams == 10
    assert progress.cycles == {"bot-farms": 10}


def test_offline_gap_is_capped():
    state = add_timer(create_engine_state(0), "bot-farms", 1000, now=0)
    progress = calculate_offline_progress(0, 24 * HOUR_MS, state)
    assert progress.elapsed_ms == BALANCE.engine.max_offline_ms == 8 * HOUR_MS
    assert progress.completed_scams == 8 * 60 * 60


def test_offline_stops_at_pause():
    state = pause(add_timer(create_engine_state(0), "bot-farms", 1000, now=0), 5000)
    progress = calculate_offline_progress(0, 100_000, state)
    assert progress.elapsed_ms == 5000
    assert progress.completed_scams == 5


def test_offline_skips_zero_duration_timers():
    state = add_timer(create_engine_state(0), "broken", 0, now=0)
    progress = calculate_offline_progress(0, 10_000, state)
    assert progress.completed_scams == 0
    assert progress.cycles == {}


def test_offline_clock_going_backwards_earns_nothing():
    state = add_timer(create_engine_state(0), "bot-farms", 1000, now=0)
    assert calculate_offline_progress(10_000, 5_000, state).elapsed_ms == 0


def test_offline_earnings_start_empty():
    progress = calculate_offline_progress(0, 1000, create_engine_state(0))
    assert progress.earnings.money == 0
    assert progress.earnings.heat == 0


# ── Driver ───────────────────────────────────────────────────────────────────

def test_step_does_nothing_until_started():
    loop = GameLoop(clock=FakeClock())
    assert loop.step() is None


def test_step_fires_callbacks():
    clock = FakeClock(0)
    ticks, done = [], []
    loop = GameLoop(clock=clock, on_tick=ticks.append, on_timer_complete=done.append)
    loop.start()
    loop.add_timer("bot-farms", 1000)

    clock.t = 500
    loop.step()
    assert len(ticks) == 1 and done == []

    clock.t = 1000
    loop.step()
    assert [t.scam_id for t in done] == ["bot-farms"]


def test_callback_sees_updated_state():
    clock = FakeClock(0)
    loop = GameLoop(clock=clock)
    seen = []
    loop.on_timer_complete = lambda timer: seen.append(loop.state.last_tick_time)
    loop.start()
    loop.add_timer("bot-farms", 100)
    clock.t = 200
    loop.step()
    assert seen == [200]


def test_stop_halts_ticking():
    clock = FakeClock(0)
    loop = GameLoop(clock=clock)
    loop.start()
    loop.stop()
    assert loop.step() is None
    assert not loop.running


def test_loop_pause_resume():
    clock = FakeClock(0)
    loop = GameLoop(clock=clock)
    loop.start()
    clock.t = 100
    loop.pause()
    assert loop.is_paused
    clock.t = 9000
    assert loop.step().delta_ms == 0
    loop.resume()
    clock.t = 9050
    assert loop.step().delta_ms == 50


def test_timer_lookup_and_clear():
    loop = GameLoop(clock=FakeClock(0))
    loop.add_timer("bot-farms", 1000)
    assert loop.timer_for("bot-farms").duration == 1000
    assert loop.timer_for("nope") is None
    loop.clear_timers()
    assert loop.state.active_timers == ()


def test_pause_freezes_running_timers():
    state = add_timer(create_engine_state(0), "bot-farms", 1000, 0)
    state = pause(state, 400)
    resumed = resume(state, 5400)
    [timer] = resumed.active_timers
    assert timer.start_time == 5000
    assert tick(resumed, 5999).completed_timers == []
    assert len(tick(resumed, 6000).completed_timers) == 1


def test_resume_without_pause_keeps_timers():
    state = add_timer(create_engine_state(0), "bot-farms", 1000, 0)
    assert resume(state, 700).active_timers is state.active_timers


def test_loop_add_timer_at_explicit_start():
    loop = GameLoop(clock=FakeClock(5000))
    loop.add_timer("bot-farms", 1000, start_at=3000)
    assert loop.timer_for("bot-farms").start_time == 3000
