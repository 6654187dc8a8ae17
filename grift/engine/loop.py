"""Game loop — tick engine, pause/resume and offline catch-up.

The state functions are pure: each returns a new ``EngineState`` and never
touches its input. ``GameLoop`` is the thin driver a scheduler calls on a
fixed cadence (``BALANCE.engine.tick_interval_ms``).
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field, replace
from typing import Callable

from grift.data.balance import BALANCE
from grift.engine.timer import ScamTimer, create_timer, update_timer

logger = logging.getLogger(__name__)


def now_ms() -> float:
    """Wall clock in milliseconds."""
    return time.time() * 1000.0


@dataclass(frozen=True)
class EngineState:
    """Clock cursor plus every running timer."""

    last_tick_time: float
    active_timers: tuple[ScamTimer, ...] = ()
    is_paused: bool = False
    paused_at: float | None = None


@dataclass(frozen=True)
class TickResult:
    state: EngineState
    delta_ms: float
    completed_timers: list[ScamTimer] = field(default_factory=list)


@dataclass(frozen=True)
class OfflineEarnings:
    """Resources earned while away. Trust never accrues offline."""

    money: float = 0.0
    reputation: float = 0.0
    heat: float = 0.0
    bots: float = 0.0
    skill_points: float = 0.0
    crypto: float = 0.0


@dataclass(frozen=True)
class OfflineProgress:
    elapsed_ms: float
    earnings: OfflineEarnings
    completed_scams: int
    # scam_id -> cycles, for callers that price the earnings themselves
    cycles: dict[str, int] = field(default_factory=dict)


# ── Pure state transitions ───────────────────────────────────────


def create_engine_state(now: float) -> EngineState:
    return EngineState(last_tick_time=now)


def tick(state: EngineState, now: float) -> TickResult:
    """Advance every timer to *now* and report the ones that just finished."""
    if state.is_paused:
        return TickResult(state=state, delta_ms=0, completed_timers=[])

    delta = now - state.last_tick_time
    completed: list[ScamTimer] = []
    updated: list[ScamTimer] = []
    for timer in state.active_timers:
        new = update_timer(timer, now)
        if not timer.is_complete and new.is_complete:
            completed.append(new)
        updated.append(new)

    return TickResult(
        state=replace(state, last_tick_time=now, active_timers=tuple(updated)),
        delta_ms=delta,
        completed_timers=completed,
    )


def pause(state: EngineState, now: float) -> EngineState:
    if state.is_paused:
        return state
    return replace(state, is_paused=True, paused_at=now)


def resume(state: EngineState, now: float) -> EngineState:
    """Unpause. The paused interval is dropped from the live delta.

    Running timers are pushed forward by the same interval, so a pause
    freezes their elapsed time.
    """
    timers = state.active_timers
    if state.is_paused and state.paused_at is not None:
        gap = max(now - state.paused_at, 0)
        timers = tuple(
            t if t.is_complete else replace(t, start_time=t.start_time + gap)
            for t in timers
        )
    return replace(
        state, is_paused=False, paused_at=None, last_tick_time=now, active_timers=timers
    )


def add_timer(state: EngineState, scam_id: str, duration_ms: float, now: float) -> EngineState:
    """Start a timer. Duplicate ids are the caller's problem."""
    timer = create_timer(scam_id, duration_ms, now)
    return replace(state, active_timers=state.active_timers + (timer,))


def remove_timer(state: EngineState, scam_id: str) -> EngineState:
    kept = tuple(t for t in state.active_timers if t.scam_id != scam_id)
    return replace(state, active_timers=kept)


def calculate_offline_progress(
    last_tick_time: float, current_time: float, state: EngineState
) -> OfflineProgress:
    """Count whole scam cycles that fit in the time away, capped at MAX_OFFLINE.

    A paused engine stopped earning at ``paused_at``. Zero-duration timers are
    degenerate and skipped. Earnings stay zero here; see
    ``grift.engine.offline`` for pricing them.
    """
    if state.is_paused and state.paused_at is not None:
        end = state.paused_at
    else:
        end = current_time

    elapsed = min(max(end - last_tick_time, 0), BALANCE.engine.max_offline_ms)

    total = 0
    cycles: dict[str, int] = {}
    for timer in state.active_timers:
        if timer.duration > 0:
            n = int(elapsed // timer.duration)
            total += n
            cycles[timer.scam_id] = cycles.get(timer.scam_id, 0) + n

    return OfflineProgress(
        elapsed_ms=elapsed,
        earnings=OfflineEarnings(),
        completed_scams=total,
        cycles=cycles,
    )


# ── Driver ───────────────────────────────────────────────────────


class GameLoop:
    """Holds the engine state and turns scheduler callbacks into ticks."""

    def __init__(
        self,
        clock: Callable[[], float] = now_ms,
        on_tick: Callable[[TickResult], None] | None = None,
        on_timer_complete: Callable[[ScamTimer], None] | None = None,
    ) -> None:
        self._clock = clock
        self.on_tick = on_tick
        self.on_timer_complete = on_timer_complete
        self.state: EngineState = create_engine_state(clock())
        self.running = False

    @property
    def is_paused(self) -> bool:
        return self.state.is_paused

    def now(self) -> float:
        return self._clock()

    def start(self) -> None:
        """Begin ticking from a fresh clock. Existing timers are kept."""
        self.state = resume(self.state, self._clock())
        self.running = True

    def stop(self) -> None:
        """Stop ticking. State is abandoned as-is, not flushed."""
        self.running = False

    def pause(self) -> None:
        self.state = pause(self.state, self._clock())

    def resume(self) -> None:
        self.state = resume(self.state, self._clock())

    def add_timer(self, scam_id: str, duration_ms: float, start_at: float | None = None) -> None:
        if start_at is None:
            start_at = self._clock()
        self.state = add_timer(self.state, scam_id, duration_ms, start_at)

    def remove_timer(self, scam_id: str) -> None:
        self.state = remove_timer(self.state, scam_id)

    def clear_timers(self) -> None:
        self.state = replace(self.state, active_timers=())

    def timer_for(self, scam_id: str) -> ScamTimer | None:
        for timer in self.state.active_timers:
            if timer.scam_id == scam_id:
                return timer
        return None

    def step(self) -> TickResult | None:
        """One tick at the clock's current time. None when stopped."""
        if not self.running:
            return None

        result = tick(self.state, self._clock())
        self.state = result.state

        if self.on_tick is not None:
            self.on_tick(result)
        for timer in result.completed_timers:
            logger.debug("Timer complete: %s", timer.scam_id)
            if self.on_timer_complete is not None:
                self.on_timer_complete(timer)
        return result
