"""Scam timers — one in-flight scam, start to finish."""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class ScamTimer:
    """Progress of one running scam. Times are in ms."""

    scam_id: str
    start_time: float
    duration: float
    is_complete: bool = False


def create_timer(scam_id: str, duration_ms: float, now: float) -> ScamTimer:
    return ScamTimer(scam_id=scam_id, start_time=now, duration=duration_ms)


def timer_progress(timer: ScamTimer, now: float) -> float:
    """Fraction done, 0 (just started) to 1 (complete)."""
    if timer.duration <= 0:
        return 1.0
    elapsed = now - timer.start_time
    if elapsed <= 0:
        return 0.0
    return min(elapsed / timer.duration, 1.0)


def is_timer_complete(timer: ScamTimer, now: float) -> bool:
    if timer.is_complete:
        return True
    return now >= timer.start_time + timer.duration


def update_timer(timer: ScamTimer, now: float) -> ScamTimer:
    """Mark *timer* complete if due.

    Returns the very same object when nothing changes, including when the
    timer was already complete.
    """
    if timer.is_complete or not is_timer_complete(timer, now):
        return timer
    return replace(timer, is_complete=True)
