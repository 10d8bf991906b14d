from __future__ import annotations

from typing import List

import pytest

from code_engine.runtime import DebounceScheduler


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms / 1000.0


def make_scheduler(fired: List[int], clock: FakeClock, interval_ms: int = 500) -> DebounceScheduler:
    return DebounceScheduler(fired.append, interval_ms=interval_ms, clock=clock)


def test_fires_only_after_interval() -> None:
    clock, fired = FakeClock(), []
    scheduler = make_scheduler(fired, clock)

    generation = scheduler.schedule()
    clock.advance(499)
    assert not scheduler.poll()
    clock.advance(2)
    assert scheduler.poll()

    assert fired == [generation]
    assert not scheduler.pending


def test_new_schedule_supersedes_pending() -> None:
    clock, fired = FakeClock(), []
    scheduler = make_scheduler(fired, clock)

    scheduler.schedule()
    clock.advance(300)
    latest = scheduler.schedule()
    clock.advance(300)
    assert not scheduler.poll()
    clock.advance(250)
    assert scheduler.poll()

    assert fired == [latest]
    assert scheduler.is_current(latest)
    assert not scheduler.is_current(latest - 1)


def test_flush_and_cancel() -> None:
    clock, fired = FakeClock(), []
    scheduler = make_scheduler(fired, clock)

    assert not scheduler.flush()
    scheduler.schedule()
    assert scheduler.flush()
    scheduler.schedule()
    scheduler.cancel()
    clock.advance(1000)

    assert not scheduler.poll()
    assert fired == [1]


def test_negative_interval_is_rejected() -> None:
    with pytest.raises(ValueError):
        DebounceScheduler(lambda generation: None, interval_ms=-1)
