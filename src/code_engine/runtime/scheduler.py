"""Debounce timer driven by the host's event loop."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Optional

from . import telemetry


@dataclass
class PendingRun:
    deadline: float
    generation: int


class DebounceScheduler:
    """Delays ``callback`` until ``interval_ms`` passed without a new ``schedule``.

    The scheduler never spawns threads: hosts call :meth:`poll` from their own
    timer tick. Each ``schedule`` bumps a generation number, and a run only
    happens for the generation that is still current, so a newer change always
    supersedes an older pending one.
    """

    def __init__(
        self,
        callback: Callable[[int], None],
        *,
        interval_ms: int = 500,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if interval_ms < 0:
            raise ValueError("interval_ms must not be negative")
        self._callback = callback
        self._interval = interval_ms / 1000.0
        self._clock = clock
        self._pending: Optional[PendingRun] = None
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def schedule(self) -> int:
        self._generation += 1
        self._pending = PendingRun(
            deadline=self._clock() + self._interval,
            generation=self._generation,
        )
        return self._generation

    def cancel(self) -> None:
        self._pending = None

    def is_current(self, generation: int) -> bool:
        return generation == self._generation

    def poll(self) -> bool:
        """Fire the callback if the pending deadline has passed."""

        pending = self._pending
        if pending is None or pending.deadline > self._clock():
            return False
        return self._fire(pending)

    def flush(self) -> bool:
        pending = self._pending
        if pending is None:
            return False
        return self._fire(pending)

    def _fire(self, pending: PendingRun) -> bool:
        self._pending = None
        if not self.is_current(pending.generation):
            telemetry.record_event(
                "scheduler.superseded",
                level="debug",
                data={"generation": pending.generation},
            )
            return False
        self._callback(pending.generation)
        return True


__all__ = ["DebounceScheduler", "PendingRun"]
