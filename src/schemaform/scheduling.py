"""Deferred-callback sources for the debounce timer.

Anything with ``call_later(delay, callback) -> handle`` where ``handle.cancel()``
exists can drive a BufferedCell; an ``asyncio`` event loop qualifies as is.
ManualScheduler is a virtual clock for tests and one-shot CLI runs.
"""
from __future__ import annotations

import logging
from typing import Callable, Protocol

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> None:
        ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        ...


class ManualTimer:
    def __init__(self, due: float, seq: int, callback: Callable[[], None]):
        self.due = due
        self.seq = seq
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Scheduler whose clock only moves when advance() or run_all() is called."""

    def __init__(self):
        self.now = 0.0
        self._timers: list[ManualTimer] = []
        self._seq = 0

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualTimer:
        self._seq += 1
        timer = ManualTimer(self.now + max(delay, 0.0), self._seq, callback)
        self._timers.append(timer)
        return timer

    @property
    def pending(self) -> int:
        return sum(1 for t in self._timers if not t.cancelled)

    def advance(self, seconds: float) -> int:
        """Move the clock forward, firing due timers in order. Returns how many fired."""
        target = self.now + seconds
        fired = 0
        while True:
            due = [t for t in self._timers if not t.cancelled and t.due <= target]
            if not due:
                break
            timer = min(due, key=lambda t: (t.due, t.seq))
            self._timers.remove(timer)
            self.now = max(self.now, timer.due)
            timer.callback()
            fired += 1
        self._timers = [t for t in self._timers if not t.cancelled]
        self.now = target
        return fired

    def run_all(self) -> int:
        """Fire every pending timer, including ones scheduled while firing."""
        fired = 0
        while True:
            live = [t for t in self._timers if not t.cancelled]
            if not live:
                self._timers = []
                return fired
            fired += self.advance(max(t.due for t in live) - self.now)
