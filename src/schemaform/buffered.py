"""Buffered state cell: a fast local copy of a value with debounced commits."""
from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Generic, Optional, TypeVar

from .scheduling import Scheduler, TimerHandle

logger = logging.getLogger(__name__)

T = TypeVar('T')
Update = Callable[[Any], Any]
Commit = Callable[[Update], Any]

DEFAULT_DELAY = 0.3


class CellState(Enum):
    IDLE = 'idle'
    EDITING = 'editing'
    COMMITTING = 'committing'


def compose(updates: list[Update]) -> Update:
    """Chain update functions so the result applies them in list order."""
    updates = list(updates)

    def composed(prev):
        for update in updates:
            prev = update(prev)
        return prev

    return composed


def _same(a: Any, b: Any) -> bool:
    # type check keeps True/1 and 1/1.0 style pairs distinct
    return a is b or (type(a) is type(b) and a == b)


class BufferedCell(Generic[T]):
    """Local value plus debounced upstream commits.

    set() applies an update to the local value at once and queues it; when the
    debounce timer fires, every queued update is composed in edit order and
    handed to ``commit`` in a single call. Without a scheduler each set()
    commits immediately; without ``commit`` the cell is local-only.

    Upstream values arrive through receive(). A value equal to the last one
    received is ignored. While updates are pending the local value wins;
    once idle the local value adopts the upstream one.
    """

    def __init__(
        self,
        value: T,
        commit: Optional[Commit] = None,
        scheduler: Optional[Scheduler] = None,
        delay: float = DEFAULT_DELAY,
    ):
        self._local = value
        self._external = value
        self._commit = commit
        self._scheduler = scheduler
        self._delay = delay
        self._pending: list[Update] = []
        self._timer: Optional[TimerHandle] = None
        self.state = CellState.IDLE
        self.commit_count = 0

    @property
    def value(self) -> T:
        return self._local

    @property
    def external(self) -> T:
        return self._external

    @property
    def has_pending(self) -> bool:
        return bool(self._pending)

    def set(self, update: Update) -> None:
        self._local = update(self._local)
        if self._commit is None:
            return
        self._pending.append(update)
        if self.state is not CellState.COMMITTING:
            self.state = CellState.EDITING
        self._schedule()

    def _schedule(self) -> None:
        self._cancel_timer()
        if self._scheduler is None:
            self.flush()
            return
        self._timer = self._scheduler.call_later(self._delay, self._on_timer)

    def _on_timer(self) -> None:
        self._timer = None
        self.flush()

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def flush(self) -> bool:
        """Commit all queued updates now. Returns False if nothing was pending."""
        self._cancel_timer()
        if not self._pending or self._commit is None:
            return False
        updates, self._pending = self._pending, []
        self.state = CellState.COMMITTING
        logger.debug(f"Committing {len(updates)} coalesced update(s)")
        try:
            self._commit(compose(updates))
        finally:
            self.state = CellState.EDITING if self._pending else CellState.IDLE
        self.commit_count += 1
        return True

    def receive(self, external: T) -> bool:
        """Report the current upstream value. Returns True if the local value changed."""
        if _same(external, self._external):
            return False
        self._external = external
        if self._pending:
            logger.debug('Upstream value changed while edits are pending; keeping local value')
            return False
        self._local = external
        return True

    def cancel(self) -> None:
        """Drop queued updates without committing and fall back to the upstream value."""
        self._cancel_timer()
        self._pending = []
        self._local = self._external
        self.state = CellState.IDLE
