"""Timer scheduling for narrative pacing.

Anything with an asyncio-style ``call_later(delay, callback)`` returning a
cancellable handle will do, so a running asyncio loop can be passed in
directly. ManualScheduler is a deterministic stand-in whose clock only moves
when told to.
"""

import heapq
import itertools
from collections.abc import Callable
from typing import Any, Protocol


class Cancellable(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(
        self, delay: float, callback: Callable[..., Any], *args: Any
    ) -> Cancellable: ...


class Timer:
    """Handle for a callback queued on a ManualScheduler."""

    def __init__(self, when: float, callback: Callable[..., Any], args: tuple):
        self.when = when
        self.callback = callback
        self.args = args
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """A scheduler driven by explicit calls to advance()."""

    def __init__(self):
        self.now = 0.0
        self._queue: list[tuple[float, int, Timer]] = []
        self._counter = itertools.count()

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> Timer:
        timer = Timer(self.now + delay, callback, args)
        heapq.heappush(self._queue, (timer.when, next(self._counter), timer))
        return timer

    @property
    def pending(self) -> int:
        return sum(1 for _, _, timer in self._queue if not timer.cancelled)

    def advance(self, seconds: float) -> int:
        """Move the clock forward, running every callback that falls due.

        Returns how many callbacks ran.
        """
        deadline = self.now + seconds
        ran = 0
        while self._queue and self._queue[0][0] <= deadline:
            when, _, timer = heapq.heappop(self._queue)
            self.now = max(self.now, when)
            if timer.cancelled:
                continue
            timer.callback(*timer.args)
            ran += 1
        self.now = deadline
        return ran

    def run_all(self, limit: int = 1000) -> int:
        """Run callbacks until none are left (or ``limit`` have run)."""
        ran = 0
        while self._queue and ran < limit:
            when, _, timer = heapq.heappop(self._queue)
            self.now = max(self.now, when)
            if timer.cancelled:
                continue
            timer.callback(*timer.args)
            ran += 1
        return ran
