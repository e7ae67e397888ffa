"""
Cooperative timers.

Every timer in the game (tick loop, meteor spawner, ship reload) lives on a
single ``Scheduler``. Time only moves when ``advance`` is called, so the
game can be driven by the pygame clock or stepped by hand in tests.
"""

from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass, field
from typing import Callable


@dataclass
class TimerHandle:
    """
    Handle to a scheduled callback
    """

    due: float
    callback: Callable[[], None]
    interval: float | None = None
    cancelled: bool = False

    def cancel(self) -> None:
        """Stop the callback from firing again."""
        self.cancelled = True


@dataclass
class Scheduler:
    """
    Single-threaded timer queue measured in milliseconds.
    """

    now: float = 0.0
    _queue: list[tuple[float, int, TimerHandle]] = field(default_factory=list)
    _seq: itertools.count = field(default_factory=itertools.count)

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        """
        Run ``callback`` once, ``delay`` milliseconds from now.

        :raise ValueError: If the delay is negative
        """
        if delay < 0:
            raise ValueError(f"delay must not be negative, got {delay}")
        handle = TimerHandle(due=self.now + delay, callback=callback)
        self._push(handle)
        return handle

    def call_every(
        self, interval: float, callback: Callable[[], None]
    ) -> TimerHandle:
        """
        Run ``callback`` every ``interval`` milliseconds, first one
        ``interval`` from now.

        :raise ValueError: If the interval is not positive
        """
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        handle = TimerHandle(
            due=self.now + interval, callback=callback, interval=interval
        )
        self._push(handle)
        return handle

    def advance(self, elapsed: float) -> int:
        """
        Move the clock forward and fire every timer that falls due, in due
        order. Returns the number of callbacks run.

        :raise ValueError: If ``elapsed`` is negative
        """
        if elapsed < 0:
            raise ValueError(f"elapsed must not be negative, got {elapsed}")

        target = self.now + elapsed
        count = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, handle = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self.now = due
            if handle.interval is not None:
                handle.due = due + handle.interval
                self._push(handle)
            handle.callback()
            count += 1
        self.now = target
        return count

    def _push(self, handle: TimerHandle) -> None:
        heapq.heappush(self._queue, (handle.due, next(self._seq), handle))
