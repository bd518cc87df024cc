"""
Supamock Core - Scheduler.

Deferred delivery for scripted events. The emulator never touches wall-clock
timers directly: it asks a Scheduler to run a callback after a delay in
milliseconds. Tests use VirtualScheduler and advance time by hand.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class Scheduler(Protocol):
    """Runs a callback after ``delay_ms`` milliseconds."""

    def call_later(self, delay_ms: float, callback: Callable[..., Any], *args: Any) -> Any:
        ...


@dataclass(order=True)
class ScheduledCall:
    due: float
    seq: int
    callback: Callable[..., Any] = field(compare=False)
    args: tuple[Any, ...] = field(compare=False, default=())


class VirtualScheduler:
    """
    Deterministic scheduler driven by virtual milliseconds.

    Calls fire in due-time order; calls with the same due time fire in the
    order they were scheduled. Nothing can be cancelled once scheduled.
    """

    def __init__(self, start_ms: float = 0.0):
        self._now = start_ms
        self._queue: list[ScheduledCall] = []
        self._seq = itertools.count()

    @property
    def now(self) -> float:
        return self._now

    @property
    def pending(self) -> int:
        return len(self._queue)

    def call_later(self, delay_ms: float, callback: Callable[..., Any], *args: Any) -> ScheduledCall:
        call = ScheduledCall(
            due=self._now + max(delay_ms, 0),
            seq=next(self._seq),
            callback=callback,
            args=args,
        )
        heapq.heappush(self._queue, call)
        return call

    def advance(self, ms: float) -> int:
        """
        Move virtual time forward by ``ms`` and fire everything that falls due.

        Callbacks scheduled while advancing fire in the same pass if they are
        due before the new time. Returns the number of callbacks fired.
        """
        target = self._now + ms
        fired = 0
        while self._queue and self._queue[0].due <= target:
            call = heapq.heappop(self._queue)
            self._now = call.due
            call.callback(*call.args)
            fired += 1
        self._now = target
        if fired:
            logger.debug(f"[SCHEDULER] Fired {fired} callback(s), now={self._now}ms")
        return fired

    def run_all(self) -> int:
        """Fire every pending callback, including ones scheduled along the way."""
        fired = 0
        while self._queue:
            fired += self.advance(self._queue[0].due - self._now)
        return fired


class AsyncioScheduler:
    """Scheduler backed by the running asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop

    def call_later(self, delay_ms: float, callback: Callable[..., Any], *args: Any) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(max(delay_ms, 0) / 1000.0, callback, *args)
