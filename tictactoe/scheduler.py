"""Timer back-ends for deferred computer moves.

The controller never sleeps.  It asks a :class:`Scheduler` to run a callback
after a delay and keeps the returned handle in a :class:`DeferredTask`, which
holds at most one pending job at a time.
"""
from __future__ import annotations

import heapq
import itertools
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, List, Optional, Set, Tuple

logger = logging.getLogger(__name__)

Callback = Callable[[], None]


class Scheduler(ABC):
    """Runs callbacks after a delay expressed in milliseconds."""

    @abstractmethod
    def call_later(self, delay_ms: int, callback: Callback) -> Any:
        """Schedule ``callback`` and return a handle usable with :meth:`cancel`."""

    @abstractmethod
    def cancel(self, handle: Any) -> None:
        """Prevent a scheduled callback from running."""


class ManualScheduler(Scheduler):
    """Virtual clock driven explicitly through :meth:`advance`.

    Used by the tests and by headless simulations where wall-clock waiting is
    pointless.  Callbacks due at the same instant run in scheduling order.
    """

    def __init__(self) -> None:
        self.now = 0
        self._queue: List[Tuple[int, int, Callback]] = []
        self._cancelled: Set[int] = set()
        self._counter = itertools.count()

    def call_later(self, delay_ms: int, callback: Callback) -> int:
        if delay_ms < 0:
            raise ValueError("delay_ms must be non-negative")
        handle = next(self._counter)
        heapq.heappush(self._queue, (self.now + delay_ms, handle, callback))
        return handle

    def cancel(self, handle: int) -> None:
        if any(entry[1] == handle for entry in self._queue):
            self._cancelled.add(handle)

    @property
    def pending(self) -> int:
        return sum(1 for _, handle, _ in self._queue if handle not in self._cancelled)

    def advance(self, ms: int) -> int:
        """Move the clock forward by ``ms`` and run everything that falls due.

        Returns the number of callbacks executed.
        """
        if ms < 0:
            raise ValueError("cannot move the clock backwards")
        target = self.now + ms
        executed = 0
        while self._queue and self._queue[0][0] <= target:
            due, handle, callback = heapq.heappop(self._queue)
            if handle in self._cancelled:
                self._cancelled.discard(handle)
                continue
            self.now = due
            callback()
            executed += 1
        self.now = target
        return executed


class TkScheduler(Scheduler):
    """Adapter over a Tk widget's ``after``/``after_cancel`` event-loop timers."""

    def __init__(self, widget: Any) -> None:
        self.widget = widget

    def call_later(self, delay_ms: int, callback: Callback) -> str:
        return self.widget.after(delay_ms, callback)

    def cancel(self, handle: str) -> None:
        self.widget.after_cancel(handle)


class DeferredTask:
    """A single slot for one pending callback.

    Scheduling while a job is still pending is a programming error: whoever
    changes the state that job would act on has to :meth:`cancel` it first.
    """

    def __init__(self, scheduler: Scheduler) -> None:
        self.scheduler = scheduler
        self._handle: Optional[Any] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def schedule(self, delay_ms: int, callback: Callback) -> None:
        if self._handle is not None:
            raise RuntimeError("a deferred task is already pending; cancel it first")

        def fire() -> None:
            self._handle = None
            callback()

        self._handle = self.scheduler.call_later(delay_ms, fire)
        logger.debug("Scheduled deferred task in %d ms", delay_ms)

    def cancel(self) -> bool:
        """Cancel the pending job, returning whether there was one."""
        if self._handle is None:
            return False
        self.scheduler.cancel(self._handle)
        self._handle = None
        logger.debug("Cancelled pending deferred task")
        return True


__all__ = ["DeferredTask", "ManualScheduler", "Scheduler", "TkScheduler"]
