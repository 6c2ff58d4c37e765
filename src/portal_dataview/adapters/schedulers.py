"""
Schedulers - Cancellable Deferred Execution.

Two implementations of the Scheduler protocol:
    - ThreadingScheduler: Real timers on threading.Timer
    - ManualScheduler: A virtual clock the host advances explicitly
      (a UI event loop tick, or a test)
"""

from __future__ import annotations

import heapq
import itertools
import logging
import threading
from typing import Any, Callable, List, Tuple

logger = logging.getLogger(__name__)


class _ThreadingHandle:
    """Handle wrapping a threading.Timer."""

    def __init__(self, timer: threading.Timer) -> None:
        self._timer = timer
        self._fired = False
        self._cancelled = False

    def cancel(self) -> None:
        if not self._fired:
            self._cancelled = True
        self._timer.cancel()

    @property
    def fired(self) -> bool:
        return self._fired

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class ThreadingScheduler:
    """
    Scheduler backed by threading.Timer.

    Callbacks run on the timer thread. They are serialized through one
    lock so a view never sees two debounced updates interleave.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()

    def call_later(
        self,
        delay_ms: int,
        callback: Callable[..., Any],
        *args: Any,
    ) -> _ThreadingHandle:
        """Schedule callback(*args) after delay_ms milliseconds."""
        handle: _ThreadingHandle

        def run() -> None:
            with self._lock:
                if handle.cancelled:
                    return
                handle._fired = True
                callback(*args)

        timer = threading.Timer(max(delay_ms, 0) / 1000.0, run)
        timer.daemon = True
        handle = _ThreadingHandle(timer)
        timer.start()
        return handle


class _ManualHandle:
    """Handle for a callback queued on a ManualScheduler."""

    def __init__(self) -> None:
        self._fired = False
        self._cancelled = False

    def cancel(self) -> None:
        if not self._fired:
            self._cancelled = True

    @property
    def fired(self) -> bool:
        return self._fired

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class ManualScheduler:
    """
    Scheduler driven by an explicit clock.

    Nothing runs until advance() moves the clock past a callback's due
    time. Callbacks run in due-time order, ties in scheduling order.

    Example:
        >>> scheduler = ManualScheduler()
        >>> _ = scheduler.call_later(300, print, "settled")
        >>> scheduler.advance(300)
        settled
    """

    def __init__(self) -> None:
        self._now_ms = 0
        self._counter = itertools.count()
        self._queue: List[Tuple[int, int, _ManualHandle, Callable[..., Any], tuple]] = []

    @property
    def now_ms(self) -> int:
        """Current virtual time in milliseconds."""
        return self._now_ms

    @property
    def pending_count(self) -> int:
        """Number of callbacks scheduled and not yet fired or cancelled."""
        return sum(1 for entry in self._queue if not entry[2].cancelled)

    def call_later(
        self,
        delay_ms: int,
        callback: Callable[..., Any],
        *args: Any,
    ) -> _ManualHandle:
        """Schedule callback(*args) delay_ms after the current virtual time."""
        handle = _ManualHandle()
        due = self._now_ms + max(delay_ms, 0)
        heapq.heappush(self._queue, (due, next(self._counter), handle, callback, args))
        return handle

    def advance(self, ms: int) -> int:
        """
        Move the clock forward and run every callback that came due.

        Args:
            ms: Milliseconds to advance

        Returns:
            Number of callbacks run
        """
        target = self._now_ms + max(ms, 0)
        ran = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, handle, callback, args = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self._now_ms = due
            handle._fired = True
            callback(*args)
            ran += 1
        self._now_ms = target
        if ran:
            logger.debug(f"ManualScheduler ran {ran} callback(s), now={self._now_ms}ms")
        return ran

    def run_all(self) -> int:
        """Advance to the last pending due time and run everything."""
        if not self._queue:
            return 0
        last_due = max(entry[0] for entry in self._queue)
        return self.advance(last_due - self._now_ms)
