"""
Debounce - Apply a Value Only After Input Settles.

A new call always cancels the pending one before scheduling; at most one
timer is outstanding per Debouncer.
"""

from __future__ import annotations

import logging
from threading import RLock
from typing import Any, Callable, Generic, Optional, Tuple, TypeVar

from portal_dataview.interfaces.scheduler import Scheduler, TimerHandle

logger = logging.getLogger(__name__)

V = TypeVar("V")


class Debouncer:
    """Delays a call until no new call arrived for delay_ms."""

    def __init__(self, delay_ms: int, scheduler: Scheduler) -> None:
        """
        Initialize debouncer.

        Args:
            delay_ms: Quiet period in milliseconds
            scheduler: Deferred-execution primitive
        """
        self.delay_ms = delay_ms
        self._scheduler = scheduler
        self._handle: Optional[TimerHandle] = None
        self._pending: Optional[Tuple[Callable[..., Any], tuple]] = None
        self._generation = 0
        self._lock = RLock()

    @property
    def pending(self) -> bool:
        """True while a call is waiting for the quiet period to end."""
        with self._lock:
            return self._pending is not None

    def call(self, fn: Callable[..., Any], *args: Any) -> None:
        """Cancel any pending call and schedule fn(*args) after the delay."""
        with self._lock:
            self._cancel_locked()
            self._generation += 1
            self._pending = (fn, args)
            self._handle = self._scheduler.call_later(
                self.delay_ms, self._fire, self._generation
            )

    def cancel(self) -> None:
        """Drop the pending call, if any."""
        with self._lock:
            self._cancel_locked()

    def flush(self) -> bool:
        """
        Run the pending call now.

        Returns:
            True if a call was pending and ran
        """
        with self._lock:
            pending = self._pending
            self._cancel_locked()
        if pending is None:
            return False
        fn, args = pending
        fn(*args)
        return True

    def _fire(self, generation: int) -> None:
        with self._lock:
            # A timer that lost the race with a newer call() must not run it
            if generation != self._generation:
                return
            pending = self._pending
            self._pending = None
            self._handle = None
        if pending is not None:
            fn, args = pending
            fn(*args)

    def _cancel_locked(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
        self._handle = None
        self._pending = None


class DebouncedValue(Generic[V]):
    """
    A value with an immediate and a settled (debounced) reading.

    `value` changes on every set(); `settled` follows it once no new
    set() arrived for delay_ms.
    """

    def __init__(self, initial: V, delay_ms: int, scheduler: Scheduler) -> None:
        self._value = initial
        self._settled = initial
        self._debouncer = Debouncer(delay_ms, scheduler)

    @property
    def value(self) -> V:
        return self._value

    @property
    def settled(self) -> V:
        return self._settled

    @property
    def debouncing(self) -> bool:
        return self._debouncer.pending

    def set(self, value: V) -> None:
        self._value = value
        if self._debouncer.delay_ms <= 0:
            self._settled = value
            return
        self._debouncer.call(self._settle, value)

    def reset(self, value: V) -> None:
        """Set both readings at once, cancelling any pending update."""
        self._debouncer.cancel()
        self._value = value
        self._settled = value

    def flush(self) -> None:
        self._debouncer.flush()

    def cancel(self) -> None:
        self._debouncer.cancel()

    def _settle(self, value: V) -> None:
        self._settled = value
        logger.debug(f"Debounced value settled: {value!r}")
