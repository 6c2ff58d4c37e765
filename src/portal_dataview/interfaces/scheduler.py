"""
Scheduler Protocol.

Defines the deferred-execution primitive the debouncer relies on. A
scheduler runs a callback once after a delay and hands back a handle that
can cancel it before it fires.

Implementations:
    - ThreadingScheduler: Wall-clock timers
    - ManualScheduler: Clock advanced explicitly by the host loop or tests
"""

from __future__ import annotations

from typing import Any, Callable, Protocol, runtime_checkable


@runtime_checkable
class TimerHandle(Protocol):
    """Handle to a scheduled callback."""

    def cancel(self) -> None:
        """Prevent the callback from running. No-op if already fired."""
        ...

    @property
    def fired(self) -> bool:
        ...

    @property
    def cancelled(self) -> bool:
        ...


@runtime_checkable
class Scheduler(Protocol):
    """Schedules a callback to run once after a delay."""

    def call_later(
        self,
        delay_ms: int,
        callback: Callable[..., Any],
        *args: Any,
    ) -> TimerHandle:
        """
        Schedule callback(*args) after delay_ms milliseconds.

        Args:
            delay_ms: Delay in milliseconds
            callback: Function to call
            *args: Positional arguments for the callback

        Returns:
            Cancellable handle
        """
        ...
