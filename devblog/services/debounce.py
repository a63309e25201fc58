from __future__ import annotations
import contextlib
from typing import Any, Callable, Optional, Protocol


class Scheduler(Protocol):
    """Runs a callback once after a delay and can cancel it again."""

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> Any: ...

    def cancel(self, handle: Any) -> None: ...


class TkScheduler:
    """Scheduler backed by a Tk widget's ``after``/``after_cancel``."""

    def __init__(self, widget: Any) -> None:
        self.widget = widget

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> str:
        return self.widget.after(delay_ms, callback)

    def cancel(self, handle: Any) -> None:
        # Tk raises if the id already fired or the widget is gone
        with contextlib.suppress(Exception):
            self.widget.after_cancel(handle)


class DebounceTimer:
    """Single-slot delayed action.

    Each ``trigger`` cancels the pending callback (if any) before scheduling
    the new one, so at most one callback is ever live and only the most
    recent one runs.
    """

    def __init__(self, scheduler: Scheduler, delay_ms: int = 300) -> None:
        self.scheduler = scheduler
        self.delay_ms = delay_ms
        self._handle: Any = None
        self._callback: Optional[Callable[[], None]] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def trigger(self, callback: Callable[[], None]) -> None:
        self.cancel()
        self._callback = callback
        self._handle = self.scheduler.schedule(self.delay_ms, self._fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self.scheduler.cancel(self._handle)
        self._handle = None
        self._callback = None

    def flush(self) -> bool:
        """Run the pending callback now. Returns False if nothing was pending."""
        if self._handle is None:
            return False
        self.scheduler.cancel(self._handle)
        self._fire()
        return True

    def _fire(self) -> None:
        callback = self._callback
        self._handle = None
        self._callback = None
        if callback is not None:
            callback()
