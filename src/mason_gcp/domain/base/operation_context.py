"""Cancellable, deadline-bound context shared by the tasks of one run."""

import threading
import time
from typing import Optional

from mason_gcp.domain.resource.exceptions import OperationCancelledError, OperationTimeoutError


class OperationContext:
    """Cancellation token with an optional absolute deadline.

    Every task of a provisioning run holds the same context. The first
    failure calls ``cancel``; creators call ``check`` or ``wait`` between
    polls of long-running cloud operations and stop once either the
    context is cancelled or the deadline has passed.
    """

    def __init__(self, timeout: Optional[float] = None) -> None:
        self._cancelled = threading.Event()
        self._lock = threading.Lock()
        self._reason: Optional[str] = None
        self._deadline = time.monotonic() + timeout if timeout is not None else None

    @property
    def deadline(self) -> Optional[float]:
        return self._deadline

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set() or self.expired

    @property
    def expired(self) -> bool:
        return self._deadline is not None and time.monotonic() >= self._deadline

    @property
    def reason(self) -> Optional[str]:
        return self._reason

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, never negative; None if unbounded."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def cancel(self, reason: str = "operation cancelled") -> None:
        """Cancel the context; only the first reason is kept."""
        with self._lock:
            if self._reason is None:
                self._reason = reason
        self._cancelled.set()

    def error(self) -> Optional[OperationCancelledError]:
        """The error a task should raise now, or None if it may continue."""
        if self.expired:
            return OperationTimeoutError("deadline exceeded", details={"reason": "deadline"})
        if self._cancelled.is_set():
            return OperationCancelledError(self._reason or "operation cancelled")
        return None

    def check(self) -> None:
        """Raise if the context is cancelled or expired."""
        error = self.error()
        if error is not None:
            raise error

    def wait(self, seconds: float) -> bool:
        """Sleep up to ``seconds`` or until cancellation; return True if cancelled."""
        remaining = self.remaining()
        if remaining is not None:
            seconds = min(seconds, remaining)
        self._cancelled.wait(seconds)
        return self.cancelled
