"""Fail-fast group of concurrent tasks sharing one operation context."""

import threading
from concurrent import futures
from typing import Any, Callable, Optional

from mason_gcp.domain.base.operation_context import OperationContext
from mason_gcp.domain.resource.exceptions import OperationTimeoutError
from mason_gcp.infrastructure.logging.logger import get_logger

logger = get_logger(__name__)


class TaskGroup:
    """Runs tasks on a thread pool and fails on the first error.

    The first task to raise cancels the shared context. Tasks that have not
    started yet observe the cancellation and never run their body; running
    tasks are expected to poll the context. ``wait`` blocks until every task
    has settled and re-raises the first original error, not the derived
    cancellation errors of its siblings. A task still running when the
    deadline passes fails the group with ``OperationTimeoutError`` even if it
    later returns.
    """

    def __init__(
        self,
        ctx: OperationContext,
        max_workers: Optional[int] = None,
        thread_name_prefix: str = "mason-task",
    ) -> None:
        self._ctx = ctx
        self._executor = futures.ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix=thread_name_prefix
        )
        self._futures: list[futures.Future] = []
        self._lock = threading.Lock()
        self._first_error: Optional[BaseException] = None

    def go(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> None:
        """Schedule ``fn(*args, **kwargs)`` on the group."""
        self._futures.append(self._executor.submit(self._run, fn, args, kwargs))

    def _run(self, fn: Callable[..., Any], args: tuple, kwargs: dict) -> None:
        try:
            self._ctx.check()
            fn(*args, **kwargs)
        except Exception as e:
            self._record(e)

    def _record(self, error: BaseException) -> None:
        with self._lock:
            first = self._first_error is None
            if first:
                self._first_error = error
        if first:
            logger.debug("Task failed, cancelling siblings: %s", error)
            self._ctx.cancel(f"sibling task failed: {error}")

    def wait(self) -> None:
        """Block until all tasks settle; raise the first error, if any."""
        timed_out = False
        try:
            _, pending = futures.wait(self._futures, timeout=self._ctx.remaining())
            if pending:
                timed_out = True
                self._ctx.cancel("deadline exceeded")
                for future in pending:
                    future.cancel()
                futures.wait(pending)
        finally:
            self._executor.shutdown(wait=True)

        if self._first_error is not None:
            raise self._first_error
        if any(f.cancelled() for f in self._futures):
            raise OperationTimeoutError("deadline exceeded before all tasks started")
        if timed_out:
            raise OperationTimeoutError("deadline exceeded while tasks were running")
