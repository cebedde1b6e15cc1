"""Shared behaviour of the GCP creators: polling long-running operations."""

from typing import Callable, Optional

from google.api_core import exceptions as gcp_exceptions

from mason_gcp.domain.base.operation_context import OperationContext
from mason_gcp.domain.resource.exceptions import ResourceCreationError
from mason_gcp.infrastructure.logging.logger import get_logger

DEFAULT_POLL_INTERVAL = 5.0


class GCPHandler:
    """Base class for creators that submit an operation and poll until done."""

    component = "GCP"

    def __init__(self, poll_interval: float = DEFAULT_POLL_INTERVAL) -> None:
        self.poll_interval = poll_interval
        self._logger = get_logger(self.__class__.__module__)

    def _wait_for(
        self,
        ctx: OperationContext,
        is_done: Callable[[], bool],
        description: str,
    ) -> None:
        """
        Poll ``is_done`` every ``poll_interval`` seconds until it returns True.

        Raises:
            OperationCancelledError: If ``ctx`` is cancelled between polls
            OperationTimeoutError: If the shared deadline passes first
        """
        while not is_done():
            if ctx.wait(self.poll_interval):
                self._logger.warning("Stopped waiting for %s: %s", description, ctx.reason)
                ctx.check()
        ctx.check()

    def _creation_error(
        self,
        project: str,
        message: str,
        cause: Optional[BaseException] = None,
    ) -> ResourceCreationError:
        details = {}
        if isinstance(cause, gcp_exceptions.GoogleAPICallError):
            details["status_code"] = cause.code
            details["reason"] = cause.reason
        return ResourceCreationError(self.component, message, project, details=details)
