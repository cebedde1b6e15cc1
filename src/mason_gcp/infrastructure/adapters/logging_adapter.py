"""Logging adapter implementing LoggingPort."""

import logging
from typing import Any

from mason_gcp.domain.base.ports.logging_port import LoggingPort
from mason_gcp.infrastructure.logging.logger import get_logger


class LoggingAdapter(LoggingPort):
    """LoggingPort backed by a package logger, with optional bound context.

    Context given at construction (or through ``bind``) is merged into the
    ``extra`` of every record, so a whole provisioning run can be tagged
    with the resource it constructs.
    """

    def __init__(self, name: str = "application", **context: Any) -> None:
        self._name = name
        self._logger = get_logger(name)
        self._context = context

    @property
    def context(self) -> dict[str, Any]:
        return dict(self._context)

    def bind(self, **context: Any) -> "LoggingAdapter":
        """Return a new adapter carrying this adapter's context plus ``context``."""
        return LoggingAdapter(self._name, **{**self._context, **context})

    def _prepare_kwargs(self, kwargs: dict[str, Any]) -> dict[str, Any]:
        kwargs.setdefault("stacklevel", 3)
        if self._context:
            kwargs["extra"] = {**self._context, **kwargs.get("extra", {})}
        return kwargs

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, args, kwargs)

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.INFO, message, args, kwargs)

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, args, kwargs)

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.ERROR, message, args, kwargs)

    def critical(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.CRITICAL, message, args, kwargs)

    def exception(self, message: str, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("exc_info", True)
        self._log(logging.ERROR, message, args, kwargs)

    def log(self, level: int, message: str, *args: Any, **kwargs: Any) -> None:
        self._log(level, message, args, kwargs)

    def _log(self, level: int, message: str, args: tuple, kwargs: dict[str, Any]) -> None:
        self._logger.log(level, message, *args, **self._prepare_kwargs(kwargs))
