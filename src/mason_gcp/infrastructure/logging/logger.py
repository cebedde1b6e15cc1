"""Logging setup for mason-gcp.

Modules obtain standard-library loggers through ``get_logger(__name__)`` and
log with %-style arguments plus ``extra`` context. ``setup_logging`` wires
the root handlers once at startup; with ``json_format`` enabled every record
is rendered as one JSON object by structlog's ``ProcessorFormatter``, which
is what the broker's log shipping expects.
"""

import logging
import os
import sys
from typing import TYPE_CHECKING, Optional

import structlog

if TYPE_CHECKING:
    from mason_gcp.config.schemas.app_schema import LoggingConfig

ROOT_LOGGER_NAME = "mason_gcp"
_TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a logger; names outside the package are nested under it."""
    if not name.startswith(ROOT_LOGGER_NAME):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def _json_formatter() -> logging.Formatter:
    pre_chain = [
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.ExtraAdder(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=pre_chain,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
    )


def setup_logging(config: Optional["LoggingConfig"] = None) -> logging.Logger:
    """
    Configure handlers of the package root logger.

    Args:
        config: Logging configuration; defaults are used when omitted

    Returns:
        The configured package root logger
    """
    if config is None:
        from mason_gcp.config.schemas.app_schema import LoggingConfig

        config = LoggingConfig()

    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    formatter = _json_formatter() if config.json_format else logging.Formatter(_TEXT_FORMAT)

    if config.console_enabled:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)

    if config.file_path:
        from mason_gcp.config.platform_dirs import get_logs_location

        file_path = config.file_path
        if not os.path.isabs(file_path):
            file_path = os.path.join(get_logs_location(), file_path)
        log_dir = os.path.dirname(file_path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(file_path)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    if not root.handlers:
        root.addHandler(logging.NullHandler())

    root.setLevel(getattr(logging, config.level.upper(), logging.INFO))
    root.propagate = False
    return root
