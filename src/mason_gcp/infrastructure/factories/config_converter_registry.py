"""Registry of converters from a resource's declarative config to a request group.

The broker stores a config type name and a raw document on every dynamic
resource; the registry maps the type name to the converter that parses it.
"""

import threading
from typing import Callable, Optional

from mason_gcp.domain.base.exceptions import ConfigurationError
from mason_gcp.domain.resource.value_objects import ResourceRequestGroup
from mason_gcp.infrastructure.logging.logger import get_logger

logger = get_logger(__name__)

ConfigConverter = Callable[[str], ResourceRequestGroup]


class ConfigConverterRegistry:
    """Thread-safe mapping of config type to converter."""

    def __init__(self) -> None:
        self._converters: dict[str, ConfigConverter] = {}
        self._lock = threading.RLock()

    def register(self, config_type: str, converter: ConfigConverter) -> None:
        """
        Register ``converter`` for ``config_type``.

        Raises:
            ConfigurationError: If the type already has a converter
        """
        with self._lock:
            if config_type in self._converters:
                raise ConfigurationError(
                    f"config converter for {config_type} is already registered",
                    error_code="CONVERTER_ALREADY_REGISTERED",
                    details={"config_type": config_type},
                )
            self._converters[config_type] = converter
        logger.debug("Registered config converter for %s", config_type)

    def is_registered(self, config_type: str) -> bool:
        with self._lock:
            return config_type in self._converters

    def registered_types(self) -> list[str]:
        with self._lock:
            return sorted(self._converters)

    def convert(self, config_type: str, content: str) -> ResourceRequestGroup:
        """
        Parse ``content`` with the converter registered for ``config_type``.

        Raises:
            ConfigurationError: If no converter is registered for the type
            ResourceConfigError: If the converter rejects the content
        """
        with self._lock:
            converter = self._converters.get(config_type)
        if converter is None:
            raise ConfigurationError(
                f"no config converter registered for {config_type}",
                error_code="CONVERTER_NOT_FOUND",
                details={"config_type": config_type},
            )
        return converter(content)


_registry: Optional[ConfigConverterRegistry] = None
_registry_lock = threading.Lock()


def get_config_converter_registry() -> ConfigConverterRegistry:
    """Return the process-wide registry, with the GCP converter registered."""
    global _registry
    with _registry_lock:
        if _registry is None:
            from mason_gcp.providers.gcp.config_converter import register_gcp_converter

            registry = ConfigConverterRegistry()
            register_gcp_converter(registry)
            _registry = registry
        return _registry


def reset_config_converter_registry() -> None:
    """Drop the process-wide registry; used by tests."""
    global _registry
    with _registry_lock:
        _registry = None
