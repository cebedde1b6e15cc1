"""Factories and registries."""

from .config_converter_registry import (
    ConfigConverterRegistry,
    get_config_converter_registry,
    reset_config_converter_registry,
)

__all__: list[str] = [
    "ConfigConverterRegistry",
    "get_config_converter_registry",
    "reset_config_converter_registry",
]
