"""Configuration loading and schemas."""

from .manager import ConfigurationManager
from .schemas.app_schema import AppConfig, GCPConfig, LoggingConfig

__all__: list[str] = ["AppConfig", "ConfigurationManager", "GCPConfig", "LoggingConfig"]
