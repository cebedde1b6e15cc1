"""Configuration loading: settings file plus ``MASON_`` environment overrides."""

from pathlib import Path
from typing import Any, Optional, Union

from dynaconf import Dynaconf
from pydantic import ValidationError

from mason_gcp.config.platform_dirs import get_config_location
from mason_gcp.config.schemas.app_schema import AppConfig
from mason_gcp.domain.base.exceptions import ConfigurationError
from mason_gcp.infrastructure.logging.logger import get_logger

ENVVAR_PREFIX = "MASON"
CONFIG_FILE_NAMES = ("config.json", "config.yaml", "config.yml", "config.toml")

logger = get_logger(__name__)


def _lower_keys(value: Any) -> Any:
    if isinstance(value, dict):
        lowered: dict[str, Any] = {}
        for key, item in value.items():
            name = str(key).lower()
            # nested environment overrides keep their upper case and win over file keys
            if name in lowered and str(key) == name:
                continue
            lowered[name] = _lower_keys(item)
        return lowered
    if isinstance(value, list):
        return [_lower_keys(v) for v in value]
    return value


class ConfigurationManager:
    """Loads and validates ``AppConfig``.

    Values come from one settings file (JSON, YAML or TOML) and are
    overridden by environment variables such as
    ``MASON_GCP__OPERATION_TIMEOUT=600`` or ``MASON_LOGGING__LEVEL=DEBUG``.
    """

    def __init__(self, config_file: Optional[Union[str, Path]] = None) -> None:
        self._config_file = Path(config_file) if config_file else self.find_config_file()
        self._app_config: Optional[AppConfig] = None

    @property
    def config_file(self) -> Optional[Path]:
        return self._config_file

    @staticmethod
    def find_config_file() -> Optional[Path]:
        """Return the first settings file found in the config directory, if any."""
        config_dir = get_config_location()
        for name in CONFIG_FILE_NAMES:
            candidate = config_dir / name
            if candidate.is_file():
                return candidate
        return None

    def _load_raw(self) -> dict[str, Any]:
        if self._config_file is not None and not self._config_file.is_file():
            raise ConfigurationError(
                f"configuration file not found: {self._config_file}",
                error_code="CONFIG_FILE_NOT_FOUND",
                details={"config_file": str(self._config_file)},
            )
        settings_files = [str(self._config_file)] if self._config_file else []
        try:
            settings = Dynaconf(
                envvar_prefix=ENVVAR_PREFIX,
                settings_files=settings_files,
                environments=False,
                load_dotenv=False,
                merge_enabled=True,
            )
            return _lower_keys(settings.as_dict())
        except Exception as e:
            raise ConfigurationError(
                f"unable to read configuration {self._config_file}: {e}",
                error_code="INVALID_CONFIG_FILE",
                details={"config_file": str(self._config_file)},
            ) from e

    def load(self) -> AppConfig:
        """
        Load, validate and cache the configuration.

        Raises:
            ConfigurationError: If the file is missing, unreadable or invalid
        """
        raw = self._load_raw()
        try:
            self._app_config = AppConfig(**raw)
        except ValidationError as e:
            errors = [
                {"field": " -> ".join(str(x) for x in error["loc"]), "message": error["msg"]}
                for error in e.errors()
            ]
            raise ConfigurationError(
                "invalid configuration",
                error_code="INVALID_CONFIGURATION",
                details={"config_file": str(self._config_file), "errors": errors},
            ) from e
        logger.debug("Loaded configuration from %s", self._config_file or "environment")
        return self._app_config

    def get_app_config(self) -> AppConfig:
        if self._app_config is None:
            return self.load()
        return self._app_config
