"""Application configuration schema."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class GCPConfig(BaseModel):
    """GCP access and provisioning limits."""

    model_config = ConfigDict(extra="forbid")

    service_account: Optional[str] = Field(
        None, description="Path to a service-account key file; application default credentials when unset"
    )
    activate_service_account: bool = Field(
        True, description="Activate the service account for gcloud before provisioning"
    )
    operation_timeout: float = Field(
        15 * 60, gt=0, description="Deadline in seconds for one whole provisioning run"
    )
    poll_interval: float = Field(
        5.0, gt=0, description="Seconds between polls of a long-running cloud operation"
    )
    max_workers: Optional[int] = Field(
        None, ge=1, description="Upper bound on concurrent creation calls"
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(extra="forbid")

    level: str = Field("INFO", description="Log level")
    file_path: Optional[str] = Field(None, description="Log file, relative to the logs directory unless absolute; no file logging when unset")
    console_enabled: bool = Field(True, description="Log to stderr")
    json_format: bool = Field(True, description="Render records as JSON objects")

    @field_validator("level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log level must be one of {sorted(_LOG_LEVELS)}")
        return level


class AppConfig(BaseModel):
    """Top-level configuration."""

    model_config = ConfigDict(extra="ignore")

    gcp: GCPConfig = Field(default_factory=GCPConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
