"""Base exception hierarchy shared by every layer."""

from typing import Any, Optional


class DomainException(Exception):
    """Base class for all mason-gcp errors.

    Carries a stable ``error_code`` so callers can classify failures without
    matching on message text, and a ``details`` dictionary for structured
    logging.
    """

    default_error_code = "DOMAIN_ERROR"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details: dict[str, Any] = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Serialize the error for logs and command line output."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(DomainException):
    """Input failed validation."""

    default_error_code = "VALIDATION_ERROR"


class ConfigurationError(DomainException):
    """Required configuration is missing or invalid."""

    default_error_code = "CONFIGURATION_ERROR"


class InfrastructureError(DomainException):
    """A call into an external system failed."""

    default_error_code = "INFRASTRUCTURE_ERROR"

    def __init__(
        self,
        component: str,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        details = dict(details or {})
        details.setdefault("component", component)
        super().__init__(message, error_code, details)
        self.component = component
