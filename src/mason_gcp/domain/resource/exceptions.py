"""Errors raised while turning a resource request into cloud resources."""

from typing import Any, Optional

from mason_gcp.domain.base.exceptions import (
    ConfigurationError,
    DomainException,
    InfrastructureError,
    ValidationError,
)


class ClientNotConfiguredError(ConfigurationError):
    """No cloud client was provided, so nothing can be provisioned."""

    default_error_code = "CLIENT_NOT_SET"

    def __init__(self, message: str = "client not set; a GCP client must be configured") -> None:
        super().__init__(message)


class ResourceConfigError(ValidationError):
    """A declarative resource config could not be parsed or validated."""

    default_error_code = "INVALID_RESOURCE_CONFIG"


class PoolExhaustedError(DomainException):
    """The pool ran out of projects of a kind before all specs were satisfied."""

    default_error_code = "POOL_EXHAUSTED"

    def __init__(self, resource_kind: str) -> None:
        super().__init__(
            f"running out of projects of type {resource_kind} while creating resources",
            details={"resource_kind": resource_kind},
        )
        self.resource_kind = resource_kind


class ZoneEnumerationError(InfrastructureError):
    """Zones of a project could not be listed."""

    default_error_code = "ZONE_ENUMERATION_FAILED"

    def __init__(self, project: str, message: Optional[str] = None) -> None:
        super().__init__(
            "GCP.Compute",
            message or f"unable to list zones for project {project}",
            details={"project": project},
        )
        self.project = project


class EmptyZoneListError(ZoneEnumerationError):
    """A zone ring was requested over no zones."""

    default_error_code = "EMPTY_ZONE_LIST"

    def __init__(self, project: Optional[str] = None) -> None:
        super().__init__(project or "", f"no zones available for project {project or '<unknown>'}")


class ResourceCreationError(InfrastructureError):
    """A cluster or VM creation call failed."""

    default_error_code = "RESOURCE_CREATION_FAILED"

    def __init__(
        self,
        component: str,
        message: str,
        project: str,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        details = dict(details or {})
        details["project"] = project
        super().__init__(component, message, details=details)
        self.project = project


class OperationCancelledError(DomainException):
    """Work was abandoned because a sibling task failed."""

    default_error_code = "OPERATION_CANCELLED"


class OperationTimeoutError(OperationCancelledError):
    """The shared deadline of a provisioning run expired."""

    default_error_code = "DEADLINE_EXCEEDED"


class CredentialMaterializationError(InfrastructureError):
    """Credentials could not be written although the resources exist.

    ``inventory`` holds everything that was created, so callers can treat the
    failure as "resources exist but are not usable yet".
    """

    default_error_code = "CREDENTIAL_MATERIALIZATION_FAILED"

    def __init__(self, message: str, inventory: Optional[Any] = None) -> None:
        details: dict[str, Any] = {}
        if inventory is not None:
            details["inventory"] = inventory.to_dict()
        super().__init__("Credentials", message, details=details)
        self.inventory = inventory
