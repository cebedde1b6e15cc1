"""Domain ports - interfaces implemented by the infrastructure layer."""

from .credential_port import CredentialMaterializerPort
from .logging_port import LoggingPort
from .resource_creator_port import (
    ClusterCreatorPort,
    ProvisioningClient,
    VirtualMachineCreatorPort,
)

__all__: list[str] = [
    "ClusterCreatorPort",
    "CredentialMaterializerPort",
    "LoggingPort",
    "ProvisioningClient",
    "VirtualMachineCreatorPort",
]
