"""Domain ports for the cloud-side creators of clusters and VMs."""

from abc import ABC, abstractmethod

from mason_gcp.domain.base.operation_context import OperationContext
from mason_gcp.domain.resource.value_objects import (
    ClusterSpec,
    InstanceInfo,
    VirtualMachineSpec,
)

# seconds
DEFAULT_OPERATION_TIMEOUT = 15 * 60


class ClusterCreatorPort(ABC):
    """Creates one Kubernetes cluster per call."""

    @abstractmethod
    def create(self, ctx: OperationContext, project: str, spec: ClusterSpec) -> InstanceInfo:
        """
        Create a cluster and block until it is ready.

        Args:
            ctx: Shared run context; must be honoured while waiting
            project: Project to create the cluster in
            spec: Cluster shape, with its zone already assigned

        Returns:
            Name and zone of the created cluster

        Raises:
            ResourceCreationError: If the provider rejects or fails the creation
            OperationCancelledError: If ``ctx`` is cancelled or expires first
        """


class VirtualMachineCreatorPort(ABC):
    """Creates one VM per call and lists the zones of a project."""

    @abstractmethod
    def create(
        self, ctx: OperationContext, project: str, spec: VirtualMachineSpec
    ) -> InstanceInfo:
        """
        Create a VM and block until it is running.

        Raises:
            ResourceCreationError: If the provider rejects or fails the creation
            OperationCancelledError: If ``ctx`` is cancelled or expires first
        """

    @abstractmethod
    def list_zones(self, project: str) -> list[str]:
        """Return the zones available to ``project``, in provider order."""


class ProvisioningClient:
    """Bundle of creators and the operation-wide timeout handed to the coordinator."""

    def __init__(
        self,
        cluster_creator: ClusterCreatorPort,
        vm_creator: VirtualMachineCreatorPort,
        operation_timeout: float = DEFAULT_OPERATION_TIMEOUT,
    ) -> None:
        self.cluster_creator = cluster_creator
        self.vm_creator = vm_creator
        self.operation_timeout = operation_timeout
