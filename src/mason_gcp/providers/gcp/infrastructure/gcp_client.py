"""GCP client: the GKE and GCE creators plus the operation timeout."""

from typing import Optional

from google.cloud import compute_v1, container_v1
from google.oauth2 import service_account

from mason_gcp.domain.base.exceptions import ConfigurationError
from mason_gcp.domain.base.ports import (
    ClusterCreatorPort,
    ProvisioningClient,
    VirtualMachineCreatorPort,
)
from mason_gcp.domain.base.ports.resource_creator_port import DEFAULT_OPERATION_TIMEOUT
from mason_gcp.infrastructure.logging.logger import get_logger
from mason_gcp.providers.gcp.infrastructure.handlers.base_handler import DEFAULT_POLL_INTERVAL
from mason_gcp.providers.gcp.infrastructure.handlers.cluster_handler import GKEClusterCreator
from mason_gcp.providers.gcp.infrastructure.handlers.instance_handler import GCEInstanceCreator

CLOUD_PLATFORM_SCOPE = "https://www.googleapis.com/auth/cloud-platform"

logger = get_logger(__name__)


class GCPClient(ProvisioningClient):
    """Provisioning client backed by the GKE and Compute Engine APIs."""

    def __init__(
        self,
        gke: ClusterCreatorPort,
        gce: VirtualMachineCreatorPort,
        operation_timeout: float = DEFAULT_OPERATION_TIMEOUT,
    ) -> None:
        super().__init__(gke, gce, operation_timeout)

    @property
    def gke(self) -> ClusterCreatorPort:
        return self.cluster_creator

    @property
    def gce(self) -> VirtualMachineCreatorPort:
        return self.vm_creator

    @classmethod
    def create(
        cls,
        service_account_file: Optional[str] = None,
        operation_timeout: float = DEFAULT_OPERATION_TIMEOUT,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ) -> "GCPClient":
        """
        Build a client from a service-account key file or application default credentials.

        Raises:
            ConfigurationError: If the key file cannot be loaded
        """
        credentials = None
        if service_account_file:
            try:
                credentials = service_account.Credentials.from_service_account_file(
                    service_account_file, scopes=[CLOUD_PLATFORM_SCOPE]
                )
            except (OSError, ValueError) as e:
                raise ConfigurationError(
                    f"unable to load service account {service_account_file}: {e}",
                    error_code="INVALID_SERVICE_ACCOUNT",
                    details={"service_account": service_account_file},
                ) from e

        logger.debug(
            "Creating GCP client (service account: %s, timeout: %ss)",
            service_account_file or "application default",
            operation_timeout,
        )
        gke = GKEClusterCreator(
            container_v1.ClusterManagerClient(credentials=credentials),
            poll_interval=poll_interval,
        )
        gce = GCEInstanceCreator(
            compute_v1.InstancesClient(credentials=credentials),
            compute_v1.ZonesClient(credentials=credentials),
            poll_interval=poll_interval,
        )
        return cls(gke, gce, operation_timeout)
