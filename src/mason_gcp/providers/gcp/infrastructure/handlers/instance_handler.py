"""GCE instance creator and zone lister."""

from typing import Any

from google.api_core import exceptions as gcp_exceptions
from google.cloud import compute_v1

from mason_gcp.domain.base.operation_context import OperationContext
from mason_gcp.domain.base.ports import VirtualMachineCreatorPort
from mason_gcp.domain.resource.exceptions import ZoneEnumerationError
from mason_gcp.domain.resource.value_objects import InstanceInfo, VirtualMachineSpec
from mason_gcp.providers.gcp.infrastructure.handlers.base_handler import (
    DEFAULT_POLL_INTERVAL,
    GCPHandler,
)
from mason_gcp.providers.gcp.infrastructure.naming import generate_name

VM_NAME_PREFIX = "gce"
ZONE_STATUS_UP = "UP"


class GCEInstanceCreator(GCPHandler, VirtualMachineCreatorPort):
    """Creates GCE instances and lists the zones a project can use."""

    component = "GCP.GCE"

    def __init__(
        self,
        instances_client: Any,
        zones_client: Any,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        """
        Args:
            instances_client: A ``compute_v1.InstancesClient``
            zones_client: A ``compute_v1.ZonesClient``
            poll_interval: Seconds between operation polls
        """
        super().__init__(poll_interval)
        self._instances = instances_client
        self._zones = zones_client

    def list_zones(self, project: str) -> list[str]:
        try:
            zones = [z.name for z in self._zones.list(project=project) if z.status == ZONE_STATUS_UP]
        except gcp_exceptions.GoogleAPICallError as e:
            self._logger.error("unable to list zones for project %s: %s", project, e)
            raise ZoneEnumerationError(project, f"unable to list zones for project {project}: {e}") from e
        self._logger.debug("Project %s has %d zones up", project, len(zones))
        return zones

    def build_instance(self, name: str, spec: VirtualMachineSpec) -> compute_v1.Instance:
        """Translate a VM spec into the Compute API resource."""
        instance = compute_v1.Instance(
            name=name,
            machine_type=f"zones/{spec.zone}/machineTypes/{spec.machine_type}",
            disks=[
                compute_v1.AttachedDisk(
                    boot=True,
                    auto_delete=True,
                    initialize_params=compute_v1.AttachedDiskInitializeParams(
                        source_image=spec.source_image,
                        disk_size_gb=spec.disk_size_gb,
                    ),
                )
            ],
            network_interfaces=[
                compute_v1.NetworkInterface(
                    network=spec.network,
                    access_configs=[
                        compute_v1.AccessConfig(name="External NAT", type_="ONE_TO_ONE_NAT")
                    ],
                )
            ],
            service_accounts=[compute_v1.ServiceAccount(email="default", scopes=list(spec.scopes))],
        )
        if spec.tags:
            instance.tags = compute_v1.Tags(items=list(spec.tags))
        return instance

    def create(
        self, ctx: OperationContext, project: str, spec: VirtualMachineSpec
    ) -> InstanceInfo:
        ctx.check()
        zone = spec.zone
        name = generate_name(VM_NAME_PREFIX)

        self._logger.info("Creating vm %s in %s/%s", name, project, zone)
        try:
            operation = self._instances.insert(
                project=project, zone=zone, instance_resource=self.build_instance(name, spec)
            )
        except gcp_exceptions.GoogleAPICallError as e:
            self._logger.error("unable to create vm on project %s: %s", project, e)
            raise self._creation_error(project, f"unable to create vm {name} in {zone}: {e}", e) from e

        def is_done() -> bool:
            try:
                return operation.done()
            except gcp_exceptions.GoogleAPICallError as e:
                raise self._creation_error(
                    project, f"unable to poll creation of vm {name}: {e}", e
                ) from e

        self._wait_for(ctx, is_done, f"vm {name}")

        if operation.error_code:
            message = f"{operation.error_code}: {operation.error_message}"
            self._logger.error("vm %s in %s failed: %s", name, project, message)
            raise self._creation_error(project, f"vm {name} in {zone} failed: {message}")

        self._logger.info("VM %s created in %s/%s", name, project, zone)
        return InstanceInfo(name=name, zone=zone)
