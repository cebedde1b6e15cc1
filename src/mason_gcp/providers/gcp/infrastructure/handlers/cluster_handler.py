"""GKE cluster creator."""

from typing import Any

from google.api_core import exceptions as gcp_exceptions
from google.cloud import container_v1

from mason_gcp.domain.base.operation_context import OperationContext
from mason_gcp.domain.base.ports import ClusterCreatorPort
from mason_gcp.domain.resource.value_objects import ClusterSpec, InstanceInfo
from mason_gcp.providers.gcp.infrastructure.handlers.base_handler import (
    DEFAULT_POLL_INTERVAL,
    GCPHandler,
)
from mason_gcp.providers.gcp.infrastructure.naming import generate_name

CLUSTER_NAME_PREFIX = "gke"


class GKEClusterCreator(GCPHandler, ClusterCreatorPort):
    """Creates zonal GKE clusters and waits for the create operation to finish."""

    component = "GCP.GKE"

    def __init__(self, client: Any, poll_interval: float = DEFAULT_POLL_INTERVAL) -> None:
        """
        Args:
            client: A ``container_v1.ClusterManagerClient``
            poll_interval: Seconds between operation polls
        """
        super().__init__(poll_interval)
        self._client = client

    def build_cluster(self, name: str, spec: ClusterSpec) -> container_v1.Cluster:
        """Translate a cluster spec into the GKE API resource."""
        cluster = container_v1.Cluster(
            name=name,
            initial_node_count=spec.num_nodes,
            node_config=container_v1.NodeConfig(
                machine_type=spec.machine_type,
                oauth_scopes=list(spec.scopes),
            ),
            enable_kubernetes_alpha=spec.enable_kubernetes_alpha,
        )
        if spec.version:
            cluster.initial_cluster_version = spec.version
        if spec.network:
            cluster.network = spec.network
        return cluster

    def create(self, ctx: OperationContext, project: str, spec: ClusterSpec) -> InstanceInfo:
        ctx.check()
        zone = spec.zone
        name = generate_name(CLUSTER_NAME_PREFIX)
        parent = f"projects/{project}/locations/{zone}"

        self._logger.info("Creating cluster %s in %s/%s", name, project, zone)
        try:
            operation = self._client.create_cluster(
                parent=parent, cluster=self.build_cluster(name, spec)
            )
        except gcp_exceptions.GoogleAPICallError as e:
            self._logger.error("unable to create cluster on project %s: %s", project, e)
            raise self._creation_error(
                project, f"unable to create cluster {name} in {zone}: {e}", e
            ) from e

        operation_name = f"{parent}/operations/{operation.name}"
        state = {"operation": operation}

        def is_done() -> bool:
            try:
                state["operation"] = self._client.get_operation(name=operation_name)
            except gcp_exceptions.GoogleAPICallError as e:
                raise self._creation_error(
                    project, f"unable to poll operation {operation_name}: {e}", e
                ) from e
            return state["operation"].status == container_v1.Operation.Status.DONE

        self._wait_for(ctx, is_done, f"cluster {name}")

        done = state["operation"]
        error = done.error
        if error and (error.code or error.message):
            message = error.message or f"error code {error.code}"
            self._logger.error("cluster %s in %s failed: %s", name, project, message)
            raise self._creation_error(project, f"cluster {name} in {zone} failed: {message}")

        self._logger.info("Cluster %s created in %s/%s", name, project, zone)
        return InstanceInfo(name=name, zone=zone)
