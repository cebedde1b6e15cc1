"""Constructs a leased broker resource: provision, then hand back credentials."""

import os
import tempfile
from typing import Optional

from mason_gcp.application.services.project_pool import ProjectPool
from mason_gcp.application.services.provisioning_coordinator import ProvisioningCoordinator
from mason_gcp.domain.base.exceptions import DomainException
from mason_gcp.domain.base.ports import CredentialMaterializerPort, LoggingPort
from mason_gcp.domain.resource.broker import Resource, TypeToResources, UserData
from mason_gcp.domain.resource.exceptions import CredentialMaterializationError
from mason_gcp.domain.resource.value_objects import ResourceInventory, ResourceRequestGroup
from mason_gcp.infrastructure.adapters.logging_adapter import LoggingAdapter

RESOURCE_CONFIG_TYPE = "GCPResourceConfig"
KUBECONFIG_KEY = "kubeconfig"


class ResourceConstructor:
    """Builds the user data of a broker resource from a request group.

    The user data carries the inventory under ``GCPResourceConfig`` and a
    merged kubeconfig under ``kubeconfig``. Credentials are materialized
    only after every cloud resource exists; a failure at that step still
    fails the construction, and the raised error carries the inventory of
    what was created.
    """

    def __init__(
        self,
        request_group: ResourceRequestGroup,
        coordinator: ProvisioningCoordinator,
        materializer: CredentialMaterializerPort,
        logger: Optional[LoggingPort] = None,
    ) -> None:
        self.request_group = request_group
        self._coordinator = coordinator
        self._materializer = materializer
        self._logger = logger or LoggingAdapter(__name__)

    def construct(
        self,
        resource: Resource,
        types: TypeToResources,
        timeout: Optional[float] = None,
    ) -> UserData:
        """
        Provision resources for ``resource`` from the projects in ``types``.

        Args:
            resource: The broker resource being constructed
            types: Free projects, by resource kind, available to this run
            timeout: Optional deadline overriding the client's default

        Returns:
            User data holding the inventory and the merged kubeconfig
        """
        user_data, inventory = self.provision(resource, types, timeout)

        fd, kubeconfig = tempfile.mkstemp(prefix="kubeconfig")
        os.close(fd)
        try:
            try:
                self._materializer.install(inventory, kubeconfig)
            except CredentialMaterializationError:
                raise
            except Exception as e:
                raise CredentialMaterializationError(
                    f"failed to install credentials for {resource.name}: {e}", inventory
                ) from e
            with open(kubeconfig) as f:
                user_data.set(KUBECONFIG_KEY, f.read())
        except CredentialMaterializationError as e:
            if e.inventory is None:
                e.inventory = inventory
                e.details["inventory"] = inventory.to_dict()
            self._logger.error(
                "Resources for %s exist but credentials could not be installed: %s",
                resource.name,
                e,
            )
            raise
        finally:
            os.remove(kubeconfig)

        return user_data

    def provision(
        self,
        resource: Resource,
        types: TypeToResources,
        timeout: Optional[float] = None,
    ) -> tuple[UserData, ResourceInventory]:
        """Run the coordinator and record the inventory in fresh user data."""
        logger = self._logger
        if isinstance(logger, LoggingAdapter):
            logger = logger.bind(resource=resource.name)
        try:
            inventory = self._coordinator.provision(self.request_group, ProjectPool(types), timeout)
        except DomainException as e:
            logger.error("failed to construct resources for %s: %s", resource.name, e)
            raise

        user_data = UserData()
        user_data.set(RESOURCE_CONFIG_TYPE, inventory)
        return user_data, inventory
