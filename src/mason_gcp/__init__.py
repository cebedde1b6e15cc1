"""
mason-gcp: GKE cluster and GCE instance construction for a resource broker.

A request group maps resource kinds to project specs; every spec consumes
one project from the broker's pool and fans out into concurrent creations
that succeed or fail as a whole. The resulting inventory and a merged
kubeconfig are returned as the broker resource's user data.

Users can import as: from mason_gcp import ProvisioningCoordinator
"""

from mason_gcp._package import __version__
from mason_gcp.application.services import ProvisioningCoordinator, ResourceConstructor
from mason_gcp.domain.resource.value_objects import ResourceInventory, ResourceRequestGroup

__all__: list[str] = [
    "ProvisioningCoordinator",
    "ResourceConstructor",
    "ResourceInventory",
    "ResourceRequestGroup",
    "__version__",
]
