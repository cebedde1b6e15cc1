"""GCP infrastructure - client, creators and credential materialization."""

from .gcp_client import GCPClient
from .kubeconfig import KubeconfigMaterializer, activate_service_account

__all__: list[str] = ["GCPClient", "KubeconfigMaterializer", "activate_service_account"]
