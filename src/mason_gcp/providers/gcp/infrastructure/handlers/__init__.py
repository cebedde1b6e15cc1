"""GCP creators."""

from .cluster_handler import GKEClusterCreator
from .instance_handler import GCEInstanceCreator

__all__: list[str] = ["GCEInstanceCreator", "GKEClusterCreator"]
