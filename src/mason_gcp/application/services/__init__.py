"""Provisioning services: pool, zone ring, task group, coordinator and constructor."""

from .project_pool import ProjectPool
from .provisioning_coordinator import ProvisioningCoordinator
from .resource_constructor import KUBECONFIG_KEY, RESOURCE_CONFIG_TYPE, ResourceConstructor
from .result_aggregator import ResultAggregator
from .result_channel import ResultChannel
from .task_group import TaskGroup
from .zone_ring import ZoneRing

__all__: list[str] = [
    "KUBECONFIG_KEY",
    "ProjectPool",
    "ProvisioningCoordinator",
    "RESOURCE_CONFIG_TYPE",
    "ResourceConstructor",
    "ResultAggregator",
    "ResultChannel",
    "TaskGroup",
    "ZoneRing",
]
