"""Resource domain - requests, results, inventory and broker records."""

from .broker import Resource, TypeToResources, UserData
from .value_objects import (
    ClusterSpec,
    CreationResult,
    CreationTask,
    InstanceInfo,
    ProjectHandle,
    ProjectInfo,
    ProjectResourceSpec,
    ResourceInventory,
    ResourceKind,
    ResourceRequestGroup,
    VirtualMachineSpec,
)

__all__: list[str] = [
    "ClusterSpec",
    "CreationResult",
    "CreationTask",
    "InstanceInfo",
    "ProjectHandle",
    "ProjectInfo",
    "ProjectResourceSpec",
    "Resource",
    "ResourceInventory",
    "ResourceKind",
    "ResourceRequestGroup",
    "TypeToResources",
    "UserData",
    "VirtualMachineSpec",
]
